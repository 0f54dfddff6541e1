"""Observability helpers for instrumenting hosted model calls."""

from __future__ import annotations

import logging
import time
from functools import wraps
from typing import Awaitable, Callable, ParamSpec, TypeVar

from voguecast.logging_config import current_correlation_id, get_logger, log_event

LOGGER = get_logger(__name__)
P = ParamSpec("P")
R = TypeVar("R")


def instrument_call(call_name: str, model: str | None = None) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Wrap an async callable to emit structured start/complete/failed logs."""

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            correlation_id = current_correlation_id()
            start = time.perf_counter()
            model_name = model or kwargs.get("model")

            log_event(
                LOGGER,
                logging.INFO,
                "model_call_started",
                call=call_name,
                model=model_name,
                correlation_id=correlation_id,
            )
            try:
                result = await func(*args, **kwargs)
            except Exception:
                duration_ms = round((time.perf_counter() - start) * 1000, 2)
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "model_call_failed",
                    call=call_name,
                    model=model_name,
                    correlation_id=correlation_id,
                    duration_ms=duration_ms,
                    exc_info=True,
                )
                raise
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            log_event(
                LOGGER,
                logging.INFO,
                "model_call_completed",
                call=call_name,
                model=model_name,
                correlation_id=correlation_id,
                duration_ms=duration_ms,
            )
            return result

        return wrapper

    return decorator


__all__ = ["instrument_call"]
