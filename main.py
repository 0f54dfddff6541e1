"""Command line entry point for a single VogueCast prediction."""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date

from agents.advice_agent import AdviceGenerationError
from voguecast.app import VogueCastApp, build_query
from voguecast.config import VogueCastConfig
from evaluation.scenarios import SCENARIOS
from logic.presentation import render_result_text
from models.prediction import GenderOption, ImageAttachment, Occasion, StyleOption
from tools.genai_client import MockContentGenerator


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Weather-aware outfit suggestions for a trip")
    parser.add_argument("--who", required=True, help="Who is travelling, e.g. '30s professional'.")
    parser.add_argument("--where", required=True, help="Destination.")
    parser.add_argument("--date", default=date.today().isoformat(), help="Trip date (passed through verbatim).")
    parser.add_argument("--end-date", default=None, help="Optional last day of the trip.")
    parser.add_argument(
        "--style",
        default=StyleOption.CASUAL.value,
        help=f"One of: {', '.join(option.value for option in StyleOption)} (or free text).",
    )
    parser.add_argument("--gender", default=None, choices=[option.value for option in GenderOption])
    parser.add_argument("--context", default=None, help="Free-text notes about your wardrobe.")
    parser.add_argument("--image", default=None, help="Path to a photo of an item to include.")
    parser.add_argument("--occasion", default=Occasion.DAY.value, choices=[o.value for o in Occasion])
    parser.add_argument("--color-focus", default=None, help="Color to emphasise in the preview image.")
    parser.add_argument("--offline", action="store_true", help="Use canned model output instead of the API.")
    return parser


async def _run(args: argparse.Namespace) -> int:
    generator = None
    config = VogueCastConfig.from_env()
    if args.offline:
        generator = MockContentGenerator(text=SCENARIOS[0].model_text, grounding_uris=SCENARIOS[0].grounding_uris)
    app = VogueCastApp(config=config, generator=generator)

    query = build_query(
        who=args.who,
        where=args.where,
        date=args.date,
        end_date=args.end_date,
        style=args.style,
        gender=args.gender,
        context=args.context,
        image=ImageAttachment.from_path(args.image) if args.image else None,
    )
    missing = query.missing_fields()
    if missing:
        print(f"Missing required fields: {', '.join(missing)}", file=sys.stderr)
        return 2

    session = app.new_session()
    try:
        result = await session.submit(query)
    except AdviceGenerationError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    task = session.select(args.occasion, color_focus=args.color_focus)
    await task

    print(render_result_text(result, args.occasion, style=query.style_label))
    if session.image_url:
        print(f"\nPreview image: {session.image_url[:48]}... ({len(session.image_url)} chars)")
    else:
        print("\nPreview image: not available")
    return 0


def main() -> None:
    args = _parser().parse_args()
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
