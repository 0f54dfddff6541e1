"""FastAPI server exposing the advice and outfit image endpoints."""

from fastapi import FastAPI, HTTPException

from agents.advice_agent import AdviceGenerationError
from voguecast.app import VogueCastApp, build_query
from voguecast.logging_config import configure_logging
from logic.validation import AdviceRequest, OutfitImageRequest, dump_prediction_result
from models.prediction import ImageAttachment


def create_app(vogue_app: VogueCastApp | None = None) -> FastAPI:
    """Build the ASGI app around an explicitly constructed :class:`VogueCastApp`."""

    configure_logging()
    vogue = vogue_app or VogueCastApp()
    api = FastAPI(title="VogueCast", version="0.1.0")
    api.state.vogue = vogue

    @api.get("/healthz")
    async def healthcheck() -> dict:
        """Lightweight readiness probe."""

        return {
            "status": "ok",
            "service": "voguecast",
            "environment": vogue.config.environment or "local",
            "text_model": vogue.config.text_model,
            "image_model": vogue.config.image_model,
        }

    @api.post("/advice")
    async def advice(request: AdviceRequest) -> dict:
        """Weather narrative, three outfits and grounding links for a profile."""

        image = None
        if request.image is not None:
            image = ImageAttachment(data=request.image.data, mime_type=request.image.mime_type)
        query = build_query(
            who=request.who,
            where=request.where,
            date=request.date,
            end_date=request.end_date,
            style=request.style,
            gender=request.gender,
            context=request.context,
            image=image,
        )
        try:
            result = await vogue.get_style_advice(query)
        except AdviceGenerationError as exc:
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return dump_prediction_result(result)

    @api.post("/outfit-image")
    async def outfit_image(request: OutfitImageRequest) -> dict:
        """Generated preview as a data URI; empty when no image was produced."""

        image_url = await vogue.generate_outfit_image(
            request.description,
            request.style,
            color_focus=request.color_focus,
            theme=request.theme,
        )
        return {"image_url": image_url}

    return api


def get_app() -> FastAPI:
    """Expose a FastAPI instance for ASGI servers (``uvicorn --factory``)."""

    return create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("server.api:get_app", factory=True, host="0.0.0.0", port=8080, reload=False)
