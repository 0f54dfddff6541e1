"""Style session: result ownership, occasion selection and stale image loads."""

import asyncio
import base64

import pytest

from agents.advice_agent import ADVICE_FAILURE_MESSAGE, AdviceAgent, AdviceGenerationError
from agents.image_agent import OutfitImageAgent
from voguecast.config import VogueCastConfig
from evaluation.scenarios import SCENARIOS
from memory.style_session import StyleSession
from models.prediction import Occasion
from tools.genai_client import MockContentGenerator, image_response


class _GatedImageGenerator(MockContentGenerator):
    """Holds each image request until the test releases it.

    The returned bytes echo the outfit headline so the test can tell which
    request produced the image on screen.
    """

    def __init__(self, text: str) -> None:
        super().__init__(text=text)
        self.gates: list[asyncio.Event] = []

    async def generate_content(self, *, model, contents, config=None):
        if "image" not in model:
            return await super().generate_content(model=model, contents=contents, config=config)
        self.calls.append({"model": model, "contents": contents, "config": config})
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        headline = contents.split("Items: ", 1)[1].split(".", 1)[0]
        return image_response(headline.encode("utf-8"), "image/png")

    def release_all(self) -> None:
        for gate in self.gates:
            gate.set()


def _data_uri(headline: str) -> str:
    return "data:image/png;base64," + base64.b64encode(headline.encode("utf-8")).decode("ascii")


def _session(generator: MockContentGenerator) -> StyleSession:
    config = VogueCastConfig(api_key="dummy-key")
    return StyleSession(
        advice_agent=AdviceAgent(config=config, generator=generator),
        image_agent=OutfitImageAgent(config=config, generator=generator),
    )


def test_submit_stores_result_and_loads_day_image() -> None:
    async def scenario() -> StyleSession:
        session = _session(MockContentGenerator(text=SCENARIOS[0].model_text))
        await session.submit(SCENARIOS[0].query)
        await session.image_task
        return session

    session = asyncio.run(scenario())

    assert session.result is not None
    assert session.occasion is Occasion.DAY
    assert session.image_url.startswith("data:image/png;base64,")
    assert session.loading_image is False


def test_selecting_each_occasion_returns_that_outfit() -> None:
    async def scenario() -> dict:
        session = _session(MockContentGenerator(text=SCENARIOS[0].model_text))
        result = await session.submit(SCENARIOS[0].query)
        seen = {}
        for occasion in Occasion:
            await session.select(occasion)
            seen[occasion] = (session.active_outfit, result.outfits.for_occasion(occasion))
        return seen

    seen = asyncio.run(scenario())

    for occasion, (active, expected) in seen.items():
        assert active is expected
    assert seen[Occasion.DINNER][0].headline == "Riverside Dinner"


def test_quick_tab_switch_shows_only_latest_image() -> None:
    async def scenario():
        generator = _GatedImageGenerator(text=SCENARIOS[0].model_text)
        session = _session(generator)
        await session.submit(SCENARIOS[0].query)
        first = session.select(Occasion.EVENING)
        await asyncio.sleep(0)
        second = session.select(Occasion.DINNER)
        await asyncio.sleep(0)
        generator.release_all()
        await second
        await asyncio.gather(first, return_exceptions=True)
        return session, first

    session, first = asyncio.run(scenario())

    assert first.cancelled()
    assert session.image_url == _data_uri("Riverside Dinner")
    assert session.occasion is Occasion.DINNER


def test_stale_completion_is_ignored_even_without_cancellation() -> None:
    async def scenario():
        generator = _GatedImageGenerator(text=SCENARIOS[0].model_text)
        session = _session(generator)
        await session.submit(SCENARIOS[0].query)
        stale = asyncio.get_running_loop().create_task(
            session._load_image(session.generation, session.active_outfit, None)
        )
        await asyncio.sleep(0)
        latest = session.select(Occasion.EVENING)
        await asyncio.sleep(0)
        generator.release_all()
        await latest
        stale_url = await stale
        return session, stale_url

    session, stale_url = asyncio.run(scenario())

    assert stale_url == _data_uri("Linen Explorer")
    assert session.image_url == _data_uri("Breezy Transition")


def test_color_focus_change_regenerates_image() -> None:
    async def scenario() -> MockContentGenerator:
        generator = MockContentGenerator(text=SCENARIOS[0].model_text)
        session = _session(generator)
        await session.submit(SCENARIOS[0].query)
        await session.image_task
        await session.select(color_focus="#F5F5DC")
        await session.select(color_focus="#F5F5DC")
        return generator

    generator = asyncio.run(scenario())

    image_prompts = [call["contents"] for call in generator.calls if "image" in call["model"]]
    assert len(image_prompts) == 3
    assert "make #F5F5DC the dominant tone" in image_prompts[-1]


def test_failed_submit_clears_result_and_records_message() -> None:
    async def scenario() -> StyleSession:
        session = _session(MockContentGenerator(text=SCENARIOS[0].model_text))
        await session.submit(SCENARIOS[0].query)
        await session.select(Occasion.EVENING, color_focus="#F5F5DC")
        assert session.image_url is not None
        session.advice_agent.generator = MockContentGenerator(text="no json here")
        with pytest.raises(AdviceGenerationError):
            await session.submit(SCENARIOS[0].query)
        return session

    session = asyncio.run(scenario())

    assert session.result is None
    assert session.error == ADVICE_FAILURE_MESSAGE
    assert session.image_url is None
    assert session.query is None
    assert session.loading_image is False
    assert session.occasion is Occasion.DAY
    assert session.color_focus is None


class _GatedAdviceGenerator(MockContentGenerator):
    """Holds the advice request until the test releases it."""

    def __init__(self, text: str) -> None:
        super().__init__(text=text)
        self.gate = asyncio.Event()

    async def generate_content(self, *, model, contents, config=None):
        if "image" not in model:
            await self.gate.wait()
        return await super().generate_content(model=model, contents=contents, config=config)


def test_reset_during_pending_submit_discards_late_answer() -> None:
    async def scenario():
        generator = _GatedAdviceGenerator(text=SCENARIOS[0].model_text)
        session = _session(generator)
        pending = asyncio.get_running_loop().create_task(session.submit(SCENARIOS[0].query))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        session.reset()
        generator.gate.set()
        late = await pending
        return session, late

    session, late = asyncio.run(scenario())

    assert late.outfits.day.headline == "Linen Explorer"
    assert session.result is None
    assert session.query is None
    assert session.image_task is None
    assert session.image_url is None



def test_reset_discards_everything() -> None:
    async def scenario() -> StyleSession:
        session = _session(MockContentGenerator(text=SCENARIOS[0].model_text))
        await session.submit(SCENARIOS[0].query)
        session.reset()
        return session

    session = asyncio.run(scenario())

    assert session.result is None
    assert session.image_url is None
    assert session.image_task is None
    with pytest.raises(LookupError):
        session.active_outfit
