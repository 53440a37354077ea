import asyncio

import pytest

from deepfolio.exceptions import FileTypeError, GenerationError
from deepfolio.models import CombinedResult, GenerationOutput
from deepfolio.submission import (
    COMMUNICATION_ERROR_MESSAGE,
    NO_INPUT_MESSAGE,
    NO_PORTFOLIO_MESSAGE,
    NO_TIMELINE_MESSAGE,
    PortfolioWorkspace,
)

from conftest import TIMELINE_PAYLOAD


def test_no_input_is_refused_without_a_call(make_client):
    client = make_client()
    ws = PortfolioWorkspace(client=client)
    outcome = asyncio.run(ws.submit())

    assert outcome.error == NO_INPUT_MESSAGE
    assert outcome.result is None
    assert ws.error == NO_INPUT_MESSAGE
    assert client.requests == []
    assert ws.is_loading is False


def test_successful_submit(make_client):
    ws = PortfolioWorkspace(client=make_client())
    ws.resume_text = "resume"
    assert ws.can_submit

    outcome = asyncio.run(ws.submit())
    assert outcome.error is None
    assert ws.timeline is not None and ws.simple_portfolio is not None
    assert ws.is_generated
    assert ws.is_loading is False


def test_posts_alone_are_enough(make_client):
    ws = PortfolioWorkspace(client=make_client())
    ws.posts_text = "2024-07-26: Launched project X"
    outcome = asyncio.run(ws.submit())
    assert outcome.result is not None


def test_missing_timeline_message(make_client):
    ws = PortfolioWorkspace(client=make_client(timeline=GenerationError("x")))
    ws.resume_text = "resume"
    outcome = asyncio.run(ws.submit())
    assert outcome.error == NO_TIMELINE_MESSAGE
    assert ws.simple_portfolio is not None


def test_missing_portfolio_message(make_client):
    ws = PortfolioWorkspace(client=make_client(portfolio=GenerationError("x")))
    ws.resume_text = "resume"
    outcome = asyncio.run(ws.submit())
    assert outcome.error == NO_PORTFOLIO_MESSAGE
    assert ws.timeline is not None


def test_both_missing_messages_are_combined(make_client):
    ws = PortfolioWorkspace(client=make_client(timeline=GenerationError("a"), portfolio=GenerationError("b")))
    ws.resume_text = "resume"
    outcome = asyncio.run(ws.submit())
    assert outcome.error == NO_TIMELINE_MESSAGE + " Also, the AI could not generate a simple portfolio."
    assert not ws.is_generated


def test_orchestrator_failure_resets_loading():
    seen_loading = []

    async def failing_generate(resume, posts, **kwargs):
        seen_loading.append(ws.is_loading)
        raise GenerationError("Failed to generate portfolio from AI.")

    ws = PortfolioWorkspace(generate=failing_generate)
    ws.resume_text = "resume"
    outcome = asyncio.run(ws.submit())

    assert seen_loading == [True]
    assert outcome.error == COMMUNICATION_ERROR_MESSAGE
    assert ws.is_loading is False


def test_stale_response_is_discarded():
    first = CombinedResult(timeline=GenerationOutput.model_validate(TIMELINE_PAYLOAD))
    second = CombinedResult(timeline=GenerationOutput.model_validate({"timeline": TIMELINE_PAYLOAD["timeline"][:1]}))

    async def scenario():
        gates = [asyncio.Event(), asyncio.Event()]
        results = [first, second]
        calls = []

        async def fake_generate(resume, posts, **kwargs):
            idx = len(calls)
            calls.append(idx)
            await gates[idx].wait()
            return results[idx]

        ws = PortfolioWorkspace(generate=fake_generate)
        ws.resume_text = "resume"

        t1 = asyncio.create_task(ws.submit())
        await asyncio.sleep(0)
        t2 = asyncio.create_task(ws.submit())
        await asyncio.sleep(0)

        gates[1].set()
        out2 = await t2
        gates[0].set()
        out1 = await t1
        return ws, out1, out2

    ws, out1, out2 = asyncio.run(scenario())

    assert out2.stale is False
    assert out1.stale is True
    assert len(ws.timeline.timeline) == 1
    assert ws.is_loading is False


def test_non_text_resume_is_rejected(tmp_path, make_client):
    pdf = tmp_path / "resume.pdf"
    pdf.write_bytes(b"%PDF-1.4")
    ws = PortfolioWorkspace(client=make_client())
    ws.resume_text = "old"

    with pytest.raises(FileTypeError):
        ws.load_resume(pdf)
    assert ws.resume_text == ""


def test_text_resume_is_loaded(tmp_path, make_client):
    txt = tmp_path / "resume.txt"
    txt.write_text("Ada Lovelace\nEngineer", encoding="utf-8")
    ws = PortfolioWorkspace(client=make_client())
    assert ws.load_resume(txt) == "Ada Lovelace\nEngineer"
