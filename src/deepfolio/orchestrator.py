from __future__ import annotations

import asyncio
from typing import Any, List, Optional, Union

from loguru import logger
from pydantic import ValidationError

from .config import AppConfig
from .exceptions import GenerationError
from .models import CombinedResult, DatedPost, GenerationOutput, SimplePortfolioData
from .openai_client import GenerationClient, OpenAIGenerationClient
from .post_parser import parse_posts
from .prompts import GenerationTask, build_prompt


TaskPayload = Union[GenerationOutput, SimplePortfolioData]

_OUTPUT_MODELS = {
    GenerationTask.TIMELINE: GenerationOutput,
    GenerationTask.SIMPLE_PORTFOLIO: SimplePortfolioData,
}


async def _generate(
    client: GenerationClient,
    task: GenerationTask,
    resume_text: str,
    posts: List[DatedPost],
    config: Optional[AppConfig],
) -> Any:
    temperature = config.temperature_for(task) if config is not None else None
    request = build_prompt(resume_text, posts, task, temperature=temperature)
    return await client.invoke(request)


def _settle(task: GenerationTask, outcome: Any) -> Optional[TaskPayload]:
    """
    Turn one settled generation into its CombinedResult slot.
    Failures, schema violations and empty payloads all become None.
    """
    if isinstance(outcome, BaseException):
        logger.error(f"{task.value} generation failed: {outcome}")
        return None

    try:
        value = _OUTPUT_MODELS[task].model_validate(outcome)
    except ValidationError as e:
        logger.error(f"{task.value} response does not match its schema: {e.error_count()} error(s)")
        logger.debug(str(e))
        return None

    if isinstance(value, GenerationOutput) and not value.timeline:
        logger.warning("timeline generation returned no events")
        return None

    return value


async def generate_all_outputs(
    resume_text: str,
    posts_text: str,
    *,
    client: Optional[GenerationClient] = None,
    config: Optional[AppConfig] = None,
) -> CombinedResult:
    """
    Run the timeline and simple-portfolio generations concurrently.

    Each generation settles on its own: a failure in one leaves only its slot
    empty and never cancels the other. Only an error outside the two
    settlements is raised, as a single GenerationError.
    """
    posts = parse_posts(posts_text)

    try:
        if client is None:
            client = OpenAIGenerationClient(model=config.openai_model if config is not None else None)

        timeline_outcome, portfolio_outcome = await asyncio.gather(
            _generate(client, GenerationTask.TIMELINE, resume_text, posts, config),
            _generate(client, GenerationTask.SIMPLE_PORTFOLIO, resume_text, posts, config),
            return_exceptions=True,
        )

        return CombinedResult(
            timeline=_settle(GenerationTask.TIMELINE, timeline_outcome),
            simple_portfolio=_settle(GenerationTask.SIMPLE_PORTFOLIO, portfolio_outcome),
        )
    except Exception as e:
        logger.error(f"Error generating portfolio outputs: {e}")
        raise GenerationError("Failed to generate portfolio from AI.") from e


def generate_all_outputs_sync(
    resume_text: str,
    posts_text: str,
    *,
    client: Optional[GenerationClient] = None,
    config: Optional[AppConfig] = None,
) -> CombinedResult:
    return asyncio.run(generate_all_outputs(resume_text, posts_text, client=client, config=config))
