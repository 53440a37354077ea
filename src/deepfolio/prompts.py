from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .models import DatedPost
from .post_parser import posts_as_json_ready
from .schemas import SIMPLE_PORTFOLIO_SCHEMA, TIMELINE_SCHEMA


class GenerationTask(str, Enum):
    TIMELINE = "timeline"
    SIMPLE_PORTFOLIO = "simple_portfolio"


DEFAULT_TEMPERATURES: Dict[GenerationTask, float] = {
    GenerationTask.TIMELINE: 0.2,
    GenerationTask.SIMPLE_PORTFOLIO: 0.3,
}


TIMELINE_SYSTEM_INSTRUCTION = (
    "You are an expert career analyst. Turn the user's resume and social media posts into a "
    "structured, chronological timeline of their professional journey. Follow these rules strictly:\n"
    "1. Extract discrete events and categorize each one as 'Work', 'Project', 'Learning', "
    "'Achievement', 'Community' or 'Other'.\n"
    "2. For each event, emit one JSON object with date, title, type, a 1-2 bullet summary, "
    "relevant tags and a confidence level.\n"
    "3. Order the timeline from the newest event to the oldest.\n"
    "4. Use only facts present in the input. Do not invent information.\n"
    "5. When a conservative inference is unavoidable, set 'confidence' to 'low' and explain "
    "the reasoning in 'inference_explanation'.\n"
    "6. When you are highly uncertain about an item, put it in 'needs_user_verification' instead.\n"
    "7. Return a single valid JSON object matching the provided schema."
)

SIMPLE_PORTFOLIO_SYSTEM_INSTRUCTION = (
    "You are a professional resume writer. Synthesize the provided resume and social media posts "
    "into a clean, structured and simple portfolio.\n"
    "1. Extract the user's name and current title.\n"
    "2. Write a compelling professional summary.\n"
    "3. List work experience, projects and skills in distinct, structured sections.\n"
    "4. Focus on quantifiable achievements and key responsibilities.\n"
    "5. Do not include information that is not present in the input.\n"
    "6. Return a valid JSON object conforming to the provided schema."
)


@dataclass(frozen=True)
class PromptRequest:
    task: GenerationTask
    system_instruction: str
    user_prompt: str
    schema: Dict[str, Any]
    schema_name: str
    temperature: float


def _input_block(resume_text: str, posts: List[DatedPost]) -> str:
    posts_json = json.dumps(posts_as_json_ready(posts), indent=2, ensure_ascii=False)
    return (
        f"**Resume Text:**\n```\n{resume_text}\n```\n"
        f"**Social Posts:**\n```json\n{posts_json}\n```\n"
    )


def build_prompt(
    resume_text: str,
    posts: List[DatedPost],
    task: GenerationTask,
    *,
    temperature: Optional[float] = None,
) -> PromptRequest:
    """
    Assemble the request for one generation task.

    The resume is embedded verbatim and the posts as JSON; nothing is
    truncated here, oversized inputs surface as a failed generation call.
    """
    task = GenerationTask(task)
    temp = DEFAULT_TEMPERATURES[task] if temperature is None else float(temperature)

    if task is GenerationTask.TIMELINE:
        return PromptRequest(
            task=task,
            system_instruction=TIMELINE_SYSTEM_INSTRUCTION,
            user_prompt=(
                "Analyze the following resume text and social media posts to generate a career timeline.\n\n"
                + _input_block(resume_text, posts)
            ),
            schema=TIMELINE_SCHEMA,
            schema_name="deepfolio_timeline",
            temperature=temp,
        )

    return PromptRequest(
        task=task,
        system_instruction=SIMPLE_PORTFOLIO_SYSTEM_INSTRUCTION,
        user_prompt=(
            "Synthesize the following resume and posts into a simple portfolio JSON output.\n\n"
            + _input_block(resume_text, posts)
        ),
        schema=SIMPLE_PORTFOLIO_SCHEMA,
        schema_name="simple_portfolio",
        temperature=temp,
    )
