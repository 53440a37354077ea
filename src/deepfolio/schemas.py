"""
Structured-output contracts sent to the generation service.

These are plain JSON Schema dicts. The service is asked to honour them via
``response_format``; the payloads are validated again locally against the
pydantic models in ``models.py`` before anything is shown to the user.
"""

from __future__ import annotations

from typing import Any, Dict


EVENT_TYPES = ["Work", "Project", "Learning", "Achievement", "Community", "Other"]
CONFIDENCE_LEVELS = ["high", "medium", "low"]


def _string(description: str | None = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": "string"}
    if description:
        out["description"] = description
    return out


def _string_list(description: str | None = None) -> Dict[str, Any]:
    out: Dict[str, Any] = {"type": "array", "items": {"type": "string"}}
    if description:
        out["description"] = description
    return out


TIMELINE_EVENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "date": _string("Date of the event as YYYY-MM-DD. A best-effort estimate is acceptable."),
        "title": _string("Concise title for the event (5-8 words)."),
        "type": {
            "type": "string",
            "description": "Category of the event.",
            "enum": EVENT_TYPES,
        },
        "bullets": _string_list(
            "1-2 summary bullet points. Each bullet frames an action with a measurable or qualitative outcome."
        ),
        "tags": _string_list("Relevant tags such as skills, technologies or roles."),
        "confidence": {
            "type": "string",
            "description": "Confidence of the extraction (high, medium or low), especially regarding the date.",
            "enum": CONFIDENCE_LEVELS,
        },
        "inference_explanation": _string("When an inference was made, the reasoning behind it."),
    },
    "required": ["date", "title", "type", "bullets", "tags", "confidence"],
}

VERIFICATION_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "item": _string("The text or concept that was unclear."),
        "reason": _string("Why this item needs verification."),
    },
    "required": ["item", "reason"],
}

TIMELINE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "timeline": {
            "type": "array",
            "description": "Chronological list of professional and learning events, ordered newest to oldest.",
            "items": TIMELINE_EVENT_SCHEMA,
        },
        "needs_user_verification": {
            "type": "array",
            "description": "Items that could not be extracted confidently and need the user to verify them.",
            "items": VERIFICATION_ITEM_SCHEMA,
        },
    },
    "required": ["timeline"],
}


WORK_EXPERIENCE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": _string(),
        "company": _string(),
        "date": _string("e.g. 'Jun 2022 - Present' or 'Jan 2021 - Dec 2021'"),
        "bullets": _string_list("Action-oriented bullet points describing achievements."),
    },
    "required": ["title", "company", "date", "bullets"],
}

PROJECT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": _string(),
        "date": _string("e.g. 'Fall 2023'"),
        "description": _string(),
        "tech_stack": _string_list(),
    },
    "required": ["title", "date", "description", "tech_stack"],
}

SKILL_GROUP_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "category": _string("e.g. 'Programming Languages', 'Frameworks', 'Cloud'"),
        "list": _string_list(),
    },
    "required": ["category", "list"],
}

SIMPLE_PORTFOLIO_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": _string("Full name of the individual, taken from the resume."),
        "title": _string("Most recent job title or professional headline."),
        "summary": _string("A 2-4 sentence professional summary highlighting key skills and experience."),
        "experience": {"type": "array", "items": WORK_EXPERIENCE_SCHEMA},
        "projects": {"type": "array", "items": PROJECT_SCHEMA},
        "skills": {"type": "array", "items": SKILL_GROUP_SCHEMA},
    },
    "required": ["name", "title", "summary", "experience", "projects", "skills"],
}


def response_format(name: str, schema: Dict[str, Any]) -> Dict[str, Any]:
    # strict mode would force every property into "required"; optional fields stay optional
    return {
        "type": "json_schema",
        "json_schema": {"name": name, "schema": schema, "strict": False},
    }
