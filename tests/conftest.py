from typing import Any, Dict

import pytest

from deepfolio.prompts import GenerationTask, PromptRequest


TIMELINE_PAYLOAD = {
    "timeline": [
        {
            "date": "2024-07-26",
            "title": "Launched project X",
            "type": "Project",
            "bullets": ["Shipped project X to 1k users"],
            "tags": ["python"],
            "confidence": "high",
        },
        {
            "date": "2024-06-15",
            "title": "Earned cloud certification",
            "type": "Learning",
            "bullets": ["Passed the associate exam"],
            "tags": ["aws"],
            "confidence": "medium",
            "inference_explanation": "Exam level inferred from the post wording.",
        },
    ],
    "needs_user_verification": [{"item": "Hackathon win", "reason": "No date given"}],
}

PORTFOLIO_PAYLOAD = {
    "name": "Ada Lovelace",
    "title": "Software Engineer",
    "summary": "Engineer who ships.",
    "experience": [
        {"title": "Engineer", "company": "Analytical Engines", "date": "Jun 2022 - Present", "bullets": ["Built things"]},
    ],
    "projects": [
        {"title": "Project X", "date": "Fall 2023", "description": "A tool", "tech_stack": ["python", "fastapi"]},
    ],
    "skills": [{"category": "Languages", "list": ["Python", "SQL"]}],
}


class FakeGenerationClient:
    """Returns (or raises) a canned response per task and records every request."""

    def __init__(self, responses: Dict[GenerationTask, Any]):
        self.responses = responses
        self.requests = []

    async def invoke(self, request: PromptRequest) -> Any:
        self.requests.append(request)
        r = self.responses[request.task]
        if isinstance(r, BaseException):
            raise r
        return r


@pytest.fixture
def make_client():
    def _make(timeline: Any = TIMELINE_PAYLOAD, portfolio: Any = PORTFOLIO_PAYLOAD) -> FakeGenerationClient:
        return FakeGenerationClient({
            GenerationTask.TIMELINE: timeline,
            GenerationTask.SIMPLE_PORTFOLIO: portfolio,
        })
    return _make
