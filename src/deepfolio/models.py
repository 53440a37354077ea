from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


UNKNOWN_DATE = "unknown"

EventType = Literal["Work", "Project", "Learning", "Achievement", "Community", "Other"]
Confidence = Literal["high", "medium", "low"]


class DatedPost(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str = Field(default=UNKNOWN_DATE, description="YYYY-MM-DD or 'unknown'")
    text: str = Field(min_length=1)


# ------------------------------------------------------------
# DeepFolio timeline
# ------------------------------------------------------------
class TimelineEvent(BaseModel):
    date: str
    title: str
    type: EventType
    bullets: List[str]
    tags: List[str]
    confidence: Confidence
    inference_explanation: Optional[str] = None


class VerificationItem(BaseModel):
    item: str
    reason: str


class GenerationOutput(BaseModel):
    """
    Payload of one timeline generation. Events keep the order the service
    returned them in (newest first is requested, not enforced).
    """
    timeline: List[TimelineEvent]
    needs_user_verification: Optional[List[VerificationItem]] = None


# ------------------------------------------------------------
# Simple portfolio
# ------------------------------------------------------------
class WorkExperience(BaseModel):
    title: str
    company: str
    date: str
    bullets: List[str]


class Project(BaseModel):
    title: str
    date: str
    description: str
    tech_stack: List[str]


class SkillGroup(BaseModel):
    category: str
    list: List[str]


class SimplePortfolioData(BaseModel):
    name: str
    title: str
    summary: str
    experience: List[WorkExperience]
    projects: List[Project]
    skills: List[SkillGroup]


class CombinedResult(BaseModel):
    """
    One generate action. Each slot is None when its generation failed,
    returned an invalid payload, or returned nothing usable.
    """
    model_config = ConfigDict(populate_by_name=True)

    timeline: Optional[GenerationOutput] = None
    simple_portfolio: Optional[SimplePortfolioData] = Field(default=None, alias="simplePortfolio")

    @property
    def is_empty(self) -> bool:
        return self.timeline is None and self.simple_portfolio is None


# ------------------------------------------------------------
# Session
# ------------------------------------------------------------
class User(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    is_guest: bool = False
