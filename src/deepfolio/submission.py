from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Awaitable, Callable, Optional

from loguru import logger

from .config import AppConfig
from .exceptions import FileTypeError
from .file_input import read_text_file
from .models import CombinedResult, GenerationOutput, SimplePortfolioData
from .openai_client import GenerationClient
from .orchestrator import generate_all_outputs


NO_INPUT_MESSAGE = "Please upload a resume or paste some posts to generate a timeline."
NO_TIMELINE_MESSAGE = "The AI could not generate a timeline. Please try refining your input."
NO_PORTFOLIO_MESSAGE = "The AI could not generate a simple portfolio. Please try refining your input."
ALSO_NO_PORTFOLIO_SUFFIX = " Also, the AI could not generate a simple portfolio."
COMMUNICATION_ERROR_MESSAGE = (
    "An error occurred while communicating with the AI. Please check the console and try again."
)


class OutputMode(str, Enum):
    DEEPFOLIO = "deepfolio"
    SIMPLE = "simple"


GenerateFn = Callable[..., Awaitable[CombinedResult]]


@dataclass
class SubmissionOutcome:
    result: Optional[CombinedResult] = None
    error: Optional[str] = None
    stale: bool = False


class PortfolioWorkspace:
    """
    State behind one "generate" screen: inputs, the selected output mode and
    the products of the latest submission.

    Each submit() takes a new sequence number. A response that arrives after
    a newer submission was dispatched is discarded instead of overwriting the
    newer state.
    """

    def __init__(
        self,
        *,
        client: Optional[GenerationClient] = None,
        config: Optional[AppConfig] = None,
        generate: GenerateFn = generate_all_outputs,
    ):
        self.client = client
        self.config = config
        self._generate = generate

        self.resume_text = ""
        self.posts_text = ""
        self.mode = OutputMode.DEEPFOLIO

        self.timeline: Optional[GenerationOutput] = None
        self.simple_portfolio: Optional[SimplePortfolioData] = None
        self.error: Optional[str] = None
        self.is_loading = False

        self._sequence = 0

    @property
    def has_input(self) -> bool:
        return bool(self.resume_text or self.posts_text)

    @property
    def can_submit(self) -> bool:
        return self.has_input and not self.is_loading

    @property
    def is_generated(self) -> bool:
        return self.timeline is not None or self.simple_portfolio is not None

    def load_resume(self, path: Path) -> str:
        try:
            self.resume_text = read_text_file(path)
        except FileTypeError:
            self.resume_text = ""
            raise
        return self.resume_text

    def _apply(self, result: CombinedResult) -> Optional[str]:
        error: Optional[str] = None
        if result.timeline is not None:
            self.timeline = result.timeline
        else:
            error = NO_TIMELINE_MESSAGE

        if result.simple_portfolio is not None:
            self.simple_portfolio = result.simple_portfolio
        else:
            error = error + ALSO_NO_PORTFOLIO_SUFFIX if error else NO_PORTFOLIO_MESSAGE

        self.error = error
        return error

    async def submit(self) -> SubmissionOutcome:
        if not self.has_input:
            self.error = NO_INPUT_MESSAGE
            return SubmissionOutcome(error=self.error)

        self._sequence += 1
        seq = self._sequence

        self.error = None
        self.is_loading = True
        self.timeline = None
        self.simple_portfolio = None

        try:
            result = await self._generate(
                self.resume_text,
                self.posts_text,
                client=self.client,
                config=self.config,
            )
        except Exception as e:
            if seq != self._sequence:
                logger.info(f"discarding failure of superseded request #{seq}")
                return SubmissionOutcome(stale=True)
            logger.error(f"generation request #{seq} failed: {e}")
            self.error = COMMUNICATION_ERROR_MESSAGE
            return SubmissionOutcome(error=self.error)
        finally:
            if seq == self._sequence:
                self.is_loading = False

        if seq != self._sequence:
            logger.info(f"discarding response of superseded request #{seq}")
            return SubmissionOutcome(result=result, stale=True)

        error = self._apply(result)
        return SubmissionOutcome(result=result, error=error)
