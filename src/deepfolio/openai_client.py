from __future__ import annotations

import json
import os
from typing import Any, Optional, Protocol

from dotenv import load_dotenv
from loguru import logger
from openai import AsyncOpenAI

from .config import DEFAULT_MODEL, load_settings
from .exceptions import GenerationError
from .prompts import PromptRequest
from .schemas import response_format


def _load_env() -> None:
    # Keep it robust even if caller didn't load env
    load_dotenv(".env")


def openai_api_key() -> str:
    """
    Returns the configured key, or "" with a warning. A missing key is not
    fatal here: the request is still attempted and fails at call time.
    """
    _load_env()
    key = (os.getenv("OPENAI_API_KEY") or "").strip()
    if not key:
        logger.warning("OPENAI_API_KEY is not set in environment variables.")
    return key


def openai_model() -> str:
    _load_env()
    m = (os.getenv("OPENAI_MODEL") or "").strip()
    if m:
        return m
    generation = load_settings().get("generation", {}) or {}
    return str(generation.get("model") or DEFAULT_MODEL)


class GenerationClient(Protocol):
    async def invoke(self, request: PromptRequest) -> Any:
        ...


def parse_response_text(content: Optional[str]) -> Any:
    """
    The service is asked for JSON only; anything else is a failed generation.
    """
    text = (content or "").strip()
    if not text:
        raise GenerationError("Model returned an empty response")
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Model did not return valid JSON. First 300 chars: {text[:300]}") from e


class OpenAIGenerationClient:
    """
    One Chat Completions call per invoke(), with the task's JSON schema as
    response_format. No retry, no cache, SDK default timeout.
    """

    def __init__(self, *, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = openai_api_key() if api_key is None else api_key
        self.model = model or openai_model()

    def _client(self) -> AsyncOpenAI:
        # AsyncOpenAI refuses to build without a key; that surfaces as a failed call
        return AsyncOpenAI(api_key=self.api_key or None)

    async def invoke(self, request: PromptRequest) -> Any:
        logger.debug(f"Requesting {request.task.value} from {self.model} (temperature={request.temperature})")
        try:
            client = self._client()
            async with client:
                resp = await client.chat.completions.create(
                    model=self.model,
                    temperature=request.temperature,
                    messages=[
                        {"role": "system", "content": request.system_instruction},
                        {"role": "user", "content": request.user_prompt},
                    ],
                    response_format=response_format(request.schema_name, request.schema),
                )
        except Exception as e:
            raise GenerationError(f"OpenAI request for {request.task.value} failed: {e}") from e

        content = resp.choices[0].message.content if resp.choices else None
        return parse_response_text(content)
