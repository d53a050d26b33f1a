import asyncio
import re
import time
from abc import ABC, abstractmethod
from typing import Optional

from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from ..core.config import Settings
from ..core.error_handling import ErrorCode, GenerationFailure
from ..core.logging import LoggerMixin
from .prompts import GenerationRequest

_HEADER_LINE = re.compile(r"^\s{0,3}#{1,6}\s+(.+?)\s*#*\s*$", re.MULTILINE)


def enforce_output_constraints(text: str, max_words: Optional[int] = None) -> str:
    """
    Apply the chat formatting rules to generated text.

    Markdown headers become *bold* labels, and text over ``max_words`` is cut at
    the last whole word with an ellipsis.
    """
    text = _HEADER_LINE.sub(lambda m: f"*{m.group(1).strip('*')}*", text.strip())

    if max_words is None:
        return text

    words = list(re.finditer(r"\S+", text))
    if len(words) <= max_words:
        return text

    cut = words[max_words - 1].end()
    return text[:cut].rstrip(" ,;:—-") + "…"


class BaseGenerationClient(ABC, LoggerMixin):
    """
    Single-attempt text generation with a caller-side timeout.

    Every failure (transport, provider error, timeout, empty output) surfaces
    as GenerationFailure. Provider detail goes to the log and the exception
    context only.
    """

    provider = "base"

    def __init__(self, model: str, timeout_seconds: float = 60.0):
        self.model = model
        self.timeout_seconds = timeout_seconds

    @abstractmethod
    async def create_completion(
        self, system_instructions: str, user_content: str, max_output_tokens: int
    ) -> str:
        pass

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def generate(self, request: GenerationRequest) -> str:
        started = time.monotonic()
        context = {
            "provider": self.provider,
            "model": self.model,
            "topic_id": request.topic_id,
            "kind": request.kind.value,
        }

        try:
            raw = await asyncio.wait_for(
                self.create_completion(
                    request.system_instructions,
                    request.user_content,
                    request.max_output_tokens,
                ),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError as e:
            raise GenerationFailure(
                f"{self.provider} generation timed out after {self.timeout_seconds}s",
                ErrorCode.AI_TIMEOUT_ERROR,
                context=context,
            ) from e
        except GenerationFailure:
            raise
        except Exception as e:
            raise GenerationFailure(
                f"{self.provider} API error: {type(e).__name__}",
                ErrorCode.AI_API_ERROR,
                context={**context, "provider_error": str(e)},
            ) from e

        if not raw or not raw.strip():
            raise GenerationFailure(
                f"{self.provider} returned an empty completion",
                ErrorCode.AI_EMPTY_RESPONSE,
                context=context,
            )

        text = enforce_output_constraints(raw, request.max_words)
        self.log_ai_interaction(
            self.model,
            response_time=round(time.monotonic() - started, 3),
            topic_id=request.topic_id,
            kind=request.kind.value,
            output_chars=len(text),
        )
        return text


class AnthropicGenerationClient(BaseGenerationClient):
    """Claude/Anthropic API client"""

    provider = "anthropic"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "claude-opus-4-5",
        timeout_seconds: float = 60.0,
        client: Optional[AsyncAnthropic] = None,
    ):
        super().__init__(model, timeout_seconds)
        self.client = client or AsyncAnthropic(api_key=api_key)

    async def create_completion(
        self, system_instructions: str, user_content: str, max_output_tokens: int
    ) -> str:
        response = await self.client.messages.create(
            model=self.model,
            max_tokens=max_output_tokens,
            system=system_instructions,
            messages=[{"role": "user", "content": user_content}],
        )
        return "".join(
            block.text for block in response.content if getattr(block, "type", "text") == "text"
        )


class OpenAIGenerationClient(BaseGenerationClient):
    """OpenAI GPT client"""

    provider = "openai"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o",
        timeout_seconds: float = 60.0,
        client: Optional[AsyncOpenAI] = None,
    ):
        super().__init__(model, timeout_seconds)
        self.client = client or AsyncOpenAI(api_key=api_key)

    async def create_completion(
        self, system_instructions: str, user_content: str, max_output_tokens: int
    ) -> str:
        response = await self.client.chat.completions.create(
            model=self.model,
            max_tokens=max_output_tokens,
            messages=[
                {"role": "system", "content": system_instructions},
                {"role": "user", "content": user_content},
            ],
        )
        return response.choices[0].message.content or ""


def create_generation_client(settings: Settings) -> BaseGenerationClient:
    """Build the configured provider client."""
    if settings.generation_provider == "openai":
        if not settings.openai_api_key:
            raise GenerationFailure(
                "OPENAI_API_KEY is not set",
                ErrorCode.AI_CONFIGURATION_ERROR,
            )
        return OpenAIGenerationClient(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout_seconds=settings.generation_timeout_seconds,
        )

    if not settings.anthropic_api_key:
        raise GenerationFailure(
            "ANTHROPIC_API_KEY is not set",
            ErrorCode.AI_CONFIGURATION_ERROR,
        )
    return AnthropicGenerationClient(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        timeout_seconds=settings.generation_timeout_seconds,
    )
