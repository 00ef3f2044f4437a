"""
OpenAI client wrapper for text completion.

Provides the OpenAICompletionClient class, the production implementation
of the CompletionClient port. No retries happen at this layer: every
failure is classified as GenerationFailure and propagated to the caller,
which owns the (capped) retry policy.
"""

import logging
from typing import Optional

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    OpenAIError,
)

from application.exceptions import GenerationFailure

logger = logging.getLogger(__name__)


class OpenAICompletionClient:
    """
    Text-completion client backed by the OpenAI chat completions API.

    Works against any OpenAI-compatible endpoint via base_url.
    """

    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_TIMEOUT_SECONDS = 60.0

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        """
        Initialize the completion client.

        Args:
            api_key: API key for the completion service
            model: Model to use (default: gpt-4o-mini)
            base_url: Optional OpenAI-compatible endpoint
            timeout_seconds: Bound on a single request
        """
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self._model = model

    @property
    def model(self) -> str:
        return self._model

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Send a single-message prompt and return the raw completion text.

        Args:
            prompt: Full instruction text
            max_tokens: Upper bound on completion size
            temperature: Sampling randomness

        Returns:
            Raw completion text

        Raises:
            GenerationFailure: On timeout, connection error, non-2xx
                               response or empty completion
        """
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": prompt}],
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except APITimeoutError as e:
            logger.warning(f"Completion request timed out: {e}")
            raise GenerationFailure("Completion service timed out") from e
        except APIConnectionError as e:
            logger.warning(f"Completion service unreachable: {e}")
            raise GenerationFailure("Completion service unreachable") from e
        except APIStatusError as e:
            logger.warning(f"Completion service returned {e.status_code}: {e}")
            raise GenerationFailure(
                f"Completion service returned status {e.status_code}"
            ) from e
        except OpenAIError as e:
            logger.warning(f"Completion request failed: {e}")
            raise GenerationFailure("Completion request failed") from e

        if not response.choices:
            raise GenerationFailure("Empty response from completion service")

        content = response.choices[0].message.content
        if not content or not content.strip():
            raise GenerationFailure("Empty response from completion service")

        finish_reason = response.choices[0].finish_reason
        if finish_reason == "length":
            logger.info("Completion hit max_tokens; output may be truncated")

        return content
