"""
Text-completion client port (interface).

The single I/O boundary with external latency. Isolated behind a
Protocol so tests can substitute a deterministic stub.
"""

from typing import Protocol


class CompletionClient(Protocol):
    """Sends a prompt to a text-completion service."""

    async def complete(self, prompt: str, max_tokens: int, temperature: float) -> str:
        """
        Complete a prompt.

        Args:
            prompt: Full instruction text
            max_tokens: Upper bound on completion size
            temperature: Sampling randomness

        Returns:
            Raw completion text (non-empty)

        Raises:
            GenerationFailure: On network error, timeout, non-2xx response
                               or empty completion
        """
        ...
