"""LLM protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for LLM client."""

    @property
    def model_name(self) -> str:
        """Provider name reported as the answering model."""
        ...

    async def generate(self, prompt: str, system: str | None = None) -> str:
        """Generate a completion for a single prompt.

        Args:
            prompt: User prompt.
            system: System prompt (optional).

        Returns:
            Generated text.

        Raises:
            Exception: Any provider failure, including timeouts.
        """
        ...
