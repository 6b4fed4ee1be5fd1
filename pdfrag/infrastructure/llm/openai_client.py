import asyncio
import logging

import httpx
from openai import AsyncOpenAI

from pdfrag.core.exceptions import MalformedResponseError

logger = logging.getLogger(__name__)


class OpenAICompatibleLLM:
    """LLM client for any OpenAI-compatible chat API (Anthropic, Cohere, OpenAI, Ollama)."""

    def __init__(
        self,
        provider: str,
        base_url: str,
        api_key: str,
        model: str,
        max_tokens: int = 4000,
        temperature: float = 0.1,
        timeout: float = 30.0,
        client: AsyncOpenAI | None = None,
    ):
        """Initialize LLM client.

        Args:
            provider: Provider name reported as the answering model.
            base_url: API URL.
            api_key: Provider API key.
            model: Model name.
            max_tokens: Max response tokens.
            temperature: Sampling temperature.
            timeout: Seconds allowed per request.
            client: Preconfigured client (tests).
        """
        self._provider = provider
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._timeout = timeout
        self._client = client or AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            timeout=httpx.Timeout(timeout),
            max_retries=0,
        )

    @property
    def model_name(self) -> str:
        return self._provider

    async def generate(self, prompt: str, system: str | None = None) -> str:
        """Generate a completion.

        Args:
            prompt: User prompt.
            system: System prompt.

        Returns:
            Completion text.

        Raises:
            asyncio.TimeoutError: Request exceeded the timeout.
            MalformedResponseError: Response carried no text.
        """
        messages: list[dict] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await asyncio.wait_for(
            self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            ),
            timeout=self._timeout,
        )

        if not response.choices or not response.choices[0].message.content:
            raise MalformedResponseError(f"[{self._provider}] empty completion")

        content = response.choices[0].message.content
        logger.info(f"[{self._provider}] Generated {len(content)} chars with {self._model}")
        return content
