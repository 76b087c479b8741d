"""Chat-completion client for the vocabulary tutor."""

import structlog
from openai import AsyncOpenAI

logger = structlog.get_logger()

DEFAULT_TIMEOUT_SECONDS = 30.0


class ChatError(Exception):
    """The chat endpoint answered without usable content."""


class ChatClient:
    """Sends a system prompt plus conversation history to an OpenAI-compatible endpoint.

    No retries: a request either completes within ``timeout`` or fails.

    Args:
        api_key: API key for the endpoint.
        model: Chat model identifier.
        base_url: Endpoint base URL; None uses the SDK default.
        temperature: Sampling temperature.
        timeout: Connect/read/write timeout in seconds.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "qwen-turbo",
        base_url: str | None = None,
        temperature: float = 0.8,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self.model = model
        self.temperature = temperature

    async def complete(self, system_prompt: str, history: list[dict[str, str]]) -> str:
        """Request the assistant's next reply.

        Args:
            system_prompt: Role-priming text sent as the system message.
            history: Prior turns as {"role": "user"|"assistant", "content": "..."}.

        Returns:
            The reply text.
        """
        messages = [{"role": "system", "content": system_prompt}, *history]
        response = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            temperature=self.temperature,
        )
        if not response.choices or not response.choices[0].message.content:
            raise ChatError("No reply received from the chat endpoint")
        reply = response.choices[0].message.content
        logger.info("chat_completion_received", model=self.model, reply_chars=len(reply))
        return reply
