"""Tutor conversation state."""

from datetime import datetime

import openai
import structlog
from pydantic import BaseModel, Field

from word_tutor.chat.client import ChatClient
from word_tutor.conversation.prompt_manager import PromptManager

logger = structlog.get_logger()

STATUS_MESSAGES: dict[int, str] = {
    401: "The API key is invalid, please contact the administrator.",
    403: "Access denied, please contact the administrator.",
    429: "Too many requests, please try again later.",
    500: "The server hit an internal error, please try again later.",
}


class ChatMessage(BaseModel):
    """A single turn in the conversation."""

    role: str  # "user" or "assistant"
    content: str
    is_error: bool = False  # failure notice, not sent back to the model
    timestamp: datetime = Field(default_factory=datetime.now)


def describe_error(error: Exception) -> str:
    """User-facing text for a failed chat request."""
    if isinstance(error, openai.APITimeoutError):
        return "The request timed out, please check your network connection and try again."
    if isinstance(error, openai.APIConnectionError):
        return "Cannot reach the server, please check your network connection."
    if isinstance(error, openai.APIStatusError):
        return STATUS_MESSAGES.get(
            error.status_code,
            f"The request failed ({error.status_code}), please try again later.",
        )
    return f"Something went wrong: {error}"


class ChatSession:
    """Conversation with the tutor using the manager's current prompt.

    Args:
        prompt_manager: Source of the system prompt for each request.
        client: Chat-completion client.
    """

    def __init__(self, prompt_manager: PromptManager, client: ChatClient):
        self.prompt_manager = prompt_manager
        self.client = client
        self.messages: list[ChatMessage] = []

    async def send(self, content: str) -> ChatMessage:
        """Append the user's message, ask the tutor, and append the reply.

        Failures are turned into an assistant message describing the problem.
        """
        self.messages.append(ChatMessage(role="user", content=content))
        prompt = self.prompt_manager.get_current_prompt()
        logger.debug("chat_using_prompt", prompt_id=prompt.id)
        history = [{"role": m.role, "content": m.content} for m in self.messages if not m.is_error]
        try:
            reply_text = await self.client.complete(prompt.content, history)
            reply = ChatMessage(role="assistant", content=reply_text)
        except Exception as e:
            logger.exception("chat_send_failed")
            reply = ChatMessage(role="assistant", content=describe_error(e), is_error=True)
        self.messages.append(reply)
        return reply

    def clear(self) -> None:
        self.messages.clear()
