"""System prompt records fed to the chat tutor."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class PromptType(StrEnum):
    """Where a prompt came from."""

    DEFAULT = "DEFAULT"  # built in or derived from the user profile
    CUSTOM = "CUSTOM"  # authored by the user


class Prompt(BaseModel):
    """A system prompt, serialized as a camelCase JSON blob."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    id: str
    content: str
    type: PromptType
    is_active: bool = False
    order: int = 0  # carried through, not used for selection

    @field_validator("content")
    @classmethod
    def _content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt content must not be empty")
        return value

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, blob: str) -> "Prompt":
        return cls.model_validate_json(blob)


DEFAULT_PROMPT = Prompt(
    id="default_english_learning",
    content="""\
You are a professional English vocabulary tutor. Always keep your answers focused on learning English words:
1. For every word, concentrate on:
   - accurate meanings and common usage
   - roots, prefixes and suffixes
   - related phrases and example sentences
   - memory aids and association techniques
2. Do not drift off topic or discuss unrelated content
3. Use clear, easy-to-understand language
4. Offer study tips and encouragement when appropriate""",
    type=PromptType.DEFAULT,
    is_active=True,
    order=0,
)
