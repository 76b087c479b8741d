"""User profile model built from the onboarding questionnaire."""

import time
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _now_millis() -> int:
    return int(time.time() * 1000)


class LearningGoal(StrEnum):
    """Why the user is learning English."""

    EXAM = "EXAM"
    ABROAD = "ABROAD"
    WORK = "WORK"
    INTEREST = "INTEREST"


class ReadingInterest(StrEnum):
    """Content domains the user likes to read."""

    NOVEL = "NOVEL"
    TECH = "TECH"
    BUSINESS = "BUSINESS"
    GAME = "GAME"


class ProficiencyLevel(StrEnum):
    """Self-reported English level."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class LearningStyle(StrEnum):
    """Preferred way of studying new words."""

    PRACTICE = "PRACTICE"
    AI_EXPLAIN = "AI_EXPLAIN"
    CONVERSATION = "CONVERSATION"


class UserProfile(BaseModel):
    """Questionnaire answers, serialized as a camelCase JSON blob.

    Unknown keys are ignored and values are parsed in lax mode so blobs
    written by older clients still load.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: int | str = 0
    learning_goal: LearningGoal = LearningGoal.EXAM
    reading_interests: list[ReadingInterest] = Field(default_factory=list)  # supplied order
    proficiency_level: ProficiencyLevel = ProficiencyLevel.BEGINNER
    custom_words: list[str] = Field(default_factory=list)
    learning_style: LearningStyle = LearningStyle.PRACTICE
    last_updated: int = Field(default_factory=_now_millis)  # epoch millis

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, blob: str) -> "UserProfile":
        return cls.model_validate_json(blob)
