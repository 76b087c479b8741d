"""Onboarding questionnaire and answer-to-profile mapping."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from word_tutor.models.user_profile import (
    LearningGoal,
    LearningStyle,
    ProficiencyLevel,
    ReadingInterest,
    UserProfile,
)


class QuestionnaireError(ValueError):
    """Raised when answers cannot be turned into a profile."""


class QuestionType(StrEnum):
    SINGLE_CHOICE = "single_choice"
    MULTI_CHOICE = "multi_choice"
    TEXT_INPUT = "text_input"


class Question(BaseModel):
    id: str
    text: str
    type: QuestionType
    options: list[str] = []
    hint: str = ""
    required: bool = True


GOAL_OPTIONS: dict[str, LearningGoal] = {
    "Exam": LearningGoal.EXAM,
    "Study abroad": LearningGoal.ABROAD,
    "Work": LearningGoal.WORK,
    "Interest": LearningGoal.INTEREST,
}

INTEREST_OPTIONS: dict[str, ReadingInterest] = {
    "Novels": ReadingInterest.NOVEL,
    "Technology": ReadingInterest.TECH,
    "Business": ReadingInterest.BUSINESS,
    "Games": ReadingInterest.GAME,
}

LEVEL_OPTIONS: dict[str, ProficiencyLevel] = {
    "Beginner": ProficiencyLevel.BEGINNER,
    "Intermediate": ProficiencyLevel.INTERMEDIATE,
    "Advanced": ProficiencyLevel.ADVANCED,
}

STYLE_OPTIONS: dict[str, LearningStyle] = {
    "Practice": LearningStyle.PRACTICE,
    "AI explanation": LearningStyle.AI_EXPLAIN,
    "Conversation": LearningStyle.CONVERSATION,
}

QUESTIONS: list[Question] = [
    Question(
        id="Q1",
        text="What is your main goal for learning English?",
        type=QuestionType.SINGLE_CHOICE,
        options=list(GOAL_OPTIONS),
    ),
    Question(
        id="Q2",
        text="What kind of content do you like to read?",
        type=QuestionType.MULTI_CHOICE,
        options=list(INTEREST_OPTIONS),
    ),
    Question(
        id="Q3",
        text="Roughly what is your English level?",
        type=QuestionType.SINGLE_CHOICE,
        options=list(LEVEL_OPTIONS),
    ),
    Question(
        id="Q4",
        text="Enter some words you came across recently (optional)",
        type=QuestionType.TEXT_INPUT,
        hint="Separate multiple words with spaces",
        required=False,
    ),
    Question(
        id="Q5",
        text="How do you prefer to learn?",
        type=QuestionType.SINGLE_CHOICE,
        options=list(STYLE_OPTIONS),
    ),
]


def is_complete(answers: dict[str, Any]) -> bool:
    """True when every required question has an answer."""
    return all(q.id in answers for q in QUESTIONS if q.required)


def _choice(answers: dict[str, Any], question_id: str, options: dict[str, Any]) -> Any:
    answer = answers[question_id]
    if not isinstance(answer, str) or answer not in options:
        raise QuestionnaireError(f"Unknown option for {question_id}: {answer!r}")
    return options[answer]


def build_profile(answers: dict[str, Any]) -> UserProfile:
    """Map questionnaire answers (keyed by question id) to a UserProfile.

    Raises:
        QuestionnaireError: A required answer is missing or not one of the
            question's options.
    """
    missing = [q.id for q in QUESTIONS if q.required and q.id not in answers]
    if missing:
        raise QuestionnaireError(f"Missing answers for {', '.join(missing)}")

    raw_interests = answers["Q2"] or []
    if isinstance(raw_interests, str):
        raw_interests = [raw_interests]
    if not isinstance(raw_interests, list):
        raise QuestionnaireError(f"Q2 expects a list of options, got {raw_interests!r}")
    interests: list[ReadingInterest] = []
    for label in raw_interests:
        if not isinstance(label, str) or label not in INTEREST_OPTIONS:
            raise QuestionnaireError(f"Unknown option for Q2: {label!r}")
        if INTEREST_OPTIONS[label] not in interests:
            interests.append(INTEREST_OPTIONS[label])

    words = answers.get("Q4") or ""
    if not isinstance(words, str):
        raise QuestionnaireError(f"Q4 expects text, got {words!r}")
    return UserProfile(
        learning_goal=_choice(answers, "Q1", GOAL_OPTIONS),
        reading_interests=interests,
        proficiency_level=_choice(answers, "Q3", LEVEL_OPTIONS),
        custom_words=words.split(),
        learning_style=_choice(answers, "Q5", STYLE_OPTIONS),
    )
