"""Profile-driven system prompt selection.

Precedence: an active custom prompt wins, otherwise a prompt is synthesized
from the user profile, otherwise the built-in default is used.
"""

from typing import assert_never

from word_tutor.models.prompt import DEFAULT_PROMPT, Prompt, PromptType
from word_tutor.models.user_profile import (
    LearningGoal,
    LearningStyle,
    ProficiencyLevel,
    ReadingInterest,
    UserProfile,
)

PROFILE_PROMPT_ID = "profile_based_prompt"
INTEREST_SEPARATOR = ", "

PROFILE_PROMPT_TEMPLATE = """\
You are a professional English learning assistant. Give targeted vocabulary guidance based on the user profile below:

User profile:
- English level: {proficiency}
- Learning goal: {goal}
- Interests: {interests}
- Learning preference: {style}

Response requirements:
1. Adjust the depth and difficulty of explanations to the user's level
2. Provide scenarios and example sentences related to the learning goal
3. Choose examples close to the user's areas of interest
4. Organize content according to the user's preferred learning style
5. Keep it concise and highlight the key points
6. Offer encouragement and study advice when appropriate"""


def describe_proficiency(level: ProficiencyLevel) -> str:
    match level:
        case ProficiencyLevel.BEGINNER:
            return "beginner level, needs more basic explanations and simple example sentences"
        case ProficiencyLevel.INTERMEDIATE:
            return "intermediate level, can follow more complex usage and example sentences"
        case ProficiencyLevel.ADVANCED:
            return "advanced level, needs in-depth distinctions between meanings and idiomatic usage"
        case _:
            assert_never(level)


def describe_goal(goal: LearningGoal) -> str:
    match goal:
        case LearningGoal.EXAM:
            return "exam preparation, focus on tested vocabulary and common question types"
        case LearningGoal.ABROAD:
            return "going abroad, focus on everyday communication and academic language"
        case LearningGoal.WORK:
            return "work, focus on business and workplace language"
        case LearningGoal.INTEREST:
            return "personal interest, flexible and varied learning content"
        case _:
            assert_never(goal)


def interest_label(interest: ReadingInterest) -> str:
    match interest:
        case ReadingInterest.NOVEL:
            return "literature and fiction"
        case ReadingInterest.TECH:
            return "technology"
        case ReadingInterest.BUSINESS:
            return "business"
        case ReadingInterest.GAME:
            return "gaming"
        case _:
            assert_never(interest)


def describe_interests(interests: list[ReadingInterest]) -> str:
    if not interests:
        return "covers general vocabulary across domains"
    labels = INTEREST_SEPARATOR.join(interest_label(i) for i in interests)
    return f"focuses on {labels} vocabulary"


def describe_style(style: LearningStyle) -> str:
    match style:
        case LearningStyle.PRACTICE:
            return "reinforces memory through plenty of practice"
        case LearningStyle.AI_EXPLAIN:
            return "wants detailed AI explanations and analysis"
        case LearningStyle.CONVERSATION:
            return "prefers learning through conversation"
        case _:
            assert_never(style)


def build_profile_prompt(profile: UserProfile) -> Prompt:
    """Synthesize the profile-based prompt. Never persisted."""
    content = PROFILE_PROMPT_TEMPLATE.format(
        proficiency=describe_proficiency(profile.proficiency_level),
        goal=describe_goal(profile.learning_goal),
        interests=describe_interests(profile.reading_interests),
        style=describe_style(profile.learning_style),
    )
    return Prompt(
        id=PROFILE_PROMPT_ID,
        content=content,
        type=PromptType.DEFAULT,
        is_active=True,
        order=0,
    )


def resolve(custom_prompt: Prompt | None, profile: UserProfile | None) -> Prompt:
    """Pick the single active prompt.

    Args:
        custom_prompt: Parsed custom prompt record, or None if absent or
            unparseable.
        profile: The user's questionnaire profile, if any.

    Returns:
        The custom prompt unchanged when it is active, else a prompt built
        from ``profile``, else ``DEFAULT_PROMPT``.
    """
    if custom_prompt is not None and custom_prompt.is_active:
        return custom_prompt
    if profile is not None:
        return build_profile_prompt(profile)
    return DEFAULT_PROMPT
