"""Tests for the onboarding questionnaire."""

import pytest

from word_tutor.models.user_profile import (
    LearningGoal,
    LearningStyle,
    ProficiencyLevel,
    ReadingInterest,
)
from word_tutor.profile.questionnaire import (
    QUESTIONS,
    QuestionnaireError,
    build_profile,
    is_complete,
)


@pytest.fixture
def answers():
    return {
        "Q1": "Study abroad",
        "Q2": ["Technology", "Novels"],
        "Q3": "Intermediate",
        "Q4": "serendipity  resilient",
        "Q5": "AI explanation",
    }


def test_question_ids():
    assert [q.id for q in QUESTIONS] == ["Q1", "Q2", "Q3", "Q4", "Q5"]


def test_build_profile(answers):
    profile = build_profile(answers)
    assert profile.learning_goal == LearningGoal.ABROAD
    assert profile.reading_interests == [ReadingInterest.TECH, ReadingInterest.NOVEL]
    assert profile.proficiency_level == ProficiencyLevel.INTERMEDIATE
    assert profile.custom_words == ["serendipity", "resilient"]
    assert profile.learning_style == LearningStyle.AI_EXPLAIN


def test_words_are_optional(answers):
    del answers["Q4"]
    assert is_complete(answers)
    assert build_profile(answers).custom_words == []


def test_duplicate_interests_collapsed(answers):
    answers["Q2"] = ["Games", "Games"]
    assert build_profile(answers).reading_interests == [ReadingInterest.GAME]


def test_empty_interests(answers):
    answers["Q2"] = []
    assert build_profile(answers).reading_interests == []


def test_incomplete_answers(answers):
    del answers["Q3"]
    assert not is_complete(answers)
    with pytest.raises(QuestionnaireError, match="Q3"):
        build_profile(answers)


@pytest.mark.parametrize("question_id,value", [("Q1", "Fun"), ("Q2", ["Cooking"]), ("Q5", ["Practice"])])
def test_unknown_option(answers, question_id, value):
    answers[question_id] = value
    with pytest.raises(QuestionnaireError, match=question_id):
        build_profile(answers)


@pytest.mark.parametrize("value", [5, {"Novels": True}])
def test_interests_must_be_a_list(answers, value):
    answers["Q2"] = value
    with pytest.raises(QuestionnaireError, match="Q2"):
        build_profile(answers)


def test_single_interest_string_accepted(answers):
    answers["Q2"] = "Business"
    assert build_profile(answers).reading_interests == [ReadingInterest.BUSINESS]


@pytest.mark.parametrize("value", [["lucid", "terse"], 42])
def test_words_must_be_text(answers, value):
    answers["Q4"] = value
    with pytest.raises(QuestionnaireError, match="Q4"):
        build_profile(answers)
