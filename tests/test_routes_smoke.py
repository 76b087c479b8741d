"""Smoke tests for API routes."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from word_tutor.api.routes import router
from word_tutor.chat.session import ChatSession
from word_tutor.conversation.prompt_manager import PromptManager
from word_tutor.conversation.prompt_resolver import PROFILE_PROMPT_ID
from word_tutor.storage.profile_store import JsonFileProfileStore

ANSWERS = {
    "Q1": "Work",
    "Q2": ["Business"],
    "Q3": "Advanced",
    "Q4": "",
    "Q5": "Conversation",
}


@pytest.fixture
def chat_client():
    c = MagicMock()
    c.complete = AsyncMock(return_value="Sure, let's practice.")
    return c


@pytest.fixture
def client(tmp_path, chat_client):
    store = JsonFileProfileStore(tmp_path / "settings.json")
    manager = PromptManager(store)
    app = FastAPI()
    app.include_router(router)
    app.state.profile_store = store
    app.state.prompt_manager = manager
    app.state.chat_session = ChatSession(manager, chat_client)
    with TestClient(app) as c:
        yield c


class TestHealthCheck:
    def test_health_returns_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestPrompt:
    def test_current_prompt_starts_as_default(self, client):
        data = client.get("/api/prompt").json()
        assert data["id"] == "default_english_learning"
        assert data["isActive"] is True

    def test_default_prompt(self, client):
        assert client.get("/api/prompt/default").json()["id"] == "default_english_learning"

    def test_custom_prompt_lifecycle(self, client):
        response = client.put("/api/prompt/custom", json={"content": "Only give synonyms."})
        assert response.status_code == 200
        assert response.json()["type"] == "CUSTOM"
        assert client.get("/api/prompt").json()["content"] == "Only give synonyms."

        response = client.delete("/api/prompt/custom")
        assert response.json()["id"] == "default_english_learning"

    def test_inactive_custom_prompt_not_used(self, client):
        response = client.put(
            "/api/prompt/custom", json={"content": "Only give synonyms.", "is_active": False}
        )
        assert response.json()["id"] == "default_english_learning"

    def test_blank_custom_prompt_rejected(self, client):
        assert client.put("/api/prompt/custom", json={"content": "  "}).status_code == 422


class TestProfile:
    def test_questions(self, client):
        questions = client.get("/api/questions").json()
        assert len(questions) == 5

    def test_profile_initially_empty(self, client):
        assert client.get("/api/profile").json() == {"completed": False, "profile": None}

    def test_submit_answers_updates_prompt(self, client):
        response = client.post("/api/profile/answers", json=ANSWERS)
        assert response.status_code == 200
        data = response.json()
        assert data["profile"]["learningGoal"] == "WORK"
        assert data["prompt"]["id"] == PROFILE_PROMPT_ID
        assert client.get("/api/prompt").json()["id"] == PROFILE_PROMPT_ID

        profile = client.get("/api/profile").json()
        assert profile["completed"] is True
        assert profile["profile"]["readingInterests"] == ["BUSINESS"]

    def test_invalid_answers(self, client):
        response = client.post("/api/profile/answers", json={"Q1": "Work"})
        assert response.status_code == 422

    def test_put_profile(self, client):
        response = client.put(
            "/api/profile",
            json={"learningGoal": "INTEREST", "proficiencyLevel": "INTERMEDIATE"},
        )
        assert response.status_code == 200
        assert response.json()["prompt"]["id"] == PROFILE_PROMPT_ID


class TestChat:
    def test_chat_roundtrip(self, client, chat_client):
        response = client.post("/api/chat", json={"content": "hello"})
        assert response.status_code == 200
        assert response.json()["content"] == "Sure, let's practice."

        system_prompt, history = chat_client.complete.call_args.args
        assert history == [{"role": "user", "content": "hello"}]
        assert system_prompt

        assert len(client.get("/api/chat").json()) == 2
        client.delete("/api/chat")
        assert client.get("/api/chat").json() == []


class TestProfileValidation:
    def test_non_list_interests_rejected(self, client):
        response = client.post("/api/profile/answers", json={**ANSWERS, "Q2": 5})
        assert response.status_code == 422

    def test_non_text_words_rejected(self, client):
        response = client.post("/api/profile/answers", json={**ANSWERS, "Q4": ["lucid"]})
        assert response.status_code == 422

    def test_save_recovers_from_corrupt_store(self, client, tmp_path):
        (tmp_path / "settings.json").write_text("{broken")
        response = client.put("/api/profile", json={"learningGoal": "WORK"})
        assert response.status_code == 200
        assert response.json()["prompt"]["id"] == PROFILE_PROMPT_ID
        assert client.get("/api/profile").json()["completed"] is True
