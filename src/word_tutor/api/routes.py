"""REST API routes for the tutor prompt, profile and chat."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel

from word_tutor.chat.session import ChatMessage, ChatSession
from word_tutor.conversation.prompt_manager import PromptManager
from word_tutor.models.prompt import Prompt, PromptType
from word_tutor.models.user_profile import UserProfile
from word_tutor.profile.questionnaire import QUESTIONS, Question, QuestionnaireError, build_profile
from word_tutor.storage.profile_store import JsonFileProfileStore

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


class ChatRequest(BaseModel):
    content: str


class CustomPromptRequest(BaseModel):
    content: str
    is_active: bool = True


def get_prompt_manager(request: Request) -> PromptManager:
    return request.app.state.prompt_manager


def get_store(request: Request) -> JsonFileProfileStore:
    return request.app.state.profile_store


def get_chat_session(request: Request) -> ChatSession:
    return request.app.state.chat_session


def _prompt_body(prompt: Prompt) -> dict[str, Any]:
    return prompt.model_dump(by_alias=True)


@router.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"status": "ok"}


@router.get("/prompt")
async def current_prompt(manager: PromptManager = Depends(get_prompt_manager)) -> dict:
    return _prompt_body(manager.get_current_prompt())


@router.get("/prompt/default")
async def default_prompt(manager: PromptManager = Depends(get_prompt_manager)) -> dict:
    return _prompt_body(manager.get_default_prompt())


@router.put("/prompt/custom")
async def set_custom_prompt(
    body: CustomPromptRequest,
    manager: PromptManager = Depends(get_prompt_manager),
    store: JsonFileProfileStore = Depends(get_store),
) -> dict:
    """Store a user-authored prompt and reload the manager."""
    if not body.content.strip():
        raise HTTPException(status_code=422, detail="Prompt content must not be empty")
    prompt = Prompt(
        id="custom_prompt",
        content=body.content,
        type=PromptType.CUSTOM,
        is_active=body.is_active,
    )
    await store.save_custom_prompt_blob(prompt.to_json())
    await manager.initialize()
    logger.info("custom_prompt_saved", is_active=prompt.is_active)
    return _prompt_body(manager.get_current_prompt())


@router.delete("/prompt/custom")
async def delete_custom_prompt(
    manager: PromptManager = Depends(get_prompt_manager),
    store: JsonFileProfileStore = Depends(get_store),
) -> dict:
    await store.save_custom_prompt_blob(None)
    await manager.initialize()
    return _prompt_body(manager.get_current_prompt())


@router.get("/questions")
async def list_questions() -> list[Question]:
    return QUESTIONS


@router.get("/profile")
async def get_profile(
    manager: PromptManager = Depends(get_prompt_manager),
    store: JsonFileProfileStore = Depends(get_store),
) -> dict:
    profile = manager.user_profile
    return {
        "completed": await store.is_profile_completed(),
        "profile": profile.model_dump(by_alias=True) if profile else None,
    }


async def _save_profile(
    profile: UserProfile, manager: PromptManager, store: JsonFileProfileStore
) -> dict:
    await store.save_profile_blob(profile.to_json())
    await manager.update_with_profile(profile)
    logger.info("profile_saved", prompt_id=manager.get_current_prompt().id)
    return {
        "profile": profile.model_dump(by_alias=True),
        "prompt": _prompt_body(manager.get_current_prompt()),
    }


@router.put("/profile")
async def put_profile(
    profile: UserProfile,
    manager: PromptManager = Depends(get_prompt_manager),
    store: JsonFileProfileStore = Depends(get_store),
) -> dict:
    return await _save_profile(profile, manager, store)


@router.post("/profile/answers")
async def submit_answers(
    answers: dict[str, Any],
    manager: PromptManager = Depends(get_prompt_manager),
    store: JsonFileProfileStore = Depends(get_store),
) -> dict:
    """Build a profile from questionnaire answers keyed by question id."""
    try:
        profile = build_profile(answers)
    except QuestionnaireError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return await _save_profile(profile, manager, store)


@router.post("/chat")
async def chat(
    body: ChatRequest, session: ChatSession = Depends(get_chat_session)
) -> ChatMessage:
    return await session.send(body.content)


@router.get("/chat")
async def chat_history(session: ChatSession = Depends(get_chat_session)) -> list[ChatMessage]:
    return session.messages


@router.delete("/chat")
async def clear_chat(session: ChatSession = Depends(get_chat_session)) -> dict:
    session.clear()
    return {"status": "cleared"}
