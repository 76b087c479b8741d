"""Session-scoped loading and caching of the active system prompt."""

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TypeVar

import structlog

from word_tutor.conversation.prompt_resolver import resolve
from word_tutor.models.prompt import DEFAULT_PROMPT, Prompt
from word_tutor.models.user_profile import UserProfile
from word_tutor.storage.profile_store import ProfileStore

logger = structlog.get_logger()

T = TypeVar("T")


class ManagerState(StrEnum):
    """PromptManager lifecycle states."""

    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class PromptManager:
    """Owns the current prompt for one user session.

    Store and parse failures are logged and treated as missing values, so
    ``initialize`` and ``update_with_profile`` never raise. Writers are
    serialized by an instance lock; ``get_current_prompt`` reads the cached
    value without locking.

    Args:
        store: Source of the profile and custom prompt blobs.
    """

    def __init__(self, store: ProfileStore):
        self._store = store
        self._lock = asyncio.Lock()
        self._state = ManagerState.UNINITIALIZED
        self._current_prompt: Prompt = DEFAULT_PROMPT
        self._user_profile: UserProfile | None = None
        self._custom_prompt: Prompt | None = None

    @property
    def state(self) -> ManagerState:
        return self._state

    @property
    def user_profile(self) -> UserProfile | None:
        return self._user_profile

    async def initialize(self) -> None:
        """Load both blobs, resolve, and cache the result."""
        async with self._lock:
            previous_state = self._state
            self._state = ManagerState.INITIALIZING
            logger.debug("prompt_manager_initializing")
            try:
                profile = await self._load(
                    "profile", self._store.load_profile_blob, UserProfile.from_json
                )
                custom_prompt = await self._load(
                    "custom_prompt", self._store.load_custom_prompt_blob, Prompt.from_json
                )
            except asyncio.CancelledError:
                self._state = previous_state
                raise

            prompt = resolve(custom_prompt, profile)
            self._user_profile = profile
            self._custom_prompt = custom_prompt
            self._current_prompt = prompt
            self._state = ManagerState.READY
            logger.info(
                "prompt_manager_initialized",
                prompt_id=prompt.id,
                has_profile=profile is not None,
                has_custom_prompt=custom_prompt is not None,
            )

    def get_current_prompt(self) -> Prompt:
        return self._current_prompt

    def get_default_prompt(self) -> Prompt:
        return DEFAULT_PROMPT

    async def update_with_profile(self, profile: UserProfile) -> None:
        """Replace the profile and re-resolve against the last known custom prompt."""
        async with self._lock:
            prompt = resolve(self._custom_prompt, profile)
            self._user_profile = profile
            self._current_prompt = prompt
            self._state = ManagerState.READY
            logger.info("prompt_updated_from_profile", prompt_id=prompt.id)

    async def _load(
        self,
        name: str,
        read: Callable[[], Awaitable[str | None]],
        parse: Callable[[str], T],
    ) -> T | None:
        try:
            blob = await read()
        except Exception:
            logger.exception(f"{name}_load_failed")
            return None
        if not blob:
            logger.debug(f"{name}_absent")
            return None
        try:
            return parse(blob)
        except Exception:
            logger.warning(f"{name}_parse_failed", exc_info=True)
            return None
