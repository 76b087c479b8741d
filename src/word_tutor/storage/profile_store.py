"""Key-value persistence for the profile and custom prompt blobs (JSON + fcntl.flock + atomic write)."""

import asyncio
import fcntl
import json
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

import structlog

logger = structlog.get_logger()

PROFILE_JSON_KEY = "user_profile_json"
CUSTOM_PROMPT_JSON_KEY = "custom_prompt_json"
PROFILE_COMPLETED_KEY = "is_profile_completed"


class ProfileStore(Protocol):
    """Blob source consumed by PromptManager.

    Loads return None when the value is absent. A present blob is returned
    verbatim; parsing it is the caller's job.
    """

    async def load_profile_blob(self) -> str | None: ...

    async def load_custom_prompt_blob(self) -> str | None: ...


class JsonFileProfileStore:
    """ProfileStore backed by a single JSON document on disk.

    Args:
        path: Location of the settings document. Created on first write.
    """

    def __init__(self, path: Path):
        self.path = path

    async def load_profile_blob(self) -> str | None:
        return await asyncio.to_thread(self._get, PROFILE_JSON_KEY)

    async def load_custom_prompt_blob(self) -> str | None:
        return await asyncio.to_thread(self._get, CUSTOM_PROMPT_JSON_KEY)

    async def is_profile_completed(self) -> bool:
        return await asyncio.to_thread(self._get, PROFILE_COMPLETED_KEY) is True

    async def save_profile_blob(self, blob: str) -> None:
        """Store the profile and mark the questionnaire as completed."""
        await asyncio.to_thread(
            self._update, {PROFILE_JSON_KEY: blob, PROFILE_COMPLETED_KEY: True}
        )

    async def save_custom_prompt_blob(self, blob: str | None) -> None:
        """Store a custom prompt, or remove it when ``blob`` is None."""
        await asyncio.to_thread(self._update, {CUSTOM_PROMPT_JSON_KEY: blob})

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        with open(self.path, encoding="utf-8") as f:
            fcntl.flock(f, fcntl.LOCK_SH)
            data = json.load(f)
            fcntl.flock(f, fcntl.LOCK_UN)
        return data

    def _get(self, key: str) -> Any:
        value = self._read().get(key)
        if value == "":
            return None
        return value

    def _update(self, values: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        lock_path = self.path.with_name(self.path.name + ".lock")
        with open(lock_path, "w") as lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                data = self._read()
            except (OSError, ValueError):
                logger.warning("settings_store_unreadable", path=str(self.path), exc_info=True)
                data = {}
            if not isinstance(data, dict):
                logger.warning("settings_store_not_a_mapping", path=str(self.path))
                data = {}
            for key, value in values.items():
                if value is None:
                    data.pop(key, None)
                else:
                    data[key] = value
            with tempfile.NamedTemporaryFile(
                "w", dir=self.path.parent, delete=False, suffix=".json", encoding="utf-8"
            ) as tmp:
                json.dump(data, tmp, ensure_ascii=False, indent=2)
            os.replace(tmp.name, self.path)
