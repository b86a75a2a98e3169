"""JSON-file backed stores for the two configuration scopes."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from dev_workflow.config.models import GlobalConfig, RepoConfig

logger = logging.getLogger(__name__)

REPO_CONFIG_PATH = Path(".wf") / "config.json"

ModelT = TypeVar("ModelT", bound=BaseModel)


class ConfigError(Exception):
    """Base class for stored-configuration failures."""


class ConfigPersistenceError(ConfigError):
    def __init__(self, path: Path, cause: OSError) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot write configuration to {path}: {cause}")


class NoBranchAvailable(ConfigError):
    def __init__(self) -> None:
        super().__init__("Repository has no local branch to use as base branch")


class JsonConfigStore(Generic[ModelT]):
    """Load and save one configuration model as a JSON file.

    A missing or unreadable file loads as the model's empty value, so the
    caller falls back to initialization instead of failing.
    """

    def __init__(self, path: Path, model: type[ModelT], *, private: bool = False) -> None:
        self._path = path
        self._model = model
        self._private = private

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> ModelT:
        if not self._path.exists():
            return self._model()

        # ValueError covers undecodable bytes and malformed JSON.
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return self._model.model_validate(raw if raw is not None else {})
        except (OSError, ValueError, ValidationError) as e:
            logger.warning(
                "Configuration file is unreadable; treating as not set",
                extra={"path": str(self._path), "error": str(e)},
            )
            return self._model()

    def save(self, value: ModelT) -> None:
        payload = value.model_dump(mode="json", exclude_none=True)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._write(json.dumps(payload, indent=2) + "\n")
        except OSError as e:
            raise ConfigPersistenceError(self._path, e) from e
        logger.info("Configuration saved", extra={"path": str(self._path)})

    def _write(self, text: str) -> None:
        if not self._private:
            self._path.write_text(text, encoding="utf-8")
            return

        # Created owner-only; fchmod also tightens a file that already existed.
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            os.fchmod(fh.fileno(), 0o600)
            fh.write(text)


class GlobalConfigStore(JsonConfigStore[GlobalConfig]):
    def __init__(self, path: Path) -> None:
        # Holds the tracker token.
        super().__init__(path, GlobalConfig, private=True)


class RepoConfigStore(JsonConfigStore[RepoConfig]):
    def __init__(self, path: Path) -> None:
        super().__init__(path, RepoConfig)

    @classmethod
    def for_workdir(cls, workdir: Path) -> RepoConfigStore:
        return cls(workdir / REPO_CONFIG_PATH)
