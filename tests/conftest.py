"""Test configuration and fixtures."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pygit2
import pytest

from dev_workflow.config import GlobalConfig, GlobalConfigStore, IssueTrackerConfig
from dev_workflow.git import GitRepository
from dev_workflow.prompts import InputCancelled, Validator, run_validators

SIGNATURE = pygit2.Signature("Test User", "test@example.com")


@dataclass
class ScriptedPrompter:
    """Prompter answering from pre-recorded responses.

    A ``None`` text answer accepts the prompt's default. Running out of
    answers behaves like the user pressing Ctrl-C.
    """

    texts: deque[str | None] = field(default_factory=deque)
    confirms: deque[bool] = field(default_factory=deque)
    selections: deque[str | None] = field(default_factory=deque)
    echoed: list[str] = field(default_factory=list)
    asked: list[str] = field(default_factory=list)
    text_defaults: list[str | None] = field(default_factory=list)
    offered: list[list[str]] = field(default_factory=list)

    @classmethod
    def answering(
        cls,
        texts: Iterable[str | None] = (),
        *,
        confirms: Iterable[bool] = (),
        selections: Iterable[str | None] = (),
    ) -> ScriptedPrompter:
        return cls(texts=deque(texts), confirms=deque(confirms), selections=deque(selections))

    def echo(self, message: str) -> None:
        self.echoed.append(message)

    def text(
        self,
        message: str,
        *,
        default: str | None = None,
        help: str | None = None,
        validators: Sequence[Validator] = (),
        hide_input: bool = False,
    ) -> str:
        self.asked.append(message)
        self.text_defaults.append(default)
        if not self.texts:
            raise InputCancelled(message)
        answer = self.texts.popleft()
        value = default if answer is None else answer
        return run_validators(value or "", validators)

    def confirm(self, message: str, *, default: bool = False) -> bool:
        self.asked.append(message)
        if not self.confirms:
            raise InputCancelled(message)
        return self.confirms.popleft()

    def select(self, message: str, options: Sequence[str]) -> str:
        self.asked.append(message)
        self.offered.append(list(options))
        if not self.selections:
            raise InputCancelled(message)
        answer = self.selections.popleft()
        return options[0] if answer is None else answer


def commit_file(
    repo: pygit2.Repository,
    *,
    ref: str,
    name: str,
    content: bytes,
    parents: list[pygit2.Oid],
    base_tree: pygit2.Tree | None = None,
    message: str = "commit",
) -> pygit2.Oid:
    """Commit ``name`` on top of ``base_tree`` without touching the working tree."""

    blob = repo.create_blob(content)
    builder = repo.TreeBuilder(base_tree) if base_tree is not None else repo.TreeBuilder()
    builder.insert(name, blob, pygit2.enums.FileMode.BLOB)
    return repo.create_commit(ref, SIGNATURE, SIGNATURE, message, builder.write(), parents)


@pytest.fixture
def repo_path(tmp_path: Path) -> Path:
    """A non-bare repository on ``main`` with a ``develop`` branch one commit ahead.

    ``main`` holds README.md; ``develop`` also changes README.md and adds
    DEVELOP.md. The working tree is a clean checkout of ``main``.
    """

    path = tmp_path / "repo"
    repo = pygit2.init_repository(str(path), bare=False, initial_head="main")

    (path / "README.md").write_text("main\n", encoding="utf-8")
    repo.index.add("README.md")
    repo.index.write()
    tree = repo.index.write_tree()
    main_id = repo.create_commit("HEAD", SIGNATURE, SIGNATURE, "initial", tree, [])

    main_tree = repo.get(main_id).tree
    readme_id = commit_file(
        repo,
        ref="refs/heads/develop",
        name="README.md",
        content=b"develop\n",
        parents=[main_id],
        base_tree=main_tree,
        message="develop readme",
    )
    commit_file(
        repo,
        ref="refs/heads/develop",
        name="DEVELOP.md",
        content=b"only on develop\n",
        parents=[readme_id],
        base_tree=repo.get(readme_id).tree,
        message="develop file",
    )
    return path


@pytest.fixture
def pygit_repo(repo_path: Path) -> pygit2.Repository:
    return pygit2.Repository(str(repo_path))


@pytest.fixture
def git_repo(pygit_repo: pygit2.Repository) -> GitRepository:
    return GitRepository(pygit_repo)


@pytest.fixture
def global_store(tmp_path: Path) -> GlobalConfigStore:
    return GlobalConfigStore(tmp_path / "config" / "config.json")


@pytest.fixture
def global_config() -> GlobalConfig:
    return GlobalConfig(
        issue_tracker=IssueTrackerConfig(
            host="https://acme.atlassian.net",
            user="alice",
            token="secret-token",
        )
    )


@pytest.fixture
def make_prompter() -> type[ScriptedPrompter]:
    """Build scripted prompters: ``make_prompter.answering(["text", None], confirms=[True])``."""
    return ScriptedPrompter
