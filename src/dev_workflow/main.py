"""CLI entrypoint for ``wf``."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from dev_workflow import __version__
from dev_workflow.commands import command_init, command_start, discover_repository
from dev_workflow.config import (
    ConfigError,
    GlobalConfigStore,
    resolve_global_config,
    resolve_repo_config,
)
from dev_workflow.errors import (
    ConfigFailure,
    Conversions,
    GitFailure,
    InputFailure,
    TrackerFailure,
    WorkflowError,
    adapt_errors,
)
from dev_workflow.git.repository import GitError, GitRepository
from dev_workflow.logging import configure_logging
from dev_workflow.prompts import ClickPrompter, InputError, Prompter
from dev_workflow.settings import WorkflowSettings
from dev_workflow.tracker.client import TrackerError

logger = logging.getLogger(__name__)

ERROR_CONVERSIONS: Conversions = {
    ConfigError: ConfigFailure,
    GitError: GitFailure,
    TrackerError: TrackerFailure,
    InputError: InputFailure,
}

_TEST_OUTPUT = {"sub1": "sub 1", "sub2": "sub 2", "all": "All"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wf",
        description="A tool to automate some common dev tasks",
    )
    parser.add_argument("--version", action="version", version=f"wf {__version__}")

    # `test` is left out of the listed commands; it still parses.
    subparsers = parser.add_subparsers(
        dest="command", required=True, metavar="{init,start,push,noop}"
    )

    subparsers.add_parser("init", help="Initialize workflow app settings")

    start = subparsers.add_parser("start", help="Start a new workflow in the current repository")
    start.add_argument("ticket_id", help="Ticket id to create the branch from")

    subparsers.add_parser("push", help="Push current work branch to remote repository")
    subparsers.add_parser("noop", help="Do nothing, just to test")

    test = subparsers.add_parser("test", description="Testing subcommands")
    test.add_argument("sub_command", choices=sorted(_TEST_OUTPUT), help="Subcommand to run")

    return parser


def run(args: argparse.Namespace, settings: WorkflowSettings, prompter: Prompter) -> None:
    store = GlobalConfigStore(settings.global_config_file)

    if args.command == "init":
        # Initialization runs directly, never through the auto-init path.
        command_init(store, prompter, repo=discover_repository())
        return

    if args.command == "start":
        config = resolve_global_config(store, prompter, auto_init=True)
        repo = GitRepository.discover()
        repo_config = resolve_repo_config(repo, prompter, auto_init=True)
        command_start(
            config,
            repo_config,
            repo,
            args.ticket_id,
            prompter,
            timeout=settings.tracker_timeout_seconds,
        )
        return

    if args.command == "push":
        repo = GitRepository.discover()
        repo.push()
        print(f"Pushed {repo.current_branch_ref()} to origin")
        return

    if args.command == "noop":
        print("Doing nothing")
        return

    if args.command == "test":
        print(_TEST_OUTPUT[args.sub_command])
        return

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: list[str] | None = None, *, prompter: Prompter | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = WorkflowSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Settings error (check your WF_* environment variables):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    try:
        with adapt_errors(ERROR_CONVERSIONS):
            run(args, settings, prompter or ClickPrompter())
        return 0

    except WorkflowError as e:
        logger.debug("Command failed", extra={"command": args.command}, exc_info=True)
        print(str(e), file=sys.stderr)
        return 1

    except Exception:
        logger.exception("Command failed", extra={"command": args.command})
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
