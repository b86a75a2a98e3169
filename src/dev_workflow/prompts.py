"""Interactive prompts used by the initialization and start flows.

The flows depend on the small :class:`Prompter` protocol so they can be driven
by a scripted prompter in tests; :class:`ClickPrompter` is the terminal
implementation.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Protocol
from urllib.parse import urlparse

import click

Validator = Callable[[str], str]


class InputError(Exception):
    """Base class for interactive input failures."""


class InputCancelled(InputError):
    def __init__(self, message: str) -> None:
        self.prompt = message
        super().__init__(f"Prompt cancelled: {message}")


def required(value: str) -> str:
    if not value.strip():
        raise click.BadParameter("A response is required.")
    return value


def min_length(length: int) -> Validator:
    def validate(value: str) -> str:
        if len(value) < length:
            raise click.BadParameter(f"The length of the response should be at least {length}.")
        return value

    return validate


def url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise click.BadParameter(f"{value!r} is not a valid http(s) URL.")
    return value


def run_validators(value: str, validators: Sequence[Validator]) -> str:
    for validator in validators:
        value = validator(value)
    return value


class Prompter(Protocol):
    def echo(self, message: str) -> None: ...

    def text(
        self,
        message: str,
        *,
        default: str | None = None,
        help: str | None = None,
        validators: Sequence[Validator] = (),
        hide_input: bool = False,
    ) -> str: ...

    def confirm(self, message: str, *, default: bool = False) -> bool: ...

    def select(self, message: str, options: Sequence[str]) -> str: ...


class ClickPrompter:
    """Terminal prompter backed by ``click``.

    Validation failures are reported and the question is asked again;
    Ctrl-C / EOF raise :class:`InputCancelled`.
    """

    def echo(self, message: str) -> None:
        click.echo(message)

    def text(
        self,
        message: str,
        *,
        default: str | None = None,
        help: str | None = None,
        validators: Sequence[Validator] = (),
        hide_input: bool = False,
    ) -> str:
        if help:
            click.echo(click.style(help, dim=True))
        try:
            value: str = click.prompt(
                message,
                default=default or None,
                hide_input=hide_input,
                value_proc=lambda raw: run_validators(raw, validators),
            )
        except click.Abort as e:
            raise InputCancelled(message) from e
        return value

    def confirm(self, message: str, *, default: bool = False) -> bool:
        try:
            return click.confirm(message, default=default)
        except click.Abort as e:
            raise InputCancelled(message) from e

    def select(self, message: str, options: Sequence[str]) -> str:
        if not options:
            raise ValueError("select() needs at least one option")

        click.echo(message)
        for index, option in enumerate(options, start=1):
            click.echo(f"  {index}) {option}")
        try:
            choice: int = click.prompt(
                "Choice",
                type=click.IntRange(1, len(options)),
                default=1,
            )
        except click.Abort as e:
            raise InputCancelled(message) from e
        return options[choice - 1]
