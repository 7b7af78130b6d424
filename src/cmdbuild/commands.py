"""Command model and the ordered registry of build targets."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping

from pydantic import BaseModel

from .errors import RegistrationError

logger = logging.getLogger(__name__)

Body = Callable[[], None]


class Command(BaseModel):
    """A named build target and the action that implements it."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    body: Body | None = None


class CommandRegistry(Mapping[str, Body]):
    """Read-only view of registered commands, in registration order."""

    def __init__(self) -> None:
        self._commands: dict[str, Body] = {}

    def add(self, name: str, body: Body | None) -> RegistrationError | None:
        """Register a body under a name.

        Returns the error instead of raising it, and leaves the registry
        unchanged, when the name is taken or the body is missing.
        """
        if name in self._commands:
            return RegistrationError(
                f"can't register command `{name}`. Already has command with such name"
            )
        if body is None:
            return RegistrationError(f"can't register command `{name}`. Command body can't be nil")
        if not callable(body):
            return RegistrationError(f"can't register command `{name}`. Command body isn't callable")
        logger.debug("Registered command '%s'", name)
        self._commands[name] = body
        return None

    def names(self) -> list[str]:
        return list(self._commands)

    def unknown(self, names: list[str]) -> list[str]:
        """Return the requested names that are not registered, in order."""
        return [n for n in names if n not in self._commands]

    def __getitem__(self, name: str) -> Body:
        return self._commands[name]

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)

    def __repr__(self) -> str:
        return f"CommandRegistry(commands={len(self._commands)})"
