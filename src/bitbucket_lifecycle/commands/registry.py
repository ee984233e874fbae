"""Command registration and dispatch by name."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from pydantic import ValidationError

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    from bitbucket_lifecycle.commands.models import CommandParameters

logger = logging.getLogger(__name__)

UNKNOWN_COMMAND: Final = "UNKNOWN_COMMAND"
INVALID_PARAMETERS: Final = "INVALID_PARAMETERS"

_COMMAND_NAME_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9]{2,63}$")

type CommandHandler = Callable[[Any], Awaitable[dict[str, Any]]]


@dataclass(frozen=True, slots=True, kw_only=True)
class CommandSpec:
    """Registration descriptor for one command."""

    name: str
    parameters: type[CommandParameters]
    handler: CommandHandler
    intent: tuple[str, ...] = ()
    description: str = ""


class CommandRegistry:
    """In-memory registry of commands keyed by name."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}

    def register(self, spec: CommandSpec) -> None:
        if not _COMMAND_NAME_PATTERN.fullmatch(spec.name):
            msg = f"Command name '{spec.name}' must match {_COMMAND_NAME_PATTERN.pattern}"
            raise ValueError(msg)
        if spec.name in self._commands:
            msg = f"Command '{spec.name}' is already registered"
            raise ValueError(msg)
        self._commands[spec.name] = spec

    def resolve(self, name: str) -> CommandSpec | None:
        return self._commands.get(name)

    def resolve_intent(self, intent: str) -> CommandSpec | None:
        """Find the command a chat intent phrase triggers."""
        phrase = intent.strip().lower()
        for spec in self._commands.values():
            if phrase in spec.intent:
                return spec
        return None

    def registered_names(self) -> tuple[str, ...]:
        return tuple(sorted(self._commands))

    async def dispatch(self, name: str, parameters: Mapping[str, Any]) -> dict[str, Any]:
        """Validate ``parameters`` against the command's model and run its handler."""
        spec = self.resolve(name)
        if spec is None:
            return {
                "success": False,
                "code": UNKNOWN_COMMAND,
                "message": f"Unknown command: {name}",
            }

        try:
            validated = spec.parameters.model_validate(dict(parameters))
        except ValidationError as exc:
            logger.info("Rejected %s parameters: %s", name, exc)
            return {
                "success": False,
                "code": INVALID_PARAMETERS,
                "message": f"Invalid parameters for {name}",
                "errors": [
                    {"field": ".".join(str(part) for part in error["loc"]), "error": error["msg"]}
                    for error in exc.errors()
                ],
            }

        logger.debug("Dispatching %s", name)
        return await spec.handler(validated)


__all__ = [
    "INVALID_PARAMETERS",
    "UNKNOWN_COMMAND",
    "CommandHandler",
    "CommandRegistry",
    "CommandSpec",
]
