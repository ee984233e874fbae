"""Action contributor contracts and registry."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from bitbucket_lifecycle.config import LifecycleConfig

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from bitbucket_lifecycle.core.models.entities import LifecycleNode
    from bitbucket_lifecycle.core.models.enums import NodeKind, RendererId
    from bitbucket_lifecycle.core.rendering import RenderContext

_CONTRIBUTOR_ID_PATTERN = re.compile(r"^[a-z][a-z0-9_.]{2,63}$")


@dataclass(frozen=True, slots=True)
class CommandInvocation:
    """Command name plus a read-only parameter mapping bound to an action."""

    name: str
    parameters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def of(cls, name: str, /, **parameters: Any) -> CommandInvocation:
        """Build an invocation, dropping parameters that are ``None``."""
        bound = {key: value for key, value in parameters.items() if value is not None}
        return cls(name=name, parameters=MappingProxyType(bound))

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "parameters": dict(self.parameters)}


@dataclass(frozen=True, slots=True)
class ConfirmDialog:
    title: str
    text: str
    ok_text: str = "Yes"
    dismiss_text: str = "No"

    def to_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "text": self.text,
            "ok_text": self.ok_text,
            "dismiss_text": self.dismiss_text,
        }


@dataclass(frozen=True, slots=True)
class ActionOption:
    """One entry of a menu action; selecting it runs ``command``."""

    text: str
    command: CommandInvocation


@dataclass(frozen=True, slots=True)
class Action:
    """A rendered control. Opaque to the engine, which never runs the command."""

    text: str
    command: CommandInvocation
    confirm: ConfirmDialog | None = None
    options: tuple[ActionOption, ...] = ()
    role: str | None = None

    @property
    def is_menu(self) -> bool:
        return bool(self.options)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"text": self.text, "command": self.command.to_dict()}
        if self.role is not None:
            payload["role"] = self.role
        if self.confirm is not None:
            payload["confirm"] = self.confirm.to_dict()
        if self.options:
            payload["options"] = [
                {"text": option.text, "command": option.command.to_dict()}
                for option in self.options
            ]
        return payload


@runtime_checkable
class ActionContributor(Protocol):
    """Contract for units that contribute actions for one node kind and render pass."""

    id: str
    node_kind: NodeKind
    renderer_ids: frozenset[RendererId]

    def configure(self, config: LifecycleConfig) -> None:
        """Receive the configuration this contributor renders with."""

    def supports(self, node: LifecycleNode) -> bool:
        """Pure applicability predicate."""

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        """Build button actions for a supported node."""

    async def menus_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        """Build menu actions for a supported node."""


class BaseContributor:
    """Shared configuration and defaults for built-in contributors."""

    id: str = ""
    node_kind: NodeKind
    renderer_ids: frozenset[RendererId] = frozenset()

    def __init__(self, config: LifecycleConfig | None = None) -> None:
        self.config = config or LifecycleConfig()

    def configure(self, config: LifecycleConfig) -> None:
        self.config = config

    def supports(self, node: LifecycleNode) -> bool:
        return node.kind == self.node_kind

    def renders_in(self, context: RenderContext) -> bool:
        return context.renderer_id in self.renderer_ids

    async def buttons_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        del node, context
        return []

    async def menus_for(self, node: LifecycleNode, context: RenderContext) -> list[Action]:
        del node, context
        return []


class ContributorRegistry:
    """In-memory registry of contributors keyed by node kind."""

    def __init__(self, config: LifecycleConfig | None = None) -> None:
        self._config = config or LifecycleConfig()
        self._contributors: dict[NodeKind, list[ActionContributor]] = {}
        self._ids: set[str] = set()

    @property
    def config(self) -> LifecycleConfig:
        return self._config

    def register(self, contributor: ActionContributor) -> None:
        """Configure and register a contributor; ids must be unique."""
        if not isinstance(contributor, ActionContributor):
            msg = f"{type(contributor).__name__} does not implement ActionContributor"
            raise TypeError(msg)
        if not _CONTRIBUTOR_ID_PATTERN.fullmatch(contributor.id):
            msg = f"Contributor ID '{contributor.id}' must match {_CONTRIBUTOR_ID_PATTERN.pattern}"
            raise ValueError(msg)
        if contributor.id in self._ids:
            msg = f"Contributor '{contributor.id}' is already registered"
            raise ValueError(msg)

        contributor.configure(self._config)
        self._contributors.setdefault(contributor.node_kind, []).append(contributor)
        self._ids.add(contributor.id)

    def register_all(self, contributors: Iterable[ActionContributor]) -> None:
        for contributor in contributors:
            self.register(contributor)

    def contributors_for(
        self,
        kind: NodeKind,
        renderer_id: RendererId | str,
    ) -> tuple[ActionContributor, ...]:
        """Resolve contributors for a node kind and render pass, in registration order."""
        return tuple(
            contributor
            for contributor in self._contributors.get(kind, [])
            if renderer_id in contributor.renderer_ids
        )

    def registered_ids(self) -> tuple[str, ...]:
        return tuple(
            contributor.id
            for contributors in self._contributors.values()
            for contributor in contributors
        )


__all__ = [
    "Action",
    "ActionContributor",
    "ActionOption",
    "BaseContributor",
    "CommandInvocation",
    "ConfirmDialog",
    "ContributorRegistry",
]
