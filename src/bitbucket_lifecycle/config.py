"""Configuration loader for bitbucket-lifecycle."""

from __future__ import annotations

import asyncio
import os
import tempfile
import tomllib
from pathlib import Path

import tomlkit
from pydantic import BaseModel, Field, SecretStr, field_validator

from bitbucket_lifecycle.core.models.enums import GoalDisplayFormat
from bitbucket_lifecycle.paths import get_config_path

DEFAULT_GENERATED_COMMIT_MARKER = "[atomist:generated]"


def atomic_write(path: Path, content: str) -> None:
    """Write file atomically to avoid partial/corrupt writes."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=".tmp_")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(content)
        Path(tmp_path).replace(path)
    except Exception:
        Path(tmp_path).unlink(missing_ok=True)
        raise


class RenderingConfig(BaseModel):
    """Options that shape which actions are rendered."""

    style: GoalDisplayFormat = Field(
        default=GoalDisplayFormat.FULL,
        description="Goal rendering style: full or compact",
    )
    generated_commit_marker: str = Field(
        default=DEFAULT_GENERATED_COMMIT_MARKER,
        description="Commit message marker identifying machine-generated commits",
    )
    default_branch_fallback: str = Field(
        default="master",
        description="Branch assumed when a repo does not report its default branch",
    )

    @field_validator("style", mode="before")
    @classmethod
    def validate_style(cls, value: object) -> str:
        """Gracefully coerce invalid rendering styles to full."""
        match value:
            case str() as style if style in {f.value for f in GoalDisplayFormat}:
                return style
            case _:
                pass
        return GoalDisplayFormat.FULL.value


class BitbucketConfig(BaseModel):
    """Bitbucket Server connection settings."""

    api_url: str = Field(default="http://localhost:7990/", description="Bitbucket base URL")
    username: str = Field(default="")
    password: SecretStr = Field(default=SecretStr(""))
    timeout_seconds: float = Field(default=30.0, gt=0)
    tagger_message: str = Field(
        default="Tag created by Bitbucket Lifecycle Automation",
        description="Message used for annotated tags created without one",
    )

    @field_validator("api_url")
    @classmethod
    def ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else f"{value}/"


class LifecycleConfig(BaseModel):
    """Root configuration model."""

    rendering: RenderingConfig = Field(default_factory=RenderingConfig)
    bitbucket: BitbucketConfig = Field(default_factory=BitbucketConfig)

    @classmethod
    def load(cls, config_path: Path | None = None) -> LifecycleConfig:
        """Load configuration from TOML file or use defaults."""
        if config_path is None:
            config_path = get_config_path()

        if config_path.exists():
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
            return cls.model_validate(data)

        return cls()

    async def save(self, path: Path) -> None:
        """Serialize current config to TOML file."""
        doc = tomlkit.document()

        rendering_table = tomlkit.table()
        for key, value in self.rendering.model_dump(mode="json").items():
            rendering_table[key] = value
        doc["rendering"] = rendering_table

        bitbucket_table = tomlkit.table()
        for key, value in self.bitbucket.model_dump(mode="json").items():
            bitbucket_table[key] = value
        bitbucket_table["password"] = self.bitbucket.password.get_secret_value()
        doc["bitbucket"] = bitbucket_table

        content = tomlkit.dumps(doc)
        await asyncio.to_thread(atomic_write, path, content)


__all__ = [
    "DEFAULT_GENERATED_COMMIT_MARKER",
    "BitbucketConfig",
    "LifecycleConfig",
    "RenderingConfig",
    "atomic_write",
]
