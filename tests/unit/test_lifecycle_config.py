"""Tests for loading and saving configuration."""

from __future__ import annotations

from pathlib import Path

import pytest

from bitbucket_lifecycle.config import (
    DEFAULT_GENERATED_COMMIT_MARKER,
    BitbucketConfig,
    LifecycleConfig,
    RenderingConfig,
    atomic_write,
)
from bitbucket_lifecycle.core.models.enums import GoalDisplayFormat
from bitbucket_lifecycle.paths import get_config_dir, get_config_path

pytestmark = pytest.mark.unit


class TestRenderingConfig:
    def test_defaults(self) -> None:
        config = RenderingConfig()

        assert config.style is GoalDisplayFormat.FULL
        assert config.generated_commit_marker == DEFAULT_GENERATED_COMMIT_MARKER
        assert config.default_branch_fallback == "master"

    @pytest.mark.parametrize("style", ["sparkly", 3, None])
    def test_invalid_style_coerced_to_full(self, style: object) -> None:
        assert RenderingConfig.model_validate({"style": style}).style is GoalDisplayFormat.FULL

    def test_compact_style(self) -> None:
        assert RenderingConfig(style="compact").style is GoalDisplayFormat.COMPACT


class TestBitbucketConfig:
    def test_api_url_gets_trailing_slash(self) -> None:
        config = BitbucketConfig(api_url="https://bitbucket.test")

        assert config.api_url == "https://bitbucket.test/"

    def test_password_is_not_leaked_in_repr(self) -> None:
        config = BitbucketConfig(password="s3cret")

        assert "s3cret" not in repr(config)
        assert config.password.get_secret_value() == "s3cret"

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            BitbucketConfig(timeout_seconds=0)


class TestLifecycleConfigFile:
    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert LifecycleConfig.load(tmp_path / "absent.toml") == LifecycleConfig()

    def test_loads_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text(
            '[rendering]\nstyle = "compact"\n\n'
            '[bitbucket]\napi_url = "https://bb.example.com"\nusername = "bot"\n',
            encoding="utf-8",
        )

        config = LifecycleConfig.load(path)

        assert config.rendering.style is GoalDisplayFormat.COMPACT
        assert config.bitbucket.api_url == "https://bb.example.com/"
        assert config.bitbucket.username == "bot"

    @pytest.mark.asyncio()
    async def test_save_then_load_keeps_settings(self, tmp_path: Path, config) -> None:
        path = tmp_path / "nested" / "config.toml"

        await config.save(path)
        loaded = LifecycleConfig.load(path)

        assert loaded == config
        assert loaded.bitbucket.password.get_secret_value() == "s3cret"

    def test_atomic_write_replaces_content(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        atomic_write(path, "first")
        atomic_write(path, "second")

        assert path.read_text(encoding="utf-8") == "second"
        assert [entry.name for entry in tmp_path.iterdir()] == ["config.toml"]

    def test_default_path_honours_env_override(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("BITBUCKET_LIFECYCLE_CONFIG_DIR", str(tmp_path))

        assert get_config_dir() == tmp_path.resolve()
        assert get_config_path() == tmp_path.resolve() / "config.toml"
