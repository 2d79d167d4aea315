"""Tests for settings resolution."""

import logging
from pathlib import Path

import pytest
import yaml

import fs_err
from fs_err.shared import (
    Settings,
    configure,
    get_settings,
    load_settings,
    reset_settings,
)
from fs_err.shared.errors import ConfigurationError


class TestLoadSettings:
    """Test defaults, config file and environment layering."""

    def test_defaults(self) -> None:
        assert load_settings() == Settings(
            inline_cause=False, log_failures=True
        )

    def test_reads_fs_err_section(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yml"
        config_path.write_text(
            yaml.dump({"fs_err": {"inline_cause": True}, "other": 1})
        )

        settings = load_settings(config_path)

        assert settings.inline_cause is True
        assert settings.log_failures is True

    def test_reads_top_level_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.dump({"log_failures": False}))

        assert load_settings(config_path).log_failures is False

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        config_path = tmp_path / "empty.yml"
        config_path.write_text("")

        assert load_settings(config_path) == Settings()

    def test_config_path_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.dump({"inline_cause": True}))
        monkeypatch.setenv("FS_ERR_CONFIG", str(config_path))

        assert load_settings().inline_cause is True

    def test_environment_overrides_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test that FS_ERR_* variables win over the config file."""
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.dump({"inline_cause": True}))
        monkeypatch.setenv("FS_ERR_INLINE_CAUSE", "off")

        assert load_settings(config_path).inline_cause is False

    def test_unknown_key_is_rejected(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.dump({"colour": True}))

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config_path)

        assert str(config_path) in str(exc_info.value)
        assert "Unknown settings: colour" in str(exc_info.value)

    def test_non_boolean_is_rejected(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FS_ERR_LOG_FAILURES", "sometimes")

        with pytest.raises(ConfigurationError, match=r"^\[environment\]"):
            load_settings()

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config_path = tmp_path / "broken.yml"
        config_path.write_text("fs_err: [unclosed")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings(config_path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Cannot read"):
            load_settings(tmp_path / "absent.yml")

    def test_section_must_be_mapping(self, tmp_path: Path) -> None:
        config_path = tmp_path / "config.yml"
        config_path.write_text(yaml.dump({"fs_err": ["inline_cause"]}))

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            load_settings(config_path)


class TestConfigure:
    """Test runtime overrides of the active settings."""

    def test_configure_updates_active_settings(self) -> None:
        configure(inline_cause=True)

        assert get_settings().inline_cause is True
        assert get_settings().log_failures is True

    def test_reset_restores_defaults(self) -> None:
        configure(log_failures=False)
        reset_settings()

        assert get_settings() == Settings()

    def test_configure_rejects_unknown_settings(self) -> None:
        with pytest.raises(ConfigurationError, match=r"^\[configure\(\)\]"):
            configure(verbose=True)


class TestBrokenSettings:
    """Test that invalid settings never replace filesystem errors."""

    def test_invalid_environment_value(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FS_ERR_INLINE_CAUSE", "maybe")
        reset_settings()

        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.File.open("missing.txt")

        assert str(exc_info.value) == "failed to open file `missing.txt`"

    def test_missing_config_file(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FS_ERR_CONFIG", str(workdir / "nope.yaml"))
        reset_settings()

        assert fs_err.exists("missing.txt") is False
        with pytest.raises(FileNotFoundError) as exc_info:
            fs_err.read("missing.txt")
        assert exc_info.value.kind is fs_err.ErrorKind.OPEN_FILE

    def test_invalid_config_file(
        self, workdir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (workdir / "broken.yml").write_text("fs_err: [unclosed")
        monkeypatch.setenv("FS_ERR_CONFIG", "broken.yml")
        reset_settings()

        with pytest.raises(FileNotFoundError):
            fs_err.remove_file("ghost.txt")

    def test_fallback_is_logged(
        self,
        workdir: Path,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        monkeypatch.setenv("FS_ERR_LOG_FAILURES", "sometimes")
        reset_settings()
        caplog.set_level(logging.DEBUG, logger="fs_err")

        with pytest.raises(FileNotFoundError):
            fs_err.metadata("ghost")

        warnings = [
            r for r in caplog.records if r.levelno == logging.WARNING
        ]
        assert warnings
        record = warnings[0]
        assert "Ignoring invalid fs_err settings" in record.getMessage()
        assert record.source == "environment"  # type: ignore[attr-defined]

    def test_get_settings_still_raises(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FS_ERR_INLINE_CAUSE", "maybe")
        reset_settings()

        with pytest.raises(ConfigurationError):
            get_settings()
