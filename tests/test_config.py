"""Tests for AppConfig."""
import tempfile
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from netutil.core.config import DEFAULT_LOG_DIR, AppConfig, load_config_file


def test_app_config_explicit_log_dir():
    """When log_dir is provided, it is used, resolved and created."""
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "logs"
        config = AppConfig(log_dir=path)
        assert config.log_dir == path.resolve()
        assert config.log_dir.exists()


def test_app_config_log_dir_from_string():
    """log_dir can be passed as a string and is converted to Path."""
    with tempfile.TemporaryDirectory() as tmp:
        config = AppConfig(log_dir=tmp)
        assert config.log_dir == Path(tmp).resolve()


def test_app_config_defaults():
    with tempfile.TemporaryDirectory() as tmp:
        config = AppConfig(log_dir=tmp)
    assert config.page_size == 20
    assert config.poll_interval_ms == 100
    assert config.terminal_window == 20
    assert config.command_timeout is None
    assert config.sudo_non_interactive is False
    assert DEFAULT_LOG_DIR.name == "logs"


def test_app_config_rejects_zero_page_size():
    with tempfile.TemporaryDirectory() as tmp:
        with pytest.raises(ValidationError):
            AppConfig(log_dir=tmp, page_size=0)


def test_load_config_file_no_file():
    """When no config file exists, load_config_file returns empty dict."""
    result = load_config_file()
    # May be empty or have values if user has ~/.netutil.yaml
    assert isinstance(result, dict)


def test_load_config_file_reads_cwd_file(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    (work / ".netutil.yaml").write_text(
        "page_size: 5\nverbose: true\nterminal_window: nope\ncommand_timeout: -3\n"
        f"log_dir: {tmp_path / 'custom'}\n"
    )
    monkeypatch.chdir(work)
    with patch("netutil.core.config.Path.home", return_value=home):
        result = load_config_file()
    assert result["page_size"] == 5
    assert result["verbose"] is True
    assert result["log_dir"] == (tmp_path / "custom").resolve()
    # Malformed and non-positive values are dropped
    assert "terminal_window" not in result
    assert "command_timeout" not in result


def test_load_config_file_ignores_malformed_yaml(tmp_path, monkeypatch):
    (tmp_path / ".netutil.yaml").write_text("page_size: [unclosed\n")
    monkeypatch.chdir(tmp_path)
    with patch("netutil.core.config.Path.home", return_value=tmp_path / "nohome"):
        assert load_config_file() == {}


def test_from_sources_overrides_file_values(tmp_path):
    file_values = {"page_size": 5, "verbose": True, "log_dir": tmp_path}
    with patch("netutil.core.config.load_config_file", return_value=file_values):
        config = AppConfig.from_sources(page_size=12, verbose=None)
    assert config.page_size == 12
    assert config.verbose is True
    assert config.log_dir == tmp_path.resolve()
