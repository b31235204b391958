import importlib
import json
import logging
from pathlib import Path
import warnings

import pytest
from pydantic import ValidationError

import rook.config
from rook.config import ScorekeeperConfig, load_config


def test_defaults(monkeypatch):
    monkeypatch.delenv("ROOK_STORAGE_PATH", raising=False)
    monkeypatch.delenv("ROOK_LOG_LEVEL", raising=False)

    config = load_config()

    assert config.storage_path == Path("rook_scorekeeper.json")
    assert config.key_prefix == "rook_"
    assert config.logging_level == logging.INFO


def test_file_and_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"key_prefix": "club_", "log_level": "debug"}), encoding="utf-8")
    monkeypatch.setenv("ROOK_STORAGE_PATH", str(tmp_path / "saved.json"))
    monkeypatch.delenv("ROOK_LOG_LEVEL", raising=False)

    config = load_config(path)

    assert config.key_prefix == "club_"
    assert config.log_level == "DEBUG"
    assert config.storage_path == tmp_path / "saved.json"


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        ScorekeeperConfig(log_level="chatty")
    with pytest.raises(ValidationError):
        ScorekeeperConfig(key_prefix="has space")


def test_config_module_loads_without_deprecation_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        reloaded = importlib.reload(rook.config)

    assert reloaded.ScorekeeperConfig(log_level="warning").log_level == "WARNING"
