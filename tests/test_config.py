# tests/test_config.py

"""
Tests for configuration models and loading in olastretch.config.
"""

import logging

import pytest
from pathlib import Path
from pydantic import ValidationError

from olastretch.config import OlaStretchConfig, load_configuration
from olastretch.config.loaders import _get_config_from_env, _deep_merge_dicts
from olastretch.utils.logging_config import setup_logging

# --- Helpers ---

def _load(tmp_path: Path, files=None, environ=None) -> OlaStretchConfig:
    """Loads configuration isolated from the real project/user files."""
    return load_configuration(
        config_files=files,
        disable_project_config=True,
        disable_user_config=True,
        environ=environ or {},
    )

# --- Model Tests ---

def test_defaults():
    config = OlaStretchConfig()
    assert config.timescale.window_length == 4096
    assert config.timescale.ramp_proportion == 0.25
    assert config.timescale.scale_factor == 1.0
    assert config.defaults.default_output_subtype == "PCM_16"
    assert config.logging.log_file_enabled is False
    assert config.paths.log_directory.is_absolute()


@pytest.mark.parametrize("section", [
    {"window_length": 4095},
    {"window_length": 0},
    {"ramp_proportion": 1.5},
    {"scale_factor": 1.5},
    {"scale_factor": 0.0},
])
def test_timescale_section_validation(section):
    with pytest.raises(ValidationError):
        OlaStretchConfig(timescale=section)


def test_log_level_is_normalized():
    config = OlaStretchConfig(logging={"log_level_file": "info"})
    assert config.logging.log_level_file == "INFO"
    with pytest.raises(ValidationError):
        OlaStretchConfig(logging={"log_level_console": "LOUD"})

# --- Loader Tests ---

def test_env_variables_are_nested():
    env = {
        "OLASTRETCH_TIMESCALE__WINDOW_LENGTH": "2048",
        "OLASTRETCH_TIMESCALE__RAMP_PROPORTION": "0.1",
        "OLASTRETCH_LOGGING__LOG_FILE_ENABLED": "true",
        "OLASTRETCH___BROKEN": "1",
        "UNRELATED": "x",
    }
    assert _get_config_from_env(env) == {
        "timescale": {"window_length": 2048, "ramp_proportion": 0.1},
        "logging": {"log_file_enabled": True},
    }


def test_deep_merge_prefers_update():
    base = {"timescale": {"window_length": 1024, "scale_factor": 1.2}, "x": 1}
    update = {"timescale": {"window_length": 2048}}
    assert _deep_merge_dicts(base, update) == {"timescale": {"window_length": 2048, "scale_factor": 1.2}, "x": 1}


def test_load_from_file_and_env(tmp_path: Path):
    config_file = tmp_path / "olastretch.toml"
    config_file.write_text(
        "[timescale]\nwindow_length = 1024\nscale_factor = 1.3\n"
        "[defaults]\ndefault_sample_rate = 16000\n"
    )
    config = _load(tmp_path, files=[config_file], environ={"OLASTRETCH_TIMESCALE__SCALE_FACTOR": "0.8"})
    assert config.timescale.window_length == 1024
    assert config.timescale.scale_factor == 0.8  # env wins over file
    assert config.defaults.default_sample_rate == 16000


def test_earlier_files_take_precedence(tmp_path: Path):
    first = tmp_path / "first.toml"
    second = tmp_path / "second.toml"
    first.write_text("[timescale]\nwindow_length = 512\n")
    second.write_text("[timescale]\nwindow_length = 256\nramp_proportion = 0.5\n")
    config = _load(tmp_path, files=[first, second])
    assert config.timescale.window_length == 512
    assert config.timescale.ramp_proportion == 0.5


def test_invalid_values_fall_back_to_defaults(tmp_path: Path, caplog):
    config_file = tmp_path / "bad.toml"
    config_file.write_text("[timescale]\nscale_factor = 3.0\n")
    with caplog.at_level(logging.WARNING, logger="olastretch"):
        config = _load(tmp_path, files=[config_file])
    assert config.timescale.scale_factor == 1.0
    assert "Falling back to default configuration" in caplog.text


def test_malformed_toml_is_skipped(tmp_path: Path, caplog):
    config_file = tmp_path / "broken.toml"
    config_file.write_text("[timescale\nwindow_length = ")
    with caplog.at_level(logging.WARNING, logger="olastretch"):
        config = _load(tmp_path, files=[config_file])
    assert config == OlaStretchConfig()
    assert "Error decoding TOML file" in caplog.text


def test_missing_file_is_ignored(tmp_path: Path):
    config = _load(tmp_path, files=[tmp_path / "missing.toml"])
    assert config.timescale.window_length == 4096

# --- Logging Setup ---

def test_setup_logging_writes_file(tmp_path: Path):
    config = OlaStretchConfig(
        paths={"log_directory": str(tmp_path / "logs")},
        logging={"log_file_enabled": True, "log_filename_template": "run.log"},
    )
    log_path = setup_logging(config, verbosity=-1)
    try:
        assert log_path == (tmp_path / "logs").resolve() / "run.log"
        logging.getLogger("olastretch.test").info("hello from the test")
        for handler in logging.getLogger("olastretch").handlers:
            handler.flush()
        assert "hello from the test" in log_path.read_text()
    finally:
        setup_logging(OlaStretchConfig(), verbosity=-1)


def test_setup_logging_console_only():
    assert setup_logging(OlaStretchConfig(), verbosity=2) is None
    handlers = logging.getLogger("olastretch").handlers
    assert len(handlers) == 1
    assert handlers[0].level == logging.DEBUG
    setup_logging(OlaStretchConfig(), verbosity=-1)
    assert logging.getLogger("olastretch").handlers == []
