"""
Tests for ParserConfig, the logger helpers and the error types.
"""

import io
import logging

import pytest
from pydantic import ValidationError

from statelog_parser.config import ParserConfig, load_config, DEFAULT_MAX_FILE_SIZE
from statelog_parser.logger import setup_logger, get_module_logger
from statelog_parser.exceptions import (
    MalformedInputError,
    RecoveryExhaustedError,
    InputTooLargeError,
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("STATELOG_MAX_FILE_SIZE", "STATELOG_SAMPLE_LENGTH",
                 "STATELOG_JSON_FALLBACK", "STATELOG_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# --- ParserConfig ---

def test_defaults(clean_env):
    config = ParserConfig.from_env()

    assert config.max_file_size == DEFAULT_MAX_FILE_SIZE
    assert config.sample_length == 300
    assert config.json_fallback_to_recovery is False
    assert config.log_level == "INFO"


def test_reads_environment(clean_env):
    clean_env.setenv("STATELOG_MAX_FILE_SIZE", "1024")
    clean_env.setenv("STATELOG_SAMPLE_LENGTH", "80")
    clean_env.setenv("STATELOG_JSON_FALLBACK", "true")
    clean_env.setenv("STATELOG_LOG_LEVEL", "debug")

    config = ParserConfig.from_env()

    assert config.max_file_size == 1024
    assert config.sample_length == 80
    assert config.json_fallback_to_recovery is True
    assert config.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["0", "false", "no", "off"])
def test_fallback_falsy_values(clean_env, value):
    clean_env.setenv("STATELOG_JSON_FALLBACK", value)
    assert ParserConfig.from_env().json_fallback_to_recovery is False


def test_overrides_win_over_environment(clean_env):
    clean_env.setenv("STATELOG_SAMPLE_LENGTH", "80")

    config = ParserConfig.from_env(sample_length=20, log_level=None)

    assert config.sample_length == 20
    assert config.log_level == "INFO"


def test_rejects_non_positive_size(clean_env):
    clean_env.setenv("STATELOG_MAX_FILE_SIZE", "0")
    with pytest.raises(ValidationError):
        ParserConfig.from_env()


def test_load_config_prefers_explicit_config(clean_env):
    explicit = ParserConfig(sample_length=5)
    assert load_config(explicit) is explicit
    assert load_config().sample_length == 300


# --- Logger ---

def test_setup_logger_is_idempotent():
    stream = io.StringIO()
    logger = setup_logger(name="statelog_parser_test", level="DEBUG", stream=stream)
    again = setup_logger(name="statelog_parser_test", level=logging.WARNING, stream=stream)

    again.warning("hello")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert "statelog_parser_test - WARNING - hello" in stream.getvalue()


def test_module_logger_is_a_child():
    assert get_module_logger("recovery").name == "statelog_parser.recovery"


# --- Exceptions ---

def test_to_response():
    error = MalformedInputError("No JSON content found")
    assert error.to_response() == {
        "error": "MalformedInputError",
        "message": "No JSON content found",
        "details": {},
    }


def test_recovery_exhausted_details():
    error = RecoveryExhaustedError(
        "Unable to parse",
        primary_error="first",
        strategy_errors={"baseline": "first", "syntax-repair": "second"},
        text_sample="{...",
        text_length=4,
    )

    assert str(error) == "Unable to parse"
    assert error.details == {
        "strategy_errors": {"baseline": "first", "syntax-repair": "second"},
        "text_sample": "{...",
        "text_length": 4,
    }


def test_input_too_large_details():
    error = InputTooLargeError("too big", size=20, limit=10)
    assert error.details == {"size": 20, "limit": 10}
