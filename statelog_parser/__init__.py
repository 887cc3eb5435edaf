"""
State Log Parser

Recovers wallet state logs from JSON files and from damaged plain-text
exports (as produced by mobile text-sharing).
- Classifier: picks direct JSON parsing or recovery, validates document shape
- Preprocessor: isolates and normalizes the JSON span of raw text
- RecoveryPipeline: ordered cascade of independent repair strategies

Public API surface:
  Orchestrator: StateLogParser, parse_state_log, parse_state_log_file
  Pipeline: RecoveryPipeline, Preprocessor, parse_text_state_log
  Classification: classify_strategy, looks_like_state_log, validate_shape
  Data models: ParsedStateLog, RecoveryResult, StrategyAttempt, StateLogSummary
  Error types: StateLogParserError and its subclasses
"""

# --- Orchestrator ---
from .main import StateLogParser, parse_state_log, parse_state_log_file

# --- Pipeline stages ---
from .preprocessor import Preprocessor
from .recovery import RecoveryPipeline, parse_text_state_log
from .strategies import Strategy, DEFAULT_STRATEGIES

# --- Classification ---
from .classifier import classify_strategy, looks_like_state_log, validate_shape
from .summary import summarize_state_log

# --- Data models ---
from .schemas import (
    ParsingStrategy,
    ParsedStateLog,
    RecoveryResult,
    StrategyAttempt,
    StateLogSummary,
)
from .config import ParserConfig

# --- Exceptions (callers should catch StateLogParserError) ---
from .exceptions import (
    StateLogParserError,
    MalformedInputError,
    RecoveryExhaustedError,
    ShapeValidationError,
    UnsupportedFormatError,
    InputTooLargeError,
)

__version__ = "0.1.0"
__all__ = [
    "StateLogParser",
    "parse_state_log",
    "parse_state_log_file",
    "Preprocessor",
    "RecoveryPipeline",
    "parse_text_state_log",
    "Strategy",
    "DEFAULT_STRATEGIES",
    "classify_strategy",
    "looks_like_state_log",
    "validate_shape",
    "summarize_state_log",
    "ParsingStrategy",
    "ParsedStateLog",
    "RecoveryResult",
    "StrategyAttempt",
    "StateLogSummary",
    "ParserConfig",
    "StateLogParserError",
    "MalformedInputError",
    "RecoveryExhaustedError",
    "ShapeValidationError",
    "UnsupportedFormatError",
    "InputTooLargeError",
]
