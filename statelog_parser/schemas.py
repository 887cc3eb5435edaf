"""
Pydantic schemas defining the contracts between modules.

Data flow through the pipeline:
  Preprocessor → PreprocessResult → each Strategy → StrategyAttempt
  RecoveryPipeline → RecoveryResult (first successful strategy wins)
  StateLogParser → ParsedStateLog (document + how it was obtained + summary)

The document itself stays an untyped dict. Only its outer shape is checked
(see classifier.validate_shape); controller fields are never coerced.
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field


class ParsingStrategy(str, Enum):
    """Entry path chosen by the classifier."""
    DIRECT_JSON = "direct-json"
    RECOVERY_TEXT = "recovery-text"
    UNRECOGNIZED = "unrecognized"


class StateLogFormat(str, Enum):
    """Which variant of state log a document is."""
    DESKTOP = "desktop"     # top-level "metamask" controller bag
    MOBILE = "mobile"       # "engine.backgroundState" or mobile-only root flags
    UNKNOWN = "unknown"


# --- Recovery pipeline contracts ---

class PreprocessResult(BaseModel):
    """Output of the unconditional preprocessing step."""
    text: str
    original_length: int
    warnings: list[str] = Field(default_factory=list)  # which normalizations changed the text


class StrategyAttempt(BaseModel):
    """Outcome of running one strategy against the preprocessed text."""
    strategy: str
    succeeded: bool
    error: Optional[str] = None


class RecoveryResult(BaseModel):
    """Successful output of the recovery pipeline."""
    document: Any
    strategy: str                                                  # name of the strategy that won
    attempts: list[StrategyAttempt] = Field(default_factory=list)  # includes the winning attempt
    warnings: list[str] = Field(default_factory=list)              # carried over from preprocessing


# --- Orchestrator output ---

class StateLogSummary(BaseModel):
    """
    Structural overview of a parsed state log, for operator logs.

    Counts are None when the field is missing or has an unexpected type.
    """
    format: StateLogFormat = StateLogFormat.UNKNOWN

    # Desktop
    has_metamask: bool = False
    transaction_count: Optional[int] = None
    transaction_history_count: Optional[int] = None
    pending_approval_count: Optional[int] = None

    # Mobile
    has_mobile_engine: bool = False
    mobile_transaction_count: Optional[int] = None
    mobile_account_count: Optional[int] = None
    controllers: list[str] = Field(default_factory=list)


class ParsedStateLog(BaseModel):
    """Output of StateLogParser: the document and how it was obtained."""
    document: dict[str, Any]
    parsing_strategy: ParsingStrategy
    recovery_strategy: Optional[str] = None  # set only when the recovery pipeline produced the document
    source_name: str = ""
    summary: StateLogSummary = Field(default_factory=StateLogSummary)
    warnings: list[str] = Field(default_factory=list)
