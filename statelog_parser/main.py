"""
Main orchestrator for the State Log Parser.

Wires the classifier, the direct JSON path and the recovery pipeline
together, then checks the result's shape:

  (filename, content) → classify_strategy
      direct-json   → strict JSON parse
      recovery-text → RecoveryPipeline
      unrecognized  → UnsupportedFormatError
  → validate_shape → ParsedStateLog
"""

from pathlib import Path
from typing import Optional, Union

from .classifier import classify_strategy, validate_shape
from .recovery import RecoveryPipeline
from .preprocessor import strip_bom
from .strategies import parse_json
from .summary import summarize_state_log
from .schemas import ParsedStateLog, ParsingStrategy
from .config import ParserConfig, load_config
from .exceptions import (
    MalformedInputError,
    ShapeValidationError,
    UnsupportedFormatError,
    InputTooLargeError,
)
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")

UNSUPPORTED_MESSAGE = (
    "Unsupported file format. Please upload a valid MetaMask state log file (.json or .txt)."
)
INVALID_SHAPE_MESSAGE = (
    "The file was parsed successfully but does not appear to be a valid MetaMask state log. "
    "Please ensure you are uploading the correct file."
)


class StateLogParser:
    """
    Main orchestrator for state log parsing.

    Stateless between calls: the same instance can parse any number of
    files, from any number of threads.
    """

    def __init__(
        self,
        config: Optional[ParserConfig] = None,
        pipeline: Optional[RecoveryPipeline] = None,
        log_level: Optional[Union[int, str]] = None
    ):
        self.config = load_config(config)

        if log_level is not None:
            setup_logger(level=log_level)

        self.pipeline = pipeline or RecoveryPipeline(sample_length=self.config.sample_length)

        logger.debug(f"StateLogParser initialized (json_fallback={self.config.json_fallback_to_recovery})")

    def parse(self, content: str, filename: str = "") -> ParsedStateLog:
        """
        Parse decoded state log content.

        Args:
            content: Decoded file content
            filename: Name hint used for classification

        Returns:
            ParsedStateLog with the document and how it was obtained

        Raises:
            UnsupportedFormatError: input not recognized as a state log
            MalformedInputError: no JSON content, or a .json file that is not JSON
            RecoveryExhaustedError: every recovery strategy failed
            ShapeValidationError: parsed, but not a state log
        """
        strategy = classify_strategy(filename, content)
        logger.info(f"Parsing {filename or '<text>'} using {strategy.value}")

        recovery_strategy = None
        warnings: list[str] = []

        if strategy is ParsingStrategy.DIRECT_JSON:
            try:
                document = self._parse_direct(content)
            except MalformedInputError:
                if not self.config.json_fallback_to_recovery:
                    raise
                logger.warning("Direct JSON parse failed, falling back to recovery pipeline")
                strategy = ParsingStrategy.RECOVERY_TEXT

        if strategy is ParsingStrategy.RECOVERY_TEXT:
            result = self.pipeline.recover(content)
            document = result.document
            recovery_strategy = result.strategy
            warnings.extend(result.warnings)

        elif strategy is ParsingStrategy.UNRECOGNIZED:
            raise UnsupportedFormatError(UNSUPPORTED_MESSAGE, filename=filename)

        if not validate_shape(document):
            raise ShapeValidationError(
                INVALID_SHAPE_MESSAGE,
                details={
                    "parsing_strategy": strategy.value,
                    "top_level_type": type(document).__name__,
                    "top_level_keys": sorted(document)[:20] if isinstance(document, dict) else []
                }
            )

        summary = summarize_state_log(document)
        logger.debug(f"Parsed file structure: {summary.model_dump_json()}")

        return ParsedStateLog(
            document=document,
            parsing_strategy=strategy,
            recovery_strategy=recovery_strategy,
            source_name=filename,
            summary=summary,
            warnings=warnings
        )

    def _parse_direct(self, content: str):
        """Strict JSON parse of the trimmed content, BOM removed."""
        try:
            return parse_json(strip_bom(content.strip()))
        except (ValueError, RecursionError) as e:
            raise MalformedInputError(
                f"File is not valid JSON: {e}",
                details={"error": str(e)}
            )

    def parse_file(self, file_path: Union[str, Path]) -> ParsedStateLog:
        """
        Read and parse a state log file.

        The file is decoded as UTF-8; undecodable bytes become U+FFFD and are
        left for the recovery strategies to deal with.
        """
        file_path = Path(file_path)

        size = file_path.stat().st_size
        if size > self.config.max_file_size:
            raise InputTooLargeError(
                f"File is too large to parse ({size} bytes, limit {self.config.max_file_size}).",
                size=size,
                limit=self.config.max_file_size
            )

        content = file_path.read_bytes().decode("utf-8", errors="replace")
        return self.parse(content, filename=file_path.name)


def parse_state_log(content: str, filename: str = "") -> dict:
    """Convenience function: parse content and return the document."""
    return StateLogParser().parse(content, filename).document


def parse_state_log_file(file_path: Union[str, Path]) -> dict:
    """Convenience function: parse a file and return the document."""
    return StateLogParser().parse_file(file_path).document

