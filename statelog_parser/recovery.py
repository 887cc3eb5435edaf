"""
Recovery pipeline for damaged state log text.

Turns text that is presumed to hold a single JSON object (possibly wrapped
in prose, possibly malformed) into a document, or raises with diagnostics.

Pipeline position: Stage 2 of 2 (Preprocessor → recovery strategies).
Input:  raw decoded text
Output: RecoveryResult (document, winning strategy, every attempt made)

Flow:
  1. Preprocessor isolates and normalizes the `{ ... }` span. No span means
     MalformedInputError, and no strategy runs.
  2. Strategies run in order on the same preprocessed text. The first one
     that parses wins and the rest are skipped.
  3. If none parses, RecoveryExhaustedError carries the first strategy's
     error as the displayed reason, plus every strategy's error and a text
     sample for the operator log.
"""

from typing import Any, Optional, Sequence

from .preprocessor import Preprocessor
from .strategies import Strategy, DEFAULT_STRATEGIES
from .schemas import RecoveryResult, StrategyAttempt
from .exceptions import RecoveryExhaustedError
from .config import DEFAULT_SAMPLE_LENGTH
from .logger import get_module_logger

logger = get_module_logger("recovery")

RECOVERY_FAILED_MESSAGE = (
    "Unable to parse .txt file as valid JSON. This might be a corrupted or "
    "incompatible file format. Common issues:\n"
    "• File may not be a MetaMask state log\n"
    "• Text encoding issues during download\n"
    "• Corrupted JSON structure\n"
    "\n"
    "Original error: {error}"
)


class RecoveryPipeline:
    """
    Ordered cascade of independent repair strategies.

    Holds no per-call state, so one instance can serve any number of calls.
    """

    def __init__(
        self,
        strategies: Optional[Sequence[Strategy]] = None,
        preprocessor: Optional[Preprocessor] = None,
        sample_length: int = DEFAULT_SAMPLE_LENGTH
    ):
        """
        Initialize the pipeline.

        Args:
            strategies: Strategies in the order they are tried.
                        Defaults to baseline → syntax-repair →
                        robust-normalization → line-reconstruction.
            preprocessor: Preprocessor to use (default: a new Preprocessor)
            sample_length: Characters of text kept in failure diagnostics
        """
        self.strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES
        if not self.strategies:
            raise ValueError("RecoveryPipeline needs at least one strategy")
        self.preprocessor = preprocessor or Preprocessor()
        self.sample_length = sample_length

    def recover(self, text: str) -> RecoveryResult:
        """
        Recover a document from raw text.

        Args:
            text: Raw decoded text

        Returns:
            RecoveryResult from the first strategy that parsed

        Raises:
            MalformedInputError: no `{ ... }` span in the text
            RecoveryExhaustedError: every strategy failed
        """
        preprocessed = self.preprocessor.process(text)
        attempts: list[StrategyAttempt] = []

        for strategy in self.strategies:
            attempt, document = strategy.run(preprocessed.text)
            attempts.append(attempt)

            if attempt.succeeded:
                if len(attempts) > 1:
                    logger.info(f"Recovered state log with strategy {strategy.name} "
                                f"after {len(attempts) - 1} failed attempts")
                return RecoveryResult(
                    document=document,
                    strategy=strategy.name,
                    attempts=attempts,
                    warnings=preprocessed.warnings
                )

            logger.info(f"Strategy {strategy.name} failed, trying next")

        raise self._exhausted(preprocessed.text, attempts)

    def _exhausted(self, text: str, attempts: list[StrategyAttempt]) -> RecoveryExhaustedError:
        """Build the terminal error and write the diagnostic bundle to the log."""
        strategy_errors = {a.strategy: a.error or "" for a in attempts}
        primary_error = attempts[0].error or ""

        sample = text[:self.sample_length]
        if len(text) > self.sample_length:
            sample += "..."

        logger.error(f"All parsing strategies failed: errors={strategy_errors}, "
                     f"text_length={len(text)}, text_sample={sample!r}")

        return RecoveryExhaustedError(
            RECOVERY_FAILED_MESSAGE.format(error=primary_error),
            primary_error=primary_error,
            strategy_errors=strategy_errors,
            text_sample=sample,
            text_length=len(text)
        )


def recover_state_log(text: str) -> RecoveryResult:
    """Convenience function to run the default recovery pipeline."""
    return RecoveryPipeline().recover(text)


def parse_text_state_log(text: str) -> Any:
    """
    Parse a plain-text state log export and return only the document.

    Raises the same errors as RecoveryPipeline.recover.
    """
    return RecoveryPipeline().recover(text).document
