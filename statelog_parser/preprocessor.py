"""
Preprocessor for raw state log text.

Isolates the JSON span of an exported state log and removes the damage that
mobile text-sharing pipelines typically introduce (byte-order marks, NULL
bytes, zero-width characters, smart quotes, CR line endings).

Runs unconditionally before any recovery strategy. Unlike the strategies, it
can fail: text without a `{ ... }` span has nothing to recover.

Pipeline position: Stage 1 of 2 (Preprocessor → recovery strategies).
Input:  raw decoded text, possibly wrapped in narrative prose
Output: PreprocessResult with the normalized JSON span and a list of warnings
"""

import re

from .exceptions import MalformedInputError
from .schemas import PreprocessResult
from .logger import get_module_logger

logger = get_module_logger("preprocessor")

BOM = "\ufeff"

NO_JSON_MESSAGE = (
    "No JSON content found in the text file. "
    "Please ensure this is a MetaMask state log file."
)

# Zero-width space, non-joiner, joiner and BOM
INVISIBLE_CHARS = re.compile("[\u200b\u200c\u200d\ufeff]")

SMART_DOUBLE_QUOTES = re.compile("[\u201c\u201d]")
SMART_SINGLE_QUOTES = re.compile("[\u2018\u2019]")


def strip_bom(text: str) -> str:
    """Remove a single leading byte-order mark."""
    return text[1:] if text.startswith(BOM) else text


class Preprocessor:
    """Rule-based normalizer for exported state log text."""

    def process(self, text: str) -> PreprocessResult:
        """
        Normalize raw text to the JSON span it contains.

        Args:
            text: Raw decoded file content

        Returns:
            PreprocessResult with the normalized text and warnings

        Raises:
            MalformedInputError: if there is no `{` followed by a `}` in the text
        """
        warnings = []

        # 1-2. Trim, then drop a leading BOM. str.strip() leaves U+FEFF alone,
        # so the BOM check must come after trimming.
        cleaned = strip_bom(text.strip())

        # 3. The span runs from the first "{" to the last "}".
        start = cleaned.find("{")
        end = cleaned.rfind("}")
        if start == -1 or end < start:
            raise MalformedInputError(NO_JSON_MESSAGE)

        # 4. Anything outside the span is narrative text from the export.
        span = cleaned[start:end + 1]
        if start > 0 or end < len(cleaned) - 1:
            warnings.append(
                f"Discarded {start} leading and {len(cleaned) - end - 1} trailing characters"
            )

        # 5. NULL bytes and zero-width characters anywhere in the span.
        if "\x00" in span:
            span = span.replace("\x00", "")
            warnings.append("Removed NULL bytes")

        if INVISIBLE_CHARS.search(span):
            span = INVISIBLE_CHARS.sub("", span)
            warnings.append("Removed zero-width characters")

        # 6. Smart quotes introduced by text conversion.
        if SMART_DOUBLE_QUOTES.search(span) or SMART_SINGLE_QUOTES.search(span):
            span = SMART_DOUBLE_QUOTES.sub('"', span)
            span = SMART_SINGLE_QUOTES.sub("'", span)
            warnings.append("Normalized smart quotes")

        # 7. Line endings.
        if "\r" in span:
            span = span.replace("\r\n", "\n").replace("\r", "\n")
            warnings.append("Normalized line endings")

        logger.debug(f"Preprocessing complete. {len(warnings)} fixes applied.")
        return PreprocessResult(text=span, original_length=len(text), warnings=warnings)


def preprocess(text: str) -> PreprocessResult:
    """Convenience function to preprocess state log text."""
    return Preprocessor().process(text)
