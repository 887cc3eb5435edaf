"""
Repair strategies for the recovery pipeline.

Each strategy is a pure text transformation followed by a strict JSON parse.
Strategies never see each other's output: every one of them starts from the
same preprocessed text, so their order decides which repair "wins" but not
what any single repair produces.

The patterns below are deliberately loose. They target the damage seen in
real mobile exports and accept that some valid-looking text will be altered
(for example, `//` inside a URL is treated as a comment by syntax-repair, and
robust-normalization collapses repeated spaces inside string values).
"""

import json
import re
from typing import Any, Callable

from .schemas import StrategyAttempt
from .logger import get_module_logger

logger = get_module_logger("strategies")


# --- Shared repairs ---

TRAILING_COMMA = re.compile(r",(\s*[}\]])")

# An identifier right after "{" or "," and followed by ":" is an unquoted key.
UNQUOTED_KEY = re.compile(r"([{,]\s*)([a-zA-Z_$][a-zA-Z0-9_$]*)\s*:")

# JavaScript values that JSON cannot represent.
JS_LITERAL_VALUE = re.compile(r":\s*(?:undefined|NaN|-?Infinity)")

BLOCK_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
LINE_COMMENT = re.compile(r"//.*$", re.MULTILINE)

# Only the first newline inside each quoted run is escaped, one pass.
NEWLINE_IN_STRING = re.compile(r'"([^"]*?)\n([^"]*?)"')
NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n]")
WHITESPACE_RUN = re.compile(r"\s+")
SPACE_AROUND_PUNCTUATION = re.compile(r"\s*([{}\[\]:,])\s*")


def parse_json(text: str) -> Any:
    """
    Strict structural parse.

    Python's json module accepts NaN and Infinity by default; a state log
    containing them is not valid JSON, so they are rejected here.
    """
    return json.loads(text, parse_constant=_reject_constant)


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name} in JSON")


def remove_trailing_commas(text: str) -> str:
    return TRAILING_COMMA.sub(r"\1", text)


def quote_unquoted_keys(text: str) -> str:
    return UNQUOTED_KEY.sub(r'\1"\2":', text)


def single_to_double_quotes(text: str) -> str:
    return text.replace("'", '"')


def replace_js_literals(text: str) -> str:
    return JS_LITERAL_VALUE.sub(":null", text)


def strip_comments(text: str) -> str:
    text = BLOCK_COMMENT.sub("", text)
    return LINE_COMMENT.sub("", text)


# --- Strategy transforms ---

def baseline_cleanup(text: str) -> str:
    """Strategy 1: only drop trailing commas."""
    return remove_trailing_commas(text)


def syntax_repair(text: str) -> str:
    """Strategy 2: turn JavaScript object-literal syntax into JSON."""
    text = quote_unquoted_keys(text)
    text = single_to_double_quotes(text)
    text = replace_js_literals(text)
    text = strip_comments(text)
    return remove_trailing_commas(text)


def robust_normalization(text: str) -> str:
    """
    Strategy 3: escape broken strings, drop non-ASCII, squeeze whitespace.

    Collapsing whitespace also rewrites multi-space runs inside string values.
    """
    text = NEWLINE_IN_STRING.sub(r'"\1\\n\2"', text)
    text = NON_PRINTABLE.sub("", text)
    text = WHITESPACE_RUN.sub(" ", text)
    text = SPACE_AROUND_PUNCTUATION.sub(r"\1", text)
    return remove_trailing_commas(text)


def line_reconstruction(text: str) -> str:
    """Strategy 4: rebuild the text from lines that are not blank or comments."""
    kept = []
    for line in text.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("//") or trimmed.startswith("/*"):
            continue
        kept.append(line)

    text = remove_trailing_commas("\n".join(kept))
    text = quote_unquoted_keys(text)
    return single_to_double_quotes(text)


class Strategy:
    """
    A named transformation plus parse attempt.

    `run` never raises for bad input: transform and parse failures are
    reported in the returned StrategyAttempt.
    """

    def __init__(self, name: str, transform: Callable[[str], str]):
        self.name = name
        self.transform = transform

    def run(self, text: str) -> tuple[StrategyAttempt, Any]:
        """
        Apply the transform and parse the result.

        Args:
            text: Preprocessed text (never another strategy's output)

        Returns:
            Tuple of (attempt record, parsed document or None)
        """
        try:
            document = parse_json(self.transform(text))
        except (ValueError, RecursionError, re.error) as e:
            logger.debug(f"Strategy {self.name} failed: {e}")
            return StrategyAttempt(strategy=self.name, succeeded=False, error=str(e)), None

        return StrategyAttempt(strategy=self.name, succeeded=True), document

    def __repr__(self) -> str:
        return f"Strategy({self.name!r})"


BASELINE = Strategy("baseline", baseline_cleanup)
SYNTAX_REPAIR = Strategy("syntax-repair", syntax_repair)
ROBUST_NORMALIZATION = Strategy("robust-normalization", robust_normalization)
LINE_RECONSTRUCTION = Strategy("line-reconstruction", line_reconstruction)

# Order matters: least to most destructive.
DEFAULT_STRATEGIES = (
    BASELINE,
    SYNTAX_REPAIR,
    ROBUST_NORMALIZATION,
    LINE_RECONSTRUCTION,
)
