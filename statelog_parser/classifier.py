"""
Shape classifier for state log input.

Two independent jobs:
  - classify_strategy: pick the entry path for a (filename, content) pair.
    Cheap direct JSON parsing whenever it is plausible, the recovery
    pipeline only for text that needs repair.
  - validate_shape: after parsing, confirm the document is a state log.

looks_like_state_log favors recall over precision. Damaged exports must not
be rejected here; an unrelated JSON file that happens to mention two of the
recognized keys will pass and be caught by validate_shape instead.
"""

from typing import Any

from .preprocessor import strip_bom
from .strategies import parse_json
from .schemas import ParsingStrategy
from .logger import get_module_logger

logger = get_module_logger("classifier")

JSON_EXTENSION = ".json"
TEXT_EXTENSION = ".txt"

# Root keys of both document shapes and the most common mobile controllers.
RECOGNIZED_KEYS = (
    "metamask",
    "engine",
    "submittedTime",
    "transactions",
    "backgroundState",
    "NetworkController",
    "TransactionController",
    "AccountTrackerController",
    "PreferencesController",
)

MIN_RECOGNIZED_KEYS = 2

DESKTOP_ROOT_KEY = "metamask"
MOBILE_ROOT_KEY = "engine"

# Root flags that only mobile exports carry.
MOBILE_PRESENCE_FLAGS = ("seedphraseBackedUp", "automaticSecurityChecksEnabled")
MOBILE_TRUTHY_FLAGS = ("submittedTime",)


def find_recognized_keys(content: str) -> list[str]:
    """Return the recognized keys that appear as `"key"` or `key:` (case-insensitive)."""
    lowered = content.lower()
    found = []
    for key in RECOGNIZED_KEYS:
        needle = key.lower()
        if f'"{needle}"' in lowered or f"{needle}:" in lowered:
            found.append(key)
    return found


def looks_like_state_log(content: str) -> bool:
    """
    Heuristic check that text could contain a state log.

    Requires both brace characters and at least two recognized keys.
    """
    cleaned = strip_bom(content.strip())

    if "{" not in cleaned or "}" not in cleaned:
        return False

    return len(find_recognized_keys(cleaned)) >= MIN_RECOGNIZED_KEYS


def _is_clean_json(content: str) -> bool:
    trimmed = strip_bom(content.strip()).strip()
    if not (trimmed.startswith("{") and trimmed.endswith("}")):
        return False
    try:
        parse_json(trimmed)
    except (ValueError, RecursionError):
        return False
    return True


def classify_strategy(filename: str, content: str) -> ParsingStrategy:
    """
    Decide how a file should be parsed.

    Args:
        filename: Name hint, only its extension is used
        content: Decoded file content

    Returns:
        DIRECT_JSON, RECOVERY_TEXT or UNRECOGNIZED
    """
    lowered_name = (filename or "").lower()

    # Extension first: a .json file is always parsed directly.
    if lowered_name.endswith(JSON_EXTENSION):
        return ParsingStrategy.DIRECT_JSON

    looks_like = looks_like_state_log(content)

    if lowered_name.endswith(TEXT_EXTENSION) and looks_like:
        return ParsingStrategy.RECOVERY_TEXT

    # Content-based detection for any other name.
    if looks_like:
        if _is_clean_json(content):
            return ParsingStrategy.DIRECT_JSON
        return ParsingStrategy.RECOVERY_TEXT

    logger.debug(f"Unrecognized input: {filename!r}")
    return ParsingStrategy.UNRECOGNIZED


def _js_truthy(value: Any) -> bool:
    # Empty containers are truthy in the exporting app, NaN is not.
    if isinstance(value, (dict, list)):
        return True
    if isinstance(value, float) and value != value:
        return False
    return bool(value)


def validate_shape(document: Any) -> bool:
    """
    Check that a parsed document has the minimal shape of a state log.

    Valid when any of these hold:
      - desktop shape: "metamask" is an object
      - mobile shape: "engine" is an object
      - a mobile-only root flag is set ("submittedTime" truthy, or
        "seedphraseBackedUp" / "automaticSecurityChecksEnabled" present)

    Never raises; anything that is not a mapping is invalid.
    """
    if not isinstance(document, dict):
        return False

    has_desktop_format = isinstance(document.get(DESKTOP_ROOT_KEY), (dict, list))
    has_mobile_format = isinstance(document.get(MOBILE_ROOT_KEY), (dict, list))

    has_mobile_props = (
        any(_js_truthy(document.get(flag)) for flag in MOBILE_TRUTHY_FLAGS)
        or any(flag in document for flag in MOBILE_PRESENCE_FLAGS)
    )

    return has_desktop_format or has_mobile_format or has_mobile_props
