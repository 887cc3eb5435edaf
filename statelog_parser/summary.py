"""
Structural overview of a parsed state log.

Used for the operator log after a successful parse and by the CLI's
--summary flag. Reads the document only; never raises on missing or
unexpected fields.
"""

from typing import Any, Optional

from .schemas import StateLogSummary, StateLogFormat
from .classifier import validate_shape, _js_truthy, DESKTOP_ROOT_KEY, MOBILE_ROOT_KEY


def _mapping(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _count(value: Any) -> Optional[int]:
    """Length of a list or mapping; None for anything else."""
    if isinstance(value, (list, dict)):
        return len(value)
    return None


def summarize_state_log(document: Any) -> StateLogSummary:
    """
    Build a StateLogSummary for a document.

    Args:
        document: Parsed state log (any value is accepted)

    Returns:
        StateLogSummary; an empty summary for non-mapping input
    """
    if not isinstance(document, dict):
        return StateLogSummary()

    raw_background_state = _mapping(document.get(MOBILE_ROOT_KEY)).get("backgroundState")
    metamask = _mapping(document.get(DESKTOP_ROOT_KEY))
    background_state = _mapping(raw_background_state)

    transaction_controller = _mapping(background_state.get("TransactionController"))
    account_tracker = _mapping(background_state.get("AccountTrackerController"))

    has_metamask = isinstance(document.get(DESKTOP_ROOT_KEY), (dict, list))

    if has_metamask:
        log_format = StateLogFormat.DESKTOP
    elif validate_shape(document):
        log_format = StateLogFormat.MOBILE
    else:
        log_format = StateLogFormat.UNKNOWN

    return StateLogSummary(
        format=log_format,
        has_metamask=has_metamask,
        transaction_count=_count(metamask.get("transactions")),
        transaction_history_count=_count(metamask.get("transactionHistory")),
        pending_approval_count=_count(metamask.get("pendingApprovals")),
        has_mobile_engine=_js_truthy(raw_background_state),
        mobile_transaction_count=_count(transaction_controller.get("transactions")),
        mobile_account_count=_count(account_tracker.get("accounts")),
        controllers=sorted(k for k, v in background_state.items() if isinstance(v, dict)),
    )
