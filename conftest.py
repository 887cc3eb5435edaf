"""
Shared fixtures for the State Log Parser tests.

Provides:
- A desktop state log (top-level "metamask" controller bag)
- A mobile state log (engine.backgroundState + root flags)
- A damaged mobile text export as it arrives from an iPhone share sheet
"""

import json

import pytest


DESKTOP_STATE_LOG = {
    "metamask": {
        "transactions": [
            {"id": 1, "status": "confirmed", "chainId": "0x1",
             "txParams": {"from": "0xabc", "to": "0xdef", "value": "0x0"}},
            {"id": 2, "status": "submitted", "chainId": "0x1",
             "txParams": {"from": "0xabc", "to": "0x123", "value": "0x10"}},
        ],
        "transactionHistory": {"1": [], "2": []},
        "pendingApprovals": {"approval-1": {"id": "approval-1", "type": "transaction"}},
        "accounts": {"0xabc": {"address": "0xabc", "balance": "0x0"}},
        "visitedDappsByHostname": ["app.uniswap.org"],
    }
}

MOBILE_STATE_LOG = {
    "submittedTime": 1718000000000,
    "seedphraseBackedUp": True,
    "automaticSecurityChecksEnabled": False,
    "engine": {
        "backgroundState": {
            "NetworkController": {
                "network": "1",
                "provider": {"chainId": "0x1", "type": "mainnet", "nickname": "Ethereum Main Network"},
            },
            "TransactionController": {
                "transactions": [
                    {"id": "tx-1", "status": "confirmed", "origin": "metamask"},
                    {"id": "tx-2", "status": "failed", "origin": "app.uniswap.org"},
                    {"id": "tx-3", "status": "submitted", "origin": "metamask"},
                ]
            },
            "PreferencesController": {
                "selectedAddress": "0xabc",
                "featureFlags": {"smartTransactions": True},
            },
            "AccountTrackerController": {
                "accounts": {"0xabc": {"balance": "0x0"}, "0xdef": {"balance": "0x1"}}
            },
        }
    },
}

# Unquoted keys, single quotes, smart quotes, an `undefined`, trailing commas,
# a zero-width space, CRLF line endings and prose around the JSON.
MOBILE_TEXT_EXPORT = (
    "MetaMask state logs\r\n"
    "Shared from iPhone\r\n"
    "{\r\n"
    "  submittedTime: 1718000000000,\r\n"
    "  seedphraseBackedUp: true,\r\n"
    "  automaticSecurityChecksEnabled: undefined,\r\n"
    "  \u201cengine\u201d: {\r\n"
    "    backgroundState: {\r\n"
    "      NetworkController: { network: '1', provider: { chainId: '0x1', type: 'mainnet', }, },\r\n"
    "      TransactionController: { transactions: [ { id: 'tx-1', status: 'confirmed' }, ], },\r\n"
    "      AccountTrackerController: { accounts: { '0xabc': { balance: '0x0' } } },\r\n"
    "      PreferencesController: { selectedAddress: '0xabc', },\u200b\r\n"
    "    },\r\n"
    "  },\r\n"
    "}\r\n"
    "End of log\r\n"
)

MOBILE_TEXT_EXPORT_DOCUMENT = {
    "submittedTime": 1718000000000,
    "seedphraseBackedUp": True,
    "automaticSecurityChecksEnabled": None,
    "engine": {
        "backgroundState": {
            "NetworkController": {"network": "1", "provider": {"chainId": "0x1", "type": "mainnet"}},
            "TransactionController": {"transactions": [{"id": "tx-1", "status": "confirmed"}]},
            "AccountTrackerController": {"accounts": {"0xabc": {"balance": "0x0"}}},
            "PreferencesController": {"selectedAddress": "0xabc"},
        }
    },
}


@pytest.fixture
def desktop_state_log():
    """Desktop state log as a dict."""
    return json.loads(json.dumps(DESKTOP_STATE_LOG))


@pytest.fixture
def mobile_state_log():
    """Mobile state log as a dict."""
    return json.loads(json.dumps(MOBILE_STATE_LOG))


@pytest.fixture
def desktop_json_text():
    """Desktop state log serialized the way the extension exports it."""
    return json.dumps(DESKTOP_STATE_LOG, indent=2)


@pytest.fixture
def mobile_json_text():
    """Mobile state log serialized as compact JSON."""
    return json.dumps(MOBILE_STATE_LOG)


@pytest.fixture
def mobile_text_export():
    """Damaged plain-text export of a mobile state log."""
    return MOBILE_TEXT_EXPORT


@pytest.fixture
def mobile_text_export_document():
    """What the damaged export should recover to."""
    return json.loads(json.dumps(MOBILE_TEXT_EXPORT_DOCUMENT))


@pytest.fixture
def write_file(tmp_path):
    """Write text (or bytes) to a file under tmp_path and return its path."""
    def _write(name, content):
        path = tmp_path / name
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path
    return _write
