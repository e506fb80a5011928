"""
Ledger Django Adapter Wiring
============================
Builds the process-wide ScholarshipLedger the HTTP views serve.

This module is adapter-only glue:
- one ledger per process, built lazily from settings
- no engine logic here
- reset_ledger() drops the instance (tests, reconfiguration)
"""

from __future__ import annotations

import logging
import threading

from django.conf import settings

from engines.ledger import ScholarshipLedger

logger = logging.getLogger("ledger.http")

_LEDGER_LOCK = threading.Lock()
_LEDGER: ScholarshipLedger | None = None


def _create_ledger() -> ScholarshipLedger:
    authority_id = settings.LEDGER_AUTHORITY_ID
    logger.info(f"Building scholarship ledger for authority '{authority_id}'")
    return ScholarshipLedger(authority_id)


def build_ledger() -> ScholarshipLedger:
    global _LEDGER
    with _LEDGER_LOCK:
        if _LEDGER is None:
            _LEDGER = _create_ledger()
        return _LEDGER


def reset_ledger() -> None:
    global _LEDGER
    with _LEDGER_LOCK:
        _LEDGER = None
