"""Conversion of captured text fragments into typed record attributes."""

from __future__ import annotations

import re
from typing import Any, Callable

from loguru import logger

from arubaexporter.exceptions import FieldCoercionError
from arubaexporter.parsing.models import FieldIssue, LinkStatus

# Plain digits, or digits grouped by thousands separators ("1,234,567").
_COUNTER_RE = re.compile(r"\d{1,3}(?:,\d{3})+|\d+")

_LINK_STATUS_TOKENS = {"Up": LinkStatus.UP, "Down": LinkStatus.DOWN}
_FLAG_TOKENS = {"Yes": True, "No": False}


def to_counter(raw: str) -> float:
    """Convert a counter column to float; whole numbers are exact up to 2**53."""
    text = raw.strip()
    if not _COUNTER_RE.fullmatch(text):
        raise FieldCoercionError(f"not a counter value: {raw!r}", raw=raw)
    return float(int(text.replace(",", "")))


def to_link_status(raw: str) -> LinkStatus:
    try:
        return _LINK_STATUS_TOKENS[raw.strip()]
    except KeyError:
        raise FieldCoercionError(f"unrecognized link status: {raw!r}", raw=raw) from None


def to_flag(raw: str) -> bool:
    try:
        return _FLAG_TOKENS[raw.strip()]
    except KeyError:
        raise FieldCoercionError(f"unrecognized yes/no token: {raw!r}", raw=raw) from None


def to_text(raw: str) -> str:
    return raw.rstrip()


COERCERS: dict[str, Callable[[str], Any]] = {
    "name": to_text,
    "description": to_text,
    "mac_address": to_text,
    "link_status": to_link_status,
    "port_enabled": to_flag,
    "rx_bytes": to_counter,
    "tx_bytes": to_counter,
    "rx_unicast": to_counter,
    "tx_unicast": to_counter,
    "rx_broadcast_multicast": to_counter,
    "tx_broadcast_multicast": to_counter,
    "rx_drops": to_counter,
    "tx_drops": to_counter,
    "rx_errors": to_counter,
    "input_bytes": to_counter,
    "output_bytes": to_counter,
    "input_packets": to_counter,
    "output_packets": to_counter,
}

# Value stored when coercion fails; attributes not listed stay unset.
FALLBACKS: dict[str, Any] = {
    "link_status": LinkStatus.UNKNOWN,
}


def set_field(fields: dict[str, Any], record: str, attribute: str, raw: str) -> FieldIssue | None:
    """Coerce ``raw`` and store it under ``attribute``.

    Later calls for the same attribute overwrite earlier ones. A failed
    coercion never raises: the fallback (if any) is stored, the previous
    value is otherwise left alone, and the issue is returned to the caller.

    Args:
        fields: Attribute values accumulated for the current record.
        record: Name of the record being built, for reporting.
        attribute: InterfaceRecord attribute to set.
        raw: Captured text.

    Returns:
        None on success, otherwise the FieldIssue describing the failure.
    """
    coerce = COERCERS[attribute]
    try:
        fields[attribute] = coerce(raw)
        return None
    except FieldCoercionError as e:
        if attribute in FALLBACKS:
            fields[attribute] = FALLBACKS[attribute]
        logger.warning(f"{record}: cannot set {attribute}: {e}")
        return FieldIssue(record=record, attribute=attribute, raw=raw, reason=str(e))
