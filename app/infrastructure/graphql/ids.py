"""Relay global ids ↔ internal integer ids.

Clients may send either a plain database id ("42") or a relay global id
(base64 of "Type:42"); both resolve to the same row.
"""

from __future__ import annotations

import re

from strawberry.relay.utils import from_base64, to_base64

from app.domain.errors import InvalidIDError

LEGACY_ID_RE = re.compile(r"\A[0-9]+\Z")


def to_global_id(type_name: str, node_id: int) -> str:
    return to_base64(type_name, node_id)


def relay_id_to_legacy_id(relay_id: str, expected_type: str | None = None) -> int:
    try:
        type_name, node_id = from_base64(relay_id)
    except ValueError as e:
        raise InvalidIDError(f"{relay_id} is not a valid relay id") from e

    if expected_type and type_name != expected_type:
        raise InvalidIDError(f"expected an id for {expected_type}")
    if not LEGACY_ID_RE.match(node_id):
        raise InvalidIDError(f"{relay_id} is not a valid relay id")
    return int(node_id)


def parse_relay_or_legacy_id(value: str | int, expected_type: str | None = None) -> int:
    value = str(value)
    if LEGACY_ID_RE.match(value):
        return int(value)
    return relay_id_to_legacy_id(value, expected_type)
