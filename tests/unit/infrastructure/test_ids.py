"""Tests for relay / legacy id parsing."""

import base64

import pytest

from app.domain.errors import InvalidIDError
from app.infrastructure.graphql.ids import parse_relay_or_legacy_id, to_global_id


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


class TestParseRelayOrLegacyId:
    def test_legacy_id(self):
        assert parse_relay_or_legacy_id("42", "Assignment") == 42

    def test_int_is_legacy(self):
        assert parse_relay_or_legacy_id(42, "Assignment") == 42

    def test_relay_id(self):
        assert parse_relay_or_legacy_id(_b64("Assignment:42"), "Assignment") == 42

    def test_round_trip_with_encoder(self):
        assert parse_relay_or_legacy_id(to_global_id("Section", 7), "Section") == 7

    def test_wrong_type(self):
        with pytest.raises(InvalidIDError, match="expected an id for Assignment"):
            parse_relay_or_legacy_id(_b64("Course:42"), "Assignment")

    def test_no_expected_type_accepts_any(self):
        assert parse_relay_or_legacy_id(_b64("Course:42")) == 42

    def test_undecodable(self):
        with pytest.raises(InvalidIDError, match="is not a valid relay id"):
            parse_relay_or_legacy_id(_b64("no-colon-here"), "Assignment")

    def test_non_numeric_node_id(self):
        with pytest.raises(InvalidIDError, match="is not a valid relay id"):
            parse_relay_or_legacy_id(_b64("Assignment:abc"), "Assignment")

    def test_signed_number_is_not_legacy(self):
        with pytest.raises(InvalidIDError):
            parse_relay_or_legacy_id("-5", "Assignment")


def test_to_global_id_format():
    assert to_global_id("Assignment", 100) == _b64("Assignment:100")
