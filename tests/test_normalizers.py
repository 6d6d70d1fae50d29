"""Tests for payload normalizers (HTML trackers and JSON APIs)."""

from __future__ import annotations

import json

import pytest

from adapters.sim_sources import paksiminfo, ridha, simdatabase
from conftest import CHALLENGE_HTML, FOUND_HTML, FOUND_JSON
from core.domain.models import UNAVAILABLE, Blocked, NetworkUsage, SimRecord
from core.extraction.normalizers import normalize_html, normalize_json, reconcile_total


class TestReconcileTotal:
    def test_explicit_total_wins(self):
        rows = [NetworkUsage(network="Jazz", voice_data=1, total=1)]

        assert reconcile_total(explicit=5, networks=rows, fallback=9) == 5

    def test_sum_when_no_explicit(self):
        rows = [NetworkUsage(network="Jazz", total=2), NetworkUsage(network="Zong", total=1)]

        assert reconcile_total(explicit=0, networks=rows, fallback=9) == 3

    def test_fallback_last(self):
        assert reconcile_total(explicit=0, networks=[], fallback=4) == 4


class TestHtmlNormalizer:
    def test_synthetic_rows_with_total(self):
        text = "Jazz: 2/0/2\nZong: 1/0/1\nTotal: 3/0/3\n"

        record = normalize_html(text)

        assert isinstance(record, SimRecord)
        assert record.total_numbers == 3
        assert record.networks == [
            NetworkUsage(network="Jazz", voice_data=2, data_only=0, total=2),
            NetworkUsage(network="Zong", voice_data=1, data_only=0, total=1),
        ]
        assert all(not n.is_total_row() for n in record.networks)

    def test_full_tracker_page(self):
        record = ridha.normalize(FOUND_HTML)

        assert isinstance(record, SimRecord)
        assert record.owner_info.name == "Muhammad Ali"
        assert record.total_numbers == 3
        assert [n.network for n in record.networks] == ["Jazz", "Zong"]
        assert [n.number for n in record.numbers_list] == ["03001234567", "03117654321"]
        assert record.summary() == {"totalVoiceData": 3, "totalDataOnly": 0, "overallTotal": 3}

    def test_total_sims_figure_used_when_no_rows(self):
        record = normalize_html("<p>Owner Name: Ali</p><p>Total SIMs: 2</p>")

        assert record.total_numbers == 2
        assert record.networks == []

    def test_number_listing_does_not_inflate_total(self):
        html = (
            "<table><tr><td>Jazz</td><td>2</td><td>0</td><td>2</td></tr></table>"
            "<table><tr><td>Zong</td><td>0311-7654321</td><td>Active</td><td>2024</td></tr></table>"
        )

        record = normalize_html(html)

        assert record.total_numbers == 2
        assert [n.network for n in record.networks] == ["Jazz"]
        assert [n.number for n in record.numbers_list] == ["03117654321"]

    def test_blocked_short_circuits(self):
        result = ridha.normalize(CHALLENGE_HTML + FOUND_HTML)

        assert isinstance(result, Blocked)
        assert result.provider is None

    @pytest.mark.parametrize(
        "garbage",
        ["", "<<<>>>", "<tr><td>", "\x00\xff", "Total SIMs: many", "<p>Total SIMs: " + "1" * 5000 + "</p>"],
    )
    def test_malformed_input_never_raises(self, garbage):
        record = normalize_html(garbage)

        assert isinstance(record, SimRecord)
        assert record.total_numbers == 0
        assert record.owner_info.name == UNAVAILABLE


class TestJsonNormalizer:
    def test_nested_payload(self):
        record = paksiminfo.normalize(FOUND_JSON)

        assert isinstance(record, SimRecord)
        assert record.owner_info.name == "Sara Bibi"
        assert record.owner_info.father_name == UNAVAILABLE
        assert record.owner_info.address == UNAVAILABLE
        assert record.total_numbers == 2
        assert [n.network for n in record.networks] == ["Telenor"]
        assert [(n.number, n.network) for n in record.numbers_list] == [
            ("03451112223", "Telenor"),
            ("03451112224", "Telenor"),
        ]

    def test_flat_camel_case_payload(self):
        text = json.dumps(
            {
                "success": True,
                "ownerInfo": {"ownerName": "Zain", "fatherName": "Umar", "address": "Karachi"},
                "networks": [{"name": "Ufone", "voice": "1", "data": "1", "total": "2"}],
                "numbers": ["03331234567", "03331234567"],
            }
        )

        record = normalize_json(text)

        assert record.owner_info.name == "Zain"
        assert record.owner_info.father_name == "Umar"
        assert record.networks == [NetworkUsage(network="Ufone", voice_data=1, data_only=1, total=2)]
        assert record.total_numbers == 2
        assert len(record.numbers_list) == 1

    def test_total_row_used_when_no_asserted_total(self):
        text = json.dumps(
            {
                "data": {
                    "networks": [
                        {"network": "Jazz", "voiceData": 1, "dataOnly": 0, "total": 1},
                        {"network": "Total", "voiceData": 4, "dataOnly": 0, "total": 4},
                    ]
                }
            }
        )

        assert normalize_json(text).total_numbers == 4

    def test_count_of_numbers_as_last_resort(self):
        text = json.dumps({"data": {"numbers_list": ["0300-1111111", "0300-2222222"]}})

        assert normalize_json(text).total_numbers == 2

    def test_result_envelope(self):
        text = json.dumps({"success": True, "result": {"sim_details": {"total_numbers": 1}}})

        assert simdatabase.normalize(text).total_numbers == 1

    def test_success_false_is_empty(self):
        text = json.dumps({"success": False, "data": {"sim_details": {"total_numbers": 3}}})

        assert normalize_json(text) == SimRecord()

    @pytest.mark.parametrize(
        "garbage",
        [
            "",
            "not json",
            "[1, 2]",
            "null",
            '{"data": {"networks": "x", "numbers_list": {}}}',
            '{"data": 5}',
            '{"data": {"sim_details": {"total_numbers": "' + "7" * 5000 + '"}}}',
            '{"data": {"sim_details": {"total_numbers": ' + "7" * 5000 + "}}}",
        ],
    )
    def test_malformed_input_never_raises(self, garbage):
        record = normalize_json(garbage)

        assert isinstance(record, SimRecord)
        assert record.total_numbers == 0

    def test_html_challenge_behind_json_endpoint(self):
        assert isinstance(paksiminfo.normalize(CHALLENGE_HTML), Blocked)
