"""Tests for the pattern extractors (pure functions, no network)."""

from __future__ import annotations

import math

import pytest

from conftest import FOUND_HTML
from core.domain.models import UNAVAILABLE, NetworkUsage
from core.extraction.patterns import (
    clean_text,
    extract_network_rows,
    extract_numbers_list,
    extract_owner_field,
    extract_owner_info,
    extract_phone_numbers,
    extract_total_row,
    extract_total_sims,
    network_for_number,
    to_count,
)


class TestToCount:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, 0),
            ("", 0),
            ("   ", 0),
            ("abc", 0),
            ("N/A", 0),
            ("7", 7),
            (" 12 ", 12),
            ("1,234", 1234),
            ("3 SIMs", 0),
            ("0311-7654321", 0),
            ("1" * 5000, 0),
            ("1234567890", 0),
            ("999,999,999", 999999999),
            (10**12, 0),
            (1e300, 0),
            ("&nbsp;4", 4),
            (5, 5),
            (-5, 0),
            (2.9, 2),
            (math.nan, 0),
            (True, 0),
        ],
    )
    def test_missing_or_non_numeric_is_zero(self, value, expected):
        assert to_count(value) == expected


class TestOwnerFields:
    def test_labels_with_inline_markup(self):
        info = extract_owner_info(FOUND_HTML)

        assert info.name == "Muhammad Ali"
        assert info.father_name == "Ahmed Khan"
        assert info.address == "House 12, Street 4, Lahore"

    def test_table_cell_delimiter(self):
        html = "<table><tr><td>Owner Name</td><td> Bilal&nbsp;Hussain </td></tr></table>"

        assert extract_owner_field(html, "Owner Name") == "Bilal Hussain"

    def test_missing_label_returns_sentinel(self):
        assert extract_owner_field("<p>nothing here</p>", "Father Name") == UNAVAILABLE

    def test_blank_value_returns_sentinel_not_empty_string(self):
        html = "<tr><td>Owner Name:</td><td>   </td></tr>"

        value = extract_owner_field(html, "Owner Name")

        assert value == UNAVAILABLE
        assert value != ""

    def test_blank_value_does_not_swallow_next_line(self):
        html = "Owner Name: &nbsp;<br>Father Name: Ahmed"

        assert extract_owner_field(html, "Owner Name") == UNAVAILABLE
        assert extract_owner_field(html, "Father Name") == "Ahmed"

    def test_blank_value_does_not_cross_span_and_newline(self):
        html = "<div><span>Owner Name:</span>\n<span>Father Name: Ahmed</span></div>"

        assert extract_owner_field(html, "Owner Name") == UNAVAILABLE
        assert extract_owner_field(html, "Father Name") == "Ahmed"

    def test_blank_value_in_plain_text_stops_at_newline(self):
        text = "Owner Name:\nFather Name: Ahmed"

        assert extract_owner_field(text, "Owner Name") == UNAVAILABLE
        assert extract_owner_field(text, "Father Name") == "Ahmed"

    def test_value_stops_at_next_label_on_same_line(self):
        html = "<span>Owner Name:</span><span>Father Name: Ahmed</span>"

        assert extract_owner_field(html, "Owner Name") == UNAVAILABLE

    def test_label_in_bold_cell(self):
        html = "<tr><td><b>Owner Name</b></td>\n<td>Bilal</td></tr>"

        assert extract_owner_field(html, "Owner Name") == "Bilal"

    def test_empty_text(self):
        info = extract_owner_info("")

        assert (info.name, info.father_name, info.address) == (UNAVAILABLE,) * 3


class TestNetworkRows:
    def test_html_rows_skip_header_zero_and_total(self):
        rows = extract_network_rows(FOUND_HTML)

        assert rows == [
            NetworkUsage(network="Jazz", voice_data=2, data_only=0, total=2),
            NetworkUsage(network="Zong", voice_data=1, data_only=0, total=1),
        ]

    def test_plain_text_rows(self):
        text = "Jazz: 2/0/2\nZong: 1/0/1\nTotal: 3/0/3\n"

        rows = extract_network_rows(text)

        assert [(r.network, r.voice_data, r.data_only, r.total) for r in rows] == [
            ("Jazz", 2, 0, 2),
            ("Zong", 1, 0, 1),
        ]

    def test_pipe_separated_rows_with_header(self):
        text = "| Network | Voice | Data | Total |\n| Telenor | 1 | 2 | 3 |\n"

        rows = extract_network_rows(text)

        assert rows == [NetworkUsage(network="Telenor", voice_data=1, data_only=2, total=3)]

    def test_unknown_names_ignored_in_plain_text(self):
        assert extract_network_rows("Date: 12/05/2024") == []

    def test_non_numeric_cells_default_to_zero(self):
        html = "<table><tr><td>Jazz</td><td>x</td><td>1</td><td>-</td></tr></table>"

        assert extract_network_rows(html) == [NetworkUsage(network="Jazz", voice_data=0, data_only=1, total=0)]

    def test_unclosed_rows_are_tolerated(self):
        html = "<table><tr><td>Jazz<td>1<td>0<td>1<tr><td>Ufone<td>2<td>0<td>2</table>"

        assert [r.network for r in extract_network_rows(html)] == ["Jazz", "Ufone"]

    def test_number_listing_rows_are_not_counters(self):
        html = (
            "<table><tr><td>Jazz</td><td>2</td><td>0</td><td>2</td></tr></table>"
            "<table><tr><th>Network</th><th>Number</th><th>Status</th><th>Since</th></tr>"
            "<tr><td>Zong</td><td>0311-7654321</td><td>Active</td><td>2024</td></tr></table>"
        )

        assert extract_network_rows(html) == [NetworkUsage(network="Jazz", voice_data=2, data_only=0, total=2)]

    def test_mixed_text_cells_reject_the_row(self):
        html = "<table><tr><td>Ufone</td><td>3 SIMs</td><td>0</td><td>3</td></tr></table>"

        assert extract_network_rows(html) == []

    def test_total_row(self):
        total = extract_total_row(FOUND_HTML)

        assert total == NetworkUsage(network="Total", voice_data=3, data_only=0, total=3)

    def test_total_row_absent(self):
        assert extract_total_row("<table><tr><td>Jazz</td><td>1</td><td>0</td><td>1</td></tr></table>") is None


class TestTotalSims:
    def test_standalone_figure(self):
        assert extract_total_sims("<p>Total SIMs: <b>4</b></p>") == 4

    def test_absent(self):
        assert extract_total_sims("<p>nothing</p>") == 0


class TestPhoneNumbers:
    def test_dedup_strip_and_order(self):
        assert extract_phone_numbers(FOUND_HTML) == ["03001234567", "03117654321"]

    def test_idempotent(self):
        first = extract_phone_numbers(FOUND_HTML)
        second = extract_phone_numbers(FOUND_HTML)

        assert first == second

    def test_rejects_longer_digit_runs(self):
        assert extract_phone_numbers("id 1203001234567 and 030012345678") == []

    def test_numbers_list_infers_network(self):
        numbers = extract_numbers_list("0345-1112223 / 0333 4445556 / 0355 1234567 / 0399 1234567")

        assert [(n.number, n.network, n.status) for n in numbers] == [
            ("03451112223", "Telenor", "Active"),
            ("03334445556", "Ufone", "Active"),
            ("03551234567", "SCOM", "Active"),
            ("03991234567", "Unknown", "Active"),
        ]

    def test_prefix_mapping(self):
        assert network_for_number("03211234567") == "Jazz"
        assert network_for_number("03151234567") == "Zong"


def test_clean_text():
    assert clean_text("<b> Ali&nbsp;&amp; Sons </b>\n") == "Ali & Sons"


def test_oversized_total_sims_figure_is_zero():
    assert extract_total_sims("<p>Total SIMs: " + "1" * 5000 + "</p>") == 0
