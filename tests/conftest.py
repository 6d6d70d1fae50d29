"""Shared fixtures: settings without env files, sample payloads, fake fetcher."""

from __future__ import annotations

import json

import pytest

from core.config import AppSettings
from core.domain.models import ProviderSpec, RawPayload, TransportStatus
from core.extraction.normalizers import normalize_html, normalize_json

IDENTIFIER = "3520112345671"

FOUND_HTML = """
<html><head><title>SIM Tracker Result</title></head><body>
<div class="owner"><b>Owner Name:</b> Muhammad Ali</div>
<div><b>Father Name:</b> Ahmed Khan</div>
<div><b>Address:</b> House 12, Street 4, Lahore</div>
<table class="networks">
  <tr><th>Network</th><th>Voice &amp; Data</th><th>Data Only</th><th>Total</th></tr>
  <tr><td>Jazz</td><td>2</td><td>0</td><td>2</td></tr>
  <tr><td>Zong</td><td>&nbsp;1 </td><td></td><td><b>1</b></td></tr>
  <tr><td>Ufone</td><td>0</td><td>0</td><td>0</td></tr>
  <tr><td>Total</td><td>3</td><td>0</td><td>3</td></tr>
</table>
<ul><li>0300-1234567</li><li>0311 7654321</li><li>03001234567</li></ul>
</body></html>
"""

EMPTY_HTML = "<html><head><title>Result</title></head><body><p>No record found.</p></body></html>"

CHALLENGE_HTML = """
<!DOCTYPE html><html><head><title>Just a moment...</title></head>
<body><div id="challenge-body">Please wait</div></body></html>
"""

FOUND_JSON = json.dumps(
    {
        "success": True,
        "data": {
            "owner_info": {"name": "Sara Bibi", "father_name": "", "address": None},
            "sim_details": {
                "total_numbers": 2,
                "networks": [
                    {"network": "Telenor", "voiceData": 2, "dataOnly": 0, "total": 2},
                    {"network": "Total", "voiceData": 2, "dataOnly": 0, "total": 2},
                ],
                "numbers_list": [
                    {"number": "0345-1112223", "network": "Unknown", "status": "Active"},
                    "0345 1112224",
                ],
            },
        },
    }
)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        user_agent="sim-resolver-tests/1.0",
        http_timeout_seconds=2.0,
    )


def make_spec(name: str, *, normalizer=normalize_html, response_format: str = "html") -> ProviderSpec:
    return ProviderSpec(
        name=name,
        label=name.upper(),
        endpoint=f"https://{name}.invalid/check/{{identifier}}",
        response_format=response_format,
        normalizer=normalizer,
    )


def ok(name: str, text: str) -> RawPayload:
    return RawPayload(provider=name, text=text, status_code=200)


def failed(name: str, detail: str = "ConnectError: refused") -> RawPayload:
    return RawPayload(provider=name, status=TransportStatus.NETWORK_ERROR, detail=detail)


class FakeFetcher:
    """In-memory `PayloadFetcher`: returns (or raises) a canned value per provider."""

    def __init__(self, responses: dict[str, RawPayload | Exception]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, str]] = []

    async def fetch(self, spec: ProviderSpec, identifier: str) -> RawPayload:
        self.calls.append((spec.name, identifier))
        value = self.responses[spec.name]
        if isinstance(value, Exception):
            raise value
        return value

    @property
    def called(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def html_providers() -> tuple[ProviderSpec, ...]:
    return (make_spec("p1"), make_spec("p2"), make_spec("p3"))


@pytest.fixture
def json_spec() -> ProviderSpec:
    return make_spec("api", normalizer=normalize_json, response_format="json")
