"""Test configuration and fixtures."""

import pytest

from bvg_departures.core.models import (
    DepartureSummary,
    StationCandidate,
    StationOverview,
)

BASE_URL = "http://mobil.bvg.de/"
SEARCH_URL = BASE_URL + "Fahrinfo/bin/stboard.bin/eox"
OVERVIEW_URL = BASE_URL + "Fahrinfo/bin/stboard.bin/dox/alexanderplatz"
DETAIL_URL = BASE_URL + "Fahrinfo/bin/traininfo.bin/dox/"


@pytest.fixture
def sample_search_response():
    """Sample search results page with two stations."""
    return """
    <html><body>
    <form class="ivu_form">
        <div class="select">
            <a href="Fahrinfo/bin/stboard.bin/dox/alexanderplatz">
                S+U Alexanderplatz (Berlin)
            </a>
            <a href="Fahrinfo/bin/stboard.bin/dox/alexanderplatz-memhardstr">
                S+U Alexanderplatz Bhf/Memhardstr. (Berlin)
            </a>
        </div>
    </form>
    </body></html>
    """


@pytest.fixture
def sample_overview_response():
    """Sample station timetable with M4 and M5 departures and a notice row."""
    return """
    <html><body>
    <div id="ivu_overview_input">
        Abfahrt <strong>S+U Alexanderplatz (Berlin)</strong>
    </div>
    <table class="ivu_table">
        <thead>
            <tr><th>Zeit</th><th>Linie</th><th>Richtung</th></tr>
        </thead>
        <tbody>
            <tr>
                <td>12:01</td>
                <td><a href="Fahrinfo/bin/traininfo.bin/dox/m4-1">M4</a></td>
                <td>S Hackescher Markt</td>
            </tr>
            <tr>
                <td>12:05</td>
                <td><a href="Fahrinfo/bin/traininfo.bin/dox/m5-1">M5 (Gl. 2)</a></td>
                <td>Zingster Str.</td>
            </tr>
            <tr>
                <td colspan="3">Bauarbeiten: Umleitung zwischen Alexanderplatz und Spandauer Str.</td>
            </tr>
            <tr>
                <td>12:11</td>
                <td><a href="Fahrinfo/bin/traininfo.bin/dox/m4-2">M4</a></td>
                <td>Zingster Str.</td>
            </tr>
            <tr>
                <td>12:21</td>
                <td><a href="Fahrinfo/bin/traininfo.bin/dox/m4-3">M4</a></td>
                <td>S Hackescher Markt</td>
            </tr>
        </tbody>
    </table>
    </body></html>
    """


def detail_page(route_steps: list[str], disruptions: list[str] | None = None) -> str:
    """Build a departure detail page."""
    messages = "".join(
        f'<div class="journeyMessageHIM">{text}</div>' for text in disruptions or []
    )
    rows = "".join(
        f'<tr><td class="tqTime">{step}</td><td>Halt</td></tr>' for step in route_steps
    )
    return f"""
    <html><body>
    {messages}
    <table id="ivu_trainroute_table">{rows}</table>
    </body></html>
    """


@pytest.fixture
def sample_detail_responses():
    """Detail pages of the three M4 departures, keyed by URL."""
    return {
        DETAIL_URL + "m4-1": detail_page(["11:52+1'", "12:01±0'"]),
        DETAIL_URL + "m4-2": detail_page(["12:11+2'"]),
        DETAIL_URL + "m4-3": "<html><body><p>Keine Echtzeitdaten</p></body></html>",
    }


@pytest.fixture
def sample_candidate():
    return StationCandidate(name="S+U Alexanderplatz (Berlin)", overview_link=OVERVIEW_URL)


def make_summary(time: str, line: str = "M4", direction: str = "S Hackescher Markt"):
    return DepartureSummary(
        time=time,
        line=line,
        direction=direction,
        platform=None,
        detail_link=f"{DETAIL_URL}{line.lower()}-{time.replace(':', '')}",
    )


@pytest.fixture
def sample_summaries():
    """Five M4 departures."""
    return [make_summary(f"12:{minute:02d}") for minute in (1, 11, 21, 31, 41)]


@pytest.fixture
def sample_overview():
    return StationOverview(
        name="S+U Alexanderplatz (Berlin)",
        departures=[
            make_summary("12:01"),
            make_summary("12:05", line="M5", direction="Zingster Str."),
            make_summary("12:11", direction="Zingster Str."),
            make_summary("12:21"),
        ],
    )


@pytest.fixture
def detail_page_builder():
    """Factory for departure detail pages."""
    return detail_page


@pytest.fixture
def summary_factory():
    """Factory for departure summaries."""
    return make_summary
