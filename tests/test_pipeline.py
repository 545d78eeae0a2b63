"""Tests for the fetcher and the end-to-end lookup pipeline.

Mocking strategy:
- ``respx`` patches ``httpx`` at the transport layer so no real network calls
  are made.
- pytest-asyncio runs with ``asyncio_mode = "auto"`` (see pyproject.toml), so
  ``async def`` tests are collected directly.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from drupal_modules.pipeline import fetch_module_info, render_record
from drupal_modules.scraper.fetcher import (
    ModuleFetchError,
    build_project_url,
    fetch_project_page,
)
from drupal_modules.scraper.models import ModuleRecord, ProjectPage


_VIEWS_URL = "https://www.drupal.org/project/views"

_PAGE_HTML = """\
<html>
<head><meta name="description" content="Lists and tables."></head>
<body>
  <h1 id="page-title">Views | Drupal.org</h1>
  <div class="release recommended-Yes">
    <div class="views-field-field-release-version"><strong>8.x-3.14</strong></div>
    <div>Works with Drupal: ^9 || ^10</div>
  </div>
  <table class="table-release-compatibility-current">
    <tbody><tr><td>^10</td><td>^11</td></tr></tbody>
  </table>
  <div class="field-name-body"><p>Read the <a href="/node/2">Issue</a>.</p></div>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# build_project_url
# ---------------------------------------------------------------------------

class TestBuildProjectUrl:
    def test_substitutes_module_name(self) -> None:
        assert build_project_url("views") == _VIEWS_URL

    def test_identifier_passed_through_verbatim(self) -> None:
        assert build_project_url("a/b") == "https://www.drupal.org/project/a/b"

    def test_uses_configured_template(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "drupal_modules.scraper.fetcher.settings.project_url_template",
            "http://mirror.test/p/{module_name}",
        )
        assert build_project_url("token") == "http://mirror.test/p/token"


# ---------------------------------------------------------------------------
# fetch_project_page
# ---------------------------------------------------------------------------

class TestFetchProjectPage:
    async def test_successful_fetch_returns_page(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(return_value=httpx.Response(200, text=_PAGE_HTML))
            page = await fetch_project_page(_VIEWS_URL)

        assert isinstance(page, ProjectPage)
        assert page.url == _VIEWS_URL
        assert page.status_code == 200
        assert "page-title" in page.html

    async def test_http_error_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(return_value=httpx.Response(404, text="Not Found"))
            with pytest.raises(ModuleFetchError) as exc_info:
                await fetch_project_page(_VIEWS_URL)

        assert "404" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    async def test_network_failure_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(side_effect=httpx.ConnectError("connection refused"))
            with pytest.raises(ModuleFetchError, match="connection refused"):
                await fetch_project_page(_VIEWS_URL)

    async def test_timeout_raises_fetch_error(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(side_effect=httpx.ReadTimeout("timed out"))
            with pytest.raises(ModuleFetchError, match="timed out"):
                await fetch_project_page(_VIEWS_URL, timeout=0.1)

    async def test_follows_redirects(self) -> None:
        moved = "https://www.drupal.org/project/views_moved"
        with respx.mock:
            respx.get(_VIEWS_URL).mock(
                return_value=httpx.Response(301, headers={"Location": moved})
            )
            respx.get(moved).mock(return_value=httpx.Response(200, text=_PAGE_HTML))
            page = await fetch_project_page(_VIEWS_URL)

        assert page.status_code == 200
        assert page.url == _VIEWS_URL


# ---------------------------------------------------------------------------
# fetch_module_info
# ---------------------------------------------------------------------------

class TestFetchModuleInfo:
    async def test_returns_record(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(return_value=httpx.Response(200, text=_PAGE_HTML))
            record = await fetch_module_info("views")

        assert isinstance(record, ModuleRecord)
        assert record.name == "Views"
        assert record.description == "Lists and tables."
        assert record.version == "8.x-3.14"
        assert record.drupal_compatibility == ["^9", "^10", "^11"]
        assert record.project_url == _VIEWS_URL
        assert record.readme == "Read the Issue (/node/2)."

    async def test_fetch_failure_propagates(self) -> None:
        with respx.mock:
            respx.get(_VIEWS_URL).mock(return_value=httpx.Response(500))
            with pytest.raises(ModuleFetchError):
                await fetch_module_info("views")


# ---------------------------------------------------------------------------
# render_record
# ---------------------------------------------------------------------------

class TestRenderRecord:
    def test_two_space_indent(self) -> None:
        text = render_record(ModuleRecord(name="Views"))
        assert text.startswith('{\n  "name": "Views",')

    def test_round_trips_all_fields(self) -> None:
        record = ModuleRecord(name="Views", drupal_compatibility=["^10"])
        data = json.loads(render_record(record))
        assert data == record.to_dict()

    def test_non_ascii_kept(self) -> None:
        text = render_record(ModuleRecord(description="Caché"))
        assert "Caché" in text
