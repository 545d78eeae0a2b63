"""Field extraction: turns a :class:`ProjectPage` into a :class:`ModuleRecord`.

drupal.org publishes no machine-readable schema for project pages, so each
field is recovered with a CSS selector against the page markup.  Every rule is
independent and returns an empty value of the right type when its fragment is
missing; a broken selector degrades one field, never the whole record.
"""

from __future__ import annotations

import copy
import re
from typing import Iterable, List

from bs4 import BeautifulSoup, Tag

from drupal_modules.scraper.models import ModuleRecord, ProjectPage

_BRAND_SUFFIX = "| Drupal.org"
_WORKS_WITH_LABEL = "Works with Drupal:"
_CATEGORIES_LABEL = "Module categories:"
_DOWNLOADS_RE = re.compile(r"\d+,\d+")

_RECOMMENDED_RELEASE = ".release.recommended-Yes"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _text_of(nodes: Iterable[Tag]) -> str:
    """Concatenated text content of *nodes*."""
    return "".join(node.get_text() for node in nodes)


def _first_text(soup: BeautifulSoup, selector: str) -> str:
    node = soup.select_one(selector)
    if node is None:
        return ""
    return node.get_text().strip()


def _inline_links(node: Tag) -> Tag:
    """Return a copy of *node* with every ``<a>`` rewritten as ``text (href)``."""
    node = copy.copy(node)
    for anchor in node.find_all("a"):
        text = anchor.get_text().strip()
        href = anchor.get("href")
        anchor.replace_with(f"{text} ({href})" if href else text)
    return node


def parse_page(html: str) -> BeautifulSoup:
    """Parse *html* into a queryable tree.  Malformed markup is tolerated."""
    return BeautifulSoup(html, "html.parser")


# ---------------------------------------------------------------------------
# Extraction rules
# ---------------------------------------------------------------------------

def extract_name(soup: BeautifulSoup) -> str:
    """Page title with the trailing site brand removed."""
    node = soup.select_one("#page-title") or soup.find("h1")
    if node is None:
        return ""
    return node.get_text().replace(_BRAND_SUFFIX, "", 1).strip()


def extract_description(soup: BeautifulSoup) -> str:
    node = soup.select_one('meta[name="description"]')
    if node is None:
        return ""
    return node.get("content") or ""


def extract_version(soup: BeautifulSoup) -> str:
    """Version label of the first recommended release."""
    return _first_text(
        soup, f"{_RECOMMENDED_RELEASE} .views-field-field-release-version strong"
    )


def extract_works_with(soup: BeautifulSoup) -> List[str]:
    """Core versions listed on the recommended release's "Works with" line.

    The line is the innermost ``div`` carrying the label; enclosing ``div``
    elements also contain the label but mix in unrelated release text.
    """
    selector = f"div:-soup-contains('{_WORKS_WITH_LABEL}')"
    line = None
    for node in soup.select(f"{_RECOMMENDED_RELEASE} {selector}"):
        if node.select_one(selector) is None:
            line = node
            break
    if line is None:
        return []

    text = line.get_text().replace(_WORKS_WITH_LABEL, "", 1).strip()
    return [part.strip() for part in text.split("||") if part.strip()]


def extract_downloads(soup: BeautifulSoup) -> str:
    """Reported install count, e.g. ``"12,345"``; ``"0"`` when not found."""
    text = _text_of(soup.select(".project-info li:-soup-contains('sites report')"))
    match = _DOWNLOADS_RE.search(text)
    return match.group(0) if match else "0"


def extract_status(soup: BeautifulSoup) -> str:
    text = _text_of(soup.select(".project-info li:-soup-contains('Module categories')"))
    return text.replace(_CATEGORIES_LABEL, "", 1).strip()


def extract_composer_command(soup: BeautifulSoup) -> str:
    return _first_text(soup, ".drupalorg-copy.composer-command")


def extract_release_table_compatibility(soup: BeautifulSoup) -> List[str]:
    """Cells of the first row of the current-release compatibility table."""
    row = soup.select_one(".table-release-compatibility-current tbody tr")
    if row is None:
        return []
    cells = (td.get_text().strip() for td in row.find_all("td"))
    # Blank cells are dropped like a missing "Works with" line.
    return [cell for cell in cells if cell]


def extract_readme(soup: BeautifulSoup) -> str:
    """Plain text of the body field with link targets kept inline.

    The parsed tree is left untouched; links are rewritten on a copy.
    """
    bodies = soup.select(".field-name-body")
    return _text_of(_inline_links(body) for body in bodies).strip()


def merge_compatibility(*sources: Iterable[str]) -> List[str]:
    """Union of *sources*, deduplicated, in first-seen order."""
    seen: set[str] = set()
    merged: List[str] = []
    for source in sources:
        for version in source:
            if version not in seen:
                seen.add(version)
                merged.append(version)
    return merged


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_module_record(page: ProjectPage) -> ModuleRecord:
    """Extract a :class:`ModuleRecord` from a fetched project page.

    Never raises on missing structure; absent fields keep their defaults.
    """
    soup = parse_page(page.html)

    return ModuleRecord(
        name=extract_name(soup),
        description=extract_description(soup),
        version=extract_version(soup),
        downloads=extract_downloads(soup),
        status=extract_status(soup),
        composer_command=extract_composer_command(soup),
        drupal_compatibility=merge_compatibility(
            extract_works_with(soup),
            extract_release_table_compatibility(soup),
        ),
        project_url=page.url,
        readme=extract_readme(soup),
    )
