"""Module lookup pipeline.

``fetch_module_info`` orchestrates the full lookup from a module machine name
to a populated record:

    build URL → fetch → parse → extract fields → merge compatibility
"""

from __future__ import annotations

import json
from typing import Optional

from drupal_modules.log import get_logger
from drupal_modules.scraper.extractor import extract_module_record
from drupal_modules.scraper.fetcher import build_project_url, fetch_project_page
from drupal_modules.scraper.models import ModuleRecord

logger = get_logger(__name__)


async def fetch_module_info(
    module_name: str, timeout: Optional[float] = None
) -> ModuleRecord:
    """Look up *module_name* on drupal.org.

    Pipeline:
        1. :func:`~drupal_modules.scraper.fetcher.build_project_url` — the
           identifier is substituted verbatim into the URL template.
        2. :func:`~drupal_modules.scraper.fetcher.fetch_project_page` — one
           GET request.
        3. :func:`~drupal_modules.scraper.extractor.extract_module_record` —
           parse once, run each field rule, merge compatibility sources.

    Args:
        module_name: Machine name of the module, e.g. ``"views"``.
        timeout: Request timeout in seconds (defaults to
            ``settings.request_timeout``).

    Returns:
        The extracted :class:`ModuleRecord`.

    Raises:
        ModuleFetchError: If the page cannot be retrieved.  No partial record
            is returned in that case.
    """
    url = build_project_url(module_name)
    page = await fetch_project_page(url, timeout=timeout)
    record = extract_module_record(page)
    logger.debug("Extracted %s: version=%r", module_name, record.version)
    return record


def render_record(record: ModuleRecord) -> str:
    """Serialize *record* as JSON text indented by two spaces."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)
