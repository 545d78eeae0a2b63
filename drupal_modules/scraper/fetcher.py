"""HTTP fetcher for drupal.org project pages."""

from __future__ import annotations

from typing import Optional

import httpx

from drupal_modules.config import settings
from drupal_modules.log import get_logger
from drupal_modules.scraper.models import ProjectPage

logger = get_logger(__name__)


class ModuleFetchError(Exception):
    """The project page could not be retrieved.

    Raised for non-2xx responses, network failures and timeouts.  The
    underlying ``httpx`` exception is chained as ``__cause__``.
    """


def build_project_url(module_name: str) -> str:
    """Return the canonical drupal.org URL for *module_name*.

    The identifier is substituted verbatim; no escaping is applied.
    """
    return settings.project_url_template.format(module_name=module_name)


async def fetch_project_page(url: str, timeout: Optional[float] = None) -> ProjectPage:
    """GET *url* and return a :class:`ProjectPage`.

    Redirects are followed.  ``timeout`` defaults to
    ``settings.request_timeout``.

    Raises:
        ModuleFetchError: If the request fails or the server answers with a
            4xx/5xx status code.
    """
    if timeout is None:
        timeout = settings.request_timeout

    logger.info("Fetching %s", url)
    try:
        async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPError as exc:
        logger.warning("Fetch failed for %s: %s", url, exc)
        raise ModuleFetchError(str(exc)) from exc

    return ProjectPage(url=url, html=response.text, status_code=response.status_code)
