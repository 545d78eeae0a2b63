"""Scraper package — drupal.org page fetch & field extraction."""

from drupal_modules.scraper.extractor import extract_module_record
from drupal_modules.scraper.fetcher import (
    ModuleFetchError,
    build_project_url,
    fetch_project_page,
)
from drupal_modules.scraper.models import ModuleRecord, ProjectPage

__all__ = [
    "build_project_url",
    "fetch_project_page",
    "extract_module_record",
    "ModuleFetchError",
    "ModuleRecord",
    "ProjectPage",
]
