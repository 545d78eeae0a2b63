"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class ProjectPage:
    """The raw HTTP response for a drupal.org project page."""

    url: str
    html: str
    status_code: int


@dataclass
class ModuleRecord:
    """Structured summary of a Drupal module, as published on drupal.org.

    Every field is always present; fields whose page fragment is missing hold
    an empty value (``"0"`` for ``downloads``).
    """

    name: str = ""
    description: str = ""
    version: str = ""
    downloads: str = "0"
    status: str = ""
    composer_command: str = ""
    drupal_compatibility: List[str] = field(default_factory=list)
    project_url: str = ""
    readme: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed the way the tool serializes it.

        Key order is part of the output format.
        """
        return {
            "name": self.name,
            "description": self.description,
            "version": self.version,
            "downloads": self.downloads,
            "status": self.status,
            "composerCommand": self.composer_command,
            "drupalCompatibility": list(self.drupal_compatibility),
            "projectUrl": self.project_url,
            "readme": self.readme,
        }
