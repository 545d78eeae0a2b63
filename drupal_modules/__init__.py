"""Drupal modules MCP server — drupal.org project page lookup."""

__version__ = "0.1.0"
