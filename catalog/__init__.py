"""Catalog module for extracting course offerings."""

from .loader import load_catalog, select_entries
from .scraper import CatalogScraper

__all__ = ["CatalogScraper", "load_catalog", "select_entries"]
