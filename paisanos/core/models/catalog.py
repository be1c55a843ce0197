"""
Catalog models — the desired outcomes of a setup run.

A catalog is an ordered mapping of entry id → CatalogEntry.  The order
of the mapping is the order in which install steps are planned.
Entries are declared in code (the default catalog) or in the YAML
config, then narrowed by the editor selection before planning.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class Category(StrEnum):
    """How the package manager installs an entry."""

    FORMULA = "formula"
    CASK = "cask"


class CatalogEntry(BaseModel):
    """One desired package or application.

    ``app_path`` makes the entry filesystem-backed: if the bundle
    exists, the entry counts as installed even when the package
    manager doesn't know about it (e.g. Chrome installed from a DMG).
    """

    model_config = ConfigDict(frozen=True)

    display_name: str
    identifier: str                 # package name as the manager knows it
    category: Category = Category.FORMULA
    enabled: bool = True
    app_path: str | None = None
    group: str = ""                 # "editor" marks editor alternatives


Catalog = dict[str, CatalogEntry]
