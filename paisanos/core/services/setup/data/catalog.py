"""
L0 Data — Default catalog and editor choices.

Pure data plus the one transformation that narrows a catalog to the
user's editor choice.  No I/O.
"""

from __future__ import annotations

from paisanos.core.models.catalog import Catalog, CatalogEntry, Category

EDITOR_GROUP = "editor"

# Insertion order is install order.
DEFAULT_CATALOG: Catalog = {
    "neovim": CatalogEntry(
        display_name="neovim",
        identifier="neovim",
        category=Category.FORMULA,
        enabled=False,
        group=EDITOR_GROUP,
    ),
    "fnm": CatalogEntry(display_name="fnm", identifier="fnm"),
    "figma": CatalogEntry(display_name="figma", identifier="figma", category=Category.CASK),
    "notion": CatalogEntry(display_name="notion", identifier="notion", category=Category.CASK),
    "slack": CatalogEntry(display_name="slack", identifier="slack", category=Category.CASK),
    "google-chrome": CatalogEntry(
        display_name="google-chrome",
        identifier="google-chrome",
        category=Category.CASK,
        app_path="/Applications/Google Chrome.app",
    ),
    "vscode": CatalogEntry(
        display_name="vscode",
        identifier="visual-studio-code",
        category=Category.CASK,
        enabled=False,
        app_path="/Applications/Visual Studio Code.app",
        group=EDITOR_GROUP,
    ),
    "cursor": CatalogEntry(
        display_name="cursor.ai",
        identifier="cursor",
        category=Category.CASK,
        enabled=False,
        app_path="/Applications/Cursor.app",
        group=EDITOR_GROUP,
    ),
}

# CLI value → catalog entry id ("none" selects no editor)
EDITOR_CHOICES: dict[str, str | None] = {
    "neovim": "neovim",
    "nvim": "neovim",
    "vscode": "vscode",
    "cursor": "cursor",
    "none": None,
}


def editor_ids(catalog: Catalog) -> list[str]:
    """Entry ids that belong to the editor group, in catalog order."""
    return [key for key, entry in catalog.items() if entry.group == EDITOR_GROUP]


def apply_editor_choice(catalog: Catalog, choice: str | None) -> Catalog:
    """Enable exactly the chosen editor entry, disable the others.

    Non-editor entries pass through untouched.  Returns a new mapping;
    the input catalog is not modified.

    Raises:
        ValueError: If ``choice`` is not a known editor.
    """
    if choice is None:
        selected = None
    else:
        key = choice.lower().strip()
        if key not in EDITOR_CHOICES:
            allowed = ", ".join(EDITOR_CHOICES)
            raise ValueError(f"Unknown editor {choice!r}. Allowed values: {allowed}")
        selected = EDITOR_CHOICES[key]

    result: Catalog = {}
    for key, entry in catalog.items():
        if entry.group == EDITOR_GROUP:
            entry = entry.model_copy(update={"enabled": key == selected})
        result[key] = entry
    return result


def enabled_entries(catalog: Catalog) -> list[tuple[str, CatalogEntry]]:
    """Enabled entries in catalog order."""
    return [(key, entry) for key, entry in catalog.items() if entry.enabled]
