"""
L0 Data — catalog definitions.
"""

from paisanos.core.services.setup.data.catalog import (  # noqa: F401
    DEFAULT_CATALOG,
    EDITOR_CHOICES,
    EDITOR_GROUP,
    apply_editor_choice,
    editor_ids,
    enabled_entries,
)
