"""
Blocs — attributs courant/legacy, migration, registry.
"""
from .base import BlockAttributes, SelectOption, SHOW_ALL_ID, show_all, show_all_list
from .contributors import (
    ContributorsAttributes, LegacyContributorsAttributes, AnyContributorsAttributes,
    ORDERBY_TITLE, ORDERBY_DATE, LEGACY_KEYS,
    attributes_shape, parse_attributes, migrate_legacy, ensure_current,
)
from .registry import (
    BLOCK_NAME, BlockType,
    register_block_type, unregister_block_type, get_block_type, registered_block_types,
)

__all__ = [
    # Base
    "BlockAttributes", "SelectOption", "SHOW_ALL_ID", "show_all", "show_all_list",
    # Contributors
    "ContributorsAttributes", "LegacyContributorsAttributes", "AnyContributorsAttributes",
    "ORDERBY_TITLE", "ORDERBY_DATE", "LEGACY_KEYS",
    "attributes_shape", "parse_attributes", "migrate_legacy", "ensure_current",
    # Registry
    "BLOCK_NAME", "BlockType",
    "register_block_type", "unregister_block_type", "get_block_type", "registered_block_types",
]
