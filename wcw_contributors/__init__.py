"""
WCW Contributors v1.0 — bloc « contributors » : sélection par contributor ou par tag,
rendu serveur d'une grille ordonnée, schéma legacy toujours lisible.

Usage (rendu serveur) :
    >>> from wcw_contributors import render_block, BLOCK_NAME
    >>> html = render_block(BLOCK_NAME, {"orderby": "date"}, source)

Usage (contenu de page) :
    >>> from wcw_contributors import render_content
    >>> html = render_content(post_content, source, config)

Usage (éditeur) :
    >>> from wcw_contributors import ContributorsEditor, RestClient, BlockConfig
    >>> editor = ContributorsEditor(RestClient(BlockConfig(rest_url="http://localhost:8001/wp-json/")))
    >>> editor.wait(); editor.toggle_select_by_contributor(); editor.preview()
"""

# ── Attributs + registry ────────────────────────────────────────────────────
from .blocks import (
    BlockAttributes, SelectOption, SHOW_ALL_ID, show_all,
    ContributorsAttributes, LegacyContributorsAttributes,
    parse_attributes, migrate_legacy, ensure_current,
    BLOCK_NAME, BlockType, register_block_type, get_block_type, registered_block_types,
)
from .config import BlockConfig, load_config

# ── Requête + rendu ─────────────────────────────────────────────────────────
from .query import ContributorQuery, build_query, filter_ids, rest_url
from .renderer import ContributorSource, render_block, render_contributors_block, render_legacy_block

# ── Contenu ─────────────────────────────────────────────────────────────────
from .content import parse_blocks, serialize_block, serialize_contributors_block, render_content

# ── Éditeur ─────────────────────────────────────────────────────────────────
from .editor import ContributorsEditor, EditorState, RestClient, LocalDataSource

__version__ = "1.0.0"

__all__ = [
    "BlockAttributes", "SelectOption", "SHOW_ALL_ID", "show_all",
    "ContributorsAttributes", "LegacyContributorsAttributes",
    "parse_attributes", "migrate_legacy", "ensure_current",
    "BLOCK_NAME", "BlockType", "register_block_type", "get_block_type", "registered_block_types",
    "BlockConfig", "load_config",
    "ContributorQuery", "build_query", "filter_ids", "rest_url",
    "ContributorSource", "render_block", "render_contributors_block", "render_legacy_block",
    "parse_blocks", "serialize_block", "serialize_contributors_block", "render_content",
    "ContributorsEditor", "EditorState", "RestClient", "LocalDataSource",
]
