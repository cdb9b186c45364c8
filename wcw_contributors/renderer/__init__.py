"""Renderer — protocol source + rendu HTML."""
from .base import ContributorSource
from .html import (
    GRID_CLASS,
    render_block, render_contributors_block, render_contributor, render_legacy_block,
)

__all__ = [
    "ContributorSource", "GRID_CLASS",
    "render_block", "render_contributors_block", "render_contributor", "render_legacy_block",
]
