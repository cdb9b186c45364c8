"""
Renderer HTML — grille contributors (rendu serveur) + rendu legacy (data-rest).
Dispatch via le BlockType enregistré : schéma courant → render, schéma
déprécié → render_deprecated. Enregistre le bloc contributors.
"""
import logging
from html import escape
from typing import Any, Optional

from ..blocks.contributors import ContributorsAttributes, LegacyContributorsAttributes
from ..blocks.registry import BLOCK_NAME, BlockType, get_block_type, register_block_type
from ..config import BlockConfig
from ..models import ContributorRecord
from ..query import build_query, rest_url
from .base import ContributorSource

log = logging.getLogger(__name__)

GRID_CLASS = "contributor-grid"


# ── Point d'entrée public ───────────────────────────────────────────────────

def render_block(name: str, raw_attributes: Any, source: ContributorSource,
                 config: Optional[BlockConfig] = None) -> str:
    """Rend un bloc enregistré depuis ses attributs persistés (dict ou modèle)."""
    block_type = get_block_type(name)
    attributes = block_type.parse_attributes(raw_attributes)

    if block_type.is_deprecated(attributes) and block_type.render_deprecated is not None:
        return block_type.render_deprecated(attributes, config or BlockConfig(), block_type.css_class)
    return block_type.render(attributes, source, block_type.css_class)


# ── Rendu courant ───────────────────────────────────────────────────────────

def render_contributors_block(attributes: ContributorsAttributes, source: ContributorSource,
                              css_class: str = "wp-block-wcw-block-contributors") -> str:
    query = build_query(attributes)
    log.debug("contributors: orderby=%s include=%s tags=%s",
              query.orderby, ",".join(map(str, query.include)), ",".join(map(str, query.tag_ids)))

    contributors = source.get_posts(query)
    items = "".join(render_contributor(c) for c in contributors)
    return f'<div class="{css_class} {GRID_CLASS}">{items}</div>'


def render_contributor(c: ContributorRecord) -> str:
    # vignette absente → src vide
    src = escape(c.thumbnail_url or "", quote=True)
    return (
        '<div class="contributor">'
        '<div class="wp-block-media-text alignwide is-stacked-on-mobile">'
        '<figure class="wp-block-media-text__media">'
        f'<img src="{src}" alt="" >'
        '</figure>'
        '<div class="wp-block-media-text__content">'
        f'<p class="has-large-font-size">{escape(c.title, quote=False)}</p>'
        f'<p>{c.content}</p>'
        '</div>'
        '</div>'
        '</div>'
    )


# ── Rendu legacy ────────────────────────────────────────────────────────────

def render_legacy_block(attributes: LegacyContributorsAttributes, config: BlockConfig,
                        css_class: str = "wp-block-wcw-block-contributors") -> str:
    """Contenu enregistré avec l'ancien schéma : conteneur vide portant l'URL REST."""
    rest = escape(rest_url(attributes, config), quote=True)
    return f'<div data-rest="{rest}" class="{css_class}"></div>'


# ── Enregistrement ──────────────────────────────────────────────────────────

register_block_type(BlockType(
    name=BLOCK_NAME,
    title="@block.contributors.title",
    description="@block.contributors.description",
    icon="groups",
    category="common",
    attributes=ContributorsAttributes,
    deprecated=[LegacyContributorsAttributes],
    render=render_contributors_block,
    render_deprecated=render_legacy_block,
), replace=True)


__all__ = [
    "BLOCK_NAME", "GRID_CLASS",
    "render_block", "render_contributors_block", "render_contributor", "render_legacy_block",
]
