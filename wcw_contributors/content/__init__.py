"""Contenu — parse/sérialisation des délimiteurs de blocs + rendu de page."""
from .schema import ParsedBlock
from .parser import parse_blocks, full_block_name
from .serializer import serialize_attributes, serialize_block, serialize_contributors_block
from .render import render_content

__all__ = [
    "ParsedBlock",
    "parse_blocks",
    "full_block_name",
    "serialize_attributes",
    "serialize_block",
    "serialize_contributors_block",
    "render_content",
]
