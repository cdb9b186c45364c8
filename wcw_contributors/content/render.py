"""
Rendu du contenu d'une page : chaque bloc enregistré est remplacé par son HTML,
le reste (HTML libre, autres blocs) est restitué tel quel.
"""
from typing import Optional

from ..blocks.registry import registered_block_types
from ..config import BlockConfig
from ..renderer.base import ContributorSource
from ..renderer.html import render_block
from .parser import parse_blocks
from .schema import ParsedBlock


def render_content(content: str, source: ContributorSource, config: Optional[BlockConfig] = None) -> str:
    dynamic = {bt.name for bt in registered_block_types()}
    return "".join(_render_parsed(b, source, config, dynamic) for b in parse_blocks(content))


def _render_parsed(block: ParsedBlock, source: ContributorSource,
                   config: Optional[BlockConfig], dynamic: set) -> str:
    if block.is_freeform:
        return block.inner_html
    if block.block_name in dynamic:
        return render_block(block.block_name, block.attrs, source, config)

    inner = iter(block.inner_blocks)
    return "".join(
        _render_parsed(next(inner), source, config, dynamic) if chunk is None else chunk
        for chunk in block.inner_content
    )
