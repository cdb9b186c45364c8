"""
Parser de contenu — délimiteurs de blocs en commentaires HTML → ParsedBlock.
Blocs imbriqués gérés par pile ; bloc non fermé → fermé en fin de document.
"""
import json
import logging
import re
from typing import Any, Dict, List, Optional

from .schema import ParsedBlock

log = logging.getLogger(__name__)

_TOKEN = re.compile(
    r"<!--\s+(?P<closer>/)?wp:(?P<name>[a-z][a-z0-9_-]*(?:/[a-z][a-z0-9_-]*)?)\s+"
    r"(?P<attrs>\{.*?\}\s+)?(?P<void>/)?-->",
    re.DOTALL,
)


def full_block_name(name: str) -> str:
    """Nom sans namespace → core/…"""
    return name if "/" in name else f"core/{name}"


def _parse_attrs(raw: Optional[str]) -> Dict[str, Any]:
    if not raw:
        return {}
    try:
        attrs = json.loads(raw.strip())
    except json.JSONDecodeError as e:
        log.warning("Attributs de bloc illisibles (%s) : %.80s", e, raw)
        return {}
    return attrs if isinstance(attrs, dict) else {}


def _add_html(block: ParsedBlock, html: str):
    if html:
        block.inner_html += html
        block.inner_content.append(html)


def parse_blocks(content: str) -> List[ParsedBlock]:
    """Découpe le contenu en blocs de premier niveau (HTML libre inclus)."""
    output: List[ParsedBlock] = []
    stack: List[ParsedBlock] = []
    offset = 0

    def attach(block: ParsedBlock):
        if stack:
            stack[-1].inner_blocks.append(block)
            stack[-1].inner_content.append(None)
        else:
            output.append(block)

    def add_text(html: str):
        if not html:
            return
        if stack:
            _add_html(stack[-1], html)
        elif output and output[-1].is_freeform:
            _add_html(output[-1], html)
        else:
            output.append(ParsedBlock(inner_html=html, inner_content=[html]))

    for m in _TOKEN.finditer(content or ""):
        add_text(content[offset:m.start()])
        offset = m.end()
        name = full_block_name(m.group("name"))

        if m.group("closer"):
            if not stack or stack[-1].block_name != name:
                # fermeture orpheline → conservée comme HTML
                add_text(m.group(0))
                continue
            attach(stack.pop())
        elif m.group("void"):
            attach(ParsedBlock(block_name=name, attrs=_parse_attrs(m.group("attrs"))))
        else:
            stack.append(ParsedBlock(block_name=name, attrs=_parse_attrs(m.group("attrs"))))

    add_text((content or "")[offset:])
    while stack:
        attach(stack.pop())
    return output
