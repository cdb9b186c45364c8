"""
Sérialisation — attributs → commentaire délimiteur persisté dans le contenu.
"""
import json
import re
from typing import Any, Dict, Optional

from ..blocks.base import BlockAttributes
from ..blocks.registry import BLOCK_NAME

_ESCAPED_QUOTE = re.compile(r'\\\\|\\"')


def serialize_attributes(attrs: Dict[str, Any]) -> str:
    """JSON compact ; --, <, >, & et \\" échappés pour ne jamais fermer le commentaire."""
    encoded = json.dumps(attrs, separators=(",", ":"), ensure_ascii=False)
    encoded = (encoded
               .replace("--", "\\u002d\\u002d")
               .replace("<", "\\u003c")
               .replace(">", "\\u003e")
               .replace("&", "\\u0026"))
    # \\ consommé en premier pour ne pas toucher au guillemet qui suit un antislash échappé
    return _ESCAPED_QUOTE.sub(lambda m: m.group(0) if m.group(0) == "\\\\" else "\\u0022", encoded)


def serialize_block(name: str, attrs: Optional[Dict[str, Any]] = None, inner_html: str = "") -> str:
    short = name[len("core/"):] if name.startswith("core/") else name
    attrs_part = f"{serialize_attributes(attrs)} " if attrs else ""
    if not inner_html:
        return f"<!-- wp:{short} {attrs_part}/-->"
    return f"<!-- wp:{short} {attrs_part}-->{inner_html}<!-- /wp:{short} -->"


def serialize_contributors_block(attributes: BlockAttributes) -> str:
    """Bloc dynamique : aucun HTML enregistré, seulement les attributs hors défauts."""
    return serialize_block(BLOCK_NAME, attributes.dump())
