"""
Schéma d'un bloc parsé depuis le contenu d'une page.

  <!-- wp:wcw/block-contributors {"orderby":"date"} /-->
  <!-- wp:group --><div>…<!-- wp:paragraph --><p>x</p><!-- /wp:paragraph --></div><!-- /wp:group -->

block_name None → HTML libre (hors délimiteurs).
inner_content : morceaux HTML, None marquant la place d'un bloc interne.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ParsedBlock(BaseModel):
    block_name: Optional[str] = None
    attrs: Dict[str, Any] = Field(default_factory=dict)
    inner_html: str = ""
    inner_blocks: List["ParsedBlock"] = Field(default_factory=list)
    inner_content: List[Optional[str]] = Field(default_factory=list)

    @property
    def is_freeform(self) -> bool:
        return self.block_name is None


ParsedBlock.model_rebuild()
