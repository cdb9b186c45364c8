"""
Rendu de contenu de page.
POST /wp-json/wcw/v1/render-content {content} → {"rendered": html}
POST /wp-json/wcw/v1/parse-content  {content} → blocs parsés
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...config import BlockConfig
from ...content import parse_blocks, render_content
from ...database import SqlContributorSource
from ..deps import get_config, get_db

router = APIRouter(prefix="/wp-json/wcw/v1", tags=["Content"])


class ContentRequest(BaseModel):
    content: str = ""


@router.post("/render-content")
def render_page_content(req: ContentRequest, db: Session = Depends(get_db),
                        config: BlockConfig = Depends(get_config)):
    return {"rendered": render_content(req.content, SqlContributorSource(db), config)}


@router.post("/parse-content")
def parse_page_content(req: ContentRequest):
    return [b.model_dump() for b in parse_blocks(req.content)]
