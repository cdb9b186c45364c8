"""
API REST hôte — /wp-json

GET  /wp/v2/contributor                       → liste paginée (orderby, include, tags)
GET  /wp/v2/tags                              → liste paginée des tags
GET  /wp/v2/block-types/{namespace}/{name}    → type de bloc + JSON schema des attributs
POST /wp/v2/block-renderer/{namespace}/{name} → {"attributes": {...}} → {"rendered": html}
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from ...blocks.registry import get_block_type
from ...config import BlockConfig
from ...core.i18n import i18n_resolve
from ...database import (
    SqlContributorSource, db_count_contributors, db_count_tags, db_list_tags, db_query_contributors,
)
from ...models import ContributorDB, TagDB
from ...query import ContributorQuery
from ...renderer.html import render_block
from ..deps import get_config, get_db

log = logging.getLogger(__name__)
router = APIRouter(prefix="/wp-json", tags=["REST"])


# ── Schémas ────────────────────────────────────────────────────────────────────

class BlockRenderRequest(BaseModel):
    attributes: Dict[str, Any] = Field(default_factory=dict)


# ── Helpers ────────────────────────────────────────────────────────────────────

def _csv_ids(value: Optional[str]) -> List[int]:
    if not value:
        return []
    try:
        return [int(v) for v in value.split(",") if v.strip()]
    except ValueError:
        raise HTTPException(400, f"Liste d'ids invalide : {value!r}")


def _contributor_json(c: ContributorDB) -> dict:
    return {
        "id":                 c.id,
        "date":               c.date.isoformat() if c.date else None,
        "type":               "contributor",
        "title":              {"rendered": c.title},
        "content":            {"rendered": c.content or ""},
        "tags":               [t.id for t in c.tags],
        "featured_media_url": c.thumbnail_url or "",
    }


def _tag_json(t: TagDB) -> dict:
    return {"id": t.id, "name": t.name, "slug": t.slug, "count": len(t.contributors)}


def _block_type_or_404(namespace: str, name: str):
    try:
        return get_block_type(f"{namespace}/{name}")
    except ValueError as e:
        raise HTTPException(404, str(e))


# ── Endpoints ──────────────────────────────────────────────────────────────────

@router.get("/wp/v2/contributor")
def list_contributors(
    response: Response,
    per_page: int = Query(10, ge=1, le=100),
    page: int = Query(1, ge=1),
    orderby: str = Query("date"),
    include: Optional[str] = Query(None, description="Ids séparés par des virgules"),
    tags: Optional[str] = Query(None, description="Ids de tags séparés par des virgules"),
    db: Session = Depends(get_db),
):
    query = ContributorQuery(orderby=orderby, include=_csv_ids(include), tag_ids=_csv_ids(tags))
    rows = db_query_contributors(db, query, limit=per_page, offset=(page - 1) * per_page)
    total = db_count_contributors(db, query)
    response.headers["X-WP-Total"] = str(total)
    response.headers["X-WP-TotalPages"] = str(max(1, -(-total // per_page)))
    return [_contributor_json(c) for c in rows]


@router.get("/wp/v2/tags")
def list_tags(
    response: Response,
    per_page: int = Query(10, ge=1, le=100),
    page: int = Query(1, ge=1),
    db: Session = Depends(get_db),
):
    rows = db_list_tags(db, limit=per_page, offset=(page - 1) * per_page)
    response.headers["X-WP-Total"] = str(db_count_tags(db))
    return [_tag_json(t) for t in rows]


@router.get("/wp/v2/block-types/{namespace}/{name}")
def block_type_detail(namespace: str, name: str, config: BlockConfig = Depends(get_config)):
    bt = _block_type_or_404(namespace, name)
    return {
        "name":        bt.name,
        "title":       i18n_resolve(bt.title, config.lang),
        "description": i18n_resolve(bt.description, config.lang),
        "icon":        bt.icon,
        "category":    bt.category,
        "attributes":  bt.attributes_schema(),
        "deprecated":  [m.model_json_schema(by_alias=True) for m in bt.deprecated],
        "is_dynamic":  True,
    }


@router.post("/wp/v2/block-renderer/{namespace}/{name}")
def block_renderer(
    namespace: str,
    name: str,
    req: BlockRenderRequest,
    db: Session = Depends(get_db),
    config: BlockConfig = Depends(get_config),
):
    """Rendu serveur d'un bloc (aperçu éditeur et rendu de production)."""
    bt = _block_type_or_404(namespace, name)
    try:
        html = render_block(bt.name, req.attributes, SqlContributorSource(db), config)
    except ValidationError as e:
        raise HTTPException(400, f"Attributs invalides : {e}")
    return {"rendered": html}
