"""
Sources de données de l'éditeur — entités candidates + rendu serveur.

RestClient      : API REST de l'hôte via requests (URL de base explicite, BlockConfig)
LocalDataSource : même contrat en process, sur une session SQLAlchemy
"""
import logging
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

import requests
from sqlalchemy.orm import Session

from ..config import BlockConfig
from ..database import SqlContributorSource, db_list_tags
from ..models import ContributorRecord, TagRecord
from ..query import POST_TYPE, REST_PER_PAGE, ContributorQuery
from ..renderer.html import render_block

log = logging.getLogger(__name__)


@runtime_checkable
class EditorDataSource(Protocol):
    def list_contributors(self) -> List[ContributorRecord]: ...
    def list_tags(self) -> List[TagRecord]: ...
    def render_block(self, name: str, attributes: Dict[str, Any]) -> str: ...


# ── REST ──────────────────────────────────────────────────────────────────

def _rendered(value: Any) -> str:
    """Champ REST {"rendered": "..."} ou chaîne brute."""
    if isinstance(value, dict):
        return value.get("rendered", "")
    return value or ""


def contributor_from_rest(item: dict) -> ContributorRecord:
    return ContributorRecord(
        id=item["id"],
        title=_rendered(item.get("title")),
        content=_rendered(item.get("content")),
        thumbnail_url=item.get("featured_media_url") or None,
        date=item.get("date"),
        tag_ids=item.get("tags") or [],
    )


def tag_from_rest(item: dict) -> TagRecord:
    return TagRecord(id=item["id"], name=item.get("name", ""), slug=item.get("slug", ""))


class RestClient:
    """Client de l'API REST hôte. Pas de retry ni de timeout : une erreur HTTP remonte."""

    def __init__(self, config: BlockConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.config.rest_base()}{path.lstrip('/')}"

    def _get(self, path: str, params: Optional[dict] = None) -> Any:
        r = self.session.get(self._url(path), params=params)
        r.raise_for_status()
        return r.json()

    def list_contributors(self) -> List[ContributorRecord]:
        items = self._get(f"wp/v2/{POST_TYPE}", params=ContributorQuery().to_rest_params())
        log.debug("%d contributor(s) reçus", len(items))
        return [contributor_from_rest(i) for i in items]

    def list_tags(self) -> List[TagRecord]:
        items = self._get("wp/v2/tags", params={"per_page": REST_PER_PAGE})
        return [tag_from_rest(i) for i in items]

    def render_block(self, name: str, attributes: Dict[str, Any]) -> str:
        r = self.session.post(self._url(f"wp/v2/block-renderer/{name}"), json={"attributes": attributes})
        r.raise_for_status()
        return r.json().get("rendered", "")


# ── Local ─────────────────────────────────────────────────────────────────

class LocalDataSource:
    """Même contrat que RestClient, sans passer par HTTP."""

    def __init__(self, db: Session, config: Optional[BlockConfig] = None):
        self.db = db
        self.config = config or BlockConfig()
        self.source = SqlContributorSource(db)

    def list_contributors(self) -> List[ContributorRecord]:
        return self.source.get_posts(ContributorQuery(orderby="title", numberposts=REST_PER_PAGE))

    def list_tags(self) -> List[TagRecord]:
        return [TagRecord.model_validate(t) for t in db_list_tags(self.db, limit=REST_PER_PAGE)]

    def render_block(self, name: str, attributes: Dict[str, Any]) -> str:
        return render_block(name, attributes, self.source, self.config)
