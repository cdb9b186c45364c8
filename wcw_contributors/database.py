"""SQLite — init + session + CRUD helpers + requête contributors"""
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, selectinload, sessionmaker

from .config import settings
from .models import Base, ContributorDB, ContributorInput, ContributorRecord, TagDB, TagRecord
from .query import ContributorQuery

log = logging.getLogger(__name__)

DB_PATH      = settings.DB_PATH
ENGINE       = create_engine(f"sqlite:///{DB_PATH}", connect_args={"check_same_thread": False})
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)

# orderby → colonne ; tout autre orderby retombe sur la date (sens : ContributorQuery.order)
_ORDER_COLUMNS = {
    "title": ContributorDB.title,
    "date":  ContributorDB.date,
}


def init_db(engine: Optional[Engine] = None):
    engine = engine or ENGINE
    if engine is ENGINE:
        Path(DB_PATH).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Tags ──
def db_create_tag(db: Session, name: str, slug: Optional[str] = None) -> TagDB:
    tag = TagDB(name=name, slug=slug or name.lower().replace(" ", "-"))
    db.add(tag); db.commit(); db.refresh(tag); return tag

def db_list_tags(db: Session, limit: Optional[int] = None, offset: int = 0) -> List[TagDB]:
    q = db.query(TagDB).order_by(TagDB.name).offset(offset)
    if limit is not None: q = q.limit(limit)
    return q.all()

def db_count_tags(db: Session) -> int:
    return db.query(TagDB).count()


# ── Contributors ──
def db_create_contributor(db: Session, data: ContributorInput) -> ContributorDB:
    obj = ContributorDB(title=data.title, content=data.content, thumbnail_url=data.thumbnail_url)
    if data.date is not None:
        obj.date = data.date
    if data.tag_ids:
        obj.tags = db.query(TagDB).filter(TagDB.id.in_(data.tag_ids)).all()
    db.add(obj); db.commit(); db.refresh(obj); return obj

def db_get_contributor(db: Session, cid: int) -> Optional[ContributorDB]:
    return db.query(ContributorDB).filter_by(id=cid).first()

def db_delete_contributor(db: Session, contributor: ContributorDB):
    db.delete(contributor); db.commit()


def db_query_contributors(db: Session, query: ContributorQuery,
                          limit: Optional[int] = None, offset: int = 0) -> List[ContributorDB]:
    """
    Équivalent get_posts() : filtre post_type publié, ids explicites et/ou tags,
    tri selon orderby. numberposts=-1 → pas de limite.
    """
    q = (db.query(ContributorDB)
         .options(selectinload(ContributorDB.tags))
         .filter(ContributorDB.status == "publish"))
    if query.include:
        q = q.filter(ContributorDB.id.in_(query.include))
    if query.tag_ids:
        q = q.filter(ContributorDB.tags.any(TagDB.id.in_(query.tag_ids)))

    column = _ORDER_COLUMNS.get(query.orderby or "date")
    if column is None:
        log.debug("orderby inconnu %r, tri par défaut (date desc)", query.orderby)
        column = _ORDER_COLUMNS["date"]
    q = q.order_by(column.asc() if query.order == "ASC" else column.desc(), ContributorDB.id)

    if limit is None and query.numberposts > 0:
        limit = query.numberposts
    if offset:
        q = q.offset(offset)
    if limit is not None:
        q = q.limit(limit)
    return q.all()


def db_count_contributors(db: Session, query: ContributorQuery) -> int:
    q = db.query(ContributorDB).filter(ContributorDB.status == "publish")
    if query.include:
        q = q.filter(ContributorDB.id.in_(query.include))
    if query.tag_ids:
        q = q.filter(ContributorDB.tags.any(TagDB.id.in_(query.tag_ids)))
    return q.count()


class SqlContributorSource:
    """ContributorSource adossé à une session SQLAlchemy."""

    def __init__(self, db: Session):
        self.db = db

    def get_posts(self, query: ContributorQuery) -> List[ContributorRecord]:
        return [ContributorRecord.from_db(row) for row in db_query_contributors(self.db, query)]

    def get_tags(self) -> List[TagRecord]:
        return [TagRecord.model_validate(t) for t in db_list_tags(self.db)]


def seed_contributors(db: Session, rows: Iterable[ContributorInput]) -> List[ContributorDB]:
    """Insère une série de contributors (démo / tests)."""
    return [db_create_contributor(db, row) for row in rows]
