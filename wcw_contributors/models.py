"""
Data models — Contributor, Tag (contenu hôte, lecture seule pour le bloc)
SQLAlchemy (SQLite) + Pydantic v2
"""
from datetime import datetime, timezone
from typing import List, Optional

import sqlalchemy as sa
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


# ── ORM ────────────────────────────────────────────────────────────────

def _utcnow() -> datetime:
    # colonne DateTime naïve : UTC sans tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(DeclarativeBase):
    pass


contributor_tags = sa.Table(
    "contributor_tags",
    Base.metadata,
    sa.Column("contributor_id", sa.Integer, sa.ForeignKey("contributors.id", ondelete="CASCADE"), primary_key=True),
    sa.Column("tag_id",         sa.Integer, sa.ForeignKey("tags.id", ondelete="CASCADE"),         primary_key=True),
)


class ContributorDB(Base):
    __tablename__ = "contributors"
    id:            Mapped[int]           = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    title:         Mapped[str]           = mapped_column(sa.String, nullable=False)
    content:       Mapped[str]           = mapped_column(sa.Text, default="")
    thumbnail_url: Mapped[Optional[str]] = mapped_column(sa.String, nullable=True)
    status:        Mapped[str]           = mapped_column(sa.String, default="publish")
    date:          Mapped[datetime]      = mapped_column(sa.DateTime, default=_utcnow)

    tags: Mapped[List["TagDB"]] = relationship("TagDB", secondary=contributor_tags, back_populates="contributors")


class TagDB(Base):
    __tablename__ = "tags"
    id:   Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(sa.String, nullable=False)
    slug: Mapped[str] = mapped_column(sa.String, nullable=False, unique=True)

    contributors: Mapped[List["ContributorDB"]] = relationship("ContributorDB", secondary=contributor_tags, back_populates="tags")


# ── PYDANTIC SCHEMAS ────────────────────────────────────────────────────

class ContributorRecord(BaseModel):
    """Contributor tel que vu par le renderer (indépendant de l'ORM)."""
    id:            int
    title:         str
    content:       str                = ""
    thumbnail_url: Optional[str]      = None
    date:          Optional[datetime] = None
    tag_ids:       List[int]          = Field(default_factory=list)

    @classmethod
    def from_db(cls, row: ContributorDB) -> "ContributorRecord":
        return cls(
            id=row.id,
            title=row.title,
            content=row.content or "",
            thumbnail_url=row.thumbnail_url,
            date=row.date,
            tag_ids=[t.id for t in row.tags],
        )


class TagRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id:   int
    name: str
    slug: str = ""


class ContributorInput(BaseModel):
    title:         str
    content:       str                = ""
    thumbnail_url: Optional[str]      = None
    date:          Optional[datetime] = None
    tag_ids:       List[int]          = Field(default_factory=list)
