"""Fixtures communes — SQLite en mémoire, contributors de démo, client API."""
import os, sys, tempfile
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
os.environ.setdefault("DB_PATH", os.path.join(tempfile.mkdtemp(prefix="wcw-test-"), "test.db"))

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from wcw_contributors.database import SqlContributorSource, db_create_tag, init_db, seed_contributors
from wcw_contributors.models import ContributorInput


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def seeded(db):
    """
    4 contributors, 3 tags :
      Alice 2020 [music]  — Bob 2022 [art] (sans vignette)
      Carol 2021 [music, art] — Dave 2023 []
    food n'est porté par personne.
    """
    music = db_create_tag(db, "Music")
    art   = db_create_tag(db, "Art")
    food  = db_create_tag(db, "Food")

    rows = {
        "alice": ContributorInput(title="Alice", content="Plays bass.", thumbnail_url="https://cdn.test/alice.jpg",
                                  date=datetime(2020, 1, 1), tag_ids=[music.id]),
        "bob":   ContributorInput(title="Bob", content="Paints murals.",
                                  date=datetime(2022, 6, 1), tag_ids=[art.id]),
        "carol": ContributorInput(title="Carol", content="Sings and draws.", thumbnail_url="https://cdn.test/carol.jpg",
                                  date=datetime(2021, 3, 15), tag_ids=[music.id, art.id]),
        "dave":  ContributorInput(title="Dave", content="Writes.", thumbnail_url="https://cdn.test/dave.jpg",
                                  date=datetime(2023, 2, 1)),
    }
    contributors = dict(zip(rows, seed_contributors(db, rows.values())))
    return {"tags": {"music": music, "art": art, "food": food}, "contributors": contributors}


@pytest.fixture
def source(db):
    return SqlContributorSource(db)


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from wcw_contributors.api.main import app
    from wcw_contributors.api.deps import get_config, get_db
    from wcw_contributors.config import BlockConfig

    def override_db():
        s = session_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = override_db
    app.dependency_overrides[get_config] = lambda: BlockConfig(rest_url="http://testserver/wp-json/")
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
