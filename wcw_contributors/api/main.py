"""
WCW Contributors — FastAPI app (hôte du bloc)
Démarrer : uvicorn wcw_contributors.api.main:app --reload --port 8001
"""
import logging

from fastapi import FastAPI

from ..blocks.registry import registered_block_types
from ..config import settings
from .routes import content, editor, rest

logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
                    format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="WCW Contributors block", version="1.0.0", docs_url="/docs")

app.include_router(rest.router)
app.include_router(content.router)
app.include_router(editor.router)


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialisée (SQLite) — blocs : %s", ", ".join(b.name for b in registered_block_types()))


@app.get("/health")
def health():
    return {"status": "ok", "service": "wcw_contributors", "version": "1.0.0"}
