"""
Éditeur du bloc contributors (prévisualisation admin).
GET /admin/contributors-block?attributes=<json>&lang=en → panneau HTML + aperçu
"""
import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import HTMLResponse
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...config import BlockConfig
from ...core.i18n import i18n_resolve
from ...editor import ContributorsEditor, LocalDataSource
from ..deps import get_config, get_db

log = logging.getLogger(__name__)
router = APIRouter(tags=["Editor"])


@router.get("/admin/contributors-block", response_class=HTMLResponse)
def editor_page(
    attributes: Optional[str] = Query(None, description="Attributs JSON du bloc"),
    lang: Optional[str] = Query(None),
    db: Session = Depends(get_db),
    config: BlockConfig = Depends(get_config),
):
    try:
        raw = json.loads(attributes) if attributes else {}
    except json.JSONDecodeError as e:
        raise HTTPException(400, f"JSON invalide : {e}")
    if not isinstance(raw, dict):
        raise HTTPException(400, "Les attributs doivent être un objet JSON")

    lang = lang or config.lang
    # une seule session SQLAlchemy → un seul worker
    with ThreadPoolExecutor(max_workers=1) as pool:
        try:
            editor = ContributorsEditor(LocalDataSource(db, config), raw, executor=pool)
        except ValidationError as e:
            raise HTTPException(400, f"Attributs invalides : {e}")
        editor.wait()
        panel = editor.render(lang=lang)

    title = i18n_resolve("@block.contributors.title", lang)
    return HTMLResponse(f"""<!DOCTYPE html>
<html lang="{lang}">
<head><meta charset="UTF-8"><title>{title}</title></head>
<body style="font-family:sans-serif;padding:24px">
<h1 style="font-size:18px">{title}</h1>
{panel}
</body>
</html>""")
