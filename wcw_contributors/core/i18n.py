"""
i18n — résolution des clés de traduction.

Clés format "@namespace.key" → texte localisé
Textes directs → retournés tels quels
"""
import json
from pathlib import Path

_I18N_CACHE: dict = {}
_I18N_DIR = Path(__file__).parent.parent / "i18n"


def _load_lang(lang: str) -> dict:
    """Charge le fichier i18n/{lang}.json (lazy, mis en cache)."""
    if lang not in _I18N_CACHE:
        path = _I18N_DIR / f"{lang}.json"
        if path.exists():
            with open(path, encoding="utf-8") as f:
                _I18N_CACHE[lang] = json.load(f)
        else:
            _I18N_CACHE[lang] = {}
    return _I18N_CACHE[lang]


def i18n_resolve(value: str, lang: str = "en") -> str:
    """
    Résout une clé i18n.
    "@editor.loading" → texte localisé
    "texte direct" → retourné tel quel
    """
    if not value or not value.startswith("@"):
        return value

    key = value[1:]
    catalog = _load_lang(lang)

    node = catalog
    for part in key.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            return f"[missing:{key}]"

    return str(node) if not isinstance(node, dict) else f"[missing:{key}]"


def available_langs() -> list:
    return sorted(p.stem for p in _I18N_DIR.glob("*.json"))


def reload_cache():
    """Force le rechargement du cache i18n (utile en dev)."""
    _I18N_CACHE.clear()
