"""
Sélecteur éditeur — état explicite + mutations d'attributs + aperçu serveur.

États : LOADING → EMPTY | READY, ERROR si une requête a échoué.
Une fois READY, l'éditeur n'y revient plus (les entités ne sont chargées qu'une fois).
Chaque contrôle remplace un seul attribut et invalide l'aperçu.
"""
import logging
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple, Union

from pydantic.alias_generators import to_camel

from ..blocks.base import SelectOption, show_all
from ..blocks.contributors import (
    ORDERBY_DATE, ORDERBY_TITLE,
    ContributorsAttributes, LegacyContributorsAttributes, ensure_current,
)
from ..blocks.registry import BLOCK_NAME
from ..models import ContributorRecord, TagRecord
from .client import EditorDataSource

log = logging.getLogger(__name__)

# Contrôle « Order by » : choix fixe à deux options (valeur, clé i18n)
ORDERBY_CHOICES = [
    (ORDERBY_DATE,  "@orderby.date"),
    (ORDERBY_TITLE, "@orderby.title"),
]

_FIELD_BY_ALIAS = {to_camel(name): name for name in ContributorsAttributes.model_fields}


class EditorState(str, Enum):
    LOADING = "loading"
    EMPTY   = "empty"
    READY   = "ready"
    ERROR   = "error"


class ContributorsEditor:
    def __init__(
        self,
        source: EditorDataSource,
        attributes: Union[ContributorsAttributes, LegacyContributorsAttributes, dict, None] = None,
        executor: Optional[Executor] = None,
    ):
        self._executor = executor
        self._owns_executor = executor is None
        self.source = source
        self.attributes = ensure_current(attributes)
        self._contributors: Optional[Future] = None
        self._tags: Optional[Future] = None
        self._preview: Optional[Future] = None
        self._ready = False

    # ── Cycle de vie ──────────────────────────────────────────────────────

    def _pool(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="wcw-editor")
        return self._executor

    def load(self) -> Tuple[Future, Future]:
        """Lance (une seule fois) les deux requêtes d'entités."""
        if self._contributors is None:
            pool = self._pool()
            self._contributors = pool.submit(self.source.list_contributors)
            self._tags = pool.submit(self.source.list_tags)
            self._contributors.add_done_callback(_log_failure("contributors"))
            self._tags.add_done_callback(_log_failure("tags"))
        return self._contributors, self._tags

    def wait(self, timeout: Optional[float] = None) -> EditorState:
        wait(self.load(), timeout=timeout)
        return self.state

    def close(self):
        """Arrête le pool créé par l'éditeur (un executor fourni reste à l'appelant)."""
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __del__(self):
        # éditeur utilisé hors `with` : le pool privé est libéré avec lui
        self.close()

    @property
    def state(self) -> EditorState:
        if self._ready:
            return EditorState.READY
        if self._contributors is None:
            return EditorState.LOADING
        futures = (self._contributors, self._tags)
        if any(f.done() and (f.cancelled() or f.exception() is not None) for f in futures):
            return EditorState.ERROR
        if not all(f.done() for f in futures):
            return EditorState.LOADING
        if not self._contributors.result():
            return EditorState.EMPTY
        self._ready = True
        return EditorState.READY

    # ── Entités / options ─────────────────────────────────────────────────

    @property
    def contributors(self) -> List[ContributorRecord]:
        return _result_or_empty(self._contributors)

    @property
    def tags(self) -> List[TagRecord]:
        return _result_or_empty(self._tags)

    @property
    def contributor_options(self) -> List[SelectOption]:
        return [show_all()] + [SelectOption(id=c.id, label=c.title) for c in self.contributors]

    @property
    def tag_options(self) -> List[SelectOption]:
        return [show_all()] + [SelectOption(id=t.id, label=t.name) for t in self.tags]

    # ── Mutations ─────────────────────────────────────────────────────────

    def set_attributes(self, **changes: Any) -> ContributorsAttributes:
        """Fusion superficielle (clés snake_case ou camelCase), revalidée ; l'aperçu est invalidé."""
        data = self.attributes.model_dump()
        for key, value in changes.items():
            name = _FIELD_BY_ALIAS.get(key, key)
            if name not in ContributorsAttributes.model_fields:
                raise ValueError(f"Attribut inconnu : {key!r}")
            data[name] = value
        self.attributes = ContributorsAttributes.model_validate(data)
        self._preview = None
        return self.attributes

    def toggle_select_by_contributor(self) -> ContributorsAttributes:
        # les deux listes sont conservées : rebasculer restaure la sélection précédente
        return self.set_attributes(select_by_contributor=not self.attributes.select_by_contributor)

    def select_contributors(self, options: Iterable[Union[SelectOption, dict]]) -> ContributorsAttributes:
        return self.set_attributes(selected_contributors=list(options))

    def select_tags(self, options: Iterable[Union[SelectOption, dict]]) -> ContributorsAttributes:
        return self.set_attributes(selected_tags=list(options))

    def set_orderby(self, orderby: str) -> ContributorsAttributes:
        if orderby not in {value for value, _ in ORDERBY_CHOICES}:
            raise ValueError(f"orderby hors contrôle : {orderby!r}")
        return self.set_attributes(orderby=orderby)

    # ── Aperçu ────────────────────────────────────────────────────────────

    def preview_async(self) -> Future:
        """Rendu serveur des attributs courants ; réutilisé tant qu'ils ne changent pas."""
        if self._preview is None:
            self._preview = self._pool().submit(
                self.source.render_block, BLOCK_NAME, self.attributes.model_dump(by_alias=True),
            )
        return self._preview

    def preview(self) -> str:
        return self.preview_async().result()

    def render(self, lang: str = "en", with_preview: bool = True) -> str:
        from .panel import render_panel
        return render_panel(self, lang=lang, with_preview=with_preview)


def _result_or_empty(future: Optional[Future]) -> list:
    if future is None or not future.done() or future.cancelled() or future.exception() is not None:
        return []
    return future.result()


def _log_failure(what: str):
    def callback(future: Future):
        if future.cancelled():
            log.warning("Chargement %s annulé", what)
        elif future.exception() is not None:
            log.warning("Chargement %s échoué : %s", what, future.exception())
    return callback
