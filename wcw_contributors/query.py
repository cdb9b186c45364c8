"""
Traduction attributs → requête contributors.

build_query() produit le descripteur consommé par la couche hôte (get_posts),
rest_url() la query string REST que les fonctions save côté client écrivaient
dans data-rest (schéma courant et legacy).
"""
from typing import Iterable, List, Optional, Union

from pydantic import BaseModel, Field

from .blocks.base import SHOW_ALL_ID, SelectOption
from .blocks.contributors import ContributorsAttributes, LegacyContributorsAttributes
from .config import BlockConfig

POST_TYPE     = "contributor"
REST_PER_PAGE = 100

Attributes = Union[ContributorsAttributes, LegacyContributorsAttributes]


class ContributorQuery(BaseModel):
    post_type: str = POST_TYPE
    orderby: Optional[str] = None
    tag_ids: List[int] = Field(default_factory=list)
    include: List[int] = Field(default_factory=list)
    numberposts: int = -1

    @property
    def order(self) -> str:
        return "ASC" if self.orderby == "title" else "DESC"

    def to_rest_params(self) -> dict:
        params = {"per_page": REST_PER_PAGE}
        if self.orderby:
            params["orderby"] = self.orderby
        if self.include:
            params["include"] = ",".join(str(i) for i in self.include)
        if self.tag_ids:
            params["tags"] = ",".join(str(i) for i in self.tag_ids)
        return params


def filter_ids(options: Optional[Iterable[SelectOption]]) -> List[int]:
    """Ids sélectionnés, sentinelle 0 retirée, ordre conservé, sans doublon."""
    ids: List[int] = []
    for opt in options or []:
        if opt.id != SHOW_ALL_ID and opt.id not in ids:
            ids.append(opt.id)
    return ids


def build_query(attributes: Attributes) -> ContributorQuery:
    """
    selectByContributor → filtre par ids explicites, sinon par tags.
    Liste vide (ou sentinelle seule) → aucun filtre. orderby transmis tel quel.
    """
    query = ContributorQuery(orderby=attributes.orderby)
    ids = filter_ids(attributes.active_selection())
    if attributes.select_by_contributor:
        query.include = ids
    else:
        query.tag_ids = ids
    return query


def rest_url(attributes: Attributes, config: BlockConfig) -> str:
    """Endpoint REST équivalent, au format des anciennes fonctions save."""
    params = build_query(attributes).to_rest_params()
    if isinstance(attributes, LegacyContributorsAttributes):
        # legacy : pas de per_page, filtre éventuel en premier, orderby seulement s'il a été persisté
        params.pop("per_page")
        orderby = params.pop("orderby", None)
        if orderby:
            params["orderby"] = orderby
    query_string = "&".join(f"{key}={value}" for key, value in params.items())
    url = f"{config.rest_base()}wp/v2/{POST_TYPE}"
    return f"{url}?{query_string}" if query_string else url
