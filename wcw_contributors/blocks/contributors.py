"""
Bloc Contributors — schéma courant + schéma legacy (union discriminée) + migration.

Courant : selectByContributor, orderby, selectedTags, selectedContributors.
Legacy  : listes d'entités en cache et flags *ApiDataFetched. orderby n'y figure
          que si le bloc a été réédité après l'ajout du tri. Lecture/rendu uniquement.
"""
import logging
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import Discriminator, Field, Tag, TypeAdapter
from .base import BlockAttributes, SelectOption, own_keys, show_all_list

log = logging.getLogger(__name__)

ORDERBY_TITLE = "title"
ORDERBY_DATE  = "date"


class ContributorsAttributes(BlockAttributes):
    orderby: str = ORDERBY_TITLE


class LegacyContributorsAttributes(BlockAttributes):
    contributor_api_data_fetched: bool = False
    tag_api_data_fetched: bool = False
    contributors: List[Dict[str, Any]] = Field(default_factory=list)
    tags: List[Dict[str, Any]] = Field(default_factory=list)
    contributor_options: List[SelectOption] = Field(default_factory=show_all_list)
    tag_options: List[SelectOption] = Field(default_factory=show_all_list)
    orderby: Optional[str] = None


LEGACY_KEYS = own_keys(LegacyContributorsAttributes, ContributorsAttributes)


def attributes_shape(value: Any) -> str:
    """'legacy' si le dict porte au moins une clé propre au schéma legacy, sinon 'current'."""
    if isinstance(value, LegacyContributorsAttributes):
        return "legacy"
    if isinstance(value, dict) and LEGACY_KEYS & value.keys():
        return "legacy"
    return "current"


AnyContributorsAttributes = Annotated[
    Union[
        Annotated[ContributorsAttributes, Tag("current")],
        Annotated[LegacyContributorsAttributes, Tag("legacy")],
    ],
    Discriminator(attributes_shape),
]

_ADAPTER = TypeAdapter(AnyContributorsAttributes)


def parse_attributes(raw: Optional[Any]) -> Union[ContributorsAttributes, LegacyContributorsAttributes]:
    """dict persisté (ou modèle déjà construit) → schéma courant ou legacy."""
    return _ADAPTER.validate_python(raw if raw is not None else {})


def migrate_legacy(legacy: LegacyContributorsAttributes) -> ContributorsAttributes:
    """
    Legacy → courant. Les deux listes et le flag sont conservés ; les caches
    d'entités sont abandonnés. Un orderby persisté est repris tel quel, sinon
    l'ordre par défaut de l'hôte (date, plus récent d'abord).
    """
    migrated = ContributorsAttributes(
        select_by_contributor=legacy.select_by_contributor,
        selected_tags=[o.model_copy() for o in legacy.selected_tags],
        selected_contributors=[o.model_copy() for o in legacy.selected_contributors],
        orderby=legacy.orderby or ORDERBY_DATE,
    )
    log.info("Attributs legacy migrés (select_by_contributor=%s, orderby=%s)",
             migrated.select_by_contributor, migrated.orderby)
    return migrated


def ensure_current(attributes: Union[ContributorsAttributes, LegacyContributorsAttributes, dict, None]) -> ContributorsAttributes:
    """Parse si besoin, puis migre le legacy."""
    parsed = parse_attributes(attributes)
    if isinstance(parsed, LegacyContributorsAttributes):
        return migrate_legacy(parsed)
    return parsed
