"""
Attributs de base du bloc contributors.
Options de sélection {value, label} + sentinelle « Show All » (id 0).
"""
from typing import Any, List, Type

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SHOW_ALL_ID = 0


class SelectOption(BaseModel):
    """Option d'un multi-select. Persistée sous {value, label}, accepte aussi {id, label}."""
    model_config = ConfigDict(populate_by_name=True)

    id: int = Field(alias="value")
    label: str = ""


def show_all() -> SelectOption:
    return SelectOption(id=SHOW_ALL_ID, label="Show All")


def show_all_list() -> List[SelectOption]:
    return [show_all()]


def own_keys(model: Type[BaseModel], other: Type[BaseModel]) -> frozenset:
    """Clés persistables (snake_case et camelCase) de `model` absentes de `other`."""
    keys = set()
    for name, field in model.model_fields.items():
        if name not in other.model_fields:
            keys.update({name, to_camel(name), field.alias or name})
    return frozenset(keys)


class BlockAttributes(BaseModel):
    """Champs communs au schéma courant et au schéma legacy (clés camelCase persistées)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    select_by_contributor: bool = False
    selected_tags: List[SelectOption] = Field(default_factory=show_all_list)
    selected_contributors: List[SelectOption] = Field(default_factory=show_all_list)

    @field_validator("selected_tags", "selected_contributors", mode="before")
    @classmethod
    def _null_list(cls, v: Any) -> Any:
        # attribut enregistré sans valeur → liste vide
        return [] if v is None else v

    def active_selection(self) -> List[SelectOption]:
        """Liste sémantiquement active selon select_by_contributor."""
        return self.selected_contributors if self.select_by_contributor else self.selected_tags

    def dump(self) -> dict:
        """Attributs persistables : clés camelCase, valeurs par défaut omises."""
        data = self.model_dump(by_alias=True)
        defaults = type(self)().model_dump(by_alias=True)
        return {k: v for k, v in data.items() if defaults.get(k) != v}
