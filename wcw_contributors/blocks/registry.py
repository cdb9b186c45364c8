"""
Registry des types de blocs — nom namespacé → BlockType.
Le nom `wcw/block-contributors` route le contenu stocké vers son renderer : il ne change pas.

Chaque BlockType porte ses renderers :
  render(attributes, source, css_class)            → HTML du schéma courant
  render_deprecated(attributes, config, css_class) → HTML d'un schéma déprécié
Le bloc contributors est enregistré par renderer/html.py.
"""
from typing import Any, Callable, Dict, List, Optional, Type

from pydantic import BaseModel, ConfigDict, Field

from .base import BlockAttributes, own_keys

BLOCK_NAME = "wcw/block-contributors"


class BlockType(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    title: str
    description: str = ""
    icon: str = "block-default"
    category: str = "common"
    attributes: Type[BlockAttributes]
    deprecated: List[Type[BlockAttributes]] = Field(default_factory=list)
    render: Callable[..., str]
    render_deprecated: Optional[Callable[..., str]] = None

    @property
    def css_class(self) -> str:
        """Classe générée par l'éditeur : wcw/block-contributors → wp-block-wcw-block-contributors."""
        return "wp-block-" + self.name.replace("/", "-")

    def attributes_schema(self) -> dict:
        return self.attributes.model_json_schema(by_alias=True)

    def is_deprecated(self, attributes: Any) -> bool:
        return isinstance(attributes, tuple(self.deprecated))

    def parse_attributes(self, raw: Any) -> BlockAttributes:
        """
        Attributs persistés → modèle. Un schéma déprécié est retenu dès qu'une
        clé qui lui est propre apparaît, sinon le schéma courant s'applique.
        """
        if isinstance(raw, (self.attributes, *self.deprecated)):
            return raw
        data = raw if raw is not None else {}
        if isinstance(data, dict):
            for model in self.deprecated:
                if own_keys(model, self.attributes) & data.keys():
                    return model.model_validate(data)
        return self.attributes.model_validate(data)


_BLOCK_REGISTRY: Dict[str, BlockType] = {}


def register_block_type(block_type: BlockType, replace: bool = False) -> BlockType:
    if block_type.name in _BLOCK_REGISTRY and not replace:
        raise ValueError(f"Bloc déjà enregistré : {block_type.name!r}")
    if "/" not in block_type.name:
        raise ValueError(f"Nom de bloc sans namespace : {block_type.name!r}")
    _BLOCK_REGISTRY[block_type.name] = block_type
    return block_type


def unregister_block_type(name: str) -> BlockType:
    return _BLOCK_REGISTRY.pop(get_block_type(name).name)


def get_block_type(name: str) -> BlockType:
    block_type = _BLOCK_REGISTRY.get(name)
    if block_type is None:
        raise ValueError(f"Bloc inconnu : {name!r}. Registry : {list(_BLOCK_REGISTRY)}")
    return block_type


def registered_block_types() -> List[BlockType]:
    return list(_BLOCK_REGISTRY.values())
