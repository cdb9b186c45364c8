"""
Protocol ContributorSource — interface de requête hôte consommée par le renderer.
"""
from typing import List, Protocol, runtime_checkable

from ..models import ContributorRecord
from ..query import ContributorQuery


@runtime_checkable
class ContributorSource(Protocol):
    def get_posts(self, query: ContributorQuery) -> List[ContributorRecord]: ...
