"""Dépendances FastAPI partagées (surchargées en test via dependency_overrides)."""
from ..config import BlockConfig, load_config
from ..database import get_db


def get_config() -> BlockConfig:
    return load_config()


__all__ = ["get_db", "get_config"]
