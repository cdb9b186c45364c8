"""
Configuration — variables d'environnement + BlockConfig explicite.

BlockConfig remplace l'objet global injecté par l'hôte (URL REST, langue) :
il est construit une fois puis passé aux renderers et aux clients.
"""
import os
from pathlib import Path

from pydantic import BaseModel

DATA_DIR = Path(__file__).parent.parent / "data"


class BlockConfig(BaseModel):
    """URL REST (rendu legacy, client REST) + langue des libellés."""
    rest_url: str = "/wp-json/"
    lang: str = "en"

    def rest_base(self) -> str:
        """URL REST garantie avec un slash final."""
        return self.rest_url if self.rest_url.endswith("/") else self.rest_url + "/"


class Settings:
    DB_PATH         = os.getenv("DB_PATH", str(DATA_DIR / "contributors.db"))
    REST_URL        = os.getenv("WCW_REST_URL", "/wp-json/")
    LANG            = os.getenv("WCW_LANG", "en")
    LOG_LEVEL       = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def load_config() -> BlockConfig:
    """BlockConfig depuis l'environnement (relu à chaque appel)."""
    return BlockConfig(
        rest_url=os.getenv("WCW_REST_URL", settings.REST_URL),
        lang=os.getenv("WCW_LANG", settings.LANG),
    )
