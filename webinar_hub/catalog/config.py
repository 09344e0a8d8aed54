from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "catalog.json"


@dataclass(frozen=True)
class CatalogConfig:
    """
    Where the webinar catalog and user profiles are read from.
    """

    catalog_path: Path = Path(os.getenv("WEBINAR_CATALOG_PATH", str(_DEFAULT_CATALOG)))


DEFAULT_CATALOG_CONFIG = CatalogConfig()
