from __future__ import annotations
import os
from dataclasses import dataclass, field
from pathlib import Path

_PKG_DIR = Path(__file__).resolve().parent


def _env_path(name: str, default: Path) -> Path:
    value = os.environ.get(name)
    return Path(value) if value else default


@dataclass(frozen=True)
class Settings:
    DB_PATH: Path = field(default_factory=lambda: _env_path("BENEDICT_DB_PATH", _PKG_DIR.parent / "benedict.db"))
    DICT_ROOT: Path = field(default_factory=lambda: _env_path("BENEDICT_DICT_ROOT", _PKG_DIR / "dictionaries"))
    TEMPLATE_DIR: Path = _PKG_DIR / "web" / "templates"
    STATIC_DIR: Path = _PKG_DIR / "web" / "static"

    APP_NAME: str = "BeneDict"
    APP_VERSION: str = "1.0.0"
    LOG_LEVEL: str = field(default_factory=lambda: os.environ.get("BENEDICT_LOG_LEVEL", "INFO"))

    # benedict://lookup?term=...
    URL_SCHEME: str = "benedict"
    DEEP_LINK_HOST: str = "lookup"

    # Pasted / dropped text is cut to this many characters before trimming.
    INTAKE_MAX_CHARS: int = 100
    WEB_SEARCH_URL: str = "https://www.google.com/search?q={term}"

    HISTORY_KEY: str = "history"
    FAVORITES_KEY: str = "favorites"

settings = Settings()
