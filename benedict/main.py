from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from benedict.config import settings
from benedict.data.dict_repo import DictRepo
from benedict.data.kv_store import SqliteListStore
from benedict.db.database import init_db
from benedict.service.capabilities import DefinitionRenderer, DictionaryChecker, ListStore
from benedict.service.dict_install_service import DictInstallService
from benedict.service.lookup_state import LookupStateManager
from benedict.service.mdx_service import MdxService
from benedict.service.speech_service import BrowserSpeechRecognizer, DictationSession
from benedict.web.routers import dict_assets, dictation, dictionary, favorites, history, home, settings_view

LOG = logging.getLogger("benedict")


def create_app(
    dictionary_checker: Optional[DictionaryChecker] = None,
    renderer: Optional[DefinitionRenderer] = None,
    store: Optional[ListStore] = None,
    recognizer: Optional[BrowserSpeechRecognizer] = None,
    db_path: Optional[Path] = None,
    dict_root: Optional[Path] = None,
) -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)

    @app.on_event("startup")
    def on_startup() -> None:
        init_db(db_path, dict_root)

        dict_repo = DictRepo(db_path)
        mdx = MdxService(dict_repo, dict_root)
        app.state.mdx = mdx
        if dictionary_checker is None:
            # Building the maps is slow for large dictionaries; do it before
            # the first lookup lands on the event loop.
            LOG.info("Loaded %d dictionaries", mdx.warm())
        app.state.renderer = renderer or mdx
        app.state.installer = DictInstallService(dict_repo, dict_root)
        app.state.lookup = LookupStateManager(
            dictionary_checker or mdx,
            store or SqliteListStore(db_path),
        )
        app.state.recognizer = recognizer or BrowserSpeechRecognizer()
        app.state.dictation = DictationSession(app.state.recognizer, app.state.lookup)

    app.mount("/static", StaticFiles(directory=settings.STATIC_DIR), name="static")

    app.include_router(home.router)
    app.include_router(dictionary.router)
    app.include_router(favorites.router)
    app.include_router(history.router)
    app.include_router(settings_view.router)
    app.include_router(dictation.router)
    app.include_router(dict_assets.router)
    return app


app = create_app()
