from __future__ import annotations
from fastapi import APIRouter, Depends, Form, Query
from fastapi.responses import RedirectResponse

from benedict.config import settings
from benedict.service.intake import clean_dropped_text, parse_deep_link
from benedict.service.lookup_state import LookupStateManager
from benedict.web.dependencies import get_lookup_state

router = APIRouter()

# State-changing routes are async so they all run on the event loop thread,
# the single writer of the lookup state.


def _back_home() -> RedirectResponse:
    return RedirectResponse(url="/", status_code=303)


@router.post("/search")
async def search(query: str = Form(""), lookup: LookupStateManager = Depends(get_lookup_state)):
    """Search box submit."""
    lookup.set_search_term(query)
    lookup.perform_search()
    return _back_home()


@router.get("/define")
async def define(term: str = Query(""), lookup: LookupStateManager = Depends(get_lookup_state)):
    """History rows and entry:// cross-references land here."""
    lookup.show_definition(term)
    return _back_home()


@router.post("/paste")
async def paste(text: str = Form(""), lookup: LookupStateManager = Depends(get_lookup_state)):
    """Clipboard paste and drag-and-drop."""
    lookup.show_definition(clean_dropped_text(text))
    return _back_home()


@router.post("/not-found/dismiss")
async def dismiss_not_found(lookup: LookupStateManager = Depends(get_lookup_state)):
    lookup.dismiss_not_found()
    return _back_home()


@router.get("/lookup")
async def lookup_link(term: str = Query(""), lookup: LookupStateManager = Depends(get_lookup_state)):
    """HTTP form of the benedict://lookup?term=... deep link."""
    lookup.show_definition(term)
    return _back_home()


@router.get("/open")
async def open_url(url: str = Query(""), lookup: LookupStateManager = Depends(get_lookup_state)):
    """Hand-off target for registered benedict:// URLs."""
    term = parse_deep_link(url, settings)
    if term is not None:
        lookup.show_definition(term)
    return _back_home()
