from __future__ import annotations
from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from benedict.config import settings
from benedict.service.lookup_state import LookupStateManager
from benedict.web.dependencies import get_lookup_state
from benedict.web.pages import templates

router = APIRouter()


def _local_path(url: str) -> str:
    # Only redirect back within this app.
    if url.startswith("/") and not url.startswith("//"):
        return url
    return "/"


@router.post("/favorites/toggle")
async def toggle_favorite(
    term: str = Form(...),
    next: str = Form("/"),
    lookup: LookupStateManager = Depends(get_lookup_state),
):
    lookup.toggle_favorite(term)
    return RedirectResponse(url=_local_path(next), status_code=303)


@router.get("/favorites", response_class=HTMLResponse)
def favorites_page(request: Request, lookup: LookupStateManager = Depends(get_lookup_state)):
    return templates.TemplateResponse(
        request,
        "favorites.html",
        {"app_name": settings.APP_NAME, "favorites": lookup.favorites_sorted()},
    )
