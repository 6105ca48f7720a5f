from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse

from benedict.service.lookup_state import LookupStateManager
from benedict.web.dependencies import get_lookup_state

router = APIRouter()

@router.post("/history/clear")
async def clear_history(lookup: LookupStateManager = Depends(get_lookup_state)):
    lookup.clear_history()
    return RedirectResponse(url="/", status_code=303)
