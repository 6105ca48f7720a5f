from __future__ import annotations
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse

from benedict.service.dict_install_service import DictInstallError, DictInstallService
from benedict.service.lookup_state import LookupStateManager
from benedict.web.dependencies import get_install_service, get_lookup_state
from benedict.web.pages import render_main

router = APIRouter()

@router.get("/settings", response_class=HTMLResponse)
async def settings_page(request: Request, lookup: LookupStateManager = Depends(get_lookup_state)):
    lookup.show_settings_view()
    return render_main(request)

@router.post("/settings/dicts/upload")
async def upload_dict(
    request: Request,
    name: str = Form(...),
    zip_file: UploadFile = File(...),
    installer: DictInstallService = Depends(get_install_service),
):
    data = await zip_file.read()
    try:
        installer.install_from_zip_bytes(name, data)
    except DictInstallError as e:
        return render_main(request, status_code=400, error=str(e))
    return RedirectResponse(url="/settings", status_code=303)

@router.post("/settings/dicts/{dict_id}/delete")
def delete_dict(dict_id: int, installer: DictInstallService = Depends(get_install_service)):
    installer.delete_dictionary(dict_id)
    return RedirectResponse(url="/settings", status_code=303)
