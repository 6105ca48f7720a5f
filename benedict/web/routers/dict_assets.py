from __future__ import annotations
from fastapi import APIRouter, Depends
from fastapi.responses import Response

from benedict.service.mdx_service import DictLookupError, MdxService
from benedict.web.dependencies import get_mdx_service

router = APIRouter()

# Dictionary stylesheets often disable text selection; appended last so it wins.
_CSS_OVERRIDE = b"""
/* BeneDict: keep definition text selectable so it can be copied and looked up. */
.definition, .definition * {
  -webkit-user-select: text !important;
  user-select: text !important;
  -webkit-touch-callout: default !important;
}
"""

@router.get("/dict_asset/{dict_id}/{asset_path:path}")
def get_asset(dict_id: int, asset_path: str, mdx: MdxService = Depends(get_mdx_service)):
    """Serve images, audio and stylesheets referenced from definition HTML."""
    try:
        data, mime = mdx.get_asset_bytes(dict_id, asset_path)
    except DictLookupError as e:
        return Response(content=str(e), media_type="text/plain", status_code=404)

    if asset_path.lower().endswith(".css") or mime.startswith("text/css"):
        if not data.endswith(b"\n"):
            data += b"\n"
        data += _CSS_OVERRIDE
        mime = "text/css"

    return Response(content=data, media_type=mime)
