from __future__ import annotations
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from benedict.web.pages import render_main

router = APIRouter()

@router.get("/", response_class=HTMLResponse)
def home(request: Request):
    return render_main(request)
