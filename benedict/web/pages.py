from __future__ import annotations
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

from benedict.config import settings
from benedict.web.dependencies import get_dictation, get_lookup_state, get_mdx_service, get_recognizer, get_renderer

templates = Jinja2Templates(directory=settings.TEMPLATE_DIR)


def render_main(request: Request, status_code: int = 200, **extra: Any):
    """Render the main page from the current lookup state.

    The detail pane shows, in order of precedence: settings, the presented
    definition, or a placeholder.
    """
    lookup = get_lookup_state(request)
    state = lookup.snapshot()

    definition = None
    if not state.show_settings and state.presented_term:
        definition = get_renderer(request).render(state.presented_term)

    not_found_url = None
    if state.no_definition_term:
        not_found_url = lookup.web_search_url(state.no_definition_term)

    context = {
        "app_name": settings.APP_NAME,
        "app_version": settings.APP_VERSION,
        "state": state,
        "definition": definition,
        "not_found_url": not_found_url,
        "dicts": get_mdx_service(request).list_dicts() if state.show_settings else [],
        "dictating": get_dictation(request).listening,
        "voice_available": get_recognizer(request).is_available(),
        "error": None,
    }
    context.update(extra)
    return templates.TemplateResponse(request, "index.html", context, status_code=status_code)
