from __future__ import annotations
from fastapi import Request
from benedict.service.capabilities import DefinitionRenderer
from benedict.service.dict_install_service import DictInstallService
from benedict.service.lookup_state import LookupStateManager
from benedict.service.mdx_service import MdxService
from benedict.service.speech_service import BrowserSpeechRecognizer, DictationSession

# Everything below is built once in create_app() and kept on app.state.

def get_lookup_state(request: Request) -> LookupStateManager:
    return request.app.state.lookup

def get_renderer(request: Request) -> DefinitionRenderer:
    return request.app.state.renderer

def get_mdx_service(request: Request) -> MdxService:
    return request.app.state.mdx

def get_install_service(request: Request) -> DictInstallService:
    return request.app.state.installer

def get_dictation(request: Request) -> DictationSession:
    return request.app.state.dictation

def get_recognizer(request: Request) -> BrowserSpeechRecognizer:
    return request.app.state.recognizer
