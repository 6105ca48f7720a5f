from __future__ import annotations
from fastapi import APIRouter, Depends, Form

from benedict.service.lookup_state import LookupStateManager
from benedict.service.speech_service import BrowserSpeechRecognizer, DictationSession
from benedict.web.dependencies import get_dictation, get_lookup_state, get_recognizer

router = APIRouter(prefix="/dictation")

# The page runs the Web Speech API and reports back here. Responses are JSON
# so the script can keep the search box in sync.


def _status(dictation: DictationSession, lookup: LookupStateManager) -> dict:
    return {"listening": dictation.listening, "search_term": lookup.search_term}


@router.post("/start")
async def start(
    dictation: DictationSession = Depends(get_dictation),
    lookup: LookupStateManager = Depends(get_lookup_state),
):
    dictation.start()
    return _status(dictation, lookup)


@router.post("/result")
async def result(
    text: str = Form(""),
    is_final: bool = Form(False),
    recognizer: BrowserSpeechRecognizer = Depends(get_recognizer),
    dictation: DictationSession = Depends(get_dictation),
    lookup: LookupStateManager = Depends(get_lookup_state),
):
    accepted = recognizer.push_result(text, is_final)
    return {"accepted": accepted, **_status(dictation, lookup)}


@router.post("/error")
async def error(
    message: str = Form(""),
    recognizer: BrowserSpeechRecognizer = Depends(get_recognizer),
    dictation: DictationSession = Depends(get_dictation),
    lookup: LookupStateManager = Depends(get_lookup_state),
):
    """Recognition failed or permission was denied in the browser."""
    recognizer.push_error(message)
    dictation.cancel()
    if message in ("not-allowed", "service-not-allowed"):
        recognizer.set_available(False)
    return _status(dictation, lookup)


@router.post("/cancel")
async def cancel(
    dictation: DictationSession = Depends(get_dictation),
    lookup: LookupStateManager = Depends(get_lookup_state),
):
    dictation.cancel()
    return _status(dictation, lookup)
