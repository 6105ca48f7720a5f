from __future__ import annotations

import logging
from typing import Callable, Optional

from benedict.service.capabilities import SpeechRecognizer
from benedict.service.lookup_state import LookupStateManager

LOG = logging.getLogger("benedict")


class SpeechUnavailableError(Exception):
    pass


class BrowserSpeechRecognizer:
    """Speech recognizer whose engine runs in the browser.

    The page captures audio with the Web Speech API and posts each
    transcript update back; this object hands those updates to whoever
    called ``start``. Updates that arrive while stopped are dropped.
    """

    def __init__(self, available: bool = True):
        self.available = available
        self._on_result: Optional[Callable[[str, bool], None]] = None
        self._on_error: Optional[Callable[[str], None]] = None

    @property
    def listening(self) -> bool:
        return self._on_result is not None

    def is_available(self) -> bool:
        return self.available

    def start(self, on_result: Callable[[str, bool], None], on_error: Callable[[str], None]) -> None:
        if not self.available:
            raise SpeechUnavailableError("Speech recognition is not authorized.")
        self._on_result = on_result
        self._on_error = on_error

    def stop(self) -> None:
        self._on_result = None
        self._on_error = None

    def push_result(self, transcript: str, is_final: bool) -> bool:
        """Deliver a transcript update. Returns False if nobody is listening."""
        if self._on_result is None:
            return False
        self._on_result(transcript, is_final)
        return True

    def push_error(self, message: str) -> bool:
        if self._on_error is None:
            return False
        self._on_error(message)
        return True

    def set_available(self, available: bool) -> None:
        self.available = available
        if not available:
            self.stop()


class DictationSession:
    """Feeds speech transcripts into the search field.

    Transcripts only ever replace ``search_term``; nothing is submitted.
    A final result or an error ends the session. Cancelling keeps whatever
    text was already applied.
    """

    def __init__(self, recognizer: SpeechRecognizer, state: LookupStateManager):
        self.recognizer = recognizer
        self.state = state
        self.listening = False

    def start(self) -> bool:
        if self.listening:
            return True
        if not self.recognizer.is_available():
            LOG.warning("Voice input unavailable: speech recognition not authorized")
            return False
        try:
            self.recognizer.start(self._on_result, self._on_error)
        except SpeechUnavailableError as exc:
            LOG.warning("Voice input unavailable: %s", exc)
            return False
        self.listening = True
        LOG.debug("Dictation started")
        return True

    def cancel(self) -> None:
        if self.listening:
            LOG.debug("Dictation cancelled")
        self._stop()

    def _on_result(self, transcript: str, is_final: bool) -> None:
        self.state.set_search_term(transcript)
        if is_final:
            LOG.debug("Dictation finished: %s", transcript)
            self._stop()

    def _on_error(self, message: str) -> None:
        LOG.warning("Dictation error: %s", message)
        self._stop()

    def _stop(self) -> None:
        self.recognizer.stop()
        self.listening = False
