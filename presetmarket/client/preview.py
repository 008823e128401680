"""
Audio preview player for catalog cards.

One ``PreviewPlayer`` per card. It owns at most one audio resource at a
time and moves between three states:

    IDLE --play(a)--> PLAYING(a) --toggle(a)--> PAUSED(a) --toggle(a)--> PLAYING(a)
    PLAYING(a)/PAUSED(a) --play(b)--> teardown a --> IDLE --> PLAYING(b)
    any --completed/errored/close--> IDLE

Resuming a paused preview reuses its resource. Every way back to IDLE
goes through ``_release()``, which stops the resource, detaches its
listeners and releases it.

Decoding and output are left to an ``AudioBackend``. ``NullAudioBackend``
plays nothing and is used when no real backend is configured.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from typing_extensions import Protocol

from .errors import AudioError
from .notify import Toaster

logger = logging.getLogger(__name__)

NO_PREVIEW_MESSAGE = "No preview available for this preset"
LOAD_FAILED_MESSAGE = "Failed to load audio"
PLAY_FAILED_MESSAGE = "Failed to play audio"


class AudioResource(Protocol):
    def play(self) -> None: ...

    def pause(self) -> None: ...

    def stop(self) -> None: ...

    def on(self, event: str, callback: Callable[[], None]) -> None: ...

    def off(self, event: str) -> None: ...

    def release(self) -> None: ...


class AudioBackend(Protocol):
    def open(self, url: str) -> AudioResource: ...


class NullAudioResource:
    """Silent resource that records what was asked of it."""

    def __init__(self, url: str):
        self.url = url
        self.playing = False
        self.released = False
        self.listeners: Dict[str, Callable[[], None]] = {}

    def play(self) -> None:
        if self.released:
            raise AudioError("resource already released")
        self.playing = True

    def pause(self) -> None:
        self.playing = False

    def stop(self) -> None:
        self.playing = False

    def on(self, event: str, callback: Callable[[], None]) -> None:
        self.listeners[event] = callback

    def off(self, event: str) -> None:
        self.listeners.pop(event, None)

    def release(self) -> None:
        self.released = True

    def emit(self, event: str) -> None:
        """Fire a listener, as the platform would on ``ended`` or ``error``."""
        callback = self.listeners.get(event)
        if callback is not None:
            callback()


class NullAudioBackend:
    def __init__(self):
        self.opened: List[NullAudioResource] = []

    def open(self, url: str) -> NullAudioResource:
        resource = NullAudioResource(url)
        self.opened.append(resource)
        return resource

    @property
    def live(self) -> List[NullAudioResource]:
        return [r for r in self.opened if not r.released]


class PlaybackStatus(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


class PreviewPlayer:
    def __init__(self, toaster: Toaster, backend: Optional[AudioBackend] = None):
        self.toaster = toaster
        self.backend = backend if backend is not None else NullAudioBackend()
        self.status = PlaybackStatus.IDLE
        self.active_id: Optional[str] = None
        self.resource: Optional[AudioResource] = None

    def is_playing(self, item_id: Optional[str] = None) -> bool:
        if self.status is not PlaybackStatus.PLAYING:
            return False
        return item_id is None or item_id == self.active_id

    # -- events --------------------------------------------------------------

    def toggle(self, item_id: str, preview_url: Optional[str]) -> None:
        """Play, pause or resume the preview of ``item_id``."""
        if not preview_url:
            self.toaster.info(NO_PREVIEW_MESSAGE)
            return

        if self.active_id is not None and self.active_id != item_id:
            self._release()

        if self.resource is None:
            self._start(item_id, preview_url)
        elif self.status is PlaybackStatus.PLAYING:
            self.resource.pause()
            self.status = PlaybackStatus.PAUSED
        else:
            self._play(PLAY_FAILED_MESSAGE)

    def completed(self) -> None:
        logger.debug("preview %s finished", self.active_id)
        self._release()

    def errored(self) -> None:
        self.toaster.error(LOAD_FAILED_MESSAGE)
        self._release()

    def close(self) -> None:
        self._release()

    # -- internals -----------------------------------------------------------

    def _start(self, item_id: str, preview_url: str) -> None:
        try:
            resource = self.backend.open(preview_url)
        except AudioError as e:
            logger.warning("could not open preview %s: %s", preview_url, e)
            self.toaster.error(LOAD_FAILED_MESSAGE)
            return
        resource.on("ended", self.completed)
        resource.on("error", self.errored)
        self.resource = resource
        self.active_id = item_id
        self._play(PLAY_FAILED_MESSAGE)

    def _play(self, failure_message: str) -> None:
        resource = self.resource
        try:
            resource.play()
        except AudioError as e:
            logger.warning("could not play preview %s: %s", self.active_id, e)
            self.toaster.error(failure_message)
            self._release()
            return
        # A listener fired during play() may already have released it.
        if self.resource is resource:
            self.status = PlaybackStatus.PLAYING

    def _release(self) -> None:
        resource = self.resource
        self.resource = None
        self.active_id = None
        self.status = PlaybackStatus.IDLE
        if resource is None:
            return
        resource.stop()
        resource.off("ended")
        resource.off("error")
        resource.release()
