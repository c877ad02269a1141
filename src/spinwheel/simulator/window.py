"""
Desktop host window using pygame.

Drives the wheel from the pygame frame clock and shows the rendered
raster. This is a development harness around the embedded core, not
part of it.
"""

import asyncio
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pygame

from spinwheel.audio.engine import AudioEngine, attach_audio
from spinwheel.core.events import Event, EventType
from spinwheel.core.wheel import DrawRequest, WheelApp
from spinwheel.graphics.renderer import WheelRenderer
from spinwheel.storage.store import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass
class WindowConfig:
    """Host window configuration."""
    size: int = 600
    title: str = "Spin Wheel"
    fps: int = 60
    state_key: str = "wheel_state"
    themes_path: Optional[Path] = None  # package themes when None


class SimulatorWindow:
    """
    Window around a ``WheelApp``.

    Keyboard Mapping:
        SPACE / ENTER: Spin
        R: Reset (clear result, stop spin)
        S: Toggle shuffle (interleaved splits)
        L: Toggle light mode
        A: Add an item
        D: Delete the last item
        M: Mute / unmute
        ESC / Q: Save and exit
    """

    def __init__(
        self,
        app: WheelApp,
        store: KeyValueStore,
        config: WindowConfig | None = None,
        audio: AudioEngine | None = None,
    ) -> None:
        self.config = config or WindowConfig()
        self.app = app
        self.store = store
        self.audio = audio
        self.renderer = WheelRenderer(size=self.config.size, themes_path=self.config.themes_path)

        self._screen: Optional[pygame.Surface] = None
        self._clock: Optional[pygame.time.Clock] = None
        self._running = False
        self._frame: Optional[DrawRequest] = None
        self._detach_audio = None

        self.app.event_bus.subscribe(EventType.DRAW, self._on_draw)
        self.app.event_bus.subscribe(EventType.WIN, self._on_win)

    def _on_draw(self, event: Event) -> None:
        self._frame = event.data.get("request")

    def _on_win(self, event: Event) -> None:
        logger.info(f"Result: {event.data.get('name')}")
        self.save()

    def _init_pygame(self) -> None:
        pygame.init()
        pygame.display.set_caption(self.config.title)
        self._screen = pygame.display.set_mode((self.config.size, self.config.size))
        self._clock = pygame.time.Clock()

        if self.audio is not None:
            self.audio.init()
            self._detach_audio = attach_audio(self.app.event_bus, self.audio)

    def load(self) -> None:
        """Restore the saved wheel, or start with the default items."""
        self.app.load_record(self.store.load(self.config.state_key))

    def save(self) -> None:
        self.store.save(self.config.state_key, json.dumps(self.app.serialize(), ensure_ascii=False, indent=2))

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.stop()
            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        key = event.key

        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.stop()
        elif key in (pygame.K_SPACE, pygame.K_RETURN):
            self.app.request_spin()
        elif key == pygame.K_r:
            self.app.reset()
        elif key == pygame.K_s:
            self.app.set_shuffled(not self.app.options.is_shuffled)
            self.save()
        elif key == pygame.K_l:
            self.app.set_light_mode(not self.app.options.is_light_mode)
            self.save()
        elif key == pygame.K_a:
            self.app.add_item()
            self.save()
        elif key == pygame.K_d:
            items = self.app.items.snapshot()
            if items:
                self.app.delete_item(items[-1].id)
                self.save()
        elif key == pygame.K_m and self.audio is not None:
            self.audio.toggle_mute()

    def _render(self) -> None:
        if self._screen is None:
            return
        request = self._frame or self.app.draw_request()
        buffer = self.renderer.render(request)
        # surfarray expects (width, height, 3)
        surface = pygame.surfarray.make_surface(buffer.swapaxes(0, 1))
        self._screen.blit(surface, (0, 0))
        pygame.display.flip()

    async def run(self) -> None:
        """Main loop: one ``advance`` per frame."""
        self._init_pygame()
        self._running = True

        logger.info("Host window started")

        while self._running:
            self._handle_events()

            if self._clock:
                self.app.advance(self._clock.get_time())

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        self.save()
        if self._detach_audio is not None:
            self._detach_audio()
        if self.audio is not None:
            self.audio.cleanup()
        self.app.close()
        pygame.quit()
        logger.info("Host window closed")

    def stop(self) -> None:
        """Stop the window loop."""
        self._running = False
