"""The game window, its keyboard state and its input and resize events."""

from __future__ import annotations

from typing import ClassVar, Optional, Set

import pygame

from truerpg.event import Event


class Window:
    """A resizable window that tracks which keys are held down.

    ``on_input`` is called with ``(key, pressed)`` and ``on_resize`` with
    ``(width, height)``. The first window created becomes the current one
    returned by :meth:`instance`.
    """

    _current: ClassVar[Optional[Window]] = None

    def __init__(self, width: int, height: int, title: str) -> None:
        self.on_input = Event()
        self.on_resize = Event()
        self._keys: Set[int] = set()
        self._should_close = False
        self._destroyed = False
        try:
            pygame.display.init()
            self._surface = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        except pygame.error as exc:
            raise RuntimeError("Failed to create window") from exc
        pygame.display.set_caption(title)
        if Window._current is None:
            Window._current = self

    @classmethod
    def instance(cls, width: int = 0, height: int = 0, title: str = "") -> Window:
        """The current window, created with the given settings if there is none."""
        if cls._current is None:
            cls(width, height, title)
        return cls._current

    @property
    def surface(self) -> pygame.Surface:
        current = None if self._destroyed else pygame.display.get_surface()
        return current if current is not None else self._surface

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def is_open(self) -> bool:
        return not self._should_close

    def close(self) -> None:
        """Ask the window to close; the main loop ends on its next check."""
        self._should_close = True

    def destroy(self) -> None:
        """Close the window and shut the display down."""
        self._should_close = True
        if not self._destroyed:
            self._destroyed = True
            pygame.display.quit()
        if Window._current is self:
            Window._current = None

    def swap_buffers(self) -> None:
        """Show what has been drawn since the last swap."""
        pygame.display.flip()

    def poll_events(self) -> None:
        """Process pending window, keyboard and resize events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.close()
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key, True)
            elif event.type == pygame.KEYUP:
                self.handle_key(event.key, False)
            elif event.type == pygame.VIDEORESIZE:
                self.handle_resize(event.w, event.h)

    def key_down(self, key: int) -> bool:
        """Whether ``key`` is currently held."""
        return key in self._keys

    def handle_key(self, key: int, pressed: bool) -> None:
        """Record a key press or release and notify ``on_input``."""
        if key < 0:
            return
        self.on_input(key, pressed)
        if pressed:
            self._keys.add(key)
        else:
            self._keys.discard(key)

    def handle_resize(self, width: int, height: int) -> None:
        """Notify ``on_resize`` of the new framebuffer size."""
        self.on_resize(width, height)