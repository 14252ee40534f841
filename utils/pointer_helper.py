"""
Pointer helpers - mouse clicks on located matches.

Matches come back in capture coordinates. On HiDPI desktops (or when the
capture is rescaled) those differ from the logical coordinates the mouse
uses, so clicks are mapped through the ratio of the two sizes.

pyautogui is imported on first use: importing it needs a display, and
tests and headless tooling import this module without one.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

if TYPE_CHECKING:
    from utils.screen_matcher import Match


class PointerHelper:
    """Clicks through pyautogui, mapping frame coordinates to screen coordinates."""

    def __init__(self, backend=None, move_duration: float = 0.0) -> None:
        """
        Args:
            backend: Object with click(x, y, duration=...) and size(); defaults to pyautogui
            move_duration: Seconds to glide the cursor before clicking
        """
        self._backend = backend
        self.move_duration = move_duration

    @property
    def backend(self):
        if self._backend is None:
            import pyautogui
            self._backend = pyautogui
        return self._backend

    def to_screen(self, point: Tuple[int, int], frame_size: Optional[Tuple[int, int]] = None) -> Tuple[int, int]:
        """Map a point from capture coordinates to pointer coordinates."""
        x, y = point
        if not frame_size:
            return x, y

        screen_w, screen_h = self.backend.size()
        frame_w, frame_h = frame_size
        if (screen_w, screen_h) == (frame_w, frame_h) or not frame_w or not frame_h:
            return x, y
        return round(x * screen_w / frame_w), round(y * screen_h / frame_h)

    def click(self, x: int, y: int) -> None:
        """Click at pointer coordinates."""
        self.backend.click(x, y, duration=self.move_duration)

    def click_match(self, match: Match) -> Tuple[int, int]:
        """
        Click the center of a match.

        Returns:
            The pointer coordinates that were clicked
        """
        x, y = self.to_screen(match.center, match.frame_size)
        self.click(x, y)
        return x, y
