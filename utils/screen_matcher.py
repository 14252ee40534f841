"""
Screen matcher - one-shot and polling template searches against the live screen.

This is the matching primitive the adaptive locator is built on:

- probe(template, similarity): capture once, match once, never waits
- poll_wait(template, similarity, max_wait): probe repeatedly until a match
  appears or max_wait elapses

Both return a Match or None. probe() lets capture/matching errors propagate;
poll_wait() counts a failed probe as a miss and keeps polling until max_wait.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from utils.debug_screenshot import save_debug_screenshot
from utils.template_matcher import TemplatePath, best_match

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Match:
    """A template found on screen."""

    x: int
    y: int
    width: int
    height: int
    score: float         # Achieved similarity
    similarity: float    # Ladder level the match was accepted at
    frame_size: Optional[Tuple[int, int]] = None  # (width, height) of the capture

    @property
    def center(self) -> Tuple[int, int]:
        return self.x + self.width // 2, self.y + self.height // 2

    @property
    def region(self) -> Tuple[int, int, int, int]:
        return self.x, self.y, self.width, self.height


class ScreenMatcher:
    """
    Template matcher bound to a screen capture source.

    Args:
        capture: Object with get_screenshot_cv2() -> BGR np.ndarray
        poll_interval: Seconds between captures in poll_wait
        search_region: Optional (x, y, w, h) to limit every search
        clock: Monotonic clock (seconds)
        sleep: Blocking sleep used between polls
    """

    def __init__(
        self,
        capture,
        poll_interval: float = 0.3,
        search_region: Optional[Tuple[int, int, int, int]] = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.capture = capture
        self.poll_interval = poll_interval
        self.search_region = search_region
        self._clock = clock
        self._sleep = sleep

    def probe(self, template: TemplatePath, similarity: float) -> Optional[Match]:
        """Single capture + match. Returns Match if the best score reaches similarity."""
        frame = self.capture.get_screenshot_cv2()
        return self.match_frame(frame, template, similarity)

    def match_frame(self, frame: np.ndarray, template: TemplatePath, similarity: float) -> Optional[Match]:
        """Match against an already captured frame."""
        hit = best_match(frame, template, self.search_region)
        if hit is None:
            return None

        logger.debug(f"{template}: best score {hit.score:.3f} (need {similarity:.2f})")
        if hit.score < similarity:
            return None

        x, y = hit.top_left
        w, h = hit.size
        return Match(
            x=x,
            y=y,
            width=w,
            height=h,
            score=hit.score,
            similarity=similarity,
            frame_size=(frame.shape[1], frame.shape[0]),
        )

    def poll_wait(self, template: TemplatePath, similarity: float, max_wait: float) -> Optional[Match]:
        """
        Probe until a match appears or max_wait seconds elapse.

        Always probes at least once, even when max_wait is zero. A probe that
        raises counts as no match at that attempt.
        """
        deadline = self._clock() + max(0.0, max_wait)
        while True:
            try:
                match = self.probe(template, similarity)
            except Exception as e:
                logger.debug(f"Probe for {template} at similarity {similarity} failed: {e}")
                match = None
            if match is not None:
                return match

            remaining = deadline - self._clock()
            if remaining <= 0:
                return None
            self._sleep(min(self.poll_interval, remaining))

    def save_debug_frame(self, flow_name: str, label: str, base_dir=None) -> str:
        """Capture the current screen and store it as a debug screenshot."""
        frame = self.capture.get_screenshot_cv2()
        return save_debug_screenshot(frame, flow_name, label, base_dir=base_dir)
