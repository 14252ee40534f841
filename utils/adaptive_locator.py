"""
Adaptive locator - find (and click) a template on screen despite DPI/scale drift.

A template captured at one resolution rarely scores 0.9+ after the window is
rescaled, so the search walks a descending similarity ladder:

    default (e.g. 0.7) -> 0.6 -> 0.5 -> 0.4

Search strategy for locate(template, timeout):
1. Fast probes: one non-blocking probe per level, highest first. Resolves
   "already on screen" in a few captures.
2. Bounded waits: the remaining budget is split evenly across the levels
   (at least MIN_WAIT_SLICE each) and each level polls for its slice, highest
   first. A wrong level can only burn its own slice.

The first level that matches wins; lower levels are never consulted after it.
No new attempt starts once the deadline has passed.

Usage:
    from utils.adaptive_locator import AdaptiveLocator

    locator = AdaptiveLocator(matcher, pointer, config=load_config())
    outcome = locator.locate("assets/1_button.png", timeout=10)
    if outcome:
        print(outcome.location, outcome.similarity)

    locator.click_on_sight("assets/1_button.png", timeout=10)
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Tuple

from utils.automation_config import AutomationConfig
from utils.pacing import Pacer, WaitCancelled
from utils.screen_matcher import Match
from utils.template_matcher import TemplatePath, template_exists

logger = logging.getLogger(__name__)


class SearchStatus(Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    RESOURCE_MISSING = "resource_missing"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a search. Truthy only when the template was found."""

    status: SearchStatus
    template: str
    match: Optional[Match] = None
    levels_tried: Tuple[float, ...] = ()
    elapsed: float = 0.0

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND

    @property
    def similarity(self) -> Optional[float]:
        return self.match.similarity if self.match else None

    @property
    def location(self) -> Optional[Tuple[int, int]]:
        return self.match.center if self.match else None

    def __bool__(self) -> bool:
        return self.found


class AdaptiveLocator:
    """
    Multi-threshold, deadline-bounded template search on top of a matching primitive.

    Args:
        matcher: Object with probe(template, similarity) and
                 poll_wait(template, similarity, max_wait), both returning Match | None
        pointer: Object with click_match(match); only needed for click_on_sight
        config: AutomationConfig (ladder, slices, retry settings)
        pacer: Pacer used for pauses between retry cycles
        clock: Monotonic clock (seconds)
    """

    def __init__(
        self,
        matcher,
        pointer=None,
        config: Optional[AutomationConfig] = None,
        pacer: Optional[Pacer] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.matcher = matcher
        self.pointer = pointer
        self.config = config or AutomationConfig()
        self.pacer = pacer or Pacer()
        self._clock = clock
        self._similarity = self.config.fallback_similarity
        self.set_similarity(self.config.default_similarity)

    # ------------------------------------------------------------------
    # Similarity
    # ------------------------------------------------------------------

    def set_similarity(self, similarity: float) -> None:
        """
        Set the default (first) level of the ladder.

        Out-of-range values reset the default to the fallback (0.8) instead of raising.
        """
        try:
            value = float(similarity)
        except (TypeError, ValueError):
            value = math.nan

        if math.isnan(value) or value < 0.0 or value > 1.0:
            fallback = self.config.fallback_similarity
            logger.warning(f"Similarity value {similarity} is out of range [0.0, 1.0], using default {fallback}")
            self._similarity = fallback
        else:
            self._similarity = value
            logger.info(f"Similarity threshold set to: {value}")

    def get_similarity(self) -> float:
        return self._similarity

    similarity = property(get_similarity, set_similarity)

    def similarity_ladder(self) -> Tuple[float, ...]:
        """Default level followed by every fallback level strictly below it."""
        lower = [level for level in self.config.similarity_ladder if level < self._similarity]
        return (self._similarity, *sorted(set(lower), reverse=True))

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def _attempt(self, search, template: TemplatePath, level: float, *args) -> Optional[Match]:
        """Run one primitive call; any error counts as no match at this attempt."""
        try:
            return search(template, level, *args)
        except Exception as e:
            logger.debug(f"Match attempt at similarity {level} failed: {e}")
            return None

    def _missing(self, template: TemplatePath) -> SearchOutcome:
        logger.error(f"Image file does not exist or is not a readable image: {template}")
        return SearchOutcome(SearchStatus.RESOURCE_MISSING, str(template))

    def locate(self, template: TemplatePath, timeout: float) -> SearchOutcome:
        """
        Wait for a template to appear, trying every similarity level.

        Args:
            template: Path of the template image
            timeout: Seconds before the search gives up (must be > 0)

        Returns:
            SearchOutcome: FOUND with the match, NOT_FOUND, or RESOURCE_MISSING
        """
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        logger.info(f"Waiting for image with adaptive similarity: {template}")
        if not template_exists(template):
            return self._missing(template)

        start = self._clock()
        deadline = start + timeout
        ladder = self.similarity_ladder()
        tried = []

        def outcome(status: SearchStatus, match: Optional[Match] = None) -> SearchOutcome:
            return SearchOutcome(status, str(template), match, tuple(tried), self._clock() - start)

        # Phase 1: quick probes (non-blocking)
        logger.debug("Performing quick probe checks with all similarity levels")
        for level in ladder:
            tried.append(level)
            match = self._attempt(self.matcher.probe, template, level)
            if match is not None:
                logger.info(f"Image found immediately at location: {match.center} with similarity: {level}")
                return outcome(SearchStatus.FOUND, match)

            if self._clock() >= deadline:
                logger.warning("Timeout exceeded during quick probe checks")
                return self._not_found(template, outcome(SearchStatus.NOT_FOUND))

        # Phase 2: bounded waits, remaining budget split evenly across levels
        remaining = deadline - self._clock()
        time_per_level = max(self.config.min_wait_slice, remaining / len(ladder))
        logger.debug(f"Quick probes failed, waiting up to {time_per_level:.2f}s per level ({remaining:.2f}s left)")

        for level in ladder:
            now = self._clock()
            if now >= deadline:
                logger.warning("Timeout exceeded")
                return self._not_found(template, outcome(SearchStatus.NOT_FOUND))

            wait = min(time_per_level, deadline - now)
            logger.debug(f"Trying poll_wait() with similarity: {level} (timeout: {wait:.2f}s)")
            tried.append(level)
            match = self._attempt(self.matcher.poll_wait, template, level, wait)
            if match is not None:
                logger.info(f"Image found at location: {match.center} with similarity: {level}")
                return outcome(SearchStatus.FOUND, match)

        return self._not_found(template, outcome(SearchStatus.NOT_FOUND))

    def _not_found(self, template: TemplatePath, result: SearchOutcome) -> SearchOutcome:
        levels = ", ".join(f"{level:g}" for level in dict.fromkeys(result.levels_tried))
        logger.warning(
            f"Image not found within {result.elapsed:.1f}s: {template} "
            f"({len(result.levels_tried)} attempts, levels {levels})"
        )
        if self.config.save_debug_screenshots and hasattr(self.matcher, 'save_debug_frame'):
            try:
                path = self.matcher.save_debug_frame("locator", f"NOTFOUND_{Path(template).stem}",
                                                     base_dir=self.config.debug_dir)
                logger.info(f"Saved debug screenshot: {path}")
            except Exception as e:
                logger.warning(f"Could not save debug screenshot: {e}")
        return result

    def find(self, template: TemplatePath) -> SearchOutcome:
        """Quick probes only: one attempt per level, no waiting."""
        logger.info(f"Searching for image: {template}")
        if not template_exists(template):
            return self._missing(template)

        start = self._clock()
        tried = []
        for level in self.similarity_ladder():
            tried.append(level)
            match = self._attempt(self.matcher.probe, template, level)
            if match is not None:
                logger.info(f"Image found at location: {match.center} with similarity: {level}")
                return SearchOutcome(SearchStatus.FOUND, str(template), match, tuple(tried),
                                     self._clock() - start)

        logger.debug(f"Image not found with any similarity threshold: {template}")
        return SearchOutcome(SearchStatus.NOT_FOUND, str(template), None, tuple(tried), self._clock() - start)

    def exists(self, template: TemplatePath) -> bool:
        """True if the template is on screen right now at any ladder level."""
        return self.find(template).found

    # ------------------------------------------------------------------
    # Wrappers
    # ------------------------------------------------------------------

    def click_on_sight(self, template: TemplatePath, timeout: float) -> bool:
        """
        Locate a template and click its center.

        Returns:
            True if the click went through. False if the template was not found
            or the click itself failed (both logged, neither raised).
        """
        logger.info(f"Attempting to click image with adaptive similarity: {template}")
        outcome = self.locate(template, timeout)
        if not outcome:
            logger.warning(f"Cannot click image - {outcome.status.value}: {template}")
            return False

        if self.pointer is None:
            logger.error(f"No pointer configured, cannot click image at {outcome.location}")
            return False

        try:
            clicked = self.pointer.click_match(outcome.match)
        except Exception as e:
            logger.error(f"Failed to click image at location {outcome.location}: {e}")
            return False

        logger.info(f"Successfully clicked image at location: {clicked}")
        return True

    def locate_with_retry(
        self,
        template: TemplatePath,
        timeout: float,
        max_retries: Optional[int] = None,
    ) -> SearchOutcome:
        """
        Run full locate() cycles until one succeeds or the retry budget runs out.

        Each cycle gets its own deadline of `timeout`; cycles are separated by
        config.retry_pause. A cancelled pause stops retrying and returns CANCELLED.
        """
        if max_retries is None:
            max_retries = self.config.retry_count
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")

        logger.info(f"Waiting for image with retry logic: {template} (max retries: {max_retries})")

        outcome = None
        for attempt in range(1, max_retries + 1):
            logger.debug(f"Attempt {attempt}/{max_retries} to find image")
            outcome = self.locate(template, timeout)
            if outcome.found:
                logger.info(f"Image found on attempt {attempt}")
                return outcome
            if outcome.status is SearchStatus.RESOURCE_MISSING:
                return outcome

            if attempt < max_retries:
                try:
                    self.pacer.pause(self.config.retry_pause)
                except WaitCancelled as e:
                    logger.warning(f"Retry interrupted after attempt {attempt}: {e}")
                    return SearchOutcome(SearchStatus.CANCELLED, str(template), None, outcome.levels_tried,
                                         outcome.elapsed)

        logger.warning(f"Image not found after {max_retries} retry attempts")
        return outcome
