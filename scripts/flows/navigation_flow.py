"""
Navigation Flow - Games Tab -> Vanguard Page -> WoW Tab -> Configuration.

Runs named page actions in order with a settle delay between them and stops
at the first step that fails. The delay goes through a Pacer, so a
cancellation aborts the rest of the sequence (WaitCancelled propagates).

Args:
    page: MainPage
    pacer: Pacer for the settle delay
    action_delay: Seconds between steps (default 0.5)
    steps: Action names to run (default: NAVIGATION_SEQUENCE from config)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from utils.automation_config import load_config
from utils.pacing import Pacer

logger = logging.getLogger(__name__)


@dataclass
class NavigationResult:
    completed: List[str] = field(default_factory=list)
    failed_step: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.failed_step is None

    def __bool__(self) -> bool:
        return self.success


def run_steps(
    page,
    steps: Sequence[str],
    pacer: Optional[Pacer] = None,
    action_delay: float = 0.5,
) -> NavigationResult:
    """Run the steps and report which completed and which (if any) failed."""
    pacer = pacer or Pacer()
    result = NavigationResult()

    for index, name in enumerate(steps, start=1):
        logger.info(f"Step {index}/{len(steps)}: {name}")
        if not page.perform(name):
            logger.error(f"Step {index} failed: {name}")
            result.failed_step = name
            return result
        result.completed.append(name)

        if index < len(steps):  # No settle delay after the last step
            pacer.pause(action_delay)

    logger.info(f"All {len(steps)} UI actions completed successfully in sequence")
    return result


def navigation_flow(
    page,
    pacer: Optional[Pacer] = None,
    action_delay: float = 0.5,
    steps: Optional[Sequence[str]] = None,
) -> bool:
    """
    Execute the full navigation sequence.

    Returns:
        True if every step clicked its target, False at the first failure

    Raises:
        WaitCancelled: The settle delay was cancelled
    """
    if steps is None:
        steps = load_config().navigation_sequence
    logger.info(f"Executing: {' -> '.join(steps)}")
    return run_steps(page, steps, pacer=pacer, action_delay=action_delay).success
