"""
Wiring for the live desktop: capture -> matcher -> locator (+ pointer).

adaptive_locator itself never imports Pillow or pyautogui.
"""
from __future__ import annotations

from typing import Optional

from utils.adaptive_locator import AdaptiveLocator
from utils.automation_config import AutomationConfig
from utils.pacing import Pacer
from utils.pointer_helper import PointerHelper
from utils.screen_capture import ScreenCaptureHelper
from utils.screen_matcher import ScreenMatcher


def create_screen_locator(config: AutomationConfig, pacer: Optional[Pacer] = None) -> AdaptiveLocator:
    """Build a locator that searches the real screen and clicks with the real mouse."""
    capture = ScreenCaptureHelper(
        target_size=config.screen_size if config.scale_to_screen else None,
        all_screens=config.capture_all_screens,
    )
    matcher = ScreenMatcher(capture, poll_interval=config.poll_interval)
    return AdaptiveLocator(matcher, PointerHelper(), config=config, pacer=pacer)
