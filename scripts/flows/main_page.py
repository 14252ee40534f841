"""
Main page - named UI actions of the launcher's main window.

Each action is a template from config.ACTIONS clicked through the adaptive
locator. The page holds the locator; it does not inherit matching behavior.

Usage:
    page = MainPage(locator, cfg.actions)
    page.click_games_tab()
    page.perform("wow_tab")
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from utils.adaptive_locator import AdaptiveLocator
    from utils.automation_config import ActionSpec

logger = logging.getLogger(__name__)


class MainPage:
    """Actions on the primary application window."""

    def __init__(self, locator: AdaptiveLocator, actions: Mapping[str, ActionSpec]) -> None:
        self.locator = locator
        self.actions = actions

    def perform(self, name: str) -> bool:
        """
        Click the template registered for a named action.

        Returns:
            True if the template was found and clicked, False otherwise

        Raises:
            KeyError: Unknown action name
        """
        spec = self.actions[name]
        logger.info(f"Executing action: {spec.description or name}")
        return self.locator.click_on_sight(spec.template, spec.timeout)

    def is_visible(self, name: str) -> bool:
        """Quick check (no waiting) whether an action's template is on screen."""
        return self.locator.exists(self.actions[name].template)

    def click_games_tab(self) -> bool:
        return self.perform('games_tab')

    def open_vanguard_page(self) -> bool:
        """Click the Vanguard thumbnail to open the Vanguard game page."""
        return self.perform('vanguard_page')

    def open_wow_tab(self) -> bool:
        return self.perform('wow_tab')

    def open_configuration_gear(self) -> bool:
        """Click the settings gear icon."""
        return self.perform('configuration_gear')
