"""
Frozen configuration value object built from config.py.

config.py stays the place where users edit values (and config_local.py the
place they override them). Everything downstream receives an AutomationConfig
built once at startup instead of importing config constants directly.

Usage:
    from utils.automation_config import load_config

    cfg = load_config()
    locator = AdaptiveLocator(matcher, pointer, config=cfg)
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from types import ModuleType
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ActionSpec:
    """One named UI action: which template to click and how long to look for it."""

    name: str
    template: Path
    timeout: float
    description: str = ""


@dataclass(frozen=True)
class AutomationConfig:
    images_dir: Path = Path("assets")
    debug_dir: Path = Path("templates") / "debug"
    timeout: float = 10.0
    retry_count: int = 3
    retry_pause: float = 0.5
    min_wait_slice: float = 1.0
    poll_interval: float = 0.3
    default_similarity: float = 0.7
    fallback_similarity: float = 0.8
    similarity_ladder: Tuple[float, ...] = (0.7, 0.6, 0.5, 0.4)
    screen_size: Tuple[int, int] = (1920, 1080)
    scale_to_screen: bool = False
    capture_all_screens: bool = False
    action_delay: float = 0.5
    save_debug_screenshots: bool = False
    actions: Mapping[str, ActionSpec] = field(default_factory=dict)
    navigation_sequence: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.retry_count < 1:
            raise ValueError(f"retry_count must be at least 1, got {self.retry_count}")
        if self.min_wait_slice <= 0:
            raise ValueError(f"min_wait_slice must be positive, got {self.min_wait_slice}")
        if not 0.0 <= self.fallback_similarity <= 1.0:
            raise ValueError(f"fallback_similarity out of range: {self.fallback_similarity}")
        levels = list(self.similarity_ladder)
        if any(not 0.0 <= level <= 1.0 for level in levels):
            raise ValueError(f"similarity ladder values must be in [0, 1]: {levels}")
        if levels != sorted(set(levels), reverse=True):
            raise ValueError(f"similarity ladder must be strictly descending: {levels}")
        unknown = [name for name in self.navigation_sequence if name not in self.actions]
        if unknown:
            raise ValueError(f"navigation sequence references unknown actions: {unknown}")

    def action(self, name: str) -> ActionSpec:
        """Look up a named action, raising KeyError with the known names."""
        try:
            return self.actions[name]
        except KeyError:
            raise KeyError(f"Unknown action '{name}'. Known: {sorted(self.actions)}") from None

    def with_overrides(self, **changes: Any) -> AutomationConfig:
        """Copy with some fields replaced (CLI flags, tests)."""
        return replace(self, **changes)


def _build_actions(
    raw: Mapping[str, Mapping[str, Any]],
    images_dir: Path,
    default_timeout: float,
) -> Dict[str, ActionSpec]:
    """Relative templates resolve against images_dir; a missing or None timeout uses default_timeout."""
    actions: Dict[str, ActionSpec] = {}
    for name, entry in raw.items():
        template = Path(entry['template'])
        if not template.is_absolute():
            template = images_dir / template
        timeout = entry.get('timeout')
        actions[name] = ActionSpec(
            name=name,
            template=template,
            timeout=float(default_timeout if timeout is None else timeout),
            description=entry.get('description', ""),
        )
    return actions


def load_config(module: Optional[ModuleType] = None) -> AutomationConfig:
    """
    Freeze a config module into an AutomationConfig.

    Args:
        module: Module holding the constants (default: the project's config.py)

    Returns:
        AutomationConfig populated from the module
    """
    if module is None:
        import config as module

    timeout = float(module.TIMEOUT_SECONDS)
    images_dir = Path(module.IMAGES_DIR)
    return AutomationConfig(
        images_dir=images_dir,
        debug_dir=Path(module.DEBUG_DIR),
        timeout=timeout,
        retry_count=int(module.RETRY_COUNT),
        retry_pause=float(module.RETRY_PAUSE),
        min_wait_slice=float(module.MIN_WAIT_SLICE),
        poll_interval=float(module.POLL_INTERVAL),
        default_similarity=float(module.DEFAULT_SIMILARITY),
        fallback_similarity=float(module.FALLBACK_SIMILARITY),
        similarity_ladder=tuple(float(level) for level in module.SIMILARITY_LADDER),
        screen_size=(int(module.SCREEN_WIDTH), int(module.SCREEN_HEIGHT)),
        scale_to_screen=bool(module.SCALE_TO_SCREEN),
        capture_all_screens=bool(getattr(module, 'CAPTURE_ALL_SCREENS', False)),
        action_delay=float(module.ACTION_DELAY),
        save_debug_screenshots=bool(module.SAVE_DEBUG_SCREENSHOTS),
        actions=_build_actions(module.ACTIONS, images_dir, timeout),
        navigation_sequence=tuple(module.NAVIGATION_SEQUENCE),
    )
