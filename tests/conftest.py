"""
Pytest configuration and shared fixtures for roboclicker tests.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, Generator, Iterable, List, Optional, Tuple
from unittest.mock import MagicMock

import cv2
import numpy as np
import pytest

# Add project root to path so imports work
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "scripts"))

from utils import template_matcher
from utils.automation_config import AutomationConfig
from utils.screen_matcher import Match

if TYPE_CHECKING:
    import numpy.typing as npt


# =============================================================================
# Frame Fixtures
# =============================================================================

@pytest.fixture
def sample_frame() -> npt.NDArray[np.uint8]:
    """Small black frame for testing (640x480 BGR)."""
    return np.zeros((480, 640, 3), dtype=np.uint8)


@pytest.fixture
def noise_frame() -> npt.NDArray[np.uint8]:
    """Seeded random noise frame (640x480 BGR)."""
    rng = np.random.default_rng(7)
    return rng.integers(0, 256, (480, 640, 3), dtype=np.uint8)


def make_button(width: int = 60, height: int = 40, seed: int = 1) -> npt.NDArray[np.uint8]:
    """Smooth textured patch: blurred noise keeps correlation high under slight rescaling."""
    rng = np.random.default_rng(seed)
    patch = rng.integers(0, 256, (height, width, 3), dtype=np.uint8)
    patch = cv2.GaussianBlur(patch, (0, 0), 3)
    return cv2.normalize(patch, None, 0, 255, cv2.NORM_MINMAX)


def paste(frame: np.ndarray, patch: np.ndarray, top_left: Tuple[int, int]) -> np.ndarray:
    """Copy of frame with patch pasted at top_left (x, y)."""
    out = frame.copy()
    x, y = top_left
    h, w = patch.shape[:2]
    out[y:y+h, x:x+w] = patch
    return out


@pytest.fixture
def button_image() -> npt.NDArray[np.uint8]:
    return make_button()


@pytest.fixture
def paste_patch() -> Callable[..., np.ndarray]:
    return paste


@pytest.fixture
def template_file(tmp_path: Path, button_image: np.ndarray) -> Path:
    """Button template written to disk as PNG."""
    path = tmp_path / "1_button.png"
    assert cv2.imwrite(str(path), button_image)
    return path


@pytest.fixture
def missing_template(tmp_path: Path) -> Path:
    return tmp_path / "does_not_exist.png"


@pytest.fixture(autouse=True)
def clear_template_cache() -> Generator[None, None, None]:
    template_matcher.clear_cache()
    yield
    template_matcher.clear_cache()


# =============================================================================
# Screenshot Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_capture(sample_frame: npt.NDArray[np.uint8]) -> MagicMock:
    """Mock ScreenCaptureHelper that returns sample_frame."""
    capture = MagicMock()
    capture.get_screenshot_cv2 = MagicMock(return_value=sample_frame)
    return capture


@pytest.fixture
def mock_capture_factory() -> Any:
    """Factory for creating mock ScreenCaptureHelper with custom frames."""
    def _create_mock(*frames: npt.NDArray[np.uint8]) -> MagicMock:
        capture = MagicMock()
        if len(frames) == 1:
            capture.get_screenshot_cv2 = MagicMock(return_value=frames[0])
        else:
            capture.get_screenshot_cv2 = MagicMock(side_effect=list(frames))
        return capture
    return _create_mock


# =============================================================================
# Pointer Mock Fixtures
# =============================================================================

@pytest.fixture
def mock_pointer() -> MagicMock:
    """Mock PointerHelper that records clicks."""
    pointer = MagicMock()
    pointer.click_match = MagicMock(side_effect=lambda match: match.center)
    return pointer


# =============================================================================
# Clock / Primitive Fakes
# =============================================================================

class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += max(0.0, seconds)

    sleep = advance


class ScriptedMatcher:
    """
    Matching primitive driven by a fake clock.

    Args:
        clock: FakeClock shared with the locator
        appear: {similarity level: seconds after creation from which that level matches}
        errors: levels whose attempts raise RuntimeError
        probe_cost: seconds each probe takes
    """

    def __init__(
        self,
        clock: FakeClock,
        appear: Optional[Dict[float, float]] = None,
        errors: Iterable[float] = (),
        probe_cost: float = 0.0,
        location: Tuple[int, int] = (100, 200),
    ) -> None:
        self.clock = clock
        self.t0 = clock()
        self.appear = dict(appear or {})
        self.errors = set(errors)
        self.probe_cost = probe_cost
        self.location = location
        self.calls: List[Tuple[str, float, Optional[float]]] = []
        self.debug_saves: List[Tuple[str, str]] = []

    def _elapsed(self) -> float:
        return self.clock() - self.t0

    def _match(self, level: float) -> Match:
        x, y = self.location
        return Match(x=x, y=y, width=40, height=20, score=level + 0.01, similarity=level, frame_size=(1920, 1080))

    def probe(self, template, similarity: float) -> Optional[Match]:
        self.calls.append(('probe', similarity, None))
        self.clock.advance(self.probe_cost)
        if similarity in self.errors:
            raise RuntimeError("capture failed")
        visible_at = self.appear.get(similarity)
        if visible_at is not None and self._elapsed() >= visible_at:
            return self._match(similarity)
        return None

    def poll_wait(self, template, similarity: float, max_wait: float) -> Optional[Match]:
        self.calls.append(('wait', similarity, max_wait))
        if similarity in self.errors:
            raise RuntimeError("capture failed")
        visible_at = self.appear.get(similarity)
        if visible_at is None:
            self.clock.advance(max_wait)
            return None
        needed = visible_at - self._elapsed()
        if needed <= max_wait:
            self.clock.advance(needed)
            return self._match(similarity)
        self.clock.advance(max_wait)
        return None

    def save_debug_frame(self, flow_name: str, label: str, base_dir=None) -> str:
        self.debug_saves.append((flow_name, label))
        return f"{flow_name}/{label}.png"

    def levels(self, kind: str) -> List[float]:
        return [level for k, level, _ in self.calls if k == kind]


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_matcher(fake_clock: FakeClock) -> Callable[..., ScriptedMatcher]:
    """Factory for ScriptedMatcher bound to fake_clock."""
    def _create(**kwargs: Any) -> ScriptedMatcher:
        return ScriptedMatcher(fake_clock, **kwargs)
    return _create


# =============================================================================
# Config Fixtures
# =============================================================================

@pytest.fixture
def locator_config() -> AutomationConfig:
    """Ladder 0.8 -> 0.7 -> 0.6 -> 0.5 -> 0.4, 1s minimum slice, 0.5s retry pause."""
    return AutomationConfig(
        default_similarity=0.8,
        similarity_ladder=(0.7, 0.6, 0.5, 0.4),
        min_wait_slice=1.0,
        retry_count=3,
        retry_pause=0.5,
    )


# =============================================================================
# Template Path Fixture
# =============================================================================

@pytest.fixture
def assets_dir() -> Path:
    """Path to the assets/ directory holding the button templates."""
    return project_root / "assets"
