"""
Shared debug screenshot utility for the locator and flows.

Usage:
    from utils.debug_screenshot import save_debug_screenshot

    # Save with flow name as subdirectory
    save_debug_screenshot(frame, "locator", "NOTFOUND_1_button")
    # Saves to: templates/debug/locator/20251209_060553_NOTFOUND_1_button.png

    save_debug_screenshot(frame, "navigation", "FAIL_step2_wow_tab", base_dir=tmp_dir)
"""

from pathlib import Path
from datetime import datetime
from typing import Optional
import re
import cv2

# Base debug directory
DEBUG_BASE = Path(__file__).parent.parent / "templates" / "debug"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def save_debug_screenshot(frame, flow_name: str, label: str, base_dir: Optional[Path] = None) -> str:
    """
    Save debug screenshot with timestamp and label.

    Args:
        frame: BGR numpy array screenshot
        flow_name: Name of the flow (used as subdirectory, e.g., "locator", "navigation")
        label: Description label for filename (e.g., "NOTFOUND_1_button")
        base_dir: Root of the debug tree (default: templates/debug)

    Returns:
        str: Path to saved file
    """
    # Create subdirectory for this flow
    debug_dir = Path(base_dir or DEBUG_BASE) / flow_name
    debug_dir.mkdir(parents=True, exist_ok=True)

    # Generate timestamped filename
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    safe_label = _UNSAFE_CHARS.sub("_", label)
    filepath = debug_dir / f"{timestamp}_{safe_label}.png"

    # Save
    if not cv2.imwrite(str(filepath), frame):
        raise OSError(f"Could not write debug screenshot: {filepath}")

    return str(filepath)
