"""
Unified template matching with automatic mask detection.

Templates are addressed by file path. Scores are similarities in [0, 1]
(higher=better) whichever method is used, so callers can compare them
directly against a similarity threshold.

Naming convention:
- Template: `<name>.png`
- Mask: `<name>_mask.png` (same directory, same size)

If mask exists, uses TM_CCORR_NORMED (masked pixels are ignored).
If no mask, uses TM_CCOEFF_NORMED (brightness-invariant correlation).

Usage:
    from utils.template_matcher import best_match, template_exists

    if template_exists("assets/1_button.png"):
        hit = best_match(frame, "assets/1_button.png", search_region=(0, 0, 960, 540))
        if hit and hit.score >= 0.7:
            print(hit.top_left, hit.size)
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import cv2
import numpy as np

TemplatePath = Union[str, Path]

# Caches for loaded templates and masks, keyed by path string
_templates: Dict[str, np.ndarray] = {}
_masks: Dict[str, Optional[np.ndarray]] = {}


@dataclass
class TemplateMatch:
    """Best location of a template in a frame."""

    score: float
    top_left: Tuple[int, int]
    size: Tuple[int, int]  # (width, height)
    masked: bool = False


def _key(path: TemplatePath) -> str:
    return str(Path(path))


def get_mask_path(template_path: TemplatePath) -> Path:
    """
    Get the expected mask path for a template.

    Enforced naming convention:
        assets/1_button.png -> assets/1_button_mask.png
        icon_1080p.png -> icon_mask_1080p.png

    Returns:
        Path to mask file (whether it exists or not)
    """
    path = Path(template_path)
    name = path.name
    if name.endswith("_1080p.png"):
        mask_name = name.replace("_1080p.png", "_mask_1080p.png")
    else:
        mask_name = f"{path.stem}_mask{path.suffix or '.png'}"
    return path.with_name(mask_name)


def _is_readable_file(path: Path) -> bool:
    return path.is_file() and os.access(path, os.R_OK)


def _load_template(template_path: TemplatePath) -> Optional[np.ndarray]:
    """Load template (grayscale) with caching. Missing or undecodable files are not cached."""
    key = _key(template_path)
    if key not in _templates:
        if not _is_readable_file(Path(template_path)):
            return None
        template = cv2.imread(key, cv2.IMREAD_GRAYSCALE)
        if template is None or template.size == 0:
            return None
        _templates[key] = template
    return _templates[key]


def template_exists(template_path: TemplatePath) -> bool:
    """Check that the template is a readable file that decodes as an image."""
    return _load_template(template_path) is not None


def _load_mask(template_path: TemplatePath) -> Optional[np.ndarray]:
    """Load mask for template if it exists, with caching."""
    key = _key(template_path)
    if key not in _masks:
        mask_path = get_mask_path(template_path)
        _masks[key] = cv2.imread(str(mask_path), cv2.IMREAD_GRAYSCALE) if mask_path.exists() else None
    return _masks[key]


def best_match(
    frame: np.ndarray,
    template_path: TemplatePath,
    search_region: Optional[Tuple[int, int, int, int]] = None,
) -> Optional[TemplateMatch]:
    """
    Find the best location of a template in a frame.

    Args:
        frame: BGR or grayscale image
        template_path: Path of the template file
        search_region: Optional (x, y, w, h) to limit search area

    Returns:
        TemplateMatch in original frame coordinates, or None if the template
        cannot be loaded or does not fit in the search area
    """
    template = _load_template(template_path)
    if template is None or frame is None or frame.size == 0:
        return None

    mask = _load_mask(template_path)

    # Convert to grayscale if needed
    if len(frame.shape) == 3:
        gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
    else:
        gray = frame

    # Extract search region
    if search_region:
        x, y, w, h = search_region
        search_area = gray[y:y+h, x:x+w]
        offset = (x, y)
    else:
        search_area = gray
        offset = (0, 0)

    th, tw = template.shape[:2]

    # Check if search area is large enough
    if search_area.shape[0] < th or search_area.shape[1] < tw:
        return None

    if mask is not None:
        result = cv2.matchTemplate(search_area, template, cv2.TM_CCORR_NORMED, mask=mask)
    else:
        result = cv2.matchTemplate(search_area, template, cv2.TM_CCOEFF_NORMED)

    # Masked correlation can produce inf/nan over flat areas
    result = np.nan_to_num(result, nan=0.0, posinf=0.0, neginf=0.0)
    _, max_val, _, max_loc = cv2.minMaxLoc(result)

    return TemplateMatch(
        score=float(max_val),
        top_left=(offset[0] + max_loc[0], offset[1] + max_loc[1]),
        size=(tw, th),
        masked=mask is not None,
    )


def clear_cache():
    """Clear template and mask caches. Useful for testing or reloading."""
    _templates.clear()
    _masks.clear()
