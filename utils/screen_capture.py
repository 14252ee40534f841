"""
Screen Capture Helper - desktop capture for template matching

Grabs the desktop with Pillow's ImageGrab, optionally rescales to the
configured screen resolution, and hands back a BGR numpy array for OpenCV.

Rescaling is off by default: the locator's similarity ladder absorbs small
DPI/scale drift, and clicks are mapped back through the frame size anyway.
"""
from __future__ import annotations

import logging
import time
from typing import Optional, Tuple

import cv2
import numpy as np
from PIL import Image, ImageGrab

logger = logging.getLogger(__name__)


class ScreenCaptureHelper:
    """Screenshot capture of the whole desktop (or a region of it)."""

    def __init__(
        self,
        target_size: Optional[Tuple[int, int]] = None,
        bbox: Optional[Tuple[int, int, int, int]] = None,
        all_screens: bool = False,
        max_retries: int = 3,
        retry_delay: float = 0.2,
    ) -> None:
        """Initialize the screenshot helper.

        Args:
            target_size: (width, height) to rescale every capture to, or None to keep native size
            bbox: Optional (left, top, right, bottom) region of the desktop to grab
            all_screens: Grab every monitor instead of the primary one (Windows only)
            max_retries: Number of grab attempts before giving up
            retry_delay: Seconds to wait between failed grabs
        """
        self.target_size = target_size
        self.bbox = bbox
        self.all_screens = all_screens
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

    def capture_screen(self) -> Image.Image:
        """Capture the desktop.

        Returns:
            PIL.Image: Raw RGB capture

        Raises:
            RuntimeError: If every attempt failed
        """
        last_error: Optional[Exception] = None
        for attempt in range(self.max_retries):
            try:
                img = ImageGrab.grab(bbox=self.bbox, all_screens=self.all_screens)
                return img.convert('RGB')
            except (OSError, ValueError) as e:
                last_error = e
                logger.debug(f"Screen grab attempt {attempt + 1}/{self.max_retries} failed: {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(self.retry_delay)  # Brief delay before retry
        raise RuntimeError(f"Screen grab failed after {self.max_retries} attempts: {last_error}")

    def scale(self, img: Image.Image) -> Image.Image:
        """Scale image to the target resolution (no-op when target_size is None or already matches)."""
        if self.target_size is None or img.size == tuple(self.target_size):
            return img
        return img.resize(tuple(self.target_size), Image.LANCZOS)

    def get_screenshot_cv2(self) -> np.ndarray:
        """Get a screenshot as cv2 numpy array (compatible with template matching).

        This is the main method to use for template matching pipelines.

        Returns:
            np.ndarray: BGR image (H x W x 3)
        """
        raw_img = self.capture_screen()
        scaled_img = self.scale(raw_img)

        # Convert PIL RGB to cv2 BGR
        img_array = np.array(scaled_img)
        return cv2.cvtColor(img_array, cv2.COLOR_RGB2BGR)

    def save_screenshot(self, output_path) -> str:
        """Capture and save a screenshot.

        Args:
            output_path: Path to save the screenshot

        Returns:
            str: Path of the saved file

        Raises:
            OSError: If the image could not be written
        """
        img_bgr = self.get_screenshot_cv2()
        if not cv2.imwrite(str(output_path), img_bgr):
            raise OSError(f"Failed to write screenshot: {output_path}")
        logger.debug(f"Saved {img_bgr.shape[1]}x{img_bgr.shape[0]} screenshot to {output_path}")
        return str(output_path)
