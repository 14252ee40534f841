"""
Screen capture helper tests (ImageGrab patched, no real display needed).
"""
from unittest.mock import patch

import cv2
import pytest
from PIL import Image

from utils.screen_capture import ScreenCaptureHelper


@pytest.fixture
def red_screen():
    return Image.new('RGB', (200, 100), (255, 0, 0))


class TestScreenCaptureHelper:

    def test_returns_bgr_array(self, red_screen):
        with patch('utils.screen_capture.ImageGrab.grab', return_value=red_screen):
            frame = ScreenCaptureHelper().get_screenshot_cv2()

        assert frame.shape == (100, 200, 3)
        assert frame[0, 0].tolist() == [0, 0, 255]

    def test_scales_to_target_size(self, red_screen):
        helper = ScreenCaptureHelper(target_size=(100, 50))
        with patch('utils.screen_capture.ImageGrab.grab', return_value=red_screen):
            frame = helper.get_screenshot_cv2()
        assert frame.shape == (50, 100, 3)

    def test_passes_region_to_grab(self, red_screen):
        helper = ScreenCaptureHelper(bbox=(0, 0, 200, 100), all_screens=True)
        with patch('utils.screen_capture.ImageGrab.grab', return_value=red_screen) as grab:
            helper.capture_screen()
        grab.assert_called_once_with(bbox=(0, 0, 200, 100), all_screens=True)

    def test_retries_transient_failure(self, red_screen):
        helper = ScreenCaptureHelper(retry_delay=0)
        with patch('utils.screen_capture.ImageGrab.grab', side_effect=[OSError("busy"), red_screen]) as grab:
            frame = helper.get_screenshot_cv2()
        assert grab.call_count == 2
        assert frame.shape == (100, 200, 3)

    def test_raises_after_all_retries(self):
        helper = ScreenCaptureHelper(max_retries=3, retry_delay=0)
        with patch('utils.screen_capture.ImageGrab.grab', side_effect=OSError("no display")) as grab:
            with pytest.raises(RuntimeError, match="3 attempts"):
                helper.capture_screen()
        assert grab.call_count == 3

    def test_save_screenshot(self, red_screen, tmp_path):
        out = tmp_path / "shot.png"
        with patch('utils.screen_capture.ImageGrab.grab', return_value=red_screen):
            ScreenCaptureHelper().save_screenshot(out)
        assert out.exists()
        assert cv2.imread(str(out)).shape == (100, 200, 3)

    def test_save_screenshot_write_failure(self, red_screen, tmp_path):
        out = tmp_path / "missing_dir" / "shot.png"
        with patch('utils.screen_capture.ImageGrab.grab', return_value=red_screen):
            with pytest.raises(OSError, match="Failed to write"):
                ScreenCaptureHelper().save_screenshot(out)
