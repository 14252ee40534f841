"""
Configuration loader - loads paths, timeouts and thresholds from config_local.py or environment variables.

Usage:
    from config import TIMEOUT_SECONDS, BUTTON_IMAGE_1

    # Frozen value object for the locator and flows
    from utils.automation_config import load_config
    cfg = load_config()

Setup:
    1. Put your button templates in assets/ (or point ROBOCLICKER_IMAGES_DIR elsewhere)
    2. Optionally create config_local.py and override any default parameter
    3. config_local.py is gitignored so local tweaks stay local
"""
import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

PROJECT_ROOT = Path(__file__).resolve().parent

# Button templates (cropped from a 1920x1080 capture of the launcher)
IMAGES_DIR = Path(os.environ.get('ROBOCLICKER_IMAGES_DIR', PROJECT_ROOT / "assets"))

# File names are resolved against IMAGES_DIR when the config is loaded
BUTTON_IMAGE_1 = "1_button.png"      # Games tab
BUTTON_IMAGE_2 = "2_thumbnail.png"   # Vanguard thumbnail
BUTTON_IMAGE_3 = "3_button.png"      # WoW tab
BUTTON_IMAGE_4 = "4_button.png"      # Configuration gear

# Debug screenshots of failed searches land in DEBUG_DIR/<flow>/
DEBUG_DIR = PROJECT_ROOT / "templates" / "debug"

# =============================================================================
# SEARCH TIMING
# =============================================================================

TIMEOUT_SECONDS = 10        # Budget for one locate() call
RETRY_COUNT = 3             # Full locate() cycles for locate_with_retry()
RETRY_PAUSE = 0.5           # Seconds between retry cycles
MIN_WAIT_SLICE = 1.0        # Smallest per-level wait in the bounded-wait phase
POLL_INTERVAL = 0.3         # Seconds between captures while polling one level

# =============================================================================
# SIMILARITY LADDER
# Lower similarity tolerates resolution/scale drift. The default is tried
# first, then each fallback level below it, highest first.
# =============================================================================

DEFAULT_SIMILARITY = 0.7
FALLBACK_SIMILARITY = 0.8   # Used when set_similarity() gets an out-of-range value
SIMILARITY_LADDER = (0.7, 0.6, 0.5, 0.4)

# =============================================================================
# SCREEN
# =============================================================================

SCREEN_WIDTH = 1920
SCREEN_HEIGHT = 1080
SCALE_TO_SCREEN = False     # Rescale captures to SCREEN_WIDTH x SCREEN_HEIGHT before matching
CAPTURE_ALL_SCREENS = False

# =============================================================================
# ACTION SEQUENCING
# =============================================================================

ACTION_DELAY = 0.5              # UI settle time between navigation steps
SAVE_DEBUG_SCREENSHOTS = False  # Dump the screen when a search misses

# Named UI actions: {'template': file name or path, 'timeout': seconds, 'description': str}
# Relative templates live in IMAGES_DIR; a missing timeout means TIMEOUT_SECONDS.
ACTIONS = {
    'games_tab': {
        'template': BUTTON_IMAGE_1,
        'description': "Click Games Tab",
    },
    'vanguard_page': {
        'template': BUTTON_IMAGE_2,
        'description': "Open Vanguard Page",
    },
    'wow_tab': {
        'template': BUTTON_IMAGE_3,
        'description': "Open WoW Tab",
    },
    'configuration_gear': {
        'template': BUTTON_IMAGE_4,
        'description': "Open Configuration Gear",
    },
}

# Order used by navigation_flow
NAVIGATION_SEQUENCE = ('games_tab', 'vanguard_page', 'wow_tab', 'configuration_gear')


# =============================================================================
# LOAD LOCAL OVERRIDES
# =============================================================================

# Try to load from config_local.py (for local development)
try:
    from config_local import *
    print("Loaded config from config_local.py")
except ImportError:
    pass
