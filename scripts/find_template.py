#!/usr/bin/env python3
"""
Find (and optionally click) a single template on the live desktop.

Usage:
    python scripts/find_template.py assets/1_button.png
    python scripts/find_template.py assets/4_button.png --timeout 5 --retries 3
    python scripts/find_template.py assets/2_thumbnail.png --click
    python scripts/find_template.py assets/3_button.png --quick   # probes only, no waiting
"""
import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from utils.automation_config import load_config
from utils.cli_args import positive_float, positive_int
from utils.locator_factory import create_screen_locator
from utils.logging_setup import setup_logging


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Locate a template image on screen")
    parser.add_argument('template', help="Path of the template image")
    parser.add_argument('--timeout', type=positive_float, default=None,
                        help="Search timeout in seconds (default: TIMEOUT_SECONDS)")
    parser.add_argument('--retries', type=positive_int, default=1,
                        help="Full search cycles before giving up (default: 1)")
    parser.add_argument('--similarity', type=float, default=None,
                        help="Default similarity, first level of the ladder")
    parser.add_argument('--click', action='store_true', help="Click the match")
    parser.add_argument('--quick', action='store_true', help="Quick probes only, no waiting")
    parser.add_argument('--debug', action='store_true', help="Enable debug logging")
    args = parser.parse_args(argv)

    setup_logging("find_template", debug=args.debug)
    logger = logging.getLogger("find_template")

    cfg = load_config()
    locator = create_screen_locator(cfg)
    if args.similarity is not None:
        locator.set_similarity(args.similarity)
    timeout = args.timeout if args.timeout is not None else cfg.timeout

    if args.click:
        ok = locator.click_on_sight(args.template, timeout)
        print("Clicked" if ok else "Not clicked")
        return 0 if ok else 1

    if args.quick:
        outcome = locator.find(args.template)
    else:
        outcome = locator.locate_with_retry(args.template, timeout, max_retries=args.retries)

    if outcome:
        match = outcome.match
        print(f"Found at {outcome.location} (similarity {outcome.similarity}, score {match.score:.3f}, "
              f"box {match.region})")
        return 0

    logger.info(f"Levels tried: {outcome.levels_tried}")
    print(f"Not found: {outcome.status.value}")
    return 1


if __name__ == '__main__':
    sys.exit(main())
