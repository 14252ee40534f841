#!/usr/bin/env python3
"""
Run the launcher navigation sequence on the live desktop.

Usage:
    python scripts/run_navigation.py
    python scripts/run_navigation.py --debug --delay 1.0
    python scripts/run_navigation.py --similarity 0.8 --timeout 15

Exit code is 0 when every step clicked its target, 1 otherwise.
Ctrl+C cancels the pending settle delay and stops the sequence.
"""
import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

# Add project root and scripts/ to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from utils.automation_config import load_config
from utils.cli_args import non_negative_float, positive_float
from utils.locator_factory import create_screen_locator
from utils.logging_setup import setup_logging
from utils.pacing import Pacer, WaitCancelled
from flows.main_page import MainPage
from flows.navigation_flow import run_steps


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Click through Games Tab -> Vanguard -> WoW Tab -> Configuration"
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help="Enable debug logging (per-level attempts and scores)"
    )
    parser.add_argument(
        '--delay',
        type=non_negative_float,
        default=None,
        help="Settle delay between steps in seconds (default: ACTION_DELAY from config)"
    )
    parser.add_argument(
        '--similarity',
        type=float,
        default=None,
        help="Default similarity, first level of the ladder (default: DEFAULT_SIMILARITY)"
    )
    parser.add_argument(
        '--timeout',
        type=positive_float,
        default=None,
        help="Per-step search timeout in seconds (default: per action from config)"
    )
    parser.add_argument(
        '--save-debug',
        action='store_true',
        help="Save a screenshot whenever a search misses"
    )
    args = parser.parse_args(argv)

    log_file = setup_logging("navigation", debug=args.debug)
    logger = logging.getLogger("navigation")
    logger.info(f"Logging to {log_file}")

    cfg = load_config()
    if args.save_debug:
        cfg = cfg.with_overrides(save_debug_screenshots=True)
    if args.timeout is not None:
        actions = {name: replace(spec, timeout=args.timeout) for name, spec in cfg.actions.items()}
        cfg = cfg.with_overrides(actions=actions)

    if not cfg.images_dir.is_dir():
        logger.error(f"Images directory does not exist: {cfg.images_dir}")
        return 1

    pacer = Pacer()
    locator = create_screen_locator(cfg, pacer=pacer)
    if args.similarity is not None:
        locator.set_similarity(args.similarity)

    page = MainPage(locator, cfg.actions)
    delay = cfg.action_delay if args.delay is None else args.delay

    try:
        result = run_steps(page, cfg.navigation_sequence, pacer=pacer, action_delay=delay)
    except (WaitCancelled, KeyboardInterrupt):
        pacer.cancel()
        logger.warning("Navigation cancelled")
        return 1

    if result:
        logger.info("Navigation sequence completed successfully")
        return 0
    logger.error(f"Navigation failed at step '{result.failed_step}' (completed: {result.completed})")
    return 1


if __name__ == '__main__':
    sys.exit(main())
