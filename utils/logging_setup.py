"""
Logging setup for command-line entry points.

Library modules only call logging.getLogger(__name__); scripts call
setup_logging() once to get console output plus a timestamped file in logs/.
"""
from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_DIR = Path(__file__).parent.parent / "logs"


def setup_logging(name: str, debug: bool = False, log_dir: Optional[Path] = None) -> Path:
    """
    Configure root logging with a console handler and a file handler.

    Args:
        name: Prefix for the log file (e.g. "navigation")
        debug: DEBUG level instead of INFO
        log_dir: Directory for log files (default: logs/)

    Returns:
        Path of the log file
    """
    log_dir = Path(log_dir or LOG_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / f"{name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"

    log_level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(),
        ],
        force=True,
    )
    return log_file
