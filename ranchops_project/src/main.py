#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RanchOps - Zone Boundary Editor

Entry point for the desktop zone editor: opens a new zone, or an existing one
with ``--zone-id``.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .utils.logging_utils import setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="ranchops", description="Draw and save ranch zone boundaries.")
    parser.add_argument("--zone-id", help="Edit an existing zone instead of creating one")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the zone editor.

    Returns:
        int: Exit code (0 for success)
    """
    args = parse_args(argv)
    log_file_path = Path(__file__).parent.parent / "app.log"
    setup_logging(log_level=logging.DEBUG if args.debug else logging.INFO, log_file=str(log_file_path))
    logger = logging.getLogger(__name__)
    logger.info("Starting RanchOps zone editor")

    try:
        from PySide6.QtWidgets import QApplication

        from .ui.zone_editor_widget import ZoneEditorWidget

        app = QApplication(sys.argv[:1])
        app.setApplicationName("RanchOps")
        app.setOrganizationName("RanchOps")

        window = ZoneEditorWidget()
        window.open_zone(args.zone_id)
        window.resize(1000, 720)
        window.show()

        exit_code = app.exec()
        logger.info("Application exited with code %s", exit_code)
        return exit_code

    except Exception as e:
        logger.exception(f"Fatal error in main application: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
