#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
RanchOps launcher.

Run with ``python -m ranchops_project.run_ranchops [--zone-id ID]``.
"""

import sys

if __name__ == "__main__":
    try:
        from .src.main import main
        sys.exit(main())
    except ImportError as e:
        import traceback
        print(f"Caught ImportError: {e}", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
        print("Please check that dependencies are installed ('pip install -e .').", file=sys.stderr)
        sys.exit(1)
