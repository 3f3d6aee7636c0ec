#!/usr/bin/env python3
"""
Entry point for kubepool CLI tool.
"""

import sys

from kubepool.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
