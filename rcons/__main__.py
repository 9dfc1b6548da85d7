# SPDX-License-Identifier: MIT
"""Allow running rcons as `python -m rcons`."""

import sys

from rcons.cli import main

sys.exit(main())
