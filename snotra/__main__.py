"""Entry point for ``python -m snotra``."""

import sys

from snotra.app import main

sys.exit(main())
