"""Allow running mlw with `python -m mlw`."""

import sys

from .cli import main

sys.exit(main())
