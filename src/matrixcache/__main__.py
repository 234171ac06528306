"""Entry point for ``python -m matrixcache``."""

import sys

from .cli import main

sys.exit(main())
