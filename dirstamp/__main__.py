"""Allow ``python -m dirstamp``."""

import sys

from .cli import main

sys.exit(main())
