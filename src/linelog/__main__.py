"""Allow ``python -m linelog``."""

import sys

from linelog.cli import main

sys.exit(main())
