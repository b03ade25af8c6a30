"""Allow ``python -m src.cli`` as a shortcut for ``python -m src.cli.search``."""

import sys

from src.cli.search import main

sys.exit(main())
