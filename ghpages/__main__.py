"""Allow ``python -m ghpages``."""

import sys

from ghpages.cli import main

if __name__ == "__main__":
    sys.exit(main())
