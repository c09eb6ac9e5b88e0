"""Allow ``python -m subkit``."""

import sys

from subkit.ui.cli import main

if __name__ == '__main__':
    sys.exit(main())
