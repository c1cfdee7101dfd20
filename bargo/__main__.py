"""Package entry point for ``python -m bargo``.

Delegates to the CLI's main() function.
"""

import sys

from bargo.cli import main

if __name__ == "__main__":
    sys.exit(main())
