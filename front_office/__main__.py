"""Entry point for ``python -m front_office``"""

import sys

from .cli import main


if __name__ == "__main__":
    sys.exit(main())
