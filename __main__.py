"""CLI entry point for markup-assist.

Allows running the CLI from a checkout with ``python .``; see
`markup_assist.__main__` for the commands.
"""

import sys

from markup_assist.__main__ import main

if __name__ == "__main__":
    sys.exit(main())
