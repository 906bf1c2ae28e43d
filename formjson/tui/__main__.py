"""Entry point for running the TUI as a module.

Usage:
    python -m formjson.tui                    # Default variant
    python -m formjson.tui --variant lottery  # Lottery form
"""

from __future__ import annotations

import sys

from formjson.lib.errors import FormError
from formjson.tui.app import FormConverterApp


def main() -> None:
    """Run the TUI application."""
    args = sys.argv[1:]

    variant = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--variant" and i + 1 < len(args):
            variant = args[i + 1]
            i += 2
        elif arg == "--help" or arg == "-h":
            print(__doc__)
            sys.exit(0)
        else:
            print(f"Unknown argument: {arg}")
            print(__doc__)
            sys.exit(1)

    try:
        app = FormConverterApp(variant=variant)
    except FormError as e:
        print(e, file=sys.stderr)
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
