"""hed CLI entry point.

Allows running via `python -m hed` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys


def main() -> None:
    # Very small arg parsing: version flag and an optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        from . import __version__
        print(f"hed {__version__}")
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .settings import SettingsStore
    from .terminal import TerminalError

    editor = Editor(settings=SettingsStore().load())
    if args:
        editor.load_file(args[0])
    try:
        editor.run()
    except TerminalError as e:
        print(f"hed: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
