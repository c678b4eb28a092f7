"""Optional keystroke trace written through the ``hed.keylog`` logger."""

import logging
from pathlib import Path
from typing import Optional

import platformdirs

from .constants import EditorConstants
from .keyboard import KeyEvent

logger = logging.getLogger("hed.keylog")

_NAMES = {
    '\x1b': '[esc]',
    '\x7f': '[bksp]',
    '\r': '[cr]',
    '\n': '[nl]',
    '\t': '[tab]',
}


def format_key(event: KeyEvent) -> str:
    """One log line for a key: raw characters, control keys in brackets."""
    return ' '.join(_NAMES.get(ch, ch) for ch in event.raw)


def default_log_path() -> Path:
    return Path(platformdirs.user_log_dir(EditorConstants.APP_NAME)) / EditorConstants.KEY_LOG_FILENAME


def enable(path: Optional[Path] = None) -> Optional[logging.Handler]:
    """Attach a file handler to the key logger; returns it, or None if the file cannot be opened."""
    path = path or default_log_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding='utf-8')
    except OSError as e:
        logger.warning(f"Could not open key log {path}: {e}")
        return None
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    logger.debug("============= new stream ==========")
    return handler


def disable(handler: logging.Handler) -> None:
    logger.removeHandler(handler)
    handler.close()


def record(event: KeyEvent) -> None:
    if logger.handlers:
        logger.debug(format_key(event))
