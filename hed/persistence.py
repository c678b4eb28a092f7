"""Reading documents from disk and writing them back atomically."""

import logging
import os
import tempfile
from typing import List

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def load_lines(path: str) -> List[str]:
    """Read ``path`` as a list of lines.

    A trailing newline does not produce an extra empty line, and an empty
    file yields no lines at all.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
    """
    with open(path, 'r', encoding='utf-8', errors='surrogateescape', newline='') as f:
        content = f.read()
    lines = content.split('\n')
    if lines[-1] == '':
        lines.pop()
    return lines


def serialize(lines: List[str]) -> str:
    """Join lines with every line terminated by a newline."""
    return ''.join(line + '\n' for line in lines)


def write_atomic(path: str, content: str) -> int:
    """Write ``content`` to ``path`` through a temporary file and rename.

    Returns the number of bytes written. Raises OSError on failure, after
    removing the temporary file.
    """
    # Undecodable bytes from load_lines come back out unchanged
    data = content.encode('utf-8', 'surrogateescape')
    # Same directory so the rename stays on one filesystem
    dir_name = os.path.dirname(path) or '.'
    temp_filename = None
    try:
        with tempfile.NamedTemporaryFile(mode='wb', dir=dir_name,
                                         prefix=os.path.basename(path) + '.',
                                         suffix=EditorConstants.ATOMIC_SAVE_SUFFIX, delete=False) as temp_file:
            temp_filename = temp_file.name
            temp_file.write(data)
            temp_file.flush()
            os.fsync(temp_file.fileno())
        os.replace(temp_filename, path)
    except OSError:
        if temp_filename and os.path.exists(temp_filename):
            try:
                os.remove(temp_filename)
            except OSError as e:
                logger.warning(f"Could not remove temporary file {temp_filename}: {e}")
        raise
    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return len(data)
