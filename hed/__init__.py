"""hed - a small modal text editor for the terminal."""

from .buffer import Document, Row
from .context import EditorContext, Mode
from .syntax import Highlight, SyntaxDescriptor, SyntaxRegistry

__version__ = "0.1.0"

__all__ = [
    'Document',
    'Row',
    'EditorContext',
    'Mode',
    'Highlight',
    'SyntaxDescriptor',
    'SyntaxRegistry',
]
