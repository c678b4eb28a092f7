"""Lightweight per-row syntax highlighting.

A ``SyntaxDescriptor`` describes one language: word lists, a single-line
comment marker and whether numbers and strings are highlighted. The
``SyntaxRegistry`` selects a descriptor from a file extension, and
``highlight_row`` tags every character of a row's rendered text.
"""

import string
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Iterable, List, Optional, Tuple

from .constants import EditorConstants


class Highlight(IntEnum):
    """Semantic class of a rendered character."""
    NORMAL = 0
    NUMBER = 1
    STRING = 2
    COMMENT = 3
    KEYWORD = 4
    TYPE = 5
    CONST = 6


# blessed color attribute per tag; NORMAL uses the terminal default
HIGHLIGHT_COLORS: Dict[Highlight, Optional[str]] = {
    Highlight.NORMAL: None,
    Highlight.NUMBER: 'red',
    Highlight.STRING: 'magenta',
    Highlight.COMMENT: 'cyan',
    Highlight.KEYWORD: 'green',
    Highlight.TYPE: 'yellow',
    Highlight.CONST: 'magenta',
}


@dataclass(frozen=True)
class SyntaxDescriptor:
    """Immutable description of how to highlight one language."""
    filetype: str
    extensions: Tuple[str, ...]
    keywords: Tuple[str, ...] = ()
    types: Tuple[str, ...] = ()
    consts: Tuple[str, ...] = ()
    comment: str = ""
    highlight_numbers: bool = True
    highlight_strings: bool = True


def is_separator(ch: str) -> bool:
    """Whether ``ch`` ends a word for keyword and number matching."""
    return ch in string.whitespace or ch == '\0' or ch in EditorConstants.SEPARATOR_CHARS


def _match_word(text: str, i: int, words: Iterable[str]) -> int:
    """Length of the first word in ``words`` found at ``text[i]`` and followed by a separator."""
    for word in words:
        end = i + len(word)
        if text.startswith(word, i) and (end >= len(text) or is_separator(text[end])):
            return len(word)
    return 0


def highlight_row(rendered: str, syntax: Optional[SyntaxDescriptor]) -> List[Highlight]:
    """Compute highlight tags for a row's rendered text from scratch."""
    n = len(rendered)
    tags = [Highlight.NORMAL] * n
    if syntax is None:
        return tags

    prev_sep = True
    quote = None
    i = 0
    while i < n:
        ch = rendered[i]
        prev_tag = tags[i - 1] if i > 0 else Highlight.NORMAL

        if syntax.comment and quote is None and rendered.startswith(syntax.comment, i):
            tags[i:] = [Highlight.COMMENT] * (n - i)
            break

        if syntax.highlight_strings:
            if quote is not None:
                tags[i] = Highlight.STRING
                if ch == '\\' and i + 1 < n:
                    tags[i + 1] = Highlight.STRING
                    i += 2
                    continue
                if ch == quote:
                    quote = None
                i += 1
                prev_sep = True
                continue
            if ch in ('"', "'"):
                quote = ch
                tags[i] = Highlight.STRING
                i += 1
                continue

        if syntax.highlight_numbers:
            if ((ch in string.digits and (prev_sep or prev_tag == Highlight.NUMBER))
                    or (ch == '.' and prev_tag == Highlight.NUMBER)):
                tags[i] = Highlight.NUMBER
                i += 1
                prev_sep = False
                continue

        if prev_sep:
            matched = False
            for words, tag in ((syntax.keywords, Highlight.KEYWORD),
                               (syntax.types, Highlight.TYPE),
                               (syntax.consts, Highlight.CONST)):
                length = _match_word(rendered, i, words)
                if length:
                    tags[i:i + length] = [tag] * length
                    i += length
                    matched = True
                    break
            if matched:
                prev_sep = False
                continue

        prev_sep = is_separator(ch)
        i += 1

    return tags


C_SYNTAX = SyntaxDescriptor(
    filetype="c",
    extensions=("c", "h", "cpp"),
    keywords=(
        "switch", "if", "while", "for", "break", "continue", "return", "else",
        "struct", "union", "typedef", "static", "enum", "class", "using",
        "namespace", "case", "const", "inline", "auto", "constexpr",
        "template", "typename", "#include", "#pragma", "#define", "#if",
        "#ifdef", "#ifndef", "#elif", "#endif",
    ),
    types=(
        "void", "char", "bool", "short", "int", "size_t", "ssize_t",
        "ptrdiff_t", "long", "float", "double",
    ),
    consts=("true", "false", "NULL"),
    comment="//",
)

PYTHON_SYNTAX = SyntaxDescriptor(
    filetype="python",
    extensions=("py",),
    keywords=(
        "and", "as", "assert", "async", "await", "break", "class", "continue",
        "def", "del", "elif", "else", "except", "finally", "for", "from",
        "global", "if", "import", "in", "is", "lambda", "nonlocal", "not",
        "or", "pass", "raise", "return", "try", "while", "with", "yield",
    ),
    types=("int", "float", "str", "bytes", "bool", "list", "dict", "set", "tuple"),
    consts=("True", "False", "None"),
    comment="#",
)


class SyntaxRegistry:
    """Maps file extensions to syntax descriptors."""

    def __init__(self, descriptors: Iterable[SyntaxDescriptor] = ()):
        self._by_extension: Dict[str, SyntaxDescriptor] = {}
        self._descriptors: List[SyntaxDescriptor] = []
        for descriptor in descriptors:
            self.register(descriptor)

    def register(self, descriptor: SyntaxDescriptor) -> None:
        """Add a descriptor; later registrations win for shared extensions."""
        self._descriptors.append(descriptor)
        for ext in descriptor.extensions:
            self._by_extension[ext] = descriptor

    def descriptors(self) -> List[SyntaxDescriptor]:
        return list(self._descriptors)

    def for_extension(self, ext: str) -> Optional[SyntaxDescriptor]:
        return self._by_extension.get(ext)

    def for_path(self, path: Optional[str]) -> Optional[SyntaxDescriptor]:
        """Descriptor for the text after the last '.' in ``path``, if any."""
        if not path or '.' not in path:
            return None
        ext = path.rsplit('.', 1)[1]
        if not ext:
            return None
        return self.for_extension(ext)


def default_registry() -> SyntaxRegistry:
    """Registry with the built-in languages."""
    return SyntaxRegistry([C_SYNTAX, PYTHON_SYNTAX])
