import os
import re
from typing import Sequence, Tuple

from pomdpformat.errors import FormatError, NumericParseError

# Exponents are accepted; "1e-3" is one token, not "1" followed by "3".
FLOAT_PATTERN = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
COMMENT = '#'
# Header fields and block starts: "discount:", "start include:", "T :", ...
SECTION_LINE = re.compile(r"^\s*[A-Za-z][A-Za-z ]*:")

def read_lines(path) -> Tuple[str, ...]:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"filename {path} does not exist")
    with open(path) as f:
        return tuple(f.read().splitlines())

def strip_comment(line : str) -> str:
    return line.split(COMMENT, 1)[0]

def scan_numbers(line : str) -> Tuple[str, ...]:
    """
    Every floating point literal in `line`, left to right, ignoring
    whatever text surrounds them.

    >>> scan_numbers("a 1 -2.5 .5 1e-3")
    ('1', '-2.5', '.5', '1e-3')
    """
    return tuple(m.group() for m in FLOAT_PATTERN.finditer(line))

def to_float(token : str, lineno=None) -> float:
    try:
        return float(token)
    except ValueError:
        raise NumericParseError(token, lineno) from None

def to_int(token : str, lineno=None) -> int:
    try:
        return int(token)
    except ValueError:
        raise NumericParseError(token, lineno, expected="integer") from None

def parse_row(text : str, length : int, lineno=None) -> Tuple[float, ...]:
    """
    Reads a data line holding exactly `length` whitespace separated numbers.
    """
    values = tuple(to_float(t, lineno) for t in text.split())
    if len(values) != length:
        raise FormatError(f"expected {length} values, found {len(values)}", lineno)
    return values

class LineCursor:
    """
    Walks the lines that follow one block-start line.

    Blank and comment-only lines are skipped and trailing comments
    removed. The cursor never moves past the next header field or
    block start, so a block cannot read rows belonging to another one.
    """
    def __init__(self, lines : Sequence[str], start_lineno : int, label : str):
        self._lines = lines
        self._pos = start_lineno  # 0-based index of the line after the start
        self.start_lineno = start_lineno
        self.label = label

    def _advance_to_data(self):
        while self._pos < len(self._lines):
            text = strip_comment(self._lines[self._pos]).strip()
            if text:
                return text
            self._pos += 1
        return None

    def peek(self):
        """Text of the next data line, or None at the end of the block."""
        text = self._advance_to_data()
        if text is None or SECTION_LINE.match(text):
            return None
        return text

    def next(self) -> Tuple[int, str]:
        """(1-based line number, text) of the next data line."""
        text = self.peek()
        if text is None:
            raise FormatError(
                f"{self.label} block ends before all of its rows were given",
                self.start_lineno
            )
        self._pos += 1
        return self._pos, text
