"""
Locating and classifying the table blocks of a model file.

A block starts on a line whose first non-blank character is the table
keyword (T, O or R) followed by a colon. The colon separated fields
after the keyword decide which of three encodings the block uses:

    Explicit   every field named, one value for the whole cross product
               T: <action> : <start> : <end> <value>
    RowVector  all but the last field named, one row of values follows
               T: <action> : <start>
               <v1> ... <vn>
    Matrix     only the leading field(s) named, a keyword or one row
               per index of the next field follows
               T: <action>
               identity | uniform | <rows>
"""
import logging
import re
from typing import Dict, NamedTuple, Optional, Sequence, Tuple, Union

from pomdpformat.errors import FormatError
from pomdpformat.parsing.lines import strip_comment

logger = logging.getLogger(__name__)

BLOCK_START = re.compile(r"^\s*([TOR])\s*:(.*)$")
TABLES = ("T", "O", "R")

# Number of fields a fully explicit line names, per table.
TABLE_ARITY = {
    "T": 3,  # action, start state, end state
    "O": 3,  # action, end state, observation
    "R": 4,  # action, start state, end state, observation
}

class Explicit(NamedTuple):
    table : str
    lineno : int
    fields : Tuple[str, ...]
    value : Optional[str]

class RowVector(NamedTuple):
    table : str
    lineno : int
    fields : Tuple[str, ...]
    row : Optional[str]

class Matrix(NamedTuple):
    table : str
    lineno : int
    fields : Tuple[str, ...]
    keyword : Optional[str]

Block = Union[Explicit, RowVector, Matrix]

def locate_blocks(lines : Sequence[str]) -> Dict[str, Tuple[int, ...]]:
    """1-based line numbers of every block start, per table."""
    found = {table: [] for table in TABLES}
    for lineno, line in enumerate(lines, start=1):
        match = BLOCK_START.match(strip_comment(line))
        if match is not None:
            found[match.group(1)].append(lineno)
    return {table: tuple(linenos) for table, linenos in found.items()}

def _split_fields(body : str, lineno : int):
    parts = body.split(':')
    *named, last = parts
    fields = []
    for part in named:
        tokens = part.split()
        if len(tokens) != 1:
            raise FormatError(f"expected one name, index or '*' between colons, found {part.strip()!r}", lineno)
        fields.append(tokens[0])
    tokens = last.split()
    if not tokens:
        raise FormatError("empty field after ':'", lineno)
    fields.append(tokens[0])
    trailing = " ".join(tokens[1:]) or None
    return tuple(fields), trailing

def classify_block(line : str, lineno : int) -> Block:
    match = BLOCK_START.match(strip_comment(line))
    if match is None:
        raise FormatError("not a T:, O: or R: line", lineno)
    table, body = match.groups()
    arity = TABLE_ARITY[table]
    fields, trailing = _split_fields(body, lineno)

    if len(fields) == arity:
        if trailing is not None and len(trailing.split()) > 1:
            raise FormatError(f"expected a single value, found {trailing!r}", lineno)
        block = Explicit(table, lineno, fields, trailing)
    elif len(fields) == arity - 1:
        block = RowVector(table, lineno, fields, trailing)
    elif len(fields) < arity - 1:
        block = Matrix(table, lineno, fields, trailing)
    else:
        raise FormatError(
            f"{table}: takes at most {arity} fields, found {len(fields)}", lineno
        )
    logger.debug(f"line {lineno}: {type(block).__name__} {table} block {fields}")
    return block
