import logging
import re
from typing import NamedTuple, Sequence
import numpy as np

from pomdpformat.core.namespace import NameSpace
from pomdpformat.errors import FormatError
from pomdpformat.parsing.lines import COMMENT, LineCursor, scan_numbers, \
    to_float, to_int, parse_row

logger = logging.getLogger(__name__)

HEADER_FIELD = re.compile(
    r"^\s*(discount|values|states|actions|observations|start|start include|start exclude)\s*:(.*)$"
)
REQUIRED_FIELDS = ("discount", "states", "actions", "observations")
VALUE_KINDS = ("reward", "cost")

class ModelHeader(NamedTuple):
    discount : float
    states : NameSpace
    actions : NameSpace
    observations : NameSpace
    start : np.array
    values : str = "reward"

    @property
    def num_states(self):
        return len(self.states)

    @property
    def num_actions(self):
        return len(self.actions)

    @property
    def num_observations(self):
        return len(self.observations)

def find_header_fields(lines : Sequence[str]):
    """
    Maps each header keyword to the (1-based line number, remainder of line)
    of its first declaration. Lines containing a comment are skipped
    entirely, even when the keyword comes before the comment marker.
    """
    fields = {}
    for lineno, line in enumerate(lines, start=1):
        if COMMENT in line:
            continue
        match = HEADER_FIELD.match(line)
        if match is None:
            continue
        keyword = re.sub(r"\s+", " ", match.group(1))
        fields.setdefault(keyword, (lineno, match.group(2)))
    return fields

def parse_discount(rest : str, lineno : int) -> float:
    tokens = scan_numbers(rest)
    if not tokens:
        raise FormatError("discount has no value", lineno)
    discount = to_float(tokens[0], lineno)
    if not 0 <= discount <= 1:
        raise FormatError(f"discount {discount} is not in [0, 1]", lineno)
    return discount

def parse_name_space(rest : str, lineno : int, kind : str) -> NameSpace:
    """
    Either literal labels ("states: left right") or a count ("states: 2"),
    in which case labels "0".."count-1" are made up.
    """
    tokens = rest.split()
    if len(tokens) > 1:
        return NameSpace(tokens, kind=kind)
    if not tokens:
        raise FormatError(f"no {kind}s declared", lineno)
    count = to_int(tokens[0], lineno)
    if count < 1:
        raise FormatError(f"number of {kind}s must be positive, found {count}", lineno)
    return NameSpace.from_count(count, kind=kind)

def parse_values(rest : str, lineno : int) -> str:
    kind = rest.strip()
    if kind not in VALUE_KINDS:
        raise FormatError(f"values must be one of {VALUE_KINDS}, found {kind!r}", lineno)
    return kind

def parse_start(lines, keyword : str, lineno : int, rest : str, states : NameSpace) -> np.array:
    n = len(states)
    tokens = rest.split()
    if keyword in ("start include", "start exclude"):
        if not tokens:
            raise FormatError(f"{keyword} names no states", lineno)
        mask = np.zeros(n, dtype=bool)
        for token in tokens:
            mask[list(states.resolve(token, lineno))] = True
        if keyword == "start exclude":
            mask = ~mask
        if not mask.any():
            raise FormatError("start distribution has no support", lineno)
        return mask/mask.sum()
    if tokens == ["uniform"]:
        return np.ones(n)/n
    if len(tokens) == 1 and n > 1:
        start = np.zeros(n)
        start[list(states.resolve(tokens[0], lineno))] = 1.
        return start
    if tokens:
        return np.array(parse_row(rest, n, lineno))
    rowno, text = LineCursor(lines, lineno, "start").next()
    if text == "uniform":
        return np.ones(n)/n
    return np.array(parse_row(text, n, rowno))

def extract_header(lines : Sequence[str]) -> ModelHeader:
    fields = find_header_fields(lines)
    for keyword in REQUIRED_FIELDS:
        if keyword not in fields:
            raise FormatError(f"missing required header field '{keyword}:'")

    lineno, rest = fields["discount"]
    discount = parse_discount(rest, lineno)
    states, actions, observations = [
        parse_name_space(fields[keyword][1], fields[keyword][0], kind)
        for keyword, kind in (
            ("states", "state"),
            ("actions", "action"),
            ("observations", "observation"),
        )
    ]

    values = "reward"
    if "values" in fields:
        lineno, rest = fields["values"]
        values = parse_values(rest, lineno)

    start_fields = [k for k in ("start", "start include", "start exclude") if k in fields]
    if start_fields:
        keyword = min(start_fields, key=lambda k: fields[k][0])
        lineno, rest = fields[keyword]
        start = parse_start(lines, keyword, lineno, rest, states)
    else:
        start = np.ones(len(states))/len(states)

    logger.info(
        f"Header: {len(states)} states, {len(actions)} actions, "
        f"{len(observations)} observations, discount {discount}"
    )
    return ModelHeader(
        discount=discount,
        states=states,
        actions=actions,
        observations=observations,
        start=start,
        values=values,
    )
