"""
Reading value functions in the `.alpha` format written by pomdp-solve
(http://www.pomdp.org/code/alpha-file-spec.html):

    A
    V1 V2 V3 ... VN

    A
    V1 V2 V3 ... VN

where A is the 0-based index of an action in the model file and
V1..VN are the coefficients of one hyperplane of the piecewise
linear and convex value function, one per state.
"""
import logging
import re
from typing import Tuple
import numpy as np

from pomdpformat.core.alphavectors import AlphaVectors
from pomdpformat.errors import FormatError
from pomdpformat.parsing.lines import read_lines, scan_numbers, to_float

logger = logging.getLogger(__name__)

ACTION_INDEX_LINE = re.compile(r"^\s*(\d+)\s*$")

def read_alpha(path) -> Tuple[np.array, np.array]:
    """
    Returns `(alpha_vectors, alpha_actions)`: a (vector length, number of
    vectors) matrix whose columns are the vectors in file order, and the
    action index attached to each column.

    A line with more than one number is a vector; the line right before it
    must hold only its action index. All vectors must have the length of
    the first one.
    """
    lines = read_lines(path)

    alpha_actions = []
    columns = []
    vector_length = None
    for lineno, line in enumerate(lines, start=1):
        tokens = scan_numbers(line)
        if len(tokens) <= 1:
            continue
        previous = ACTION_INDEX_LINE.match(lines[lineno - 2]) if lineno > 1 else None
        if previous is None:
            raise FormatError("previous line must contain an action index", lineno)
        if vector_length is None:
            vector_length = len(tokens)
        elif len(tokens) != vector_length:
            raise FormatError(
                f"vector length is inconsistent. Was {vector_length}, is {len(tokens)}",
                lineno
            )
        alpha_actions.append(int(previous.group(1)))
        columns.append([to_float(t, lineno) for t in tokens])

    if not columns:
        raise FormatError(f"no alpha vectors found in {path}")
    logger.info(f"Read {len(columns)} alpha vectors of length {vector_length} from {path}")

    # The alpha vectors are the columns
    alpha_vectors = np.array(columns, dtype=float).T
    alpha_actions = np.array(alpha_actions, dtype=int)
    return alpha_vectors, alpha_actions

def load_alpha_vectors(path, pomdp=None) -> AlphaVectors:
    """
    Reads a value function file as AlphaVectors. When a model is given,
    the vectors must have one entry per state and every action index must
    refer to one of its actions.
    """
    alpha_vectors, alpha_actions = read_alpha(path)
    if pomdp is not None:
        n_states = len(pomdp.state_list)
        n_actions = len(pomdp.action_list)
        if alpha_vectors.shape[0] != n_states:
            raise FormatError(
                f"alpha vectors have {alpha_vectors.shape[0]} entries but the model has {n_states} states"
            )
        bad = sorted(set(alpha_actions[alpha_actions >= n_actions].tolist()))
        if bad:
            raise FormatError(f"action indices {bad} are out of range for {n_actions} actions")
    return AlphaVectors(alpha_vectors, alpha_actions)
