import logging
from typing import Sequence, Tuple
import numpy as np

from pomdpformat.core.namespace import NameSpace
from pomdpformat.core.utils.funcutils import readonly
from pomdpformat.errors import FormatError
from pomdpformat.parsing.blocks import Block, Explicit, RowVector, Matrix
from pomdpformat.parsing.header import ModelHeader
from pomdpformat.parsing.lines import LineCursor, parse_row, to_float

logger = logging.getLogger(__name__)

IDENTITY = "identity"
UNIFORM = "uniform"

def _laid_out(values, value_axes : Sequence[int], ndim : int) -> np.array:
    """
    Arranges `values` (one dimension per entry of `value_axes`) along those
    tensor axes, with size-1 dimensions everywhere else, so it broadcasts
    over a region selected with np.ix_.
    """
    values = np.asarray(values, dtype=float)
    if not value_axes:
        return values
    values = np.transpose(values, np.argsort(value_axes))
    shape = [1]*ndim
    for axis, size in zip(sorted(value_axes), values.shape):
        shape[axis] = size
    return values.reshape(shape)

class TableParser:
    """
    Fills one tensor of the model from the blocks of its table.

    Subclasses name the file order of the table's fields, the name space
    each field is resolved in, and the tensor axis it indexes. Every block
    gets its own line cursor and its own index sets; later blocks overwrite
    cells assigned by earlier ones.
    """
    table : str
    keywords : Tuple[str, ...] = ()

    def __init__(self, header : ModelHeader):
        self.header = header
        self.spaces, self.axes = zip(*self.field_layout(header))
        shape = [None]*len(self.axes)
        for space, axis in zip(self.spaces, self.axes):
            shape[axis] = len(space)
        self.tensor = np.zeros(shape)
        self.n_blocks = 0

    @staticmethod
    def field_layout(header : ModelHeader) -> Sequence[Tuple[NameSpace, int]]:
        """(name space, tensor axis) of every field, in file order."""
        raise NotImplementedError

    def _index_sets(self, fields, lineno):
        return [
            space.resolve(token, lineno)
            for space, token in zip(self.spaces, fields)
        ]

    def _assign(self, index_sets, values, value_axes):
        """
        Writes `values` over the cross product of `index_sets` (given in
        file order); fields past the named ones take every index.
        """
        by_axis = [None]*self.tensor.ndim
        for fi, axis in enumerate(self.axes):
            if fi < len(index_sets):
                by_axis[axis] = index_sets[fi]
            else:
                by_axis[axis] = tuple(range(len(self.spaces[fi])))
        region = np.ix_(*by_axis)
        self.tensor[region] = _laid_out(values, value_axes, self.tensor.ndim)

    def parse_block(self, lines : Sequence[str], block : Block):
        assert block.table == self.table
        cursor = LineCursor(lines, block.lineno, self.table)
        if isinstance(block, Explicit):
            self.parse_explicit(block, cursor)
        elif isinstance(block, RowVector):
            self.parse_row_vector(block, cursor)
        elif isinstance(block, Matrix):
            self.parse_matrix(block, cursor)
        else:
            raise TypeError(f"Unknown block {block!r}")
        self.n_blocks += 1

    def parse_explicit(self, block : Explicit, cursor : LineCursor):
        index_sets = self._index_sets(block.fields, block.lineno)
        if block.value is not None:
            lineno, text = block.lineno, block.value
        else:
            lineno, text = cursor.next()
        tokens = text.split()
        if len(tokens) != 1:
            raise FormatError(f"expected a single value, found {text!r}", lineno)
        self._assign(index_sets, to_float(tokens[0], lineno), ())

    def parse_row_vector(self, block : RowVector, cursor : LineCursor):
        index_sets = self._index_sets(block.fields, block.lineno)
        free = len(block.fields)
        if block.row is not None:
            lineno, text = block.lineno, block.row
        else:
            lineno, text = cursor.next()
        row = parse_row(text, len(self.spaces[free]), lineno)
        self._assign(index_sets, row, (self.axes[free],))

    def parse_matrix(self, block : Matrix, cursor : LineCursor):
        index_sets = self._index_sets(block.fields, block.lineno)
        row_field = len(block.fields)
        col_field = row_field + 1
        n_rows = len(self.spaces[row_field])
        n_cols = len(self.spaces[col_field])

        keyword = block.keyword
        if keyword is None and cursor.peek() in self.keywords:
            _, keyword = cursor.next()
        if keyword is None:
            matrix = np.array([
                parse_row(text, n_cols, lineno)
                for lineno, text in (cursor.next() for _ in range(n_rows))
            ])
        elif keyword not in self.keywords:
            raise FormatError(f"unexpected {keyword!r} after {self.table}:", block.lineno)
        elif keyword == IDENTITY:
            if n_rows != n_cols:
                raise FormatError(
                    f"identity needs a square matrix, this one is {n_rows}x{n_cols}",
                    block.lineno
                )
            matrix = np.eye(n_rows)
        elif keyword == UNIFORM:
            matrix = np.ones((n_rows, n_cols))/n_cols
        self._assign(index_sets, matrix, (self.axes[row_field], self.axes[col_field]))

    def result(self) -> np.array:
        logger.info(f"{self.table}: parsed {self.n_blocks} blocks into shape {self.tensor.shape}")
        return readonly(self.tensor)

class TransitionTableParser(TableParser):
    """T[start, action, end]"""
    table = "T"
    keywords = (IDENTITY, UNIFORM)

    @staticmethod
    def field_layout(header):
        return (
            (header.actions, 1),
            (header.states, 0),
            (header.states, 2),
        )

class ObservationTableParser(TableParser):
    """O[observation, action, end]"""
    table = "O"
    keywords = (IDENTITY, UNIFORM)

    @staticmethod
    def field_layout(header):
        return (
            (header.actions, 1),
            (header.states, 2),
            (header.observations, 0),
        )

class RewardTableParser(TableParser):
    """
    R[start, action, end, observation]

    Rewards may depend on the end state and observation, so blocks are
    read into the full tensor and reduced to R[start, action] afterwards.
    A block naming only the action is followed by one row per start state
    over end states.
    """
    table = "R"

    @staticmethod
    def field_layout(header):
        return (
            (header.actions, 1),
            (header.states, 0),
            (header.states, 2),
            (header.observations, 3),
        )

    def state_action_rewards(self, transition_matrix, observation_matrix) -> np.array:
        """
        R[s, a] from the full reward tensor. Entries that do not vary with
        the end state and observation are taken as they are; others are the
        expected reward under T[s, a, :] and O[:, a, :].
        """
        full = self.result()
        n_states, n_actions = full.shape[:2]
        flat = full.reshape(n_states, n_actions, -1)
        constant = np.all(flat == flat[:, :, :1], axis=2)
        if constant.all():
            return readonly(flat[:, :, 0])
        logger.info(f"R: {np.sum(~constant)} state-action rewards depend on the outcome; taking expectations")
        expected = np.einsum('san,oan,sano->sa', transition_matrix, observation_matrix, full)
        return readonly(np.where(constant, flat[:, :, 0], expected))
