import logging
from typing import Callable, Sequence

from pomdpformat.core.tabularpomdp import TabularPOMDP
from pomdpformat.parsing.blocks import locate_blocks, classify_block
from pomdpformat.parsing.header import ModelHeader, extract_header
from pomdpformat.parsing.lines import read_lines
from pomdpformat.parsing.tables import TransitionTableParser, \
    ObservationTableParser, RewardTableParser

logger = logging.getLogger(__name__)

def parse_tables(lines : Sequence[str], header : ModelHeader):
    """
    Returns the transition tensor, observation tensor and reward matrix.
    Blocks are parsed in file order within each table.
    """
    block_lines = locate_blocks(lines)
    parsers = {
        "T": TransitionTableParser(header),
        "O": ObservationTableParser(header),
        "R": RewardTableParser(header),
    }
    for table, parser in parsers.items():
        for lineno in block_lines[table]:
            parser.parse_block(lines, classify_block(lines[lineno - 1], lineno))
    transition_matrix = parsers["T"].result()
    observation_matrix = parsers["O"].result()
    reward_matrix = parsers["R"].state_action_rewards(transition_matrix, observation_matrix)
    return transition_matrix, observation_matrix, reward_matrix

def assemble_model(
    header : ModelHeader,
    transition_matrix,
    observation_matrix,
    reward_matrix,
    model_factory : Callable = None,
):
    if model_factory is None:
        model_factory = TabularPOMDP
    return model_factory(
        transition_matrix,
        reward_matrix,
        observation_matrix,
        header.discount,
        state_list=header.states,
        action_list=header.actions,
        observation_list=header.observations,
        initial_state_vec=header.start,
        values=header.values,
    )

def read_model(path, *, model_factory : Callable = None):
    """
    Reads a POMDP model definition file.

    `model_factory(T, R, O, discount, **names_and_start)` builds the
    returned object; by default a TabularPOMDP. T is indexed
    [state, action, next_state], R [state, action] and O
    [observation, action, next_state].

    Raises FileNotFoundError for a missing file and FormatError (or its
    subclass NumericParseError) for a malformed one.
    """
    lines = read_lines(path)
    header = extract_header(lines)
    transition_matrix, observation_matrix, reward_matrix = parse_tables(lines, header)
    logger.info(f"Read model from {path}")
    return assemble_model(
        header,
        transition_matrix,
        observation_matrix,
        reward_matrix,
        model_factory=model_factory,
    )
