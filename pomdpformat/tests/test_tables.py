import numpy as np
import pytest
from pomdpformat.errors import FormatError, NumericParseError
from pomdpformat.parsing.header import extract_header
from pomdpformat.parsing.model import parse_tables
from pomdpformat.tests.domains import THREE_STATES

HEADER_LINES = 4

def tables_of(text):
    """T, O, R for a model with states a b c, actions go wait
    and observations beep silence."""
    lines = (THREE_STATES.strip("\n") + "\n" + text.strip("\n")).split("\n")
    return parse_tables(lines, extract_header(lines))

def only_cells(tensor, cells, value):
    expected = np.zeros_like(tensor)
    expected[cells] = value
    return np.array_equal(tensor, expected)

def test_explicit_wildcards_cover_the_cross_product():
    T, O, R = tables_of("T: go : * : c 0.7")
    assert only_cells(T, (slice(None), 0, 2), 0.7)

    T, O, R = tables_of("O: * : b : silence 0.4")
    assert only_cells(O, (1, slice(None), 1), 0.4)

    T, O, R = tables_of("T: * : * : * 0.1")
    assert np.all(T == 0.1)

    T, O, R = tables_of("R: wait : * : * : * 2")
    assert only_cells(R, (slice(None), 1), 2)

def test_explicit_by_position_and_next_line_value():
    T, O, R = tables_of("""
T: 0 : a : 1
0.3
O: wait : 2 : beep 1e-1
""")
    assert only_cells(T, (0, 0, 1), 0.3)
    assert only_cells(O, (0, 1, 2), 0.1)

def test_row_vector():
    T, O, R = tables_of("""
T: go : a
0.2 0.3 0.5
T: * : b
0 1 0
O: go : c
0.9 0.1
O: wait : a 0.6 0.4
""")
    assert np.array_equal(T[0, 0], [0.2, 0.3, 0.5])
    assert np.array_equal(T[1, 0], [0, 1, 0])
    assert np.array_equal(T[1, 1], [0, 1, 0])
    assert np.array_equal(T[2], np.zeros((2, 3)))
    assert np.array_equal(O[:, 0, 2], [0.9, 0.1])
    assert np.array_equal(O[:, 1, 0], [0.6, 0.4])

def test_transition_matrix_rows():
    T, O, R = tables_of("""
T: wait
0.5 0.5 0
0 0.5 0.5

0.5 0 0.5
""")
    assert np.array_equal(T[:, 1, :], [
        [0.5, 0.5, 0],
        [0, 0.5, 0.5],
        [0.5, 0, 0.5],
    ])
    assert np.array_equal(T[:, 0, :], np.zeros((3, 3)))

def test_identity_and_uniform():
    T, O, R = tables_of("""
T: go
identity
T: wait uniform
""")
    assert np.array_equal(T[:, 0, :], np.eye(3))
    rows = T[:, 1, :]
    assert np.allclose(rows.sum(axis=1), 1)
    assert np.all(rows == rows[:, :1])

def test_observation_matrix():
    T, O, R = tables_of("""
O: *
0.5 0.5
1 0
0 1
""")
    for ai in range(2):
        assert np.array_equal(O[:, ai, :], [
            [0.5, 1, 0],
            [0.5, 0, 1],
        ])
    T, O, R = tables_of("O: go\nuniform")
    assert np.all(O[:, 0, :] == 0.5)
    assert np.all(O[:, 1, :] == 0)
    with pytest.raises(FormatError):
        tables_of("O: go\nidentity")

def test_later_blocks_overwrite_earlier_ones():
    T, O, R = tables_of("""
T: go
uniform
T: go : a : a 1.0
T: go : a : * 0.0
T: go : a : b 1.0
""")
    assert np.array_equal(T[0, 0], [0, 1, 0])
    assert np.allclose(T[1, 0], [1/3]*3)

def test_reward_depending_on_outcome_is_an_expectation():
    T, O, R = tables_of("""
T: go : a : b 1.0
O: go : b : beep 0.25
O: go : b : silence 0.75
R: go : a : b
1 3
""")
    assert R[0, 0] == 2.5
    assert only_cells(R, (0, 0), 2.5)

    T, O, R = tables_of("""
T: go : a : b 1.0
O: go : b : beep 0.25
O: go : b : silence 0.75
R: go : a
0 0
1 3
0 0
""")
    assert only_cells(R, (0, 0), 2.5)

def test_action_only_reward_rows_go_to_rewards():
    T, O, R = tables_of("""
R: wait
1 1 1
2 2 2
3 3 3
""")
    assert np.array_equal(R[:, 1], [1, 2, 3])
    assert np.array_equal(R[:, 0], [0, 0, 0])
    assert np.all(T == 0)

def test_tables_are_read_only():
    T, O, R = tables_of("T: go\nidentity")
    with pytest.raises(ValueError):
        T[0, 0, 0] = 0.5

def test_unknown_name():
    with pytest.raises(FormatError) as e:
        tables_of("""
T: go : a : a 1.0
T: go : a : d 1.0
""")
    assert e.value.lineno == HEADER_LINES + 2
    assert "'d'" in str(e.value)

def test_wrong_row_length():
    with pytest.raises(FormatError) as e:
        tables_of("""
T: go : a
0.5 0.5
""")
    assert e.value.lineno == HEADER_LINES + 2

def test_block_runs_out_of_lines():
    with pytest.raises(FormatError) as e:
        tables_of("""
T: go
1 0 0
0 1 0
""")
    assert e.value.lineno == HEADER_LINES + 1
    with pytest.raises(FormatError):
        tables_of("""
T: go
1 0 0
0 1 0
T: wait
identity
""")
    with pytest.raises(FormatError):
        tables_of("T: go : a : b")

def test_non_numeric_values():
    with pytest.raises(NumericParseError):
        tables_of("T: go : a : b high")
    with pytest.raises(NumericParseError):
        tables_of("R: wait\nidentity")
