import pytest
from pomdpformat.core.namespace import NameSpace
from pomdpformat.errors import FormatError

def test_from_count():
    ns = NameSpace.from_count(3)
    assert ns == ("0", "1", "2")
    assert ns.index("2") == 2

def test_resolve():
    ns = NameSpace(["left", "right", "middle"], kind="state")
    assert ns.resolve("*") == (0, 1, 2)
    assert ns.resolve("right") == (1,)
    # numbers refer to positions even when labels are given
    assert ns.resolve("2") == (2,)
    with pytest.raises(FormatError) as e:
        ns.resolve("up", lineno=7)
    assert e.value.lineno == 7
    assert "state" in str(e.value)
    with pytest.raises(FormatError):
        ns.resolve("3")

def test_labels_take_precedence_over_positions():
    ns = NameSpace(["1", "0"])
    assert ns.resolve("0") == (1,)

def test_duplicate_labels():
    with pytest.raises(FormatError):
        NameSpace(["a", "b", "a"], kind="action")

def test_namespace_is_a_tuple():
    ns = NameSpace(["a", "b"])
    assert NameSpace(ns) is ns
    assert hash(ns) == hash(("a", "b"))
    assert list(ns) == ["a", "b"]
