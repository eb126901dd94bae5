# tests/model/test_scenario.py
import pytest

from scenarios.model.scenario import Scenario, is_alnum_identifier
from scenarios.utils.errors import (
    DuplicateVariableError,
    InvalidNameError,
    InvalidVariableError,
    ScenarioError,
)


def test_scenario_basic():
    s = Scenario("A", {"x": "1", "_y2": ""})

    assert s.name == "A"
    assert s.has_variable("x")
    assert s.get_variable("_y2") == ""
    assert s.get_variable("missing") is None
    assert sorted(s.variable_names()) == ["_y2", "x"]
    assert str(s) == 'Scenario "A"'


def test_scenario_is_immutable():
    src = {"x": "1"}
    s = Scenario("A", src)
    src["x"] = "2"

    assert s.get_variable("x") == "1"
    with pytest.raises(TypeError):
        s.variables["x"] = "3"


@pytest.mark.parametrize("name", ["", "a\0b"])
def test_invalid_name(name):
    with pytest.raises(InvalidNameError):
        Scenario(name)


@pytest.mark.parametrize("key", ["", "1abc", "a-b", "a b", "ä"])
def test_invalid_variable_name(key):
    with pytest.raises(InvalidVariableError) as exc:
        Scenario("A", {key: "v"})
    assert isinstance(exc.value, ScenarioError)
    assert isinstance(exc.value, ValueError)


def test_from_pairs_rejects_duplicates():
    with pytest.raises(DuplicateVariableError) as exc:
        Scenario.from_pairs("A", [("x", "1"), ("x", "2")])
    assert exc.value.name == "x"


def test_equality_and_hash():
    a = Scenario("A", {"x": "1"})
    b = Scenario("A", {"x": "1"})

    assert a == b
    assert hash(a) == hash(b)
    assert a != Scenario("A", {"x": "2"})


def test_identifier_rules():
    assert is_alnum_identifier("FOO_bar9")
    assert not is_alnum_identifier("9foo")
    assert not is_alnum_identifier("")
