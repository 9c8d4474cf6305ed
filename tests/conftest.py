"""Pytest configuration and fixtures."""

import pytest

from samples import Basic, Lists, Nested, T1, Tuples


@pytest.fixture
def basic():
    """Single string field record."""
    return Basic(hello="world")


@pytest.fixture
def bools():
    """Booleans interleaved with strings."""
    return T1(bool1=True, middle="hi", bool2=False, after="world")


@pytest.fixture
def nested():
    """Record nested in a record."""
    return Nested(nest=Basic(hello="world"))


@pytest.fixture
def tuples():
    """Tuple holding an empty list, a string and a record."""
    return Tuples(t=([], "a", Basic(hello="world")))


@pytest.fixture
def lists():
    """Lists of records, inside a field and inside a tuple."""
    return Lists(
        l1=[
            T1(bool1=True, middle="", bool2=True, after=""),
            T1(bool1=False, middle="", bool2=False, after=""),
        ],
        l2=(
            [
                T1(bool1=True, middle="", bool2=True, after=""),
                T1(bool1=False, middle="", bool2=False, after=""),
            ],
            "a",
            T1(bool1=True, middle="hi", bool2=False, after="world"),
            ["x", "y", "z"],
        ),
    )


@pytest.fixture
def lists_json():
    """Expected JSON for the lists fixture."""
    return (
        '{"l1":[{"bool1":true,"middle":"","bool2":true,"after":""},'
        '{"bool1":false,"middle":"","bool2":false,"after":""}],'
        '"l2":[[{"bool1":true,"middle":"","bool2":true,"after":""},'
        '{"bool1":false,"middle":"","bool2":false,"after":""}],'
        '"a",{"bool1":true,"middle":"hi","bool2":false,"after":"world"},'
        '["x","y","z"]]}'
    )


@pytest.fixture
def basic_fragments():
    """Fragments a pretty renderer emits for Basic(hello="world")."""
    return ["Basic", " {\n", "    ", "hello", ": ", '"', "world", '"', ",\n", "}"]
