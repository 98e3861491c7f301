import pytest

from contentsync.core.indexed import from_indexed_map, to_indexed_map


def test_to_indexed_map_uses_stringified_positions():
    assert to_indexed_map(["a", "b", "c"]) == {"0": "a", "1": "b", "2": "c"}
    assert list(to_indexed_map(["x", "y"]).keys()) == ["0", "1"]


def test_to_indexed_map_of_empty_sequence():
    assert to_indexed_map([]) == {}


def test_from_indexed_map_sorts_numerically_not_lexicographically():
    stored = {"0": "a", "1": "b", "10": "k", "2": "c"}
    assert from_indexed_map(stored) == ["a", "b", "c", "k"]


def test_from_indexed_map_ignores_insertion_order():
    stored = {"2": "c", "0": "a", "1": "b"}
    assert from_indexed_map(stored) == ["a", "b", "c"]


def test_from_indexed_map_places_non_numeric_keys_last():
    stored = {"b": "y", "1": "second", "a": "x", "0": "first"}
    assert from_indexed_map(stored) == ["first", "second", "x", "y"]


def test_from_indexed_map_accepts_plain_list():
    values = ["a", "b"]
    decoded = from_indexed_map(values)
    assert decoded == values
    assert decoded is not values


def test_from_indexed_map_rejects_scalars():
    with pytest.raises(TypeError):
        from_indexed_map("abc")


@pytest.mark.parametrize("values", [[], ["only"], ["h1", "", "h3"], list(range(12))])
def test_indexed_map_round_trip(values):
    assert from_indexed_map(to_indexed_map(values)) == values
    encoded = to_indexed_map(values)
    assert to_indexed_map(from_indexed_map(encoded)) == encoded
