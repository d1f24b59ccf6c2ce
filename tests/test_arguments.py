import pytest

from swagger_mcp.models.arguments import (
    ArgumentKind,
    classify,
    to_header_value,
    to_path_segment,
    to_query_values,
    to_text,
)


@pytest.mark.parametrize("value,kind", [
    ("red", ArgumentKind.STRING),
    (7, ArgumentKind.NUMBER),
    (2.5, ArgumentKind.NUMBER),
    (True, ArgumentKind.BOOLEAN),
    ([1, 2], ArgumentKind.LIST),
    ({"a": 1}, ArgumentKind.MAP),
    (None, ArgumentKind.NULL),
    (object(), None),
    ({1, 2}, None),
])
def test_classify(value, kind):
    assert classify(value) is kind


def test_text_forms():
    assert to_text(False) == "false"
    assert to_text(42) == "42"
    assert to_text(1.5) == "1.5"
    assert to_text(["a", 1, True]) == "a,1,true"
    assert to_text({"k": "v", "n": 1}) == '{"k":"v","n":1}'


def test_unsupported_values_raise_type_error():
    with pytest.raises(TypeError, match="set"):
        to_text({1, 2})
    with pytest.raises(TypeError, match="bytes"):
        to_query_values(b"raw")


def test_path_segments_are_percent_encoded():
    assert to_path_segment(7) == "7"
    assert to_path_segment("a b/c") == "a%20b%2Fc"
    assert to_path_segment(None) is None


def test_query_values():
    assert to_query_values("red") == ["red"]
    assert to_query_values(["a", "b", None, 3]) == ["a", "b", "3"]
    assert to_query_values(None) == []
    assert to_query_values(True) == ["true"]


def test_header_values():
    assert to_header_value(["a", "b"]) == "a,b"
    assert to_header_value(None) is None
