"""Test module for HashDir's ID and Name classes."""

import pytest
from hashdir.hashdir_exceptions import DecodeError
from hashdir.identifier import ID, Name, check_id


def test_id_str_is_lowercase_hex():
    """Check the text form of an ID is lowercase hex, twice its length."""
    object_id = ID(b"\x01\xab\xff")
    assert str(object_id) == "01abff"
    assert len(str(object_id)) == 2 * len(object_id)


def test_id_repr():
    """Check the representation of an ID shows its hex digest."""
    assert repr(ID(b"\x01\xab")) == "ID('01ab')"


def test_id_equal():
    """Check IDs compare byte by byte."""
    assert ID(b"\x01\x02").equal(ID(b"\x01\x02"))
    assert ID(b"\x01\x02").equal(b"\x01\x02")
    assert not ID(b"\x01\x02").equal(ID(b"\x01\x03"))
    assert ID(b"\x01\x02") == ID(b"\x01\x02")


def test_id_equal_different_length():
    """Check IDs of different length are never equal."""
    assert not ID(b"\x01\x02").equal(ID(b"\x01\x02\x00"))
    assert not ID(b"\x01\x02").equal(ID(b"\x01"))


def test_id_equal_other_type():
    """Check an ID is not equal to something that is not bytes."""
    assert not ID(b"\x01\x02").equal("0102")


def test_id_equal_string(contents):
    """Check an ID equals its own text form."""
    for content in contents.values():
        object_id = ID.from_hex(content["sha256"])
        assert object_id.equal_string(str(object_id))
        assert object_id.equal_string(content["sha256"].upper())


def test_id_equal_string_different():
    """Check equal_string returns False for another valid hex string."""
    assert not ID(b"\x01\x02").equal_string("0103")
    assert not ID(b"\x01\x02").equal_string("")


@pytest.mark.parametrize("text", ["01a", "zz", "0x01", " 0102", "01 02", "é1"])
def test_id_equal_string_malformed(text):
    """Check equal_string raises DecodeError for malformed hex."""
    with pytest.raises(DecodeError):
        ID(b"\x01\x02").equal_string(text)


def test_id_from_hex_not_string():
    """Check from_hex raises DecodeError when not given a string."""
    with pytest.raises(DecodeError):
        ID.from_hex(b"0102")


def test_id_from_hex_decode_error_is_value_error():
    """Check DecodeError can be caught as a ValueError."""
    with pytest.raises(ValueError):
        ID.from_hex("xyz")


def test_id_usable_as_dict_key():
    """Check IDs hash like the bytes they hold."""
    lookup = {ID(b"\x01"): "one"}
    assert lookup[ID.from_hex("01")] == "one"


def test_name_encode_plain():
    """Check a plain name is left as is."""
    assert Name("greeting").encode() == "greeting"
    assert Name("v1.0_final-~").encode() == "v1.0_final-~"


def test_name_encode_escapes_separators():
    """Check separators and special characters are escaped."""
    assert Name("a/b").encode() == "a%2Fb"
    assert Name("../etc/passwd").encode() == "..%2Fetc%2Fpasswd"
    assert Name("hello world").encode() == "hello+world"
    assert Name("a+b").encode() == "a%2Bb"
    assert Name("100%").encode() == "100%25"


def test_name_encode_reserved_segments():
    """Check '.' and '..' cannot be used as path segments."""
    assert Name(".").encode() == "%2E"
    assert Name("..").encode() == "%2E%2E"


def test_name_encode_is_reversible():
    """Check decoding an encoded name gives the original name back."""
    for value in ["greeting", "a/b", "hello world", "a+b", ".", "..", "ünïcode", "100%"]:
        assert Name.decode(Name(value).encode()).value == value


def test_name_str():
    """Check the text form of a name is the name itself."""
    assert str(Name("a/b")) == "a/b"


def test_name_from_name():
    """Check a Name can be built from another Name."""
    assert Name(Name("greeting")) == Name("greeting")


@pytest.mark.parametrize("value", ["", None, 42])
def test_name_invalid(value):
    """Check a Name must be a non-empty string."""
    with pytest.raises(ValueError):
        Name(value)


def test_check_id():
    """Check IDs, raw bytes and hex text are all coerced into an ID."""
    expected = ID(b"\x01\xab")
    for value in (expected, b"\x01\xab", bytearray(b"\x01\xab"), "01ab", "01AB"):
        checked_id = check_id(value)
        assert isinstance(checked_id, ID)
        assert checked_id == expected


def test_check_id_invalid():
    """Check invalid IDs are rejected."""
    with pytest.raises(DecodeError):
        check_id("xyz")
    with pytest.raises(TypeError):
        check_id(42)
    with pytest.raises(ValueError):
        check_id(b"")
