"""Identifiers used by HashDir: content IDs and human-readable names"""

import logging
import string
from collections import namedtuple
from urllib.parse import quote_plus, unquote_plus
from hashdir.hashdir_exceptions import DecodeError


class ID(bytes):
    """Content identifier, the raw digest of an object's bytes.

    An `ID` is an immutable byte sequence whose length is the digest size of the
    hash algorithm that produced it. Two IDs are equal if and only if their bytes
    are equal. The canonical text form, returned by `str()`, is lowercase hex.
    """

    def __str__(self):
        return self.hex()

    def __repr__(self):
        return f"ID('{self.hex()}')"

    def equal(self, other):
        """Compare this ID to another one byte by byte.

        :param bytes other: ID (or raw digest) to compare with.

        :return: True if both hold the same bytes, IDs of different length are
            never equal.
        :rtype: bool
        """
        if not isinstance(other, (bytes, bytearray)):
            return False
        return bytes(self) == bytes(other)

    def equal_string(self, other):
        """Compare this ID to another one given as hex text.

        :param str other: Hex encoded ID.

        :raises DecodeError: If `other` is not valid hex of even length.

        :return: True if the decoded bytes equal this ID.
        :rtype: bool
        """
        return self.equal(self.from_hex(other))

    @classmethod
    def from_hex(cls, text):
        """Decode hex text (either case) into an `ID`.

        :param str text: Hex encoded ID.

        :raises DecodeError: If `text` is not a string of hex digits of even length.

        :return: The decoded ID.
        :rtype: ID
        """
        if not isinstance(text, str):
            exception_string = (
                f"ID - from_hex: expected a hex string, got: {type(text)}"
            )
            logging.error(exception_string)
            raise DecodeError(exception_string)
        if len(text) % 2 != 0 or any(ch not in string.hexdigits for ch in text):
            exception_string = f"ID - from_hex: invalid hex string: '{text}'"
            logging.error(exception_string)
            raise DecodeError(exception_string)
        return cls(bytes.fromhex(text))


class Name(namedtuple("Name", ["value"])):
    """Alias given to an ID.

    Names are arbitrary, non-empty strings. Before being used as a file name they
    are percent-encoded so that separators and reserved segments can neither
    traverse directories nor collide with path syntax.

    :param str value: The alias as given by the caller.
    """

    # Segments with a special meaning to the file system
    reserved_segments = (".", "..")

    def __new__(cls, value):
        if isinstance(value, Name):
            value = value.value
        if not isinstance(value, str) or value == "":
            exception_string = f"Name: name must be a non-empty string, got: {value!r}"
            logging.error(exception_string)
            raise ValueError(exception_string)
        return super(Name, cls).__new__(cls, value)

    def __str__(self):
        return self.value

    def encode(self):
        """Percent-escape the name for use as a single path segment.

        :return: Encoded name, reversible with `Name.decode`.
        :rtype: str
        """
        encoded = quote_plus(self.value, safe="")
        if encoded in self.reserved_segments:
            encoded = encoded.replace(".", "%2E")
        return encoded

    @classmethod
    def decode(cls, encoded):
        """Build a `Name` back from its encoded form."""
        return cls(unquote_plus(encoded))


def check_id(value):
    """Coerce an ID argument (an `ID`, raw bytes or hex text) into an `ID`.

    :raises DecodeError: If a string is given that is not valid hex.
    :raises TypeError: If `value` is neither bytes nor a string.
    :raises ValueError: If the ID is empty.

    :return: The checked ID.
    :rtype: ID
    """
    if isinstance(value, str):
        checked_id = ID.from_hex(value)
    elif isinstance(value, (bytes, bytearray)):
        checked_id = ID(value)
    else:
        exception_string = f"check_id: id must be an ID, bytes or hex string: {value!r}"
        logging.error(exception_string)
        raise TypeError(exception_string)
    if len(checked_id) == 0:
        exception_string = "check_id: id cannot be empty."
        logging.error(exception_string)
        raise ValueError(exception_string)
    return checked_id
