"""Hashing helpers for HashDir: algorithm lookup, input streams and the
digesting writer used to compute an object's ID while it is written."""

import functools
import hashlib
import io
import logging
import os
from hashdir.hashdir_exceptions import UnsupportedAlgorithm


def clean_algorithm(algorithm_string):
    """Format an algorithm name and ensure that it is supported by `hashlib` and
    yields a fixed-length digest.

    Example:
        'SHA-256' -> 'sha256', 'SHA3-256' -> 'sha3_256'

    :param str algorithm_string: Algorithm to validate.

    :raises UnsupportedAlgorithm: If the algorithm is unknown to `hashlib` or has
        no fixed digest size (e.g. the `shake` family).

    :return: `hashlib` supported algorithm string.
    :rtype: str
    """
    if not isinstance(algorithm_string, str) or algorithm_string.strip() == "":
        exception_string = (
            f"HashDir - clean_algorithm: Algorithm must be a string: {algorithm_string!r}"
        )
        logging.error(exception_string)
        raise UnsupportedAlgorithm(exception_string)
    count = 0
    for char in algorithm_string:
        if char.isdigit():
            count += 1
    if count > 3:
        cleaned_string = algorithm_string.lower().replace("-", "_")
    else:
        cleaned_string = algorithm_string.lower().replace("-", "").replace("_", "")
    if cleaned_string not in hashlib.algorithms_available:
        exception_string = (
            f"HashDir - clean_algorithm: Algorithm not supported: {cleaned_string}"
        )
        logging.error(exception_string)
        raise UnsupportedAlgorithm(exception_string)
    if hashlib.new(cleaned_string).digest_size < 1:
        exception_string = (
            "HashDir - clean_algorithm: Algorithm has no fixed digest size:"
            + f" {cleaned_string}"
        )
        logging.error(exception_string)
        raise UnsupportedAlgorithm(exception_string)
    return cleaned_string


def get_hash_factory(algorithm):
    """Return a constructor of fresh hash objects for the given algorithm.

    :param str algorithm: Algorithm name, cleaned with `clean_algorithm`.

    :return: Callable taking no arguments and returning a `hashlib` hash object.
    """
    return functools.partial(hashlib.new, clean_algorithm(algorithm))


class HashingWriter:
    """Write-through wrapper that feeds every byte written to a sink into a hash.

    The bytes handed to the hash are exactly the bytes handed to the sink, in the
    same order, once. The digest is only finalized by `digest()`, after which
    further writes are rejected.

    :param sink: Writable binary file-like object.
    :param hash_factory: Callable returning a new `hashlib` hash object.
    """

    def __init__(self, sink, hash_factory):
        self._sink = sink
        self._hash = hash_factory()
        self._digest = None
        self.bytes_written = 0

    def write(self, data):
        """Write `data` to the sink and the hash, return the number of bytes written."""
        if self._digest is not None:
            raise ValueError("HashingWriter - write: digest already finalized")
        data = bytes(data)
        self._sink.write(data)
        self._hash.update(data)
        self.bytes_written += len(data)
        return len(data)

    def close(self):
        """Close the underlying sink."""
        self._sink.close()

    @property
    def closed(self):
        return self._sink.closed

    def digest(self):
        """Finalize the hash and return the raw digest. Subsequent calls return
        the same value."""
        if self._digest is None:
            self._digest = self._hash.digest()
        return self._digest

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class Stream(object):
    """Common interface for file-like objects.

    The input `obj` can be a file-like object or a path to a file. If `obj` is
    a path to a file, then it will be opened until :meth:`close` is called.
    If `obj` is a file-like object, it is read from its current position and
    closing is deferred to whatever process passed the stream in. Streams are
    read once, so pipes and sockets can be stored too.
    """

    def __init__(self, obj):
        if hasattr(obj, "read"):
            opened = False
        elif isinstance(obj, (str, os.PathLike)):
            # Raises FileNotFoundError for a missing path
            obj = io.open(obj, "rb")
            opened = True
        else:
            raise ValueError("Object must be a valid file path or a readable object")

        try:
            file_stat = os.stat(obj.name)
            buffer_size = file_stat.st_blksize
        except (AttributeError, TypeError, OSError):
            buffer_size = 8192

        self._obj = obj
        self._opened = opened
        self._buffer_size = buffer_size

    def __iter__(self):
        """Read underlying IO object and yield results."""
        while True:
            data = self._obj.read(self._buffer_size)

            if not data:
                break

            yield data

    def close(self):
        """Close underlying IO object if we opened it."""
        if self._opened:
            self._obj.close()
