"""Test module for HashDir's hashing helpers: algorithms, HashingWriter and Stream."""

import hashlib
import io
from pathlib import Path
import pytest
from hashdir.hashdir_exceptions import UnsupportedAlgorithm
from hashdir.hashing import HashingWriter, Stream, clean_algorithm, get_hash_factory


@pytest.mark.parametrize(
    "algorithm, expected",
    [
        ("sha256", "sha256"),
        ("SHA-256", "sha256"),
        ("SHA-1", "sha1"),
        ("sha_512", "sha512"),
        ("MD5", "md5"),
        ("SHA3-256", "sha3_256"),
        ("blake2b", "blake2b"),
    ],
)
def test_clean_algorithm(algorithm, expected):
    """Check algorithm names are translated to hashlib names."""
    assert clean_algorithm(algorithm) == expected


@pytest.mark.parametrize("algorithm", ["md2", "dou_algo", "", None, "shake_128"])
def test_clean_algorithm_unsupported(algorithm):
    """Check unknown and variable-length algorithms are rejected."""
    with pytest.raises(UnsupportedAlgorithm):
        clean_algorithm(algorithm)


def test_get_hash_factory_returns_fresh_hashes():
    """Check the factory returns a new hash object on every call."""
    factory = get_hash_factory("SHA-256")
    first = factory()
    first.update(b"hello")
    assert factory().hexdigest() == hashlib.sha256().hexdigest()
    assert factory().digest_size == 32


def test_hashing_writer_digest(contents):
    """Check the digest matches the bytes written to the sink."""
    for content in contents.values():
        sink = io.BytesIO()
        writer = HashingWriter(sink, get_hash_factory("sha256"))
        writer.write(content["data"])
        assert sink.getvalue() == content["data"]
        assert writer.digest().hex() == content["sha256"]


def test_hashing_writer_multiple_writes():
    """Check successive writes are hashed in order."""
    sink = io.BytesIO()
    writer = HashingWriter(sink, get_hash_factory("sha1"))
    for chunk in (b"hello", b" ", b"world"):
        assert writer.write(chunk) == len(chunk)
    assert sink.getvalue() == b"hello world"
    assert writer.bytes_written == 11
    assert writer.digest() == hashlib.sha1(b"hello world").digest()


def test_hashing_writer_digest_is_final():
    """Check the digest is computed once and writes are rejected afterwards."""
    writer = HashingWriter(io.BytesIO(), get_hash_factory("sha256"))
    writer.write(b"hello")
    digest = writer.digest()
    assert writer.digest() == digest
    with pytest.raises(ValueError):
        writer.write(b"more")


def test_hashing_writer_closes_sink():
    """Check the context manager closes the sink."""
    sink = io.BytesIO()
    with HashingWriter(sink, get_hash_factory("sha256")) as writer:
        writer.write(b"hello")
        assert not writer.closed
    assert sink.closed
    assert writer.digest() == hashlib.sha256(b"hello").digest()


def test_stream_reads_file(tmp_path):
    """Check a stream reads a file path and closes it."""
    path = tmp_path / "data.bin"
    path.write_bytes(b"x" * 20000)
    obj_stream = Stream(path.as_posix())
    assert b"".join(obj_stream) == b"x" * 20000
    obj_stream.close()
    assert obj_stream._obj.closed  # pylint: disable=W0212


def test_stream_reads_path_object(tmp_path):
    """Check a stream reads a Path object."""
    path = Path(tmp_path / "data.bin")
    path.write_bytes(b"hello")
    obj_stream = Stream(path)
    assert b"".join(obj_stream) == b"hello"
    obj_stream.close()


def test_stream_reads_from_current_position():
    """Check a stream reads a file-like object once from its position and leaves it open."""
    input_stream = io.BytesIO(b"0123456789")
    input_stream.seek(5)
    obj_stream = Stream(input_stream)
    assert b"".join(obj_stream) == b"56789"
    obj_stream.close()
    assert not input_stream.closed


def test_stream_raises_error_for_invalid_object():
    """Check a stream raises ValueError for an invalid input object."""
    with pytest.raises(ValueError):
        Stream(1234)


def test_stream_raises_error_for_missing_path(tmp_path):
    """Check a stream raises FileNotFoundError for a path that does not exist."""
    with pytest.raises(FileNotFoundError):
        Stream(tmp_path / "missing.bin")
