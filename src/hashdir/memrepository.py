"""Repository that keeps all objects and names in memory"""

import io
import logging
from contextlib import closing
from hashdir import hashdir_config
from hashdir.hashdir_exceptions import ConstraintError, CorruptDataError, NotFoundError
from hashdir.hashing import HashingWriter, Stream, clean_algorithm, get_hash_factory
from hashdir.identifier import ID, Name, check_id
from hashdir.repository import Repository


class MemoryRepository(Repository):
    """In-memory implementation of the `Repository` interface, with the same error
    semantics as `DirRepository`. Useful as a stand-in for tests.

    :param dict properties: Optional dictionary with the keys (and values):
        - store_path (str, optional): Reported by `path`, nothing is written there.
        - store_algorithm (str, optional): Hash algorithm, defaults to 'sha256'.
    """

    def __init__(self, properties=None):
        properties = properties or {}
        self.root = properties.get("store_path")
        self.algorithm = clean_algorithm(
            properties.get("store_algorithm") or hashdir_config.ALGORITHM
        )
        self._hash_factory = get_hash_factory(self.algorithm)
        self.digest_size = self._hash_factory().digest_size
        # Objects keyed by hex digest, names keyed by encoded name
        self._objects = {}
        self._refs = {}

    @property
    def path(self):
        return self.root

    def with_hash(self, algorithm):
        """Return a new handle sharing this repository's contents that derives IDs
        with `algorithm`."""
        other = MemoryRepository(
            {"store_path": self.root, "store_algorithm": algorithm}
        )
        other._objects = self._objects
        other._refs = self._refs
        return other

    def put(self, data):
        if not isinstance(data, (bytes, bytearray)) and not hasattr(data, "read"):
            raise TypeError(
                "MemoryRepository - put: Data must be a readable stream or bytes."
                + f" Data type supplied: {type(data)}"
            )
        if isinstance(data, (bytes, bytearray)):
            data = io.BytesIO(data)
        buffer = io.BytesIO()
        with closing(Stream(data)) as stream:
            writer = HashingWriter(buffer, self._hash_factory)
            for chunk in stream:
                writer.write(chunk)
        object_id = ID(writer.digest())
        self._objects[str(object_id)] = buffer.getvalue()
        logging.debug("MemoryRepository - put: Stored object: %s", object_id)
        return object_id

    def put_file(self, path):
        with open(path, "rb") as file:
            return self.put(file)

    def get(self, id):
        checked_id = check_id(id)
        try:
            return io.BytesIO(self._objects[str(checked_id)])
        except KeyError as ke:
            raise NotFoundError(
                f"MemoryRepository - get: No object found for id: {checked_id}"
            ) from ke

    def test(self, id):
        return str(check_id(id)) in self._objects

    def remove(self, id):
        checked_id = check_id(id)
        try:
            del self._objects[str(checked_id)]
        except KeyError as ke:
            raise NotFoundError(
                f"MemoryRepository - remove: No object found for id: {checked_id}"
            ) from ke

    def link(self, name, id):
        checked_name = Name(name)
        checked_id = check_id(id)
        if not self.test(checked_id):
            raise ConstraintError(
                f"MemoryRepository - link: Cannot link name '{checked_name}', no object"
                + f" found for id: {checked_id}"
            )
        self._refs[checked_name.encode()] = str(checked_id)

    def unlink(self, name):
        try:
            del self._refs[Name(name).encode()]
        except KeyError as ke:
            raise NotFoundError(
                f"MemoryRepository - unlink: Name not found: '{name}'"
            ) from ke

    def resolve(self, name):
        try:
            hex_digest = self._refs[Name(name).encode()]
        except KeyError as ke:
            raise NotFoundError(
                f"MemoryRepository - resolve: Name not found: '{name}'"
            ) from ke
        # Same reading rule as a refs file on disk
        expected_length = self.digest_size * 2
        if len(hex_digest) < expected_length:
            raise CorruptDataError(
                f"MemoryRepository - resolve: Record for name '{name}' is truncated."
            )
        return ID.from_hex(hex_digest[:expected_length])

    def list_ids(self):
        return [ID.from_hex(hex_digest) for hex_digest in sorted(self._objects)]

    def list_names(self):
        return [Name.decode(encoded).value for encoded in sorted(self._refs)]
