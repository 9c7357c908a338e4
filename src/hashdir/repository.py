"""Repository Interface"""
from abc import ABC, abstractmethod
import importlib.metadata
import importlib.util


class Repository(ABC):
    """Repository is a content-addressable object store that utilizes an object's
    content identifier (the digest of its bytes) to address it, and an alias layer
    that maps human-readable names to content identifiers."""

    @staticmethod
    def version():
        """Return the version number"""
        __version__ = importlib.metadata.version("hashdir")
        return __version__

    @property
    @abstractmethod
    def path(self):
        """Location of the repository (the root directory for on-disk stores)."""
        raise NotImplementedError()

    @abstractmethod
    def put(self, data):
        """Store the content of a stream and return its content identifier. The whole
        stream is consumed in a single pass, the ID is computed while the bytes are
        written. Storing the same content twice yields the same ID and a single copy
        of the object.

        :param data: Readable binary stream (or `bytes`) holding the content.

        :return: ID - Content identifier of the stored object.
        """
        raise NotImplementedError()

    @abstractmethod
    def put_file(self, path):
        """Store the content of the file found at `path` and return its ID. The file
        is opened for the duration of the call only.

        :param str path: Path to the file to store.

        :return: ID - Content identifier of the stored object.
        """
        raise NotImplementedError()

    @abstractmethod
    def get(self, id):
        """Open the object stored under `id` for reading. The caller is responsible
        for closing the returned stream.

        :param ID id: Content identifier.

        :raises NotFoundError: If no object is stored under `id`.

        :return: io.BufferedIOBase - Stream positioned at the start of the object.
        """
        raise NotImplementedError()

    @abstractmethod
    def test(self, id):
        """Check whether an object is stored under `id`.

        :param ID id: Content identifier.

        :return: bool - `True` if the object exists, `False` if it does not.
        """
        raise NotImplementedError()

    @abstractmethod
    def remove(self, id):
        """Delete the object stored under `id`. Names pointing to the object are
        left in place.

        :param ID id: Content identifier.

        :raises NotFoundError: If no object is stored under `id`.
        """
        raise NotImplementedError()

    @abstractmethod
    def link(self, name, id):
        """Bind `name` to `id`, replacing any previous binding of `name`.

        :param str name: Alias to create or overwrite.
        :param ID id: Content identifier the alias refers to.

        :raises ConstraintError: If no object is stored under `id`.
        """
        raise NotImplementedError()

    @abstractmethod
    def unlink(self, name):
        """Remove the alias `name`.

        :param str name: Alias to delete.

        :raises NotFoundError: If the alias does not exist.
        """
        raise NotImplementedError()

    @abstractmethod
    def resolve(self, name):
        """Return the ID bound to `name`. The object itself is not checked for
        existence, use `test` for that.

        :param str name: Alias to look up.

        :raises NotFoundError: If the alias does not exist.
        :raises CorruptDataError: If the alias record is truncated or not hex.

        :return: ID - Content identifier bound to `name`.
        """
        raise NotImplementedError()


class RepositoryFactory:
    """A factory class for creating `Repository`-like objects.

    This factory class provides a method to retrieve a `Repository` object based on a
    given module (e.g., "hashdir.dirrepository") and class name (e.g., "DirRepository").
    """

    @staticmethod
    def get_repository(module_name, class_name, properties=None):
        """Get a `Repository`-like object based on the specified `module_name` and
        `class_name`.

        :param str module_name: Name of the package (e.g., "hashdir.dirrepository").
        :param str class_name: Name of the class in the given module (e.g., "DirRepository").
        :param dict properties: Desired repository properties (optional). Example:
            {
                "store_path": "/var/hashdir",
                "store_algorithm": "sha256",
            }

        :return: Repository - A repository object based on the given `module_name` and
            `class_name`.

        :raises ModuleNotFoundError: If the module is not found.
        :raises AttributeError: If the class does not exist within the module.
        """
        # Validate module
        if importlib.util.find_spec(module_name) is None:
            raise ModuleNotFoundError(f"No module found for '{module_name}'")

        imported_module = importlib.import_module(module_name)

        # If class is not part of module, raise error
        if hasattr(imported_module, class_name):
            repository_class = getattr(imported_module, class_name)
            return repository_class(properties=properties)
        raise AttributeError(
            f"Class name '{class_name}' is not an attribute of module '{module_name}'"
        )
