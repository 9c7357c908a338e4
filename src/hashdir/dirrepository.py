"""Core module for DirRepository"""

import io
import logging
import os
from contextlib import closing
from tempfile import NamedTemporaryFile
import yaml
from hashdir import hashdir_config
from hashdir.hashdir_exceptions import (
    ConstraintError,
    CorruptDataError,
    DecodeError,
    NotFoundError,
)
from hashdir.hashing import HashingWriter, Stream, clean_algorithm, get_hash_factory
from hashdir.identifier import ID, Name, check_id
from hashdir.repository import Repository


class DirRepository(Repository):
    """DirRepository is a content-addressable object store backed by a directory. Objects
    are written once under the hex digest of their content, and names (aliases) are small
    files holding the hex digest they refer to.

    DirRepository initializes using a given properties dictionary. Upon initialization it
    creates the directory tree (root, `objects/`, `refs/` and `tmp/`) if missing and writes
    a configuration file 'hashdir.yaml' holding the store algorithm to the root directory.
    The hash algorithm of an instance never changes, use `with_hash` to get a handle on the
    same directory that uses another algorithm.

    :param dict properties: A Python dictionary with the following keys (and values):
        - store_path (str): Path to the repository directory.
        - store_algorithm (str, optional): Hash algorithm used to calculate IDs. Defaults
          to the value found in 'hashdir.yaml', or 'sha256' for a new repository.
    """

    # Property (repository configuration) requirements
    property_required_keys = ["store_path"]
    # Permissions settings for creating directories
    dmode = hashdir_config.DIR_MODE

    def __init__(self, properties=None):
        if not properties:
            exception_string = (
                "DirRepository - Repository properties must be supplied."
                + f" Properties: {properties}"
            )
            logging.debug(exception_string)
            raise ValueError(exception_string)

        checked_properties = self._validate_properties(properties)
        self.root = os.fspath(checked_properties["store_path"])
        self.hashdir_configuration_yaml = os.path.join(
            self.root, hashdir_config.CONFIG_FILE
        )

        # Resolve the store algorithm, an existing configuration provides the default
        stored_algorithm = None
        if os.path.exists(self.hashdir_configuration_yaml):
            stored_algorithm = clean_algorithm(
                self.load_properties(self.root)["store_algorithm"]
            )
        prop_store_algorithm = checked_properties.get("store_algorithm")
        if prop_store_algorithm is None:
            prop_store_algorithm = stored_algorithm or hashdir_config.ALGORITHM
        self.algorithm = clean_algorithm(prop_store_algorithm)
        if stored_algorithm is not None and stored_algorithm != self.algorithm:
            logging.warning(
                "DirRepository - Store algorithm (%s) differs from the one found in %s (%s)."
                + " Objects stored with the other algorithm will not be found by their IDs.",
                self.algorithm,
                self.hashdir_configuration_yaml,
                stored_algorithm,
            )
        self._hash_factory = get_hash_factory(self.algorithm)
        self.digest_size = self._hash_factory().digest_size

        # Complete initialization by setting and creating store directories
        self.objects = os.path.join(self.root, hashdir_config.OBJECTS_DIR)
        self.refs = os.path.join(self.root, hashdir_config.REFS_DIR)
        self.tmp = os.path.join(self.root, hashdir_config.TMP_DIR)
        for directory in (self.root, self.objects, self.refs, self.tmp):
            self._create_path(directory)

        if not os.path.exists(self.hashdir_configuration_yaml):
            logging.debug(
                "DirRepository - Configuration file not found. Writing configuration file."
            )
            self._write_properties()
        logging.debug(
            "DirRepository - Initialization success. Store root: %s, algorithm: %s",
            self.root,
            self.algorithm,
        )

    # Configuration and Related Methods

    @staticmethod
    def load_properties(store_path):
        """Get and return the contents of the configuration found at `store_path`.

        :param str store_path: Path to the repository directory.

        :raises FileNotFoundError: If 'hashdir.yaml' is not found in `store_path`.

        :return: Repository properties with the keys ``store_path`` and
            ``store_algorithm``.
        :rtype: dict
        """
        hashdir_yaml_path = os.path.join(store_path, hashdir_config.CONFIG_FILE)
        if not os.path.exists(hashdir_yaml_path):
            exception_string = (
                "DirRepository - load_properties: hashdir.yaml not found"
                + f" in store root path: {store_path}"
            )
            logging.critical(exception_string)
            raise FileNotFoundError(exception_string)

        with open(hashdir_yaml_path, "r", encoding="utf-8") as hd_yaml_file:
            yaml_data = yaml.safe_load(hd_yaml_file)

        logging.debug(
            "DirRepository - load_properties: Successfully retrieved 'hashdir.yaml' properties."
        )
        return {
            "store_path": os.fspath(store_path),
            "store_algorithm": yaml_data["store_algorithm"],
        }

    def _write_properties(self):
        """Writes 'hashdir.yaml' to the repository root with the store algorithm."""
        hashdir_configuration_yaml = self._build_hashdir_yaml_string(self.algorithm)
        with open(
            self.hashdir_configuration_yaml, "w", encoding="utf-8"
        ) as hd_yaml_file:
            hd_yaml_file.write(hashdir_configuration_yaml)

        logging.debug(
            "DirRepository - write_properties: Configuration file written to: %s",
            self.hashdir_configuration_yaml,
        )

    @staticmethod
    def _build_hashdir_yaml_string(store_algorithm):
        """Build a YAML string representing the configuration for a repository.

        :param str store_algorithm: Hash algorithm used for calculating IDs.

        :return: A YAML string representing the configuration.
        :rtype: str
        """
        hashdir_configuration_yaml = f"""
        # Configuration of this HashDir repository

        ############### Hash Algorithms ###############
        # Hash algorithm used to calculate the IDs (file names) of stored objects
        store_algorithm: "{store_algorithm}"  # WARNING: DO NOT CHANGE ON A POPULATED STORE
        """
        return hashdir_configuration_yaml

    def _validate_properties(self, properties):
        """Validate a properties dictionary by checking if it contains all the
        required keys and non-None values.

        :param dict properties: Dictionary containing repository properties.

        :raises KeyError: If key is missing from the required keys.
        :raises ValueError: If value is missing for a required key.

        :return: The given properties object (that has been validated).
        :rtype: dict
        """
        if not isinstance(properties, dict):
            exception_string = (
                "DirRepository - _validate_properties: Invalid argument -"
                + " expected a dictionary."
            )
            logging.debug(exception_string)
            raise ValueError(exception_string)

        for key in self.property_required_keys:
            if key not in properties:
                exception_string = (
                    "DirRepository - _validate_properties: Missing required"
                    + f" key: {key}."
                )
                logging.debug(exception_string)
                raise KeyError(exception_string)
            if properties.get(key) is None:
                exception_string = (
                    "DirRepository - _validate_properties: Value for key:"
                    + f" {key} is none."
                )
                logging.debug(exception_string)
                raise ValueError(exception_string)
        return properties

    @property
    def path(self):
        return self.root

    def with_hash(self, algorithm):
        """Return a new handle on this repository's directory that derives IDs with
        `algorithm`. Stored objects are not rehashed.

        :param str algorithm: Hash algorithm for the new handle.

        :return: A new `DirRepository` rooted at the same path.
        :rtype: DirRepository
        """
        return DirRepository({"store_path": self.root, "store_algorithm": algorithm})

    # Public API / Repository Interface

    def put(self, data):
        logging.debug("DirRepository - put: Request to store object.")
        self._check_arg_data(data)
        if isinstance(data, (bytes, bytearray)):
            data = io.BytesIO(data)

        with closing(Stream(data)) as stream:
            object_id = self._move_and_get_id(stream)

        logging.info("DirRepository - put: Successfully stored object: %s", object_id)
        return object_id

    def put_file(self, path):
        logging.debug("DirRepository - put_file: Request to store file: %s", path)
        with open(path, "rb") as file:
            return self.put(file)

    def get(self, id):
        checked_id = check_id(id)
        logging.debug("DirRepository - get: Request to retrieve object: %s", checked_id)
        try:
            obj_stream = io.open(self._build_path(self.objects, str(checked_id)), "rb")
        except FileNotFoundError as fnfe:
            exception_string = f"DirRepository - get: No object found for id: {checked_id}"
            logging.error(exception_string)
            raise NotFoundError(exception_string) from fnfe
        logging.info("DirRepository - get: Retrieved object: %s", checked_id)
        return obj_stream

    def test(self, id):
        checked_id = check_id(id)
        try:
            os.stat(self._build_path(self.objects, str(checked_id)))
        except FileNotFoundError:
            return False
        return True

    def remove(self, id):
        checked_id = check_id(id)
        logging.debug("DirRepository - remove: Request to delete object: %s", checked_id)
        try:
            os.remove(self._build_path(self.objects, str(checked_id)))
        except FileNotFoundError as fnfe:
            exception_string = (
                f"DirRepository - remove: No object found for id: {checked_id}"
            )
            logging.error(exception_string)
            raise NotFoundError(exception_string) from fnfe
        logging.info("DirRepository - remove: Deleted object: %s", checked_id)

    def link(self, name, id):
        checked_name = self._check_name(name)
        checked_id = check_id(id)
        logging.debug(
            "DirRepository - link: Request to link name '%s' to id: %s",
            checked_name,
            checked_id,
        )
        if not self.test(checked_id):
            exception_string = (
                f"DirRepository - link: Cannot link name '{checked_name}', no object"
                + f" found for id: {checked_id}"
            )
            logging.error(exception_string)
            raise ConstraintError(exception_string)

        self._write_refs_file(
            self._build_path(self.refs, checked_name.encode()), checked_id
        )
        logging.info(
            "DirRepository - link: Linked name '%s' to id: %s", checked_name, checked_id
        )

    def unlink(self, name):
        checked_name = self._check_name(name)
        logging.debug("DirRepository - unlink: Request to unlink name '%s'", checked_name)
        try:
            os.remove(self._build_path(self.refs, checked_name.encode()))
        except FileNotFoundError as fnfe:
            exception_string = f"DirRepository - unlink: Name not found: '{checked_name}'"
            logging.error(exception_string)
            raise NotFoundError(exception_string) from fnfe
        logging.info("DirRepository - unlink: Unlinked name '%s'", checked_name)

    def resolve(self, name):
        checked_name = self._check_name(name)
        expected_length = self.digest_size * 2
        try:
            with open(
                self._build_path(self.refs, checked_name.encode()), "rb"
            ) as refs_file:
                hex_digest = refs_file.read(expected_length)
        except FileNotFoundError as fnfe:
            exception_string = f"DirRepository - resolve: Name not found: '{checked_name}'"
            logging.error(exception_string)
            raise NotFoundError(exception_string) from fnfe

        if len(hex_digest) < expected_length:
            exception_string = (
                f"DirRepository - resolve: Refs file for name '{checked_name}' is truncated."
                + f" Expected {expected_length} bytes, found: {len(hex_digest)}"
            )
            logging.error(exception_string)
            raise CorruptDataError(exception_string)
        try:
            return ID.from_hex(hex_digest.decode("ascii"))
        except (UnicodeDecodeError, DecodeError) as err:
            exception_string = (
                f"DirRepository - resolve: Refs file for name '{checked_name}' does not"
                + f" hold a hex digest: {hex_digest!r}"
            )
            logging.error(exception_string)
            raise CorruptDataError(exception_string) from err

    def list_ids(self):
        """Return the IDs of all stored objects, sorted.

        :return: List of IDs.
        :rtype: list
        """
        return [ID.from_hex(file_name) for file_name in self._get_file_names(self.objects)]

    def list_names(self):
        """Return the names of all aliases, sorted by encoded name.

        :return: List of names.
        :rtype: list
        """
        return [
            Name.decode(file_name).value
            for file_name in self._get_file_names(self.refs)
        ]

    # DirRepository Core Methods

    def _move_and_get_id(self, stream):
        """Copy the contents of `stream` into a temporary file while calculating its
        digest, then atomically move the temporary file to its permanent address in
        `/objects`. If the object already exists it is replaced by identical bytes.
        The temporary file is deleted if anything fails before the move completes.

        :param Stream stream: Object stream.

        :return: ID - Content identifier of the stored object.
        """
        tmp = self._mktmpfile()
        logging.debug(
            "DirRepository - _move_and_get_id: tmp file created: %s, calculating digest.",
            tmp.name,
        )
        tmp_file_completion_flag = False
        try:
            with HashingWriter(tmp, self._hash_factory) as writer:
                for data in stream:
                    writer.write(data)
            object_id = ID(writer.digest())
            object_path = self._build_path(self.objects, str(object_id))
            # Publication point, the object is not visible before the move
            os.replace(tmp.name, object_path)
            tmp_file_completion_flag = True
            logging.debug(
                "DirRepository - _move_and_get_id: Moved %s bytes to: %s",
                writer.bytes_written,
                object_path,
            )
            return object_id
        except Exception as err:
            exception_string = (
                "DirRepository - _move_and_get_id: failed to store object."
                + f" Unexpected {err=}, {type(err)=}"
            )
            logging.error(exception_string)
            raise err
        finally:
            if not tmp_file_completion_flag:
                self._delete_tmp_file(tmp)

    def _write_refs_file(self, refs_file_path, ref_id):
        """Write the hex digest of `ref_id` into a temporary file and move it to
        `refs_file_path`, replacing any existing refs file.

        :param str refs_file_path: Permanent address of the refs file.
        :param ID ref_id: Content identifier to write.
        """
        tmp = self._mktmpfile()
        tmp_file_completion_flag = False
        try:
            with tmp as tmp_refs_file:
                tmp_refs_file.write(str(ref_id).encode("ascii"))
            os.replace(tmp.name, refs_file_path)
            tmp_file_completion_flag = True
        except Exception as err:
            exception_string = (
                "DirRepository - _write_refs_file: failed to write refs file:"
                + f" {refs_file_path}. Unexpected {err=}, {type(err)=}"
            )
            logging.error(exception_string)
            raise err
        finally:
            if not tmp_file_completion_flag:
                self._delete_tmp_file(tmp)

    def _mktmpfile(self):
        """Create a temporary file in the repository's tmp directory ready to be written.

        :return: file object - object with a file-like interface.
        """
        # Physically create directory if it doesn't exist
        if os.path.exists(self.tmp) is False:
            self._create_path(self.tmp)
        return NamedTemporaryFile(
            dir=self.tmp, prefix=hashdir_config.TMP_PREFIX, delete=False
        )

    @staticmethod
    def _delete_tmp_file(tmp):
        """Close and delete a temporary file, errors are logged and not raised so that
        the error being handled propagates."""
        try:
            tmp.close()
            if os.path.exists(tmp.name):
                os.remove(tmp.name)
        except OSError as err:
            logging.error(
                "DirRepository - _delete_tmp_file: Unexpected %s while attempting to"
                + " delete tmp file: %s",
                repr(err),
                tmp.name,
            )

    def _create_path(self, path):
        """Physically create the folder path (and all intermediate ones) on disk.

        :param str path: The path to create.

        :raises NotADirectoryError: If the path already exists but is not a directory.
        """
        try:
            os.makedirs(path, self.dmode)
        except FileExistsError as fee:
            if not os.path.isdir(path):
                exception_string = (
                    f"DirRepository - _create_path: expected {path} to be a directory"
                )
                logging.error(exception_string)
                raise NotADirectoryError(exception_string) from fee

    @staticmethod
    def _build_path(directory, file_name):
        """Build the absolute path of a file in one of the repository directories."""
        return os.path.join(directory, file_name)

    @staticmethod
    def _get_file_names(directory):
        """Get the sorted names of the regular files in `directory`."""
        with os.scandir(directory) as entries:
            return sorted(entry.name for entry in entries if entry.is_file())

    # Other Static Methods

    @staticmethod
    def _check_arg_data(data):
        """Checks a data argument to ensure that it is either a readable stream or bytes.

        :param data: Object to validate.
        :type data: io.BufferedIOBase, bytes

        :return: True if valid.
        :rtype: bool
        """
        if not isinstance(data, (bytes, bytearray)) and not hasattr(data, "read"):
            exception_string = (
                "DirRepository - _check_arg_data: Data must be a readable stream or bytes."
                + f" Data type supplied: {type(data)}"
            )
            logging.error(exception_string)
            raise TypeError(exception_string)
        return True

    @staticmethod
    def _check_name(name):
        """Coerce a name argument into a `Name`."""
        return Name(name)
