"""HashDir Command Line App"""
import logging
import os
import shutil
import sys
from argparse import ArgumentParser
from pathlib import Path
from hashdir import RepositoryFactory, hashdir_config
from hashdir.dirrepository import DirRepository


class HashDirParser:
    """Class to set up parsing arguments via argparse."""

    def __init__(self):
        """Initialize the argparse 'parser'."""

        program_name = "HashDir Command Line Client"
        description = (
            "Command line tool to put, get, test and remove objects in a HashDir"
            + " repository, and to link, unlink and resolve names."
        )

        self.parser = ArgumentParser(
            prog=program_name,
            description=description,
        )

        # Add positional argument
        self.parser.add_argument("store_path", help="Path of the HashDir repository")

        # Add optional arguments
        self.parser.add_argument(
            "-loglevel",
            dest="logging_level",
            help="Set logging level for the client",
        )
        self.parser.add_argument(
            "-chs",
            dest="create_hashdir",
            action="store_true",
            help="Create a HashDir repository",
        )
        self.parser.add_argument(
            "-algorithm",
            dest="algorithm",
            help="Hash algorithm of a new repository (default: sha256)",
        )

        # Object operations
        self.parser.add_argument(
            "-putfile",
            dest="client_putfile",
            help="Path of a file to store, '-' reads from stdin",
        )
        self.parser.add_argument(
            "-get",
            dest="client_get",
            help="ID of an object to write to stdout (or to -out)",
        )
        self.parser.add_argument(
            "-out",
            dest="output_path",
            help="Path to write the object retrieved with -get to",
        )
        self.parser.add_argument(
            "-test",
            dest="client_test",
            help="ID of an object to check for existence",
        )
        self.parser.add_argument(
            "-remove",
            dest="client_remove",
            help="ID of an object to remove",
        )
        self.parser.add_argument(
            "-listids",
            dest="client_listids",
            action="store_true",
            help="Flag to list the IDs of all stored objects",
        )

        # Name operations
        self.parser.add_argument(
            "-link",
            dest="client_link",
            help="Name to link to the object given with -id",
        )
        self.parser.add_argument(
            "-id",
            dest="object_id",
            help="ID of the object to link a name to",
        )
        self.parser.add_argument(
            "-unlink",
            dest="client_unlink",
            help="Name to unlink",
        )
        self.parser.add_argument(
            "-resolve",
            dest="client_resolve",
            help="Name to resolve to an ID",
        )
        self.parser.add_argument(
            "-listnames",
            dest="client_listnames",
            action="store_true",
            help="Flag to list all names",
        )

    def get_parser_args(self, args=None):
        """Get command line arguments, `sys.argv` is used if `args` is None."""
        return self.parser.parse_args(args)


class HashDirClient:
    """Create a HashDir repository to use through the command line."""

    def __init__(self, properties):
        factory = RepositoryFactory()

        # Get repository from factory
        module_name = "hashdir.dirrepository"
        class_name = "DirRepository"

        # Instance attributes
        self.repository = factory.get_repository(module_name, class_name, properties)
        logging.info("HashDirClient - Repository initialized.")

    def put_file(self, path):
        """Store a file, or stdin if `path` is '-', and return its ID."""
        if path == "-":
            return self.repository.put(sys.stdin.buffer)
        return self.repository.put_file(path)

    def get_to(self, object_id, output_path=None):
        """Copy an object to `output_path`, or to stdout if no path is given."""
        with self.repository.get(object_id) as obj_stream:
            if output_path is None:
                shutil.copyfileobj(obj_stream, sys.stdout.buffer)
                sys.stdout.buffer.flush()
            else:
                with open(output_path, "wb") as output_file:
                    shutil.copyfileobj(obj_stream, output_file)


def main(args=None):
    """Entry point of the HashDir client."""

    parser = HashDirParser()
    args = parser.get_parser_args(args)

    # Client setup process
    store_path = getattr(args, "store_path")
    if getattr(args, "create_hashdir"):
        # Create repository if -chs flag is true in a given directory
        props = {
            "store_path": store_path,
            "store_algorithm": getattr(args, "algorithm"),
        }
        HashDirClient(props)
    # Can't use client app without first initializing the repository
    store_path_config_yaml = os.path.join(store_path, hashdir_config.CONFIG_FILE)
    if not os.path.exists(store_path_config_yaml):
        raise FileNotFoundError(
            f"Missing config file ({hashdir_config.CONFIG_FILE}) at store path: {store_path}."
            + " Repository must first be initialized, use `--help` for more information."
        )
    # Setup logging, create log file if it doesn't already exist
    python_log_file_path = Path(store_path) / "python_client.log"
    if not os.path.exists(python_log_file_path):
        python_log_file_path.parent.mkdir(parents=True, exist_ok=True)
        open(python_log_file_path, "w", encoding="utf-8").close()
    # Check for logging level
    logging_level_arg = getattr(args, "logging_level")
    if logging_level_arg is None:
        logging_level = "INFO"
    else:
        logging_level = logging_level_arg.upper()
    logging.basicConfig(
        filename=python_log_file_path,
        level=logging_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Instantiate HashDir Client
    props = DirRepository.load_properties(store_path)
    hashdir_c = HashDirClient(props)
    repository = hashdir_c.repository

    object_id = getattr(args, "object_id")
    if getattr(args, "client_putfile") is not None:
        print(hashdir_c.put_file(getattr(args, "client_putfile")))
    elif getattr(args, "client_get") is not None:
        hashdir_c.get_to(getattr(args, "client_get"), getattr(args, "output_path"))
    elif getattr(args, "client_test") is not None:
        print(repository.test(getattr(args, "client_test")))
    elif getattr(args, "client_remove") is not None:
        repository.remove(getattr(args, "client_remove"))
        print(f"Object: {getattr(args, 'client_remove')} has been removed.")
    elif getattr(args, "client_link") is not None:
        if object_id is None:
            parser.parser.error("-link requires the -id of the object to link to")
        name = getattr(args, "client_link")
        repository.link(name, object_id)
        print(f"Name: {name} has been linked to: {object_id}")
    elif getattr(args, "client_unlink") is not None:
        name = getattr(args, "client_unlink")
        repository.unlink(name)
        print(f"Name: {name} has been unlinked.")
    elif getattr(args, "client_resolve") is not None:
        print(repository.resolve(getattr(args, "client_resolve")))
    elif getattr(args, "client_listids"):
        for stored_id in repository.list_ids():
            print(stored_id)
    elif getattr(args, "client_listnames"):
        for name in repository.list_names():
            print(name)


if __name__ == "__main__":
    main()
