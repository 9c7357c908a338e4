"""HashDir is a content-addressable object store backed by a directory tree. Some
properties:

- Objects are immutable and never change once written
- Objects are named using the lowercase hex digest of their contents
    (thus, a content-identifier), so identical content is stored once
- Objects are written to a temporary file first and published with an
    atomic rename, partially written objects are never visible
- Human-readable names (aliases) are stored in parallel to objects, each
    name is a small file holding the hex digest it refers to
"""

from hashdir.identifier import ID, Name
from hashdir.repository import Repository, RepositoryFactory

__all__ = ("ID", "Name", "Repository", "RepositoryFactory")
__version__ = "0.1.0"
