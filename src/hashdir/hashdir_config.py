"""Default configuration variables for HashDir"""

############### Configuration File ###############
# Written to the store root on creation, holds the store algorithm
CONFIG_FILE = "hashdir.yaml"

############### Directory Structure ###############
OBJECTS_DIR = "objects"
REFS_DIR = "refs"
TMP_DIR = "tmp"
# Directories are private to the owner
DIR_MODE = 0o700
# Prefix of the staging files written into the tmp directory
TMP_PREFIX = "temp-"
# Example:
#    /var/hashdir
#    ├── hashdir.yaml
#    ├── objects
#    │   └── 2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824
#    ├── refs
#    │   └── greeting
#    └── tmp

############### Hash Algorithms ###############
# Hash algorithm to use when calculating an object's ID
ALGORITHM = "sha256"
