"""
Runtime configuration flags.
"""

DEBUG = False

CURRENT_VERSION = "1.0.0"

# Client version written into exported interchange files when none is given
DEFAULT_CLIENT_VERSION = 1098

# lzma preset used for interchange files
OBD_COMPRESSION_PRESET = 5

# gzip level used when the sprite container is compressed on save
GZIP_COMPRESSION_LEVEL = 6
