# topmark:header:start
#
#   project      : KeyVal Resource
#   file         : constants.py
#   file_relpath : src/keyval/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""KeyVal Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

KEYVAL_VERSION: str = get_version("keyval-resource")

# Mapping used by `out` when no explicit mapping is configured.
IDENTITY_MAPPING: str = "this"

# Name under which the whole input document is exposed to mapping expressions.
DOCUMENT_NAME: str = "this"

VERSION_FILENAME: str = "version.json"
METADATA_FILENAME: str = "metadata.json"

# Permissions for files produced by `in` (before umask).
OUTPUT_FILE_MODE: int = 0o777

LOG_LEVEL_ENV: str = "KEYVAL_LOG_LEVEL"
