from __future__ import annotations

"""Project-wide constants used across modules."""

# Delimiters of the blocks readable-stream marks as platform-specific.
REPLACEMENT_START: str = '/*<replacement>*/'
REPLACEMENT_END: str = '/*</replacement>*/'

DEFAULT_ENTRY: str = './bundle/main.js'
DEFAULT_BUNDLE_NAME: str = 'bundle.js'
DEFAULT_UGLIFY_CMD: str = 'uglifyjs'

# Process-local shim module, relative to the build working directory.
UTILS_MODULE_SUBPATH: str = 'bundle/utils'
