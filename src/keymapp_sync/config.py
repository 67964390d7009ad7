"""
config.py - Configuration constants for keymapp_sync.

All configuration is immutable and defined at module level.
No mutable global state is permitted.
"""

from typing import Final

# Remote endpoints
GRAPHQL_URL: Final[str] = "https://oryx.zsa.io/graphql"
METADATA_URL: Final[str] = "https://configure.zsa.io/metadata.json"

# GraphQL operation requested for a layout revision
LAYOUT_OPERATION_NAME: Final[str] = "getLayout"

USER_AGENT: Final[str] = "keymapp-sync"

# Per-request deadline in seconds
DEFAULT_TIMEOUT_SECONDS: Final[float] = 30.0

# Where Keymapp looks for its database
DEFAULT_STORE_PATH: Final[str] = "~/.config/.keymapp/keymapp.sqlite3"
STORE_DIR_MODE: Final[int] = 0o750

# Config rows Keymapp creates on first start. Order matches Keymapp's own
# seeding so that rowids line up with a database it initialised itself.
DEFAULT_CONFIG: Final[tuple[tuple[str, str], ...]] = (
    ("prompt_update_check", "1"),
    ("update_check", "0"),
    ("startup_minimized", "0"),
    ("startup_autoconnect", "0"),
    ("smart_layers_enabled", "1"),
    ("api_enabled", "0"),
    ("api_port", "50051"),
)
