"""Remote configuration service access."""

from keymapp_sync.remote.client import OryxClient, RevisionPayload, extract_revision
from keymapp_sync.remote.query import LAYOUT_QUERY, build_layout_query

__all__ = [
    "OryxClient",
    "RevisionPayload",
    "extract_revision",
    "LAYOUT_QUERY",
    "build_layout_query",
]
