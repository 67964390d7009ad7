"""
address.py - Configuration-page address decoding.

The ZSA configurator exposes layouts at addresses of the form

    https://configure.zsa.io/<geometry>/layouts/<layout-id>/<revision-id>/...

Only the positional path segments are extracted. Nothing here checks
that the identifiers look like hash ids; the remote service is the
authority on that.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from keymapp_sync.errors import InvalidAddressError

# geometry, "layouts", layout id, revision id
_MIN_SEGMENTS = 4


@dataclass(frozen=True)
class LayoutAddress:
    """Identifiers the remote service needs to locate a layout revision."""
    geometry: str
    layout_id: str
    revision_id: str


def parse_layout_address(address: str) -> LayoutAddress:
    """
    Decode a configuration-page address.

    Args:
        address: Address copied from the configurator's browser URL bar

    Returns:
        LayoutAddress with geometry, layout and revision identifiers

    Raises:
        InvalidAddressError: If the address is not a URL or its path has
            fewer than four non-empty segments
    """
    try:
        path = urlsplit(address).path
    except ValueError as e:
        raise InvalidAddressError(
            f"Failed to parse address: {e}", address=address, reason="parse"
        ) from e

    segments = path.lstrip("/").split("/")
    if len(segments) < _MIN_SEGMENTS or not all(segments[:_MIN_SEGMENTS]):
        raise InvalidAddressError(
            "Invalid configuration page address",
            address=address,
            reason="expected /<geometry>/layouts/<layout-id>/<revision-id>",
        )

    return LayoutAddress(
        geometry=segments[0],
        layout_id=segments[2],
        revision_id=segments[3],
    )
