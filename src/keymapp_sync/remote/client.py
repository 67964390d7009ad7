"""
client.py - HTTP client for the ZSA configuration service.

Performs the two requests a sync run needs:
- POST the layout query to the GraphQL endpoint
- GET the configurator metadata document

Only the revision hash id is read out of the GraphQL response. The rest
of the Data member is kept opaque and stored byte for byte.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any

import httpx

from keymapp_sync.address import LayoutAddress
from keymapp_sync.config import (
    DEFAULT_TIMEOUT_SECONDS,
    GRAPHQL_URL,
    METADATA_URL,
    USER_AGENT,
)
from keymapp_sync.errors import FetchFailedError, MalformedResponseError
from keymapp_sync.remote.query import build_layout_query

logger = logging.getLogger("keymapp_sync.remote")

REVISION_ID_PATH = ("layout", "revision", "hashId")


@dataclass(frozen=True)
class RevisionPayload:
    """Revision hash id and the raw Data payload it keys."""
    revision_id: str
    data: bytes


_decoder = json.JSONDecoder()
_WHITESPACE = " \t\n\r"


def _skip_ws(text: str, idx: int) -> int:
    while idx < len(text) and text[idx] in _WHITESPACE:
        idx += 1
    return idx


def _top_level_members(text: str) -> dict[str, tuple[Any, str]]:
    """
    Decode a JSON object one member at a time.

    Returns a mapping of member name to (decoded value, raw source text).
    Later duplicates replace earlier ones.
    """
    idx = _skip_ws(text, 0)
    if not text.startswith("{", idx):
        raise ValueError("expected a JSON object")
    idx = _skip_ws(text, idx + 1)

    members: dict[str, tuple[Any, str]] = {}
    if text.startswith("}", idx):
        idx += 1
    else:
        while True:
            key, idx = _decoder.raw_decode(text, idx)
            if not isinstance(key, str):
                raise ValueError("expected a member name")
            idx = _skip_ws(text, idx)
            if not text.startswith(":", idx):
                raise ValueError("expected ':' after member name")
            start = _skip_ws(text, idx + 1)
            value, idx = _decoder.raw_decode(text, start)
            members[key] = (value, text[start:idx])
            idx = _skip_ws(text, idx)
            if text.startswith(",", idx):
                idx = _skip_ws(text, idx + 1)
                continue
            if text.startswith("}", idx):
                idx += 1
                break
            raise ValueError("expected ',' or '}' in object")

    if _skip_ws(text, idx) != len(text):
        raise ValueError("trailing data after JSON object")
    return members


def _match_member(members: dict[str, Any], name: str) -> str | None:
    """
    Find the member called name, preferring an exact match.

    GraphQL servers answer with a lowercase "data" member, so names are
    otherwise compared case-insensitively.
    """
    if name in members:
        return name
    folded = name.casefold()
    for key in members:
        if key.casefold() == folded:
            return key
    return None


def extract_revision(body: bytes, url: str = GRAPHQL_URL) -> RevisionPayload:
    """
    Decode a GraphQL response body.

    The body is decoded in two stages: first the top-level Data member
    as an opaque block, then layout.revision.hashId within it. The Data
    member's source text is returned byte for byte. Member names match
    exactly when they can, and case-insensitively otherwise.

    Args:
        body: Raw response body
        url: Endpoint the body came from, for error context

    Returns:
        RevisionPayload with the hash id and the raw Data bytes

    Raises:
        MalformedResponseError: If the body is not a JSON object, has no
            Data member, or Data has no string layout.revision.hashId
    """
    try:
        members = _top_level_members(body.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as e:
        # json.JSONDecodeError is a ValueError
        raise MalformedResponseError(
            f"Failed to parse revision data: {e}", url=url
        ) from e

    data_key = _match_member(members, "Data")
    if data_key is None:
        raise MalformedResponseError(
            "Response has no Data member", url=url, field="Data"
        )
    data, raw = members[data_key]

    node: Any = data
    for key in REVISION_ID_PATH:
        matched = _match_member(node, key) if isinstance(node, dict) else None
        if matched is None:
            node = None
            break
        node = node[matched]

    if not isinstance(node, str) or not node:
        raise MalformedResponseError(
            "Response has no revision hash id",
            url=url,
            field="Data." + ".".join(REVISION_ID_PATH),
        )

    return RevisionPayload(revision_id=node, data=raw.encode("utf-8"))


class OryxClient:
    """
    Blocking client for the configurator's GraphQL and metadata endpoints.

    A transport can be injected (e.g. httpx.MockTransport) so that no
    request leaves the process.
    """

    def __init__(
        self,
        graphql_url: str = GRAPHQL_URL,
        metadata_url: str = METADATA_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self._graphql_url = graphql_url
        self._metadata_url = metadata_url
        self._client = httpx.Client(
            timeout=timeout,
            transport=transport,
            headers={"User-Agent": USER_AGENT},
        )

    def __enter__(self) -> "OryxClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def close(self) -> None:
        self._client.close()

    def fetch_revision(self, address: LayoutAddress) -> RevisionPayload:
        """
        Fetch layout data for one revision.

        Args:
            address: Decoded configuration-page address

        Returns:
            RevisionPayload keyed on the revision hash id the service
            reports, which may differ from the one in the address (for
            example when the address names the "latest" revision)

        Raises:
            FetchFailedError: On transport error or non-success status
            MalformedResponseError: If the response cannot be decoded
        """
        query = build_layout_query(address)
        logger.info(
            "Fetching revision %s of layout %s (%s)",
            address.revision_id,
            address.layout_id,
            address.geometry,
            extra={"event": "fetch_revision"},
        )
        body = self._request("POST", self._graphql_url, json=query)
        payload = extract_revision(body, url=self._graphql_url)
        logger.debug("Received revision %s (%d bytes)", payload.revision_id, len(payload.data))
        return payload

    def fetch_metadata(self) -> bytes:
        """
        Fetch the configurator metadata document verbatim.

        Raises:
            FetchFailedError: On transport error or non-success status
        """
        logger.info("Fetching metadata", extra={"event": "fetch_metadata"})
        return self._request("GET", self._metadata_url)

    def _request(self, method: str, url: str, **kwargs: Any) -> bytes:
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise FetchFailedError(f"Request failed: {e}", url=url) from e

        if response.is_error:
            raise FetchFailedError(
                f"Unexpected HTTP status {response.status_code}",
                url=url,
                status_code=response.status_code,
            )
        return response.content
