"""
Response clean-up before a body goes back to a tenant.

``scrub_labels`` is a textual pass over the serialized body, not a JSON
transform. The three replacements run in a fixed order: the label key is
masked to a single space, then the tenant token is removed, then the
``," ":" "`` pair left behind by the first two steps is dropped.
"""
import json
import logging
from typing import Optional

from roxy_tenancy.config import DEFAULT_TENANCY_LABEL, DEFAULT_TENANT_HEADER
from roxy_tenancy.naming import network_prefix
from roxy_tenancy.request import InboundRequest

logger = logging.getLogger(__name__)

EMPTY_LABEL_PAIR = b'," ":" "'


def scrub_labels(
    body: bytes,
    request: InboundRequest,
    *,
    tenancy_label: str = DEFAULT_TENANCY_LABEL,
    tenant_header: str = DEFAULT_TENANT_HEADER,
) -> bytes:
    """Remove the tenancy label and tenant token from a serialized response."""
    new_body = body.replace(tenancy_label.encode(), b" ")
    token = request.header(tenant_header)
    if token:
        new_body = new_body.replace(token.encode(), b"")
    new_body = new_body.replace(EMPTY_LABEL_PAIR, b"")
    logger.debug("Clean up labeling done.")
    return new_body


def _short_name(name: str) -> str:
    # Swarm reports networks as "<node>/<name>"
    return name.rsplit("/", 1)[-1]


def filter_networks(
    body: bytes,
    request: InboundRequest,
    *,
    tenant_header: str = DEFAULT_TENANT_HEADER,
) -> Optional[bytes]:
    """
    Keep only the calling tenant's networks, with the tenant prefix stripped.

    Returns a JSON array, or None when the body cannot be decoded or the
    result cannot be encoded. None means total failure; the caller must not
    forward anything in that case.
    """
    try:
        networks = json.loads(body)
    except (ValueError, UnicodeDecodeError) as e:
        logger.error(f"Failed to decode network list: {e}")
        return None
    if networks is None:
        networks = []
    if not isinstance(networks, list) or not all(isinstance(n, dict) for n in networks):
        logger.error(f"Network list must be a JSON array of objects, got {type(networks).__name__}")
        return None

    name_prefix = network_prefix(request.header(tenant_header))
    candidates = []
    for network in networks:
        name = _short_name(str(network.get("Name") or ""))
        if name.startswith(name_prefix):
            candidates.append({**network, "Name": name[len(name_prefix):]})

    try:
        encoded = json.dumps(candidates)
    except (TypeError, ValueError) as e:
        logger.error(f"Failed to encode network list: {e}")
        return None
    return encoded.encode()
