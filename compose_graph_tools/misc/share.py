"""Share links carrying a whole compose document.

The payload is the base64 of the document escaped like a URI component, it
travels in the fragment of a link or in its ``yaml`` query parameter.
"""

from __future__ import annotations

import base64
from typing import Optional
from urllib.parse import parse_qs, quote, unquote, urlsplit, urlunsplit

import structlog


log = structlog.get_logger(__name__)

QUERY_PARAM = "yaml"
URI_COMPONENT_SAFE = "!*'()"
"left unescaped on top of letters, digits and -_.~"


def encode_document(text: str) -> str:
    escaped = quote(text, safe=URI_COMPONENT_SAFE)
    return base64.b64encode(escaped.encode("ascii")).decode("ascii")


def decode_document(payload: str) -> Optional[str]:
    try:
        escaped = base64.b64decode(payload, validate=True).decode("ascii")
        return unquote(escaped, errors="strict")
    except ValueError as e:
        # binascii.Error, UnicodeDecodeError and non-ASCII payload text
        log.warning("share payload not decodable", error=str(e))
        return None


def payload_from_url(url: str) -> Optional[str]:
    "query parameter first, fragment otherwise"
    parts = urlsplit(url)
    values = parse_qs(parts.query).get(QUERY_PARAM)
    if values and values[0]:
        # parse_qs reads "+" as an encoded space
        return values[0].replace(" ", "+")
    return parts.fragment or None


def document_from_url(url: str) -> Optional[str]:
    payload = payload_from_url(url)
    if payload is None:
        return None
    return decode_document(payload)


def share_url(text: str, base_url: str) -> str:
    parts = urlsplit(base_url)
    return urlunsplit(parts._replace(fragment=encode_document(text)))
