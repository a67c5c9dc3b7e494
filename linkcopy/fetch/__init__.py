"""Page title fetching over HTTP."""

from linkcopy.fetch.title import (
    TITLE_PATTERN,
    TitleFetcher,
    decode_body,
    extract_title,
    fallback_title,
)
from linkcopy.fetch.transport import DEFAULT_USER_AGENT, HttpxTransport

__all__ = [
    "DEFAULT_USER_AGENT",
    "HttpxTransport",
    "TITLE_PATTERN",
    "TitleFetcher",
    "decode_body",
    "extract_title",
    "fallback_title",
]
