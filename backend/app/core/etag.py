"""ETag helpers for static downloads."""

import hashlib

from fastapi import Request, status
from fastapi.responses import Response


def compute_etag(content: str | bytes) -> str:
    """Weak ETag over the response body."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return f'W/"{hashlib.sha256(content).hexdigest()[:32]}"'


def _opaque_tag(etag: str) -> str:
    etag = etag.strip()
    if etag.startswith("W/"):
        etag = etag[2:]
    return etag.strip('"')


def check_if_none_match(request: Request, etag: str) -> bool:
    """
    True when If-None-Match names this ETag (weak comparison) or is ``*``.

    The header may list several tags separated by commas.
    """
    header = request.headers.get("If-None-Match")
    if not header:
        return False
    if header.strip() == "*":
        return True
    wanted = _opaque_tag(etag)
    return any(_opaque_tag(candidate) == wanted for candidate in header.split(","))


def create_not_modified_response(etag: str) -> Response:
    """304 Not Modified carrying the ETag."""
    return Response(
        status_code=status.HTTP_304_NOT_MODIFIED,
        headers={"ETag": etag},
    )
