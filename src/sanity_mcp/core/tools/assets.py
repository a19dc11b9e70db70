from __future__ import annotations

import base64
import binascii
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional

from sanity_mcp.core.client import SanityClient
from sanity_mcp.core.errors import SanityClientError
from sanity_mcp.core.tools._results import as_payload

DEFAULT_IMAGE_CONTENT_TYPE = "image/jpeg"


def _read_image_bytes(
    file_path: Optional[str], content_base64: Optional[str]
) -> bytes:
    if file_path and content_base64:
        raise SanityClientError(
            "Provide either file_path or content_base64, not both."
        )

    if content_base64 is not None:
        try:
            return base64.b64decode(content_base64, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise SanityClientError(f"Invalid base64 content: {exc}") from exc

    if not file_path:
        raise SanityClientError(
            "Either file_path or content_base64 must be provided."
        )

    path = Path(file_path)
    if not path.is_file():
        raise SanityClientError(f"File not found: {file_path}")
    return path.read_bytes()


async def sanity_upload_image(
    client: SanityClient,
    file_path: Optional[str] = None,
    *,
    content_base64: Optional[str] = None,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Upload an image asset from a server-side file or base64 content.
    Returns the asset document plus an image reference ready to be set on a
    document field, e.g. {"_type": "image", "asset": {"_ref": ...}}.
    """
    data = _read_image_bytes(file_path, content_base64)
    if not data:
        raise SanityClientError("Image content is empty; refusing to upload.")

    fname = filename or (Path(file_path).name if file_path else "image")
    ctype = (
        content_type or mimetypes.guess_type(fname)[0] or DEFAULT_IMAGE_CONTENT_TYPE
    )

    asset = await client.upload_image(data, fname, ctype)
    return {
        "asset": as_payload(asset),
        "reference": client.image_reference(asset.id),
    }
