import base64
import os
import re

from fastapi import UploadFile
from app.core.config import get_settings
from app.core.errors import InvalidArgument
from app.schemas.submission_schema import ReceiptUpload

CHUNK_SIZE = 1024 * 1024


def read_receipt(upload: UploadFile | None) -> ReceiptUpload:
    """Read an uploaded receipt into memory and base64-encode it."""
    if upload is None or not upload.filename:
        raise InvalidArgument(
            {
                "error": "Receipt file is required",
                "message": "Please upload a receipt image (JPG, PNG) or PDF file.",
            }
        )

    settings = get_settings()
    mime_type = (upload.content_type or "").lower()
    if mime_type not in settings.allowed_receipt_types:
        raise InvalidArgument(
            {
                "error": "Invalid file type",
                "message": "Only JPG, PNG, and PDF files are allowed.",
                "allowed_types": list(settings.allowed_receipt_types),
            }
        )

    buffer = bytearray()
    while True:
        chunk = upload.file.read(CHUNK_SIZE)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > settings.max_receipt_bytes:
            raise InvalidArgument(
                {
                    "error": "File too large",
                    "message": f"Maximum file size is {settings.max_receipt_bytes} bytes.",
                }
            )
    if not buffer:
        raise InvalidArgument({"error": "Receipt file is empty"})

    safe_name = re.sub(r"[^A-Za-z0-9._-]", "_", os.path.basename(upload.filename))
    return ReceiptUpload(
        payload=base64.b64encode(bytes(buffer)).decode("ascii"),
        mime_type=mime_type,
        original_name=safe_name,
        size_bytes=len(buffer),
    )
