import logging
import os
import re
import time

from models.employee import upload_descriptor
from utils.constants import DOCUMENT_FIELDS, UPLOADS_URL_PREFIX

logger = logging.getLogger(__name__)


class UploadError(ValueError):
    """Raised for file parts /api/onboard does not accept."""


def stored_filename(original: str, now_ms: int | None = None) -> str:
    """
    Timestamp-prefixed name for an uploaded file.

    Any directory part of the client supplied name is dropped and runs of
    whitespace become a single underscore: "my photo.png" -> "1700000000000-my_photo.png"
    """
    name = os.path.basename((original or "").replace("\\", "/"))
    name = re.sub(r"\s+", "_", name)
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{name}"


def _uploaded_parts(files, field) -> list:
    """File parts for ``field`` that actually carry a file."""
    return [f for f in files.getlist(field) if f and f.filename]


def check_document_files(files) -> None:
    """Reject unknown file fields and more than one file per field before anything is saved."""
    for field in files.keys():
        uploads = _uploaded_parts(files, field)
        if not uploads:
            continue
        if field not in DOCUMENT_FIELDS:
            raise UploadError(f"Unexpected file field: {field}")
        if len(uploads) > 1:
            raise UploadError(f"Too many files for field: {field}")


def save_file(file_storage, uploads_dir: str) -> dict | None:
    """Write one upload to disk and return its descriptor, or None if no file was sent."""
    if not file_storage or not file_storage.filename:
        return None
    os.makedirs(uploads_dir, exist_ok=True)

    # Never overwrite an earlier upload; bump the prefix until the name is free
    now_ms = int(time.time() * 1000)
    while True:
        fname = stored_filename(file_storage.filename, now_ms)
        path = os.path.join(uploads_dir, fname)
        try:
            with open(path, "xb") as f:
                file_storage.save(f)
            break
        except FileExistsError:
            now_ms += 1

    size = os.path.getsize(path)
    logger.info(f"Stored upload {fname} ({size} bytes)")
    return upload_descriptor(
        filename=fname,
        path=f"{UPLOADS_URL_PREFIX}/{fname}",
        mimetype=file_storage.mimetype,
        size=size,
    )


def save_documents(files, uploads_dir: str) -> dict:
    """
    Save every recognised document upload.

    Returns {field: descriptor} for the fields that carried a file; fields
    without one are left out.
    """
    saved_docs = {}
    for key in DOCUMENT_FIELDS:
        uploads = _uploaded_parts(files, key)
        if not uploads:
            continue
        saved_docs[key] = save_file(uploads[0], uploads_dir)
    return saved_docs
