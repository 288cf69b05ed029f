# account_api/utils/files.py
import os
import re
import uuid
from pathlib import Path

from fastapi import Request, UploadFile

from account_api.core.config import settings
from account_api.core.exceptions import BadRequestError, ErrorMessages, PayloadTooLargeError

IMAGE_FILE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp|svg)$", re.IGNORECASE)
CHUNK_SIZE = 64 * 1024


def is_allowed_image(filename: str) -> bool:
    return bool(IMAGE_FILE_RE.search(filename or ""))


def get_upload_dir() -> Path:
    return Path(settings.FILE_UPLOAD_DIR)


def create_uploads_folder(folder: Path) -> None:
    folder.mkdir(parents=True, exist_ok=True)


def unique_filename(original: str) -> str:
    """uuid4 + 원본 확장자"""
    return f"{uuid.uuid4()}{os.path.splitext(original)[1]}"


def get_user_logo_path(filename: str) -> Path:
    return get_upload_dir() / filename


def get_upload_url_path() -> str:
    return "/" + settings.FILE_UPLOAD_URL_PATH.strip("/")


def get_file_url(filename: str, request: Request) -> str:
    base_url = str(request.base_url).rstrip("/")
    return f"{base_url}{get_upload_url_path()}/{filename}"


def save_image_upload(upload: UploadFile, max_size: int) -> str:
    """
    Validate and store an uploaded image under the upload dir.
    Returns the stored filename. The partial file is removed when the size limit is hit.
    """
    if not is_allowed_image(upload.filename):
        raise BadRequestError(ErrorMessages.INVALID_FILE_FORMAT)

    folder = get_upload_dir()
    create_uploads_folder(folder)

    filename = unique_filename(upload.filename)
    dest = folder / filename

    written = 0
    with open(dest, "wb") as out:
        while True:
            chunk = upload.file.read(CHUNK_SIZE)
            if not chunk:
                break
            written += len(chunk)
            if written > max_size:
                break
            out.write(chunk)

    if written > max_size:
        dest.unlink(missing_ok=True)
        raise PayloadTooLargeError()

    return filename


def remove_file(path: Path) -> None:
    """Delete a file if present. OSError propagates to the caller."""
    if path.exists():
        os.remove(path)
