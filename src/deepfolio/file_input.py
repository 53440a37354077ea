from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Optional

from .exceptions import FileTypeError


TEXT_MIME_TYPE = "text/plain"
INVALID_FILE_MESSAGE = "Please upload a valid .txt file."


def guess_mime_type(path: Path) -> Optional[str]:
    mime, _ = mimetypes.guess_type(str(path))
    return mime


def is_text_file(path: Path) -> bool:
    return guess_mime_type(path) == TEXT_MIME_TYPE


def read_text_file(path: Path) -> str:
    """
    Only plain-text files are accepted; anything else is rejected before its
    content is read.
    """
    path = Path(path)
    if not is_text_file(path):
        raise FileTypeError(INVALID_FILE_MESSAGE)
    return path.read_text(encoding="utf-8", errors="replace")
