from __future__ import annotations

import re
import unicodedata
from io import BytesIO
from typing import Any
from zipfile import BadZipFile, ZipFile

CV_ALLOWED_EXTENSIONS = {"pdf", "doc", "docx"}

PDF_MAGIC = b"%PDF-"
OLE_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def _safe_str(value: Any, max_len: int = 255) -> str:
    if value is None:
        return ""
    text = str(value).strip()
    if not text:
        return ""
    return text[:max_len]


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(magic) for magic in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            return any(name.startswith(prefixes) for name in archive.namelist())
    except BadZipFile:
        return False


def extension_from_filename(filename: str) -> str:
    if "." not in filename:
        return ""
    return _safe_str(filename.rsplit(".", 1)[-1], 20).lower()


def validate_cv_upload(*, filename: str, content: bytes, max_bytes: int) -> str:
    """Check size, extension and file signature; return the normalised extension."""
    ext = extension_from_filename(filename)
    if ext not in CV_ALLOWED_EXTENSIONS:
        raise ValueError(f"Format non supporté '.{ext}'. Formats acceptés : {', '.join(sorted(CV_ALLOWED_EXTENSIONS))}.")
    if not content:
        raise ValueError("Le fichier est vide.")
    if len(content) > max_bytes:
        raise ValueError(f"Le fichier est trop volumineux (max {max_bytes // (1024 * 1024)} Mo)")

    if ext == "pdf" and not content.startswith(PDF_MAGIC):
        raise ValueError("La signature du fichier ne correspond pas au format .pdf.")
    if ext == "docx" and (not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",))):
        raise ValueError("La signature du fichier ne correspond pas au format .docx.")
    if ext == "doc" and not content.startswith(OLE_MAGIC):
        raise ValueError("La signature du fichier ne correspond pas au format .doc.")
    return ext


def safe_name_part(value: str, max_len: int = 40) -> str:
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r"[^A-Za-z0-9-]+", "-", ascii_value).strip("-")
    return cleaned[:max_len] or "x"
