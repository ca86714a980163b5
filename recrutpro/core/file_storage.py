from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from recrutpro.core.config import settings


class FileStorage:
    """Local bucket for uploaded CVs, served back under ``/v1/files/``."""

    def __init__(self, root_dir: str, public_base_url: str):
        self.root = Path(root_dir).resolve()
        self.public_base_url = public_base_url.rstrip("/")

    def resolve(self, key: str) -> Path:
        path = (self.root / key).resolve()
        if path != self.root and self.root not in path.parents:
            raise ValueError("Invalid file key.")
        return path

    def upload(self, key: str, content: bytes) -> None:
        path = self.resolve(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/v1/files/{key}"


@lru_cache(maxsize=1)
def get_file_storage() -> FileStorage:
    return FileStorage(settings.uploads_dir, settings.public_base_url)
