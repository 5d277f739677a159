"""Local image store for avatars and post covers. Validates type and size; no resizing."""

import logging
import secrets
import time
from pathlib import Path
from typing import Literal

from app.core.errors import bad_request

logger = logging.getLogger(__name__)

ImageKind = Literal["avatars", "covers"]

ALLOWED_IMAGE_TYPES: dict[str, str] = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
}
MAX_AVATAR_BYTES = 5 * 1024 * 1024  # 5 MB
MAX_COVER_BYTES = 10 * 1024 * 1024  # 10 MB
MAX_BYTES_BY_KIND: dict[str, int] = {"avatars": MAX_AVATAR_BYTES, "covers": MAX_COVER_BYTES}

PUBLIC_PREFIX = "/uploads"


class LocalImageStore:
    """Writes images under root/<kind>/ and returns their public path (/uploads/<kind>/<file>)."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def save(self, kind: ImageKind, data: bytes, content_type: str | None) -> str:
        if not data:
            raise bad_request("No file provided.")
        media_type = (content_type or "").split(";")[0].strip().lower()
        extension = ALLOWED_IMAGE_TYPES.get(media_type)
        if extension is None:
            raise bad_request("Invalid file type. Use JPEG, PNG or WebP.")
        max_bytes = MAX_BYTES_BY_KIND[kind]
        if len(data) > max_bytes:
            raise bad_request(f"File too large. Maximum {max_bytes // (1024 * 1024)} MB.")

        directory = self.root / kind
        directory.mkdir(parents=True, exist_ok=True)
        filename = f"{kind[:-1]}-{int(time.time() * 1000)}-{secrets.token_hex(4)}{extension}"
        (directory / filename).write_bytes(data)
        logger.info("Stored %s image %s (%d bytes)", kind[:-1], filename, len(data))
        return f"{PUBLIC_PREFIX}/{kind}/{filename}"

    def delete(self, public_path: str | None) -> None:
        """Remove a previously stored file. Paths outside the store are ignored."""
        if not public_path or not public_path.startswith(PUBLIC_PREFIX + "/"):
            return
        relative = public_path[len(PUBLIC_PREFIX) + 1 :]
        target = (self.root / relative).resolve()
        if self.root.resolve() not in target.parents:
            return
        target.unlink(missing_ok=True)
