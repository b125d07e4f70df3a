"""
Avatar storage client for Pelada Manager.

Uploads avatar image bytes to an HTTP object store and returns the URL the
image can be fetched from. The URL is then saved on the player record.
"""
import logging
import os
from typing import Optional

import requests

from ..utils import now_ts, stamp_ms
from ..utils.constants import DEFAULT_STORAGE_URL, STORAGE_URL_ENV, UPLOAD_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class AvatarUploadError(Exception):
    """Raised when an avatar cannot be stored."""
    pass


class AvatarStorageClient:
    """
    Minimal object-store client.

    Objects are written with ``PUT <base_url>/avatars/<player>_<millis>``. If
    the store answers with JSON containing a ``url`` field, that URL is
    returned; otherwise the object URL itself is.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = UPLOAD_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None
    ) -> None:
        self.base_url = (base_url or os.environ.get(STORAGE_URL_ENV) or DEFAULT_STORAGE_URL).rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def object_url(self, player_id: str, ts: Optional[float] = None) -> str:
        stamp = stamp_ms(now_ts() if ts is None else ts)
        safe_id = "".join(c if c.isalnum() or c in "-_" else "_" for c in player_id)
        return f"{self.base_url}/avatars/{safe_id}_{stamp}"

    def upload_avatar(self, player_id: str, data: bytes, content_type: str = "image/jpeg") -> str:
        """
        Upload image bytes for a player.

        Args:
            player_id: Owner of the avatar
            data: Raw image bytes
            content_type: MIME type sent with the upload

        Returns:
            URL of the stored image

        Raises:
            AvatarUploadError: If the data is empty or the upload fails
        """
        if not data:
            raise AvatarUploadError("Avatar image is empty")
        if not content_type.startswith("image/"):
            raise AvatarUploadError(f"Unsupported avatar content type: {content_type}")

        url = self.object_url(player_id)
        try:
            response = self.session.put(
                url,
                data=data,
                headers={"Content-Type": content_type},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Avatar upload failed for %s: %s", player_id, e)
            raise AvatarUploadError(f"Unable to upload avatar: {e}") from e

        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and payload.get("url"):
            return payload["url"]
        return url
