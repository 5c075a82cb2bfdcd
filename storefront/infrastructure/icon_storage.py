"""Icon asset storage HTTP client.

Uploads category icons to a Cloudinary-compatible asset storage API and
deletes them again. SVG icons are uploaded as "raw" resources so the
markup is served unchanged.
"""

import base64
import hashlib
import re
import secrets
import time
from typing import Any, Protocol

import httpx
import structlog

from storefront.catalog.taxonomy import IconAsset, IconRef
from storefront.domain.exceptions import IconStorageError
from storefront.infrastructure.config import Settings

logger = structlog.get_logger()

_UNSAFE_ID_CHARS = re.compile(r"[^a-z0-9_-]")


class IconStorage(Protocol):
    """Contract the taxonomy store needs from an asset storage service."""

    async def upload(self, asset: IconAsset, name_prefix: str | None = None) -> IconRef:
        ...

    async def destroy(self, public_id: str) -> bool:
        ...


def _sanitize_id(text: str) -> str:
    return _UNSAFE_ID_CHARS.sub("", re.sub(r"\s+", "_", text.strip().lower()))


def build_public_id(asset: IconAsset, name_prefix: str | None = None) -> str:
    """Build a readable public id with a random suffix.

    Args:
        asset: Icon being uploaded.
        name_prefix: Preferred prefix, usually the category name.

    Returns:
        Public id like ``"riding_gloves_3f9a1c"``.
    """
    suffix = secrets.token_hex(3)
    prefix = _sanitize_id(name_prefix or "") or _sanitize_id(asset.stem) or "icon"
    return f"{prefix}_{suffix}"


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Compute the request signature.

    Parameters are sorted by name, joined as ``k=v`` pairs with ``&`` and
    hashed with SHA-1 together with the API secret.
    """
    payload = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{payload}{api_secret}".encode("utf-8")).hexdigest()


class IconStorageClient:
    """HTTP client for the icon asset storage service.

    Example usage:
        client = IconStorageClient.from_settings(settings)
        ref = await client.upload(asset, name_prefix="Helmets")
        await client.destroy(ref.public_id)
    """

    def __init__(
        self,
        base_url: str,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize icon storage client.

        Args:
            base_url: Storage API root URL.
            cloud_name: Account (cloud) name used in the URL path.
            api_key: API key sent with signed requests.
            api_secret: Secret used to sign requests.
            folder: Folder all icons are stored in.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url
        self.cloud_name = cloud_name
        self.api_key = api_key
        self.api_secret = api_secret
        self.folder = folder
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "IconStorageClient":
        return cls(
            base_url=settings.icon_storage_url,
            cloud_name=settings.icon_storage_cloud_name,
            api_key=settings.icon_storage_api_key,
            api_secret=settings.icon_storage_api_secret,
            folder=settings.icon_folder,
            timeout=settings.icon_storage_timeout,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        params = {**params, "timestamp": int(time.time())}
        return {
            **params,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }

    async def upload(self, asset: IconAsset, name_prefix: str | None = None) -> IconRef:
        """Upload an SVG icon.

        Args:
            asset: Icon to upload.
            name_prefix: Preferred public id prefix.

        Returns:
            Persisted icon reference.

        Raises:
            IconStorageError: If the asset is not SVG or the upload fails.
        """
        if not asset.is_svg:
            raise IconStorageError(
                f"Icon must be {IconAsset.SVG_CONTENT_TYPE}, got {asset.content_type}"
            )

        encoded = base64.b64encode(asset.data).decode("ascii")
        data = self._signed(
            {
                "folder": self.folder,
                "public_id": build_public_id(asset, name_prefix),
                "overwrite": "false",
            }
        )
        data["file"] = f"data:{asset.content_type};base64,{encoded}"

        try:
            client = await self._get_client()
            response = await client.post(f"/v1_1/{self.cloud_name}/raw/upload", data=data)
        except httpx.HTTPError as e:
            logger.warning("Icon upload failed", filename=asset.filename, error=str(e))
            raise IconStorageError(f"Icon upload failed: {e}") from e

        if response.status_code != 200:
            raise IconStorageError(
                f"Icon upload rejected: {response.text}",
                response.status_code,
            )

        body = response.json()
        secure_url = body.get("secure_url")
        public_id = body.get("public_id")
        if not secure_url or not public_id:
            raise IconStorageError("Icon upload returned an incomplete reference")

        logger.info("Icon uploaded", public_id=public_id)
        return IconRef(secure_url=secure_url, public_id=public_id)

    async def destroy(self, public_id: str) -> bool:
        """Delete an icon.

        A missing asset counts as deleted.

        Args:
            public_id: Storage id of the icon.

        Returns:
            True if the asset is gone, False if the service refused.

        Raises:
            IconStorageError: If the service cannot be reached.
        """
        if not public_id.strip():
            return False

        data = self._signed({"public_id": public_id})
        try:
            client = await self._get_client()
            response = await client.post(f"/v1_1/{self.cloud_name}/raw/destroy", data=data)
        except httpx.HTTPError as e:
            raise IconStorageError(f"Icon deletion failed: {e}") from e

        if response.status_code != 200:
            logger.warning(
                "Icon deletion rejected",
                public_id=public_id,
                status_code=response.status_code,
            )
            return False

        result = response.json().get("result")
        if result in ("ok", "not found"):
            logger.info("Icon deleted", public_id=public_id, result=result)
            return True

        logger.warning("Icon deletion failed", public_id=public_id, result=result)
        return False
