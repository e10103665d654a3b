"""NPM registry client: fetch the packument for one package."""

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import quote

from constants import Constants
from common.http_client import get_json
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import PackageNotFound, RegistryUnavailable
from versioning.models import RegistryMetadata

logger = logging.getLogger(__name__)


def encode_package_name(name: str) -> str:
    """Percent-encode a package name for the registry path.

    Scoped names keep a literal leading ``@`` and encode the rest as one
    unit, so ``@scope/pkg`` becomes ``@scope%2Fpkg``.
    """
    if name.startswith("@"):
        return "@" + quote(name[1:], safe="")
    return quote(name, safe="")


class RegistryClient:
    """Thin wrapper over the registry's ``GET /{package}`` endpoint."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        base_url = base_url or Constants.REGISTRY_URL_NPM
        if not base_url.startswith(("http://", "https://")):
            raise ValueError(f"Registry URL must be http(s): {base_url!r}")
        self.base_url = base_url.rstrip("/") + "/"
        self.token = token
        self.timeout = Constants.REQUEST_TIMEOUT if timeout is None else timeout

    def package_url(self, name: str) -> str:
        return f"{self.base_url}{encode_package_name(name)}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def fetch_metadata(self, name: str) -> RegistryMetadata:
        """Fetch and parse the packument for ``name``.

        Raises:
            PackageNotFound: On HTTP 404.
            RegistryUnavailable: On transport errors, other non-200 statuses
                or an unusable body.
        """
        url = self.package_url(name)
        with Timer() as timer:
            status_code, _, data = get_json(url, headers=self._headers(), timeout=self.timeout)

        if is_debug_enabled(logger):
            logger.debug(
                "Registry response",
                extra=extra_context(
                    event="http_response",
                    component="registry",
                    status_code=status_code,
                    duration_ms=timer.duration_ms(),
                    target=safe_url(url),
                    package_manager="npm",
                )
            )

        if status_code == 404:
            raise PackageNotFound(name)
        if status_code != 200:
            raise RegistryUnavailable(
                f"Registry returned HTTP {status_code} for {safe_url(url)}"
            )
        if not isinstance(data, dict):
            raise RegistryUnavailable(f"Registry returned invalid JSON for {safe_url(url)}")

        try:
            metadata = RegistryMetadata.from_packument(name, data)
        except ValueError as exc:
            raise RegistryUnavailable(f"Unexpected registry document for {name}: {exc}") from exc
        logger.debug("Fetched %d versions of %s", len(metadata.versions), name)
        return metadata
