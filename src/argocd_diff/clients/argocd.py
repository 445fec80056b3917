"""Minimal Argo CD REST client: just the application inventory."""

import logging

import requests

from argocd_diff.clients.exceptions import InventoryFetchError
from argocd_diff.config import ActionConfig
from argocd_diff.models import Application

logger = logging.getLogger(__name__)

DEFAULT_HTTP_TIMEOUT = 30


class ArgoCDClient:
    """Reads applications from the Argo CD API server."""

    def __init__(
        self,
        base_url: str,
        token: str,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        insecure: bool = False,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.cookies.set("argocd.token", token)
        if insecure:
            self._session.verify = False

    @classmethod
    def from_config(cls, config: ActionConfig, **kwargs) -> "ArgoCDClient":
        kwargs.setdefault("insecure", config.insecure)
        return cls(config.argocd_base_url, config.argocd_token, **kwargs)

    def list_applications(self) -> list[Application]:
        """Fetch every application visible to the token.

        Raises:
            InventoryFetchError: On transport errors, non-2xx responses, or a
                body that is not the expected JSON document.
        """
        url = f"{self.base_url}/api/v1/applications"
        logger.info("Fetching apps from: %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise InventoryFetchError(f"Failed to fetch applications from {url}: {exc}") from exc
        except ValueError as exc:
            raise InventoryFetchError(f"Invalid JSON from {url}: {exc}") from exc

        if not isinstance(payload, dict):
            raise InventoryFetchError(f"Unexpected response from {url}: {type(payload).__name__}")

        items = payload.get("items") or []
        apps = [Application.from_api(item) for item in items]
        logger.info("Argo CD reports %d applications", len(apps))
        return apps
