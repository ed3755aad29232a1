"""
Server configuration - connection details and client construction.

A MealieServerConfig is shared by every operational node that references it.
The API token never lives on the config object: it is fetched from the
injected CredentialProvider each time a client is built.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field

from mealie_nodes.config import Settings, get_settings

from .errors import ConfigurationError


logger = logging.getLogger(__name__)


# Called as factory(base_url=..., token=..., timeout=...) and returns a client
# exposing recipes, households, shopping_lists, meal_plans, organizers, admin,
# parser, utilities, bulk, users, media, groups and about services.
ClientFactory = Callable[..., Any]


class CredentialProvider(Protocol):
    """Host capability that hands out decrypted credentials per config node."""

    def get_credentials(self, config_id: str) -> Dict[str, Any]:
        ...


class StaticCredentialProvider:
    """Credentials held in memory, keyed by config node ID."""

    def __init__(self, credentials: Optional[Mapping[str, Mapping[str, Any]]] = None) -> None:
        self._credentials: Dict[str, Dict[str, Any]] = {
            key: dict(value) for key, value in (credentials or {}).items()
        }

    def set_credentials(self, config_id: str, credentials: Mapping[str, Any]) -> None:
        self._credentials[config_id] = dict(credentials)

    def get_credentials(self, config_id: str) -> Dict[str, Any]:
        return dict(self._credentials.get(config_id, {}))


class SettingsCredentialProvider:
    """Serves MEALIE_API_TOKEN to every config node."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings or get_settings()

    def get_credentials(self, config_id: str) -> Dict[str, Any]:
        token = self._settings.api_token
        return {"apiToken": token.get_secret_value()} if token else {}


def load_client_factory(path: str) -> ClientFactory:
    """
    Import a client factory from a 'module:attribute' path.

    Raises:
        ConfigurationError: If the path is malformed or cannot be imported
    """
    module_name, sep, attr = path.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigurationError(f"Invalid client factory path: {path!r}")
    try:
        module = importlib.import_module(module_name)
        factory = getattr(module, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigurationError(f"Cannot load client factory {path!r}: {e}") from e
    if not callable(factory):
        raise ConfigurationError(f"Client factory {path!r} is not callable")
    return factory


class ServerConnection(BaseModel):
    """Connection details of one Mealie server (no secrets)."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(..., description="Config node ID, also the client cache key")
    name: Optional[str] = Field(None, description="Display name")
    url: str = Field("", description="Server base URL")
    timeout: float = Field(5.0, description="Request timeout in seconds", gt=0)


class MealieServerConfig:
    """
    Config node shared by operational nodes.

    Usage:
        server = MealieServerConfig(
            ServerConnection(id="server1", url="https://mealie.local"),
            credentials=StaticCredentialProvider({"server1": {"apiToken": "..."}}),
            client_factory=my_factory,
        )
        client = server.get_client()
    """

    def __init__(
        self,
        connection: ServerConnection,
        credentials: CredentialProvider,
        client_factory: ClientFactory,
    ) -> None:
        self.connection = connection
        self._credentials = credentials
        self._client_factory = client_factory

    @property
    def id(self) -> str:
        return self.connection.id

    @property
    def url(self) -> str:
        return self.connection.url

    @property
    def timeout(self) -> float:
        return self.connection.timeout

    @classmethod
    def from_settings(
        cls,
        config_id: str,
        settings: Optional[Settings] = None,
        client_factory: Optional[ClientFactory] = None,
        credentials: Optional[CredentialProvider] = None,
    ) -> "MealieServerConfig":
        """
        Build a config node from MEALIE_* settings.

        An explicitly passed client_factory wins over MEALIE_CLIENT_FACTORY.
        """
        settings = settings or get_settings()
        if client_factory is None:
            if not settings.client_factory:
                raise ConfigurationError(
                    "No client factory configured. Pass client_factory or set MEALIE_CLIENT_FACTORY"
                )
            client_factory = load_client_factory(settings.client_factory)
        return cls(
            ServerConnection(id=config_id, url=settings.url or "", timeout=settings.timeout_s),
            credentials=credentials or SettingsCredentialProvider(settings),
            client_factory=client_factory,
        )

    def get_client(self) -> Any:
        """
        Build an authenticated client.

        Raises:
            ConfigurationError: If URL or token are missing, or the factory fails
        """
        token = self._credentials.get_credentials(self.id).get("apiToken")
        if not self.url or not token:
            raise ConfigurationError("Missing Mealie server URL or API token")

        try:
            client = self._client_factory(base_url=self.url, token=token, timeout=self.timeout)
        except Exception as e:
            raise ConfigurationError(f"Failed to connect to Mealie: {e}", details=e) from e

        logger.debug(f"Created Mealie client for config {self.id}")
        return client


__all__ = [
    "ClientFactory",
    "CredentialProvider",
    "StaticCredentialProvider",
    "SettingsCredentialProvider",
    "load_client_factory",
    "ServerConnection",
    "MealieServerConfig",
]
