"""MongoDB connection management."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import ConfigurationError as MongoConfigurationError

URI_SCHEMES = ("mongodb://", "mongodb+srv://")


class ConfigurationError(Exception):
    """Raised when the store cannot be configured. Not retryable."""


@dataclass
class ConnectionOptions:
    """Connection settings for the work order database."""

    uri: str
    username: str = ""
    password: str = ""
    database: str = "finfabrik"
    collection: str = "workOrder"
    max_pool_size: int = 10
    timeout_ms: int = 5000


class ConnectionManager:
    """Owns the pooled MongoDB client shared by all store operations.

    The client keeps a thread-safe pool of sockets; every command checks one
    out and returns it when the command completes.
    """

    def __init__(
        self,
        options: Optional[ConnectionOptions],
        logger: logging.Logger | None = None,
    ):
        if options is None:
            raise ConfigurationError("Missing database connection options")

        uri = (options.uri or "").strip()
        if not uri.startswith(URI_SCHEMES):
            raise ConfigurationError(
                f"Invalid MongoDB URI, expected one of {', '.join(URI_SCHEMES)}"
            )

        kwargs: dict[str, Any] = {
            "maxPoolSize": options.max_pool_size,
            "serverSelectionTimeoutMS": options.timeout_ms,
            "tz_aware": True,
        }
        if options.username:
            kwargs["username"] = options.username
        if options.password:
            kwargs["password"] = options.password

        try:
            self._client: MongoClient = MongoClient(uri, **kwargs)
        except (MongoConfigurationError, ValueError) as e:
            raise ConfigurationError(f"Invalid MongoDB URI: {e}") from e

        self._options = options
        self._logger = logger or logging.getLogger("work-orders")
        self._logger.debug(
            f"Connection pool ready for {options.database}.{options.collection} "
            f"(max pool size {options.max_pool_size})"
        )

    @classmethod
    def initialize(
        cls,
        options: Optional[ConnectionOptions],
        logger: logging.Logger | None = None,
    ) -> "ConnectionManager":
        return cls(options, logger)

    def collection(self) -> Collection:
        """Return the work order collection handle."""
        return self._client[self._options.database][self._options.collection]

    def close(self) -> None:
        """Close the client and release every pooled connection."""
        self._client.close()
        self._logger.debug("Connection pool closed")

    def __enter__(self) -> "ConnectionManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
