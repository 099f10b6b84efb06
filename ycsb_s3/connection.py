"""
Process-wide S3 client provider

Many driver threads each own an adapter instance, but they all share one
boto3 client. The first caller builds it under a lock; everyone after that
gets the same handle back, even if they pass different options.
"""

import logging
import threading
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError

from ycsb_s3.config import S3Config

logger = logging.getLogger(__name__)


def make_s3_client(config: S3Config) -> Any:
    """Build a boto3 S3 client from the adapter config"""
    session = boto3.session.Session(
        aws_access_key_id=config.access_key,
        aws_secret_access_key=config.secret_key,
        region_name=config.region,
    )
    client_config = Config(
        retries={"max_attempts": config.max_error_retry, "mode": "standard"},
    )
    return session.client(
        "s3",
        endpoint_url=config.endpoint_url,
        config=client_config,
    )


class ConnectionProvider:
    """Builds the shared S3 client once and hands it out afterwards"""

    def __init__(self, client_factory: Callable[[S3Config], Any] = make_s3_client):
        self._client_factory = client_factory
        self._lock = threading.Lock()
        self._client: Optional[Any] = None

    @property
    def client(self) -> Optional[Any]:
        return self._client

    def ensure_connected(self, config: S3Config) -> Optional[Any]:
        """
        Return the shared client, building it on first use.

        Returns None when construction fails; the failure is logged and the
        next call tries again.
        """
        with self._lock:
            if self._client is not None:
                logger.info("Reusing the same client")
                return self._client

            logger.info("Initializing the S3 connection to %s", config.endpoint_url)
            try:
                self._client = self._client_factory(config)
            except (BotoCoreError, ValueError) as e:
                logger.error("Could not connect to S3 storage because: %s", e)
                return None

            logger.info("Connection successfully initialized")
            return self._client

    def reset(self) -> None:
        """Forget the shared client"""
        with self._lock:
            self._client = None


shared_provider = ConnectionProvider()
