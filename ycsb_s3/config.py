"""
S3 adapter configuration

Options are resolved from, highest precedence first:

    1) explicit properties (driver properties or ``-p key=value``)
    2) a YAML config file whose keys are property names
    3) environment variables (S3_ENDPOINT, S3_ACCESS_KEY, ...)
    4) built-in defaults
"""

import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from ycsb_s3.errors import ConfigError

ACCESS_KEY_PROPERTY = "s3.accessKeyId"
SECRET_KEY_PROPERTY = "s3.secretKey"
ENDPOINT_PROPERTY = "s3.endPoint"
REGION_PROPERTY = "s3.region"
MAX_ERROR_RETRY_PROPERTY = "s3.maxErrorRetry"

DEFAULTS = {
    ACCESS_KEY_PROPERTY: "accessKeyId",
    SECRET_KEY_PROPERTY: "secretKey",
    ENDPOINT_PROPERTY: "s3.amazonaws.com",
    REGION_PROPERTY: "us-east-1",
    MAX_ERROR_RETRY_PROPERTY: "15",
}

ENVIRONMENT = {
    ACCESS_KEY_PROPERTY: "S3_ACCESS_KEY",
    SECRET_KEY_PROPERTY: "S3_SECRET_KEY",
    ENDPOINT_PROPERTY: "S3_ENDPOINT",
    REGION_PROPERTY: "S3_REGION",
    MAX_ERROR_RETRY_PROPERTY: "S3_MAX_ERROR_RETRY",
}


@dataclass(frozen=True)
class S3Config:
    """Connection settings for the shared S3 client"""

    access_key: str = DEFAULTS[ACCESS_KEY_PROPERTY]
    secret_key: str = DEFAULTS[SECRET_KEY_PROPERTY]
    endpoint: str = DEFAULTS[ENDPOINT_PROPERTY]
    region: str = DEFAULTS[REGION_PROPERTY]
    max_error_retry: int = int(DEFAULTS[MAX_ERROR_RETRY_PROPERTY])

    @property
    def endpoint_url(self) -> str:
        """Endpoint with a scheme, as boto3 expects it"""
        if "://" in self.endpoint:
            return self.endpoint
        return f"https://{self.endpoint}"

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["secret_key"] = "*" * len(self.secret_key)
        return d

    @classmethod
    def from_properties(
        cls,
        properties: Optional[Mapping[str, Any]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "S3Config":
        """Resolve a config from driver properties, environment and defaults"""
        properties = properties or {}
        environ = os.environ if environ is None else environ

        resolved = {}
        for name, default in DEFAULTS.items():
            value = properties.get(name)
            if value is None:
                value = environ.get(ENVIRONMENT[name])
            if value is None:
                value = default
            resolved[name] = str(value)

        return cls(
            access_key=resolved[ACCESS_KEY_PROPERTY],
            secret_key=resolved[SECRET_KEY_PROPERTY],
            endpoint=resolved[ENDPOINT_PROPERTY],
            region=resolved[REGION_PROPERTY],
            max_error_retry=_parse_retry(resolved[MAX_ERROR_RETRY_PROPERTY]),
        )


def _parse_retry(value: str) -> int:
    try:
        retries = int(value)
    except ValueError:
        raise ConfigError(
            f"{MAX_ERROR_RETRY_PROPERTY} must be an integer, got {value!r}"
        ) from None
    if retries < 0:
        raise ConfigError(f"{MAX_ERROR_RETRY_PROPERTY} must be >= 0, got {retries}")
    return retries


def load_properties_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML file of property names to values"""
    path = Path(path)
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return {str(k): v for k, v in data.items()}


def parse_property(text: str) -> Dict[str, str]:
    """Parse a single ``name=value`` override"""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise ConfigError(f"Property must look like name=value, got {text!r}")
    return {name.strip(): value}
