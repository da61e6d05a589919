"""
apisnap Endpoint Configuration

YAML-based list of the named endpoints to capture and snapshot.

Example endpoints.yaml:

    suite: "API Snapshot Tests"
    endpoints:
      - name: "Health"
        url: "/health"
      - name: "IP Geo"
        url: "https://ipinfo.io/161.185.160.93/geo"
        filename: "ipinfo-geo.json"
        matchers:
          readme: String
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..common.utils import slugify_name

DEFAULT_SUITE_NAME = 'API Snapshot Tests'
ALLOWED_METHODS = ('GET', 'POST', 'PUT', 'DELETE')
MATCHER_TYPES = ('String', 'Number', 'Date', 'Boolean', 'Array', 'Object')


@dataclass(frozen=True)
class Endpoint:
    """A named HTTP resource to fetch."""

    name: str
    url: str
    method: str = 'GET'
    filename: Optional[str] = None
    matchers: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Endpoint':
        """
        Create an Endpoint from a configuration mapping.

        Raises:
            ValueError: If name or url is missing, or method / matcher
                        types are not supported
        """
        if not isinstance(data, dict):
            raise ValueError(f"Endpoint entry must be a mapping, got {type(data).__name__}")

        name = data.get('name')
        url = data.get('url')
        if not name:
            raise ValueError(f"Endpoint is missing 'name': {data}")
        if not url:
            raise ValueError(f"Endpoint '{name}' is missing 'url'")

        method = str(data.get('method', 'GET')).upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(
                f"Endpoint '{name}' has unsupported method {method}. "
                f"Expected one of: {', '.join(ALLOWED_METHODS)}"
            )

        matchers = data.get('matchers') or {}
        if not isinstance(matchers, dict):
            raise ValueError(f"Endpoint '{name}' matchers must be a mapping")
        for key, type_tag in matchers.items():
            if type_tag not in MATCHER_TYPES:
                raise ValueError(
                    f"Endpoint '{name}' matcher '{key}' has unknown type {type_tag}. "
                    f"Expected one of: {', '.join(MATCHER_TYPES)}"
                )

        return cls(
            name=str(name),
            url=str(url),
            method=method,
            filename=data.get('filename'),
            matchers={str(k): v for k, v in matchers.items()},
        )

    @property
    def slug(self) -> str:
        """Kebab-case form of the endpoint name."""
        return slugify_name(self.name)

    def capture_filename(self, extension: str = '.json') -> str:
        """File name for before/after captures: explicit filename or slug."""
        return self.filename or f"{self.slug}{extension}"

    def snapshot_filename(self, extension: str = '.snap') -> str:
        """File name for snapshot captures, always derived from the name."""
        return f"{self.slug}{extension}"


@dataclass
class EndpointConfig:
    """The endpoint list plus the snapshot suite name."""

    endpoints: List[Endpoint] = field(default_factory=list)
    suite: str = DEFAULT_SUITE_NAME

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'EndpointConfig':
        """
        Load endpoint configuration from a YAML file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the content is invalid
        """
        path = Path(yaml_path)
        if not path.exists():
            raise FileNotFoundError(f"Endpoint configuration not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Any) -> 'EndpointConfig':
        """
        Create configuration from a mapping or a bare list of endpoints.

        Raises:
            ValueError: If an endpoint is invalid or names are not unique
        """
        if isinstance(data, list):
            entries, suite = data, DEFAULT_SUITE_NAME
        elif isinstance(data, dict):
            entries = data.get('endpoints') or []
            suite = data.get('suite') or DEFAULT_SUITE_NAME
        else:
            raise ValueError(
                f"Unexpected endpoint configuration format. "
                f"Expected dict or list, got {type(data).__name__}"
            )

        endpoints = [Endpoint.from_dict(entry) for entry in entries]

        seen = set()
        for endpoint in endpoints:
            if endpoint.name in seen:
                raise ValueError(f"Duplicate endpoint name: {endpoint.name}")
            seen.add(endpoint.name)

        return cls(endpoints=endpoints, suite=str(suite))
