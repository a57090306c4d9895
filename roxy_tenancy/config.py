import logging
import os
from typing import List, Union

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_TENANCY_LABEL = "com.swarm.tenant.0"
DEFAULT_TENANT_HEADER = "X-Auth-Token"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class TenancyConfig(BaseModel):
    """Model for the tenancy layer configuration file."""
    tenancy_label: str = DEFAULT_TENANCY_LABEL
    tenant_header: str = DEFAULT_TENANT_HEADER
    log_level: str = "INFO"
    # Resource types every tenant may read; GET requests for them skip the ownership check.
    shared_resource_types: List[str] = Field(default_factory=lambda: ["image"])

    @field_validator("tenancy_label", "tenant_header")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    def to_yaml(self) -> str:
        """Convert the configuration to YAML format."""
        return yaml.safe_dump(self.model_dump(exclude_none=True), sort_keys=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "TenancyConfig":
        """Create a configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        if data is None:
            data = {}
        return cls.model_validate(data)

    @classmethod
    def load(cls, path: Union[str, os.PathLike]) -> "TenancyConfig":
        """Read a configuration file; a missing file yields the defaults."""
        if not os.path.exists(path):
            return cls()
        with open(path, 'r') as f:
            return cls.from_yaml(f.read())


def configure_logging(config: TenancyConfig) -> None:
    logging.basicConfig(level=config.log_level, format=LOG_FORMAT)
