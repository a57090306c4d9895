import logging
from pathlib import Path
from typing import Callable, Optional
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from roxy_tenancy.config import LOG_FORMAT, TenancyConfig, configure_logging


def test_config_generation() -> None:
    """Test that the configuration generation mechanism works correctly."""
    config_model = TenancyConfig(tenancy_label="com.example.tenant", tenant_header="X-Tenant")

    # Verify that the configuration can be converted to YAML
    yaml_str = config_model.to_yaml()
    assert isinstance(yaml_str, str)
    assert "tenancy_label: com.example.tenant" in yaml_str
    assert "tenant_header: X-Tenant" in yaml_str

    # Verify that the configuration can be parsed back from YAML
    config_from_yaml = TenancyConfig.from_yaml(yaml_str)
    assert config_from_yaml == config_model


def test_defaults() -> None:
    config = TenancyConfig()
    assert config.tenancy_label == "com.swarm.tenant.0"
    assert config.tenant_header == "X-Auth-Token"
    assert config.log_level == "INFO"
    assert config.shared_resource_types == ["image"]


def test_empty_yaml_is_defaults() -> None:
    assert TenancyConfig.from_yaml("") == TenancyConfig()
    assert TenancyConfig.from_yaml("# only a comment\n") == TenancyConfig()


def test_log_level_normalized() -> None:
    assert TenancyConfig(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize("yaml_str", [
    "log_level: chatty\n",
    "tenancy_label: ''\n",
    "- not\n- a\n- mapping\n",
    "just a string\n",
])
def test_invalid_config(yaml_str: str) -> None:
    with pytest.raises(ValidationError):
        TenancyConfig.from_yaml(yaml_str)


def test_load_from_file(with_config_file: Callable[[Optional[TenancyConfig]], Path]) -> None:
    """Test that a config file written to disk loads back unchanged."""
    config_model = TenancyConfig(tenant_header="X-Tenant", shared_resource_types=["image", "volume"])
    config_path = with_config_file(config_model)

    loaded = TenancyConfig.load(config_path)
    assert loaded == config_model


def test_load_missing_file(tmp_path: Path) -> None:
    assert TenancyConfig.load(tmp_path / "missing.yml") == TenancyConfig()


def test_configure_logging() -> None:
    with patch("roxy_tenancy.config.logging.basicConfig") as basic_config:
        configure_logging(TenancyConfig(log_level="warning"))
    basic_config.assert_called_once_with(level="WARNING", format=LOG_FORMAT)
    assert logging.getLevelName("WARNING") == logging.WARNING
