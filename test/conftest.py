import logging
from pathlib import Path
from typing import Callable, Generator, Optional

import docker
import docker.errors
import pytest
import requests
from _pytest.config import Config

from roxy_tenancy.config import DEFAULT_TENANCY_LABEL, DEFAULT_TENANT_HEADER, LOG_FORMAT, TenancyConfig
from roxy_tenancy.request import InboundRequest
from roxy_tenancy.snapshot import ClusterSnapshot, ContainerInfo, NetworkInfo

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[
        logging.StreamHandler(),
    ]
)
logger = logging.getLogger("pytest_fixtures")

FOO_CONTAINER = "f00c0a7a1e7b0b5d3e1f0c9a8b7d6e5f4a3b2c1d0e9f8a7b6c5d4e3f2a1b0c9d"
BAR_CONTAINER = "ba2c0a7a1e7b0b5d3e1f0c9a8b7d6e5f4a3b2c1d0e9f8a7b6c5d4e3f2a1b0c9d"
UNLABELED_CONTAINER = "0000a7a1e7b0b5d3e1f0c9a8b7d6e5f4a3b2c1d0e9f8a7b6c5d4e3f2a1b0c9d"
FOO_NETWORK = "a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2"
BAR_NETWORK = "b1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2c3d4e5f6a1b2"
FOO_EXEC = "e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0e0"
BAR_EXEC = "e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1e1"


def pytest_configure(config: Config) -> None:
    """Register the custom markers."""
    config.addinivalue_line("markers", "docker: mark test as needing a reachable Docker engine")


@pytest.fixture(scope="session")
def snapshot() -> ClusterSnapshot:
    """A two-tenant cluster: tenant "foo" and tenant "bar"."""
    return ClusterSnapshot(
        containers=[
            ContainerInfo(id=FOO_CONTAINER, labels={DEFAULT_TENANCY_LABEL: "foo"}, exec_ids=[FOO_EXEC]),
            ContainerInfo(id=BAR_CONTAINER, labels={DEFAULT_TENANCY_LABEL: "bar"}, exec_ids=[BAR_EXEC]),
            ContainerInfo(id=UNLABELED_CONTAINER, labels={"maintainer": "ops"}),
        ],
        networks=[
            NetworkInfo(id=FOO_NETWORK, name="sfoo-net1"),
            NetworkInfo(id=BAR_NETWORK, name="sbar-net2"),
        ],
    )


@pytest.fixture
def make_request() -> Callable[..., InboundRequest]:
    """
    Build an InboundRequest for a method and URL.

    Example usage in a test:
        def test_something(self, make_request):
            request = make_request("GET", "/v1.24/containers/json", tenant="foo")
    """

    def _make(method: str, url: str, tenant: Optional[str] = None) -> InboundRequest:
        headers = {DEFAULT_TENANT_HEADER: tenant} if tenant is not None else {}
        return InboundRequest.from_url(method, url, headers)

    return _make


@pytest.fixture
def with_config_file(tmp_path: Path) -> Callable[[Optional[TenancyConfig]], Path]:
    """Return a callback that writes a config model to a temporary YAML file."""

    def _save_config(config_model: Optional[TenancyConfig] = None) -> Path:
        current_config = config_model if config_model is not None else TenancyConfig()
        config_path = tmp_path / "tenancy.yml"
        with open(config_path, 'w') as f:
            yaml_content = f"# Test configuration for the tenancy layer\n{current_config.to_yaml()}"
            logger.info(f"Config YAML content: {yaml_content}")
            f.write(yaml_content)
        return config_path

    return _save_config


@pytest.fixture(scope="session")
def docker_client() -> Generator[docker.DockerClient, None, None]:
    """Create a Docker client for the tests, skipping when no engine is reachable."""
    try:
        client = docker.from_env(timeout=30)
        client.ping()
    except (docker.errors.DockerException, requests.exceptions.ConnectionError) as e:
        pytest.skip(f"Docker engine not available: {e}")
    yield client
    client.close()


@pytest.fixture(scope="function")
def container_cleanup(docker_client: docker.DockerClient) -> Generator[Callable[[str], None], None, None]:
    """
    Fixture that provides container cleanup functionality.

    Usage in tests:
        def test_example(docker_client, container_cleanup):
            container = docker_client.containers.create(...)
            container_cleanup(container.id)  # Register for cleanup
    """
    containers_to_cleanup = []

    def register_container(container_name_or_id: str):
        """Register a container for cleanup."""
        containers_to_cleanup.append(container_name_or_id)

    yield register_container

    for container_name_or_id in containers_to_cleanup:
        try:
            container = docker_client.containers.get(container_name_or_id)
            if container.status == "running":
                container.stop()
            container.remove()
            logger.info(f"Cleaned up container: {container_name_or_id}")
        except docker.errors.NotFound:
            logger.info(f"Container {container_name_or_id} not found, skipping cleanup")
        except docker.errors.APIError as e:
            logger.warning(f"Failed to cleanup container {container_name_or_id}: {e}")
