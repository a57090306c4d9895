import logging
from typing import Dict, List, Optional

import docker
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class ContainerInfo(BaseModel):
    """A container as seen by the tenancy checks."""
    model_config = ConfigDict(frozen=True)

    id: str
    labels: Dict[str, str] = Field(default_factory=dict)
    exec_ids: List[str] = Field(default_factory=list)


class NetworkInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ClusterSnapshot(BaseModel):
    """
    Point-in-time, read-only view of the cluster's containers and networks.

    Built by the caller once per request; nothing here mutates it.
    """
    model_config = ConfigDict(frozen=True)

    containers: List[ContainerInfo] = Field(default_factory=list)
    networks: List[NetworkInfo] = Field(default_factory=list)


def _container_from_attrs(attrs: dict) -> ContainerInfo:
    config = attrs.get("Config") or {}
    labels: Optional[dict] = config.get("Labels") if config else attrs.get("Labels")
    return ContainerInfo(
        id=attrs["Id"],
        labels=labels or {},
        exec_ids=attrs.get("ExecIDs") or [],
    )


def snapshot_from_docker(client: docker.DockerClient) -> ClusterSnapshot:
    """
    Materialize a snapshot from a live engine.

    ``containers.list(all=True)`` inspects each container, so the attributes
    carry ``ExecIDs`` and ``Config.Labels``.
    """
    containers = [_container_from_attrs(c.attrs) for c in client.containers.list(all=True)]
    networks = [NetworkInfo(id=n.id, name=n.name) for n in client.networks.list()]
    logger.debug(f"Snapshot holds {len(containers)} containers and {len(networks)} networks")
    return ClusterSnapshot(containers=containers, networks=networks)
