import logging
from typing import Union

from roxy_tenancy.config import DEFAULT_TENANCY_LABEL
from roxy_tenancy.naming import is_tenant_name
from roxy_tenancy.patterns import ResourceType
from roxy_tenancy.snapshot import ClusterSnapshot

logger = logging.getLogger(__name__)


def _container_owner(snapshot: ClusterSnapshot, container_id: str, tenant_id: str, tenancy_label: str) -> bool:
    for container in snapshot.containers:
        if container.id == container_id:
            return container.labels.get(tenancy_label) == tenant_id
    return False


def _network_owner(snapshot: ClusterSnapshot, network_id: str, tenant_id: str) -> bool:
    for network in snapshot.networks:
        if network.id == network_id:
            return is_tenant_name(tenant_id, network.name)
    return False


def _exec_owner(snapshot: ClusterSnapshot, exec_id: str, tenant_id: str, tenancy_label: str) -> bool:
    for container in snapshot.containers:
        if exec_id in container.exec_ids:
            return container.labels.get(tenancy_label) == tenant_id
    return False


def verify(
    resource_type: Union[ResourceType, str],
    resource_id: str,
    tenant_id: str,
    snapshot: ClusterSnapshot,
    *,
    tenancy_label: str = DEFAULT_TENANCY_LABEL,
) -> bool:
    """
    Decide whether ``tenant_id`` owns the resource.

    ``resource_id`` must already be a full id. Resources absent from the
    snapshot are never owned. Resource types without an ownership rule are
    denied with a warning.
    """
    try:
        kind = ResourceType(resource_type)
    except ValueError:
        kind = None

    if kind is ResourceType.CONTAINER:
        owned = _container_owner(snapshot, resource_id, tenant_id, tenancy_label)
    elif kind is ResourceType.NETWORK:
        owned = _network_owner(snapshot, resource_id, tenant_id)
    elif kind is ResourceType.EXEC:
        owned = _exec_owner(snapshot, resource_id, tenant_id, tenancy_label)
    else:
        logger.warning(f"Unsupported resource type for authorization: {resource_type}")
        return False

    logger.debug(f"Ownership of {kind.value} {resource_id} by tenant {tenant_id}: {owned}")
    return owned
