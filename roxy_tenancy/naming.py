from typing import Optional


def network_prefix(tenant_id: str) -> str:
    """
    Name prefix for resources owned by ``tenant_id``.

    Pattern: "s" + lowercase(tenant_id) + "-". Tenant ids that differ only in
    case share a prefix.
    """
    return "s" + tenant_id.lower() + "-"


def scope_name(tenant_id: str, name: str) -> str:
    return network_prefix(tenant_id) + name


def is_tenant_name(tenant_id: str, name: str) -> bool:
    return name.startswith(network_prefix(tenant_id))


def unscope_name(tenant_id: str, name: str) -> Optional[str]:
    """Strip the tenant prefix; None if ``name`` does not carry it."""
    prefix = network_prefix(tenant_id)
    if not name.startswith(prefix):
        return None
    return name[len(prefix):]
