"""Request classification and tenant isolation for a multi-tenant Docker API proxy."""
from roxy_tenancy.classifier import CommandClassifier, ResourceReference, classify, parse_command, resource_reference
from roxy_tenancy.commands import COMMAND_TABLE, Command
from roxy_tenancy.config import TenancyConfig
from roxy_tenancy.gate import AuthorizationDenied, ResponseFilterError, TenancyError, TenantGate, UnsupportedCommand
from roxy_tenancy.naming import network_prefix
from roxy_tenancy.ownership import verify
from roxy_tenancy.patterns import ResourceType
from roxy_tenancy.request import InboundRequest
from roxy_tenancy.sanitize import filter_networks, scrub_labels
from roxy_tenancy.snapshot import ClusterSnapshot, ContainerInfo, NetworkInfo, snapshot_from_docker

__all__ = [
    "AuthorizationDenied",
    "COMMAND_TABLE",
    "ClusterSnapshot",
    "Command",
    "CommandClassifier",
    "ContainerInfo",
    "InboundRequest",
    "NetworkInfo",
    "ResourceReference",
    "ResourceType",
    "ResponseFilterError",
    "TenancyConfig",
    "TenancyError",
    "TenantGate",
    "UnsupportedCommand",
    "classify",
    "filter_networks",
    "network_prefix",
    "parse_command",
    "resource_reference",
    "scrub_labels",
    "snapshot_from_docker",
    "verify",
]
