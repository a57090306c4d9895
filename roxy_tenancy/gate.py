import logging
from typing import Optional

from roxy_tenancy.classifier import DEFAULT_CLASSIFIER, CommandClassifier, resource_reference
from roxy_tenancy.commands import Command
from roxy_tenancy.config import TenancyConfig
from roxy_tenancy.ownership import verify
from roxy_tenancy.request import InboundRequest
from roxy_tenancy.sanitize import filter_networks, scrub_labels
from roxy_tenancy.snapshot import ClusterSnapshot

logger = logging.getLogger(__name__)


class TenancyError(Exception):
    """A request the tenancy layer refuses, with the HTTP status to answer it with."""
    status = 500

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        if status is not None:
            self.status = status


class UnsupportedCommand(TenancyError):
    status = 501


class AuthorizationDenied(TenancyError):
    status = 403


class ResponseFilterError(TenancyError):
    status = 500


class TenantGate:
    """
    Per-process entry point tying classification, ownership and response
    clean-up to one configuration.

    Holds no per-request state; one instance serves all requests.
    """

    def __init__(
        self,
        config: Optional[TenancyConfig] = None,
        classifier: CommandClassifier = DEFAULT_CLASSIFIER,
    ):
        self.config = config or TenancyConfig()
        self.classifier = classifier

    def tenant(self, request: InboundRequest) -> str:
        return request.header(self.config.tenant_header)

    def command(self, request: InboundRequest) -> Command:
        return self.classifier.classify(request)

    def authorize(self, request: InboundRequest, snapshot: ClusterSnapshot) -> bool:
        """
        Allow a supported command when it targets no single resource, reads
        a shared resource type, or touches a resource the calling tenant owns.
        Writes to shared types go through the ownership check.
        """
        if not self.command(request).supported:
            return False
        ref = resource_reference(request)
        if ref is None:
            return True
        if request.method == "GET" and ref.resource_type.value in self.config.shared_resource_types:
            return True
        tenant_id = self.tenant(request)
        if not tenant_id:
            return False
        return verify(
            ref.resource_type,
            ref.resource_id,
            tenant_id,
            snapshot,
            tenancy_label=self.config.tenancy_label,
        )

    def require(self, request: InboundRequest, snapshot: ClusterSnapshot) -> Command:
        """Like ``authorize`` but raises; returns the command on success."""
        command = self.command(request)
        if not command.supported:
            raise UnsupportedCommand(f"{request.method} {request.path} is not supported")
        if not self.authorize(request, snapshot):
            logger.warning(f"Denied {command.value} on {request.path} for tenant {self.tenant(request)!r}")
            raise AuthorizationDenied(f"Not authorized to {command.value} {request.path}")
        return command

    def scrub(self, request: InboundRequest, body: bytes) -> bytes:
        return scrub_labels(
            body,
            request,
            tenancy_label=self.config.tenancy_label,
            tenant_header=self.config.tenant_header,
        )

    def filter_networks(self, request: InboundRequest, body: bytes) -> bytes:
        filtered = filter_networks(body, request, tenant_header=self.config.tenant_header)
        if filtered is None:
            raise ResponseFilterError("Could not filter network list")
        return filtered
