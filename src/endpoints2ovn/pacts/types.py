"""Public data types and collaborator contracts."""

from dataclasses import dataclass, field
from enum import Enum


class Protocol(str, Enum):
    """Service port protocols that map to an OVN load balancer."""
    TCP = "TCP"
    UDP = "UDP"

    @classmethod
    def parse(cls, value: str | None) -> "Protocol | None":
        """Return the protocol for a K8s protocol string, None if unsupported.

        An absent protocol means TCP (the K8s API default).
        """
        if not value:
            return cls.TCP
        try:
            return cls(value)
        except ValueError:
            return None


class KubeError(Exception):
    """Kubernetes object retrieval failed."""


class KubeNotFound(KubeError):
    """The requested Kubernetes object does not exist."""


class LoadBalancerError(Exception):
    """A load-balancer lookup or VIP mutation failed."""


@dataclass
class LbEndpoints:
    """Backend IPs and the target port they listen on."""
    ips: list = field(default_factory=list)
    port: int = 0


@dataclass
class BackendTable:
    """Per-protocol mapping of service port name → LbEndpoints."""
    tcp: dict = field(default_factory=dict)
    udp: dict = field(default_factory=dict)

    def ports(self, protocol: Protocol) -> dict:
        return self.tcp if protocol is Protocol.TCP else self.udp

    def items(self):
        """Yield (protocol, port_name, LbEndpoints) for every entry."""
        for protocol in Protocol:
            for name, lb_eps in self.ports(protocol).items():
                yield protocol, name, lb_eps


@dataclass
class VipResult:
    """Outcome of one VIP create/remove call."""
    action: str
    load_balancer: str
    vip: str
    backends: list = field(default_factory=list)
    ok: bool = True
    error: str = ""


@dataclass
class SyncReport:
    """Everything an entry point did, in order.

    notes are informational (absence conditions), warnings are configuration
    gaps or resolution failures, results are the VIP operations issued.
    """
    results: list = field(default_factory=list)
    notes: list = field(default_factory=list)
    warnings: list = field(default_factory=list)

    @property
    def failures(self) -> list:
        return [r for r in self.results if not r.ok]

    @property
    def ok(self) -> bool:
        return not self.failures and not self.warnings

    def merge(self, other: "SyncReport") -> None:
        self.results.extend(other.results)
        self.notes.extend(other.notes)
        self.warnings.extend(other.warnings)


@dataclass
class GatewayState:
    """Gateway objects of one node, filled in as they become visible."""
    tcp_lb: str = ""
    udp_lb: str = ""
    physical_ip: str = ""

    @property
    def ready(self) -> bool:
        return bool(self.tcp_lb and self.udp_lb and self.physical_ip)

    def load_balancer(self, protocol: Protocol) -> str:
        return self.tcp_lb if protocol is Protocol.TCP else self.udp_lb


class WaitOutcome(Enum):
    READY = "ready"
    TIMED_OUT = "timed-out"
    CANCELLED = "cancelled"


class KubeAccessor:
    """Base class for Kubernetes object sources.

    Objects are plain dicts shaped like the API's JSON (metadata, spec,
    subsets). Subclasses raise KubeError when retrieval fails.
    """

    def get_service(self, namespace: str, name: str) -> dict | None:
        """Return the Service, or None if it does not exist."""
        raise NotImplementedError

    def get_namespaces(self) -> list[dict]:
        raise NotImplementedError

    def get_endpoints(self, namespace: str) -> list[dict]:
        raise NotImplementedError


class LoadBalancerClient:
    """Base class for the load-balancer control plane.

    Lookups of gateway objects return "" while the object is not provisioned
    yet; that is not an error. Everything else raises LoadBalancerError.
    """

    def get_load_balancer(self, protocol: Protocol) -> str:
        """Return the cluster-wide load balancer for *protocol*."""
        raise NotImplementedError

    def get_gateway_load_balancer(self, gateway: str, protocol: Protocol) -> str:
        raise NotImplementedError

    def get_gateway_physical_ip(self, gateway: str) -> str:
        raise NotImplementedError

    def get_default_gateway_load_balancer(self, protocol: Protocol) -> str:
        raise NotImplementedError

    def list_gateways(self) -> list[str]:
        """Return the names of all gateway routers."""
        raise NotImplementedError

    def create_vip(self, load_balancer: str, vip: str, vport: int,
                   ips: list[str], target_port: int) -> None:
        """Set (vip, vport) → ips@target_port; overwrites an existing entry."""
        raise NotImplementedError

    def remove_vip(self, load_balancer: str, vip: str, vport: int) -> None:
        raise NotImplementedError
