"""Public contracts: data types, collaborator base classes, helpers."""

from endpoints2ovn.pacts.types import (
    BackendTable, GatewayState, KubeAccessor, KubeError, KubeNotFound, LbEndpoints,
    LoadBalancerClient, LoadBalancerError, Protocol, SyncReport, VipResult,
    WaitOutcome,
)
from endpoints2ovn.pacts.helpers import (
    gateway_router_name, is_cluster_ip_set, join_host_port, nodeport_enabled,
    service_type_has_cluster_ip, service_type_has_node_port, vip_key,
)

__all__ = [
    "BackendTable",
    "GatewayState",
    "KubeAccessor",
    "KubeError",
    "KubeNotFound",
    "LbEndpoints",
    "LoadBalancerClient",
    "LoadBalancerError",
    "Protocol",
    "SyncReport",
    "VipResult",
    "WaitOutcome",
    "gateway_router_name",
    "is_cluster_ip_set",
    "join_host_port",
    "nodeport_enabled",
    "service_type_has_cluster_ip",
    "service_type_has_node_port",
    "vip_key",
]
