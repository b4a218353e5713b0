"""endpoints2ovn — program OVN load-balancer VIPs from Kubernetes Services/Endpoints.

Re-exports the reconcilers and the public contracts.
"""

from endpoints2ovn.pacts.types import (
    KubeAccessor, LoadBalancerClient, Protocol, SyncReport,
)
from endpoints2ovn.core.backends import build_backend_table
from endpoints2ovn.core.sync import add_endpoints, handle_external_ips
from endpoints2ovn.core.gateway import handle_node_port_lb, start_node_port_lb, wait_for
from endpoints2ovn.core.teardown import delete_endpoints

__all__ = [
    "KubeAccessor",
    "LoadBalancerClient",
    "Protocol",
    "SyncReport",
    "build_backend_table",
    "add_endpoints",
    "handle_external_ips",
    "handle_node_port_lb",
    "start_node_port_lb",
    "wait_for",
    "delete_endpoints",
]
