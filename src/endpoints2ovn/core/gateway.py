"""Node join: wait for the node's gateway objects, then backfill NodePort VIPs.

Gateway routers and their load balancers are created asynchronously by the
node provisioning, so a freshly added node is polled until its TCP and UDP
gateway load balancers and its physical IP are all visible.
"""

import threading
import time

from endpoints2ovn.core.backends import build_backend_table, match_service_ports
from endpoints2ovn.core.constants import GATEWAY_POLL_INTERVAL, GATEWAY_POLL_TIMEOUT
from endpoints2ovn.core.sync import lookup_service
from endpoints2ovn.core.vips import create_vip
from endpoints2ovn.pacts.helpers import (
    gateway_router_name, object_key, service_type_has_node_port,
)
from endpoints2ovn.pacts.types import (
    GatewayState, KubeAccessor, KubeError, LoadBalancerClient,
    LoadBalancerError, Protocol, SyncReport, WaitOutcome,
)


def wait_for(predicate, interval: float = GATEWAY_POLL_INTERVAL,
             timeout: float = GATEWAY_POLL_TIMEOUT,
             cancel: threading.Event | None = None,
             clock=time.monotonic) -> WaitOutcome:
    """Call *predicate* every *interval* seconds until it returns True.

    The first check happens after one interval. Setting *cancel* interrupts
    the wait between checks.
    """
    cancel = cancel or threading.Event()
    deadline = clock() + timeout
    while True:
        if cancel.wait(interval):
            return WaitOutcome.CANCELLED
        if predicate():
            return WaitOutcome.READY
        if clock() >= deadline:
            return WaitOutcome.TIMED_OUT


def _lookup(fn, *args) -> str:
    # Lookup errors mean "not there yet" while polling
    try:
        return fn(*args) or ""
    except LoadBalancerError:
        return ""


def probe_gateway(client: LoadBalancerClient, gateway: str,
                  state: GatewayState) -> bool:
    """Refresh *state* with whatever the control plane shows now."""
    state.tcp_lb = _lookup(client.get_gateway_load_balancer, gateway, Protocol.TCP)
    state.udp_lb = _lookup(client.get_gateway_load_balancer, gateway, Protocol.UDP)
    state.physical_ip = _lookup(client.get_gateway_physical_ip, gateway)
    return state.ready


def _backfill_endpoints(kube: KubeAccessor, client: LoadBalancerClient,
                        endpoints: dict, state: GatewayState,
                        report: SyncReport) -> None:
    svc = lookup_service(kube, endpoints, report)
    if svc is None or not service_type_has_node_port(svc):
        return
    table = build_backend_table(endpoints)
    for protocol, port_name, lb_eps in table.items():
        for svc_port in match_service_ports(svc, protocol, port_name):
            node_port = svc_port.get("nodePort")
            if not node_port:
                report.notes.append(
                    f"service {object_key(svc)[1]} port {port_name!r} "
                    f"has no nodePort allocated yet")
                continue
            create_vip(client, report, state.load_balancer(protocol),
                       state.physical_ip, node_port,
                       lb_eps.ips, lb_eps.port)


def handle_node_port_lb(kube: KubeAccessor, client: LoadBalancerClient,
                        node: dict, interval: float = GATEWAY_POLL_INTERVAL,
                        timeout: float = GATEWAY_POLL_TIMEOUT,
                        cancel: threading.Event | None = None) -> SyncReport:
    """Create the NodePort VIPs of every NodePort service on a new node."""
    report = SyncReport()
    node_name = (node.get("metadata") or {}).get("name", "")
    gateway = gateway_router_name(node_name)
    state = GatewayState()

    outcome = wait_for(lambda: probe_gateway(client, gateway, state),
                       interval=interval, timeout=timeout, cancel=cancel)
    if outcome is not WaitOutcome.READY:
        report.warnings.append(
            f"{outcome.value} waiting for load balancer to be ready on node {node_name!r}")
        return report

    try:
        namespaces = kube.get_namespaces()
    except KubeError as exc:
        report.warnings.append(f"failed to get k8s namespaces: {exc}")
        return report
    for ns in namespaces:
        ns_name = (ns.get("metadata") or {}).get("name", "")
        try:
            endpoints_list = kube.get_endpoints(ns_name)
        except KubeError as exc:
            report.warnings.append(f"failed to get k8s endpoints in {ns_name}: {exc}")
            continue
        for endpoints in endpoints_list:
            _backfill_endpoints(kube, client, endpoints, state, report)
    return report


def start_node_port_lb(kube: KubeAccessor, client: LoadBalancerClient,
                       node: dict, **kwargs) -> tuple[threading.Thread, list]:
    """Run handle_node_port_lb on a daemon thread.

    Returns the thread and a list that receives the SyncReport once done.
    """
    reports: list = []
    name = (node.get("metadata") or {}).get("name", "")
    thread = threading.Thread(
        target=lambda: reports.append(handle_node_port_lb(kube, client, node, **kwargs)),
        name=f"node-port-lb-{name}",
        daemon=True,
    )
    thread.start()
    return thread, reports
