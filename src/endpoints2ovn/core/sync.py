"""Endpoints add/update: program cluster, NodePort and external-IP VIPs."""

from endpoints2ovn.core.backends import build_backend_table, match_service_ports
from endpoints2ovn.core.vips import create_vip
from endpoints2ovn.pacts.helpers import (
    is_cluster_ip_set, nodeport_enabled, object_key,
    service_type_has_cluster_ip, service_type_has_node_port,
)
from endpoints2ovn.pacts.types import (
    KubeAccessor, KubeError, LbEndpoints, LoadBalancerClient,
    LoadBalancerError, Protocol, SyncReport,
)


def lookup_service(kube: KubeAccessor, endpoints: dict,
                   report: SyncReport) -> dict | None:
    """Return the Service owning *endpoints*, or None (noted, not an error).

    Endpoints without a service are normal, e.g. while a service is deleted.
    """
    namespace, name = object_key(endpoints)
    try:
        svc = kube.get_service(namespace, name)
    except KubeError as exc:
        report.notes.append(f"service {namespace}/{name} not retrievable: {exc}")
        return None
    if svc is None:
        report.notes.append(f"no service found for endpoint {name} in namespace {namespace}")
    return svc


def create_gateways_vip(client: LoadBalancerClient, report: SyncReport,
                        protocol: Protocol, node_port: int, target_port: int,
                        ips: list[str]) -> bool:
    """Bind node_port on every gateway router's load balancer to the backends.

    Returns False only when the gateways themselves cannot be listed;
    per-gateway problems are recorded and skipped.
    """
    try:
        gateways = client.list_gateways()
    except LoadBalancerError as exc:
        report.warnings.append(f"failed to list gateway routers: {exc}")
        return False
    for gateway in gateways:
        try:
            load_balancer = client.get_gateway_load_balancer(gateway, protocol)
            physical_ip = client.get_gateway_physical_ip(gateway)
        except LoadBalancerError as exc:
            report.warnings.append(f"gateway {gateway}: lookup failed ({exc})")
            continue
        if not load_balancer or not physical_ip:
            report.notes.append(f"gateway {gateway} has no {protocol.value} "
                                f"load balancer or physical IP yet")
            continue
        create_vip(client, report, load_balancer, physical_ip, node_port,
                   ips, target_port)
    return True


def handle_external_ips(client: LoadBalancerClient, svc: dict, svc_port: dict,
                        ips: list[str], target_port: int,
                        report: SyncReport | None = None) -> SyncReport:
    """Expose a service port on each of the service's external IPs."""
    report = report if report is not None else SyncReport()
    external_ips = (svc.get("spec") or {}).get("externalIPs") or []
    if not external_ips:
        return report
    protocol = Protocol.parse(svc_port.get("protocol"))
    for ext_ip in external_ips:
        load_balancer = client.get_default_gateway_load_balancer(protocol)
        if not load_balancer:
            report.warnings.append(
                f"no default gateway found for protocol {protocol.value} "
                f"(external IP {ext_ip}); 'nodeportEnable' must be set for a default gateway")
            continue
        create_vip(client, report, load_balancer, ext_ip, svc_port.get("port"),
                   ips, target_port)
    return report


def _sync_port(client: LoadBalancerClient, config: dict, svc: dict,
               svc_port: dict, protocol: Protocol, lb_eps: LbEndpoints,
               report: SyncReport) -> None:
    spec = svc.get("spec") or {}
    if service_type_has_node_port(svc) and nodeport_enabled(config):
        node_port = svc_port.get("nodePort")
        if not node_port:
            report.notes.append(
                f"service {object_key(svc)[1]} port {svc_port.get('name', '')!r} "
                f"has no nodePort allocated yet")
        elif not create_gateways_vip(client, report, protocol,
                                     node_port, lb_eps.port, lb_eps.ips):
            return
    if not service_type_has_cluster_ip(svc):
        return
    try:
        load_balancer = client.get_load_balancer(protocol)
    except LoadBalancerError as exc:
        report.warnings.append(
            f"failed to get load balancer for {protocol.value} ({exc})")
        return
    if create_vip(client, report, load_balancer, spec.get("clusterIP"),
                  svc_port.get("port"), lb_eps.ips, lb_eps.port):
        handle_external_ips(client, svc, svc_port, lb_eps.ips, lb_eps.port, report)


def add_endpoints(kube: KubeAccessor, client: LoadBalancerClient,
                  endpoints: dict, config: dict | None = None) -> SyncReport:
    """Program the VIPs of the service owning *endpoints*.

    Never raises for per-VIP problems: every failure lands in the report and
    the remaining ports are still processed.
    """
    config = config or {}
    report = SyncReport()
    svc = lookup_service(kube, endpoints, report)
    if svc is None:
        return report
    if not is_cluster_ip_set(svc):
        report.notes.append(
            f"skipping service {object_key(svc)[1]} due to clusterIP = "
            f"{(svc.get('spec') or {}).get('clusterIP', '')!r}")
        return report

    table = build_backend_table(endpoints)
    for protocol, port_name, lb_eps in table.items():
        for svc_port in match_service_ports(svc, protocol, port_name):
            _sync_port(client, config, svc, svc_port, protocol, lb_eps, report)
    return report
