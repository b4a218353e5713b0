"""Endpoints delete: remove the cluster VIPs of the owning service."""

from endpoints2ovn.core.sync import lookup_service
from endpoints2ovn.core.vips import remove_vip
from endpoints2ovn.pacts.helpers import is_cluster_ip_set
from endpoints2ovn.pacts.types import (
    KubeAccessor, LoadBalancerClient, LoadBalancerError, Protocol, SyncReport,
)


def delete_endpoints(kube: KubeAccessor, client: LoadBalancerClient,
                     endpoints: dict) -> SyncReport:
    """Remove (clusterIP, port) from the protocol load balancer, per service port.

    NodePort and external-IP VIPs are left in place.
    """
    report = SyncReport()
    svc = lookup_service(kube, endpoints, report)
    if svc is None or not is_cluster_ip_set(svc):
        return report
    spec = svc.get("spec") or {}
    for svc_port in spec.get("ports") or []:
        protocol = Protocol.parse(svc_port.get("protocol"))
        if protocol is None:
            report.notes.append(f"unsupported protocol {svc_port.get('protocol')!r} "
                                f"on port {svc_port.get('port')}")
            continue
        try:
            load_balancer = client.get_load_balancer(protocol)
        except LoadBalancerError as exc:
            report.warnings.append(
                f"failed to get load balancer for {protocol.value} ({exc})")
            continue
        remove_vip(client, report, load_balancer, spec.get("clusterIP"),
                   svc_port.get("port"))
    return report
