"""VIP create/remove calls that record their outcome instead of raising."""

from endpoints2ovn.pacts.helpers import join_host_port, vip_key
from endpoints2ovn.pacts.types import (
    LoadBalancerClient, LoadBalancerError, SyncReport, VipResult,
)


def create_vip(client: LoadBalancerClient, report: SyncReport, load_balancer: str,
               vip: str, vport: int, ips: list[str], target_port: int) -> bool:
    """Create one VIP, append the result to *report*, return success."""
    result = VipResult(
        action="create",
        load_balancer=load_balancer,
        vip=vip_key(vip, vport),
        backends=[join_host_port(ip, target_port) for ip in ips],
    )
    try:
        client.create_vip(load_balancer, vip, vport, ips, target_port)
    except LoadBalancerError as exc:
        result.ok = False
        result.error = str(exc)
    report.results.append(result)
    return result.ok


def remove_vip(client: LoadBalancerClient, report: SyncReport, load_balancer: str,
               vip: str, vport: int) -> bool:
    result = VipResult(action="remove", load_balancer=load_balancer,
                       vip=vip_key(vip, vport))
    try:
        client.remove_vip(load_balancer, vip, vport)
    except LoadBalancerError as exc:
        result.ok = False
        result.error = str(exc)
    report.results.append(result)
    return result.ok
