"""Service inspection and VIP formatting helpers."""

from endpoints2ovn.core.constants import (
    CLUSTER_IP_SERVICE_TYPES, GATEWAY_ROUTER_PREFIX, NODE_PORT_SERVICE_TYPES,
)


def _service_spec(svc: dict) -> dict:
    return svc.get("spec") or {}


def is_cluster_ip_set(svc: dict) -> bool:
    """True unless the service is headless or has no address allocated yet."""
    cluster_ip = _service_spec(svc).get("clusterIP", "")
    return cluster_ip not in ("", "None")


def service_type_has_node_port(svc: dict) -> bool:
    return _service_spec(svc).get("type", "ClusterIP") in NODE_PORT_SERVICE_TYPES


def service_type_has_cluster_ip(svc: dict) -> bool:
    return _service_spec(svc).get("type", "ClusterIP") in CLUSTER_IP_SERVICE_TYPES


def object_key(obj: dict) -> tuple[str, str]:
    """(namespace, name) of a K8s object."""
    meta = obj.get("metadata") or {}
    return meta.get("namespace", "") or "default", meta.get("name", "")


def join_host_port(host: str, port: int) -> str:
    """Format host:port, bracketing IPv6 literals."""
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def vip_key(vip: str, vport: int) -> str:
    return join_host_port(vip, vport)


def gateway_router_name(node_name: str) -> str:
    """Name of the gateway router the node provisioning creates for a node."""
    return GATEWAY_ROUTER_PREFIX + node_name


def nodeport_enabled(config: dict) -> bool:
    """Read gateway.nodeportEnable, accepting booleans and boolean-like strings."""
    value = (config.get("gateway") or {}).get("nodeportEnable", False)
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on")
    return bool(value)
