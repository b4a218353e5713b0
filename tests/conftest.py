"""In-memory fakes for the Kubernetes and load-balancer collaborators."""

import pytest

from endpoints2ovn.pacts.types import (
    KubeAccessor, KubeError, LoadBalancerClient, LoadBalancerError, Protocol,
)


class FakeKube(KubeAccessor):
    def __init__(self, services=(), endpoints=(), broken_namespaces=()):
        self.services = {}
        for svc in services:
            meta = svc["metadata"]
            self.services[(meta.get("namespace", "default"), meta["name"])] = svc
        self.endpoints = list(endpoints)
        self.broken_namespaces = set(broken_namespaces)

    def get_service(self, namespace, name):
        return self.services.get((namespace, name))

    def get_namespaces(self):
        names = {ns for ns, _ in self.services}
        names |= {ep["metadata"].get("namespace", "default") for ep in self.endpoints}
        names |= self.broken_namespaces
        return [{"metadata": {"name": n}} for n in sorted(names)]

    def get_endpoints(self, namespace):
        if namespace in self.broken_namespaces:
            raise KubeError(f"endpoints in {namespace} forbidden")
        return [ep for ep in self.endpoints
                if ep["metadata"].get("namespace", "default") == namespace]


class FakeLoadBalancers(LoadBalancerClient):
    """Holds VIPs as {lb: {(vip, vport): [(ip, port), ...]}}."""

    def __init__(self, gateways=None, default_gateway=True):
        self.cluster = {Protocol.TCP: "lb-tcp", Protocol.UDP: "lb-udp"}
        # gateway name -> {"tcp": lb, "udp": lb, "ip": physical ip}
        self.gateways = gateways if gateways is not None else {}
        self.default_gateway = default_gateway
        self.vips = {}
        self.calls = []
        self.fail_create = set()
        self.fail_remove = set()
        self.broken_cluster = set()

    def get_load_balancer(self, protocol):
        if protocol in self.broken_cluster:
            raise LoadBalancerError("no load-balancer found in the database")
        return self.cluster[protocol]

    def get_gateway_load_balancer(self, gateway, protocol):
        return self.gateways.get(gateway, {}).get(protocol.value.lower(), "")

    def get_gateway_physical_ip(self, gateway):
        return self.gateways.get(gateway, {}).get("ip", "")

    def get_default_gateway_load_balancer(self, protocol):
        if not self.default_gateway or not self.gateways:
            return ""
        return self.get_gateway_load_balancer(sorted(self.gateways)[0], protocol)

    def list_gateways(self):
        return sorted(self.gateways)

    def create_vip(self, load_balancer, vip, vport, ips, target_port):
        self.calls.append(("create", load_balancer, vip, vport,
                           [(ip, target_port) for ip in ips]))
        if (load_balancer, vip, vport) in self.fail_create:
            raise LoadBalancerError("ovn-nbctl: transaction error")
        self.vips.setdefault(load_balancer, {})[(vip, vport)] = [
            (ip, target_port) for ip in ips]

    def remove_vip(self, load_balancer, vip, vport):
        self.calls.append(("remove", load_balancer, vip, vport))
        if (load_balancer, vip, vport) in self.fail_remove:
            raise LoadBalancerError("ovn-nbctl: transaction error")
        self.vips.get(load_balancer, {}).pop((vip, vport), None)

    def creates(self):
        return [c for c in self.calls if c[0] == "create"]


def make_service(name="web", namespace="default", cluster_ip="10.96.0.5",
                 svc_type="ClusterIP", ports=None, external_ips=None):
    spec = {
        "type": svc_type,
        "clusterIP": cluster_ip,
        "ports": ports if ports is not None else [
            {"name": "web", "port": 80, "protocol": "TCP"}],
    }
    if external_ips:
        spec["externalIPs"] = external_ips
    return {"kind": "Service",
            "metadata": {"name": name, "namespace": namespace},
            "spec": spec}


def make_endpoints(name="web", namespace="default", subsets=None):
    return {"kind": "Endpoints",
            "metadata": {"name": name, "namespace": namespace},
            "subsets": subsets if subsets is not None else [{
                "addresses": [{"ip": "10.0.0.1"}, {"ip": "10.0.0.2"}],
                "ports": [{"name": "web", "port": 8080, "protocol": "TCP"}],
            }]}


@pytest.fixture
def lbs():
    return FakeLoadBalancers()
