"""Endpoints delete."""

from endpoints2ovn.core.teardown import delete_endpoints
from endpoints2ovn.pacts.types import Protocol

from conftest import FakeKube, make_endpoints, make_service


def _service():
    return make_service(svc_type="NodePort", external_ips=["192.0.2.10"], ports=[
        {"name": "web", "port": 80, "nodePort": 30080, "protocol": "TCP"},
        {"name": "dns", "port": 53, "nodePort": 30053, "protocol": "UDP"},
        {"port": 443},
    ])


def test_removes_one_key_per_service_port(lbs):
    delete_endpoints(FakeKube(services=[_service()]), lbs, make_endpoints())
    assert lbs.calls == [
        ("remove", "lb-tcp", "10.96.0.5", 80),
        ("remove", "lb-udp", "10.96.0.5", 53),
        ("remove", "lb-tcp", "10.96.0.5", 443),
    ]


def test_removes_programmed_vip(lbs):
    lbs.vips["lb-tcp"] = {("10.96.0.5", 80): [("10.0.0.1", 8080)],
                          ("10.96.0.6", 80): [("10.0.0.2", 8080)]}
    delete_endpoints(FakeKube(services=[make_service()]), lbs, make_endpoints())
    assert lbs.vips["lb-tcp"] == {("10.96.0.6", 80): [("10.0.0.2", 8080)]}


def test_missing_service_or_cluster_ip(lbs):
    assert delete_endpoints(FakeKube(), lbs, make_endpoints()).ok
    kube = FakeKube(services=[make_service(cluster_ip="None")])
    assert delete_endpoints(kube, lbs, make_endpoints()).ok
    assert lbs.calls == []


def test_failures_do_not_stop_other_ports(lbs):
    lbs.broken_cluster.add(Protocol.UDP)
    lbs.fail_remove.add(("lb-tcp", "10.96.0.5", 80))
    report = delete_endpoints(FakeKube(services=[_service()]), lbs, make_endpoints())
    assert ("remove", "lb-tcp", "10.96.0.5", 443) in lbs.calls
    assert len(report.failures) == 1
    assert "failed to get load balancer for UDP" in report.warnings[0]
