"""Backend table construction from Endpoints subsets."""

from endpoints2ovn.pacts.types import BackendTable, LbEndpoints, Protocol


def build_backend_table(endpoints: dict) -> BackendTable:
    """Group endpoint addresses by protocol and service port name.

    Every address of a subset is a backend for every port of that subset.
    Addresses are appended as seen (duplicates kept); the target port is
    overwritten on each match, so the last subset wins on disagreement.
    Ports with a protocol other than TCP/UDP are dropped.
    """
    table = BackendTable()
    for subset in endpoints.get("subsets") or []:
        for address in subset.get("addresses") or []:
            for port in subset.get("ports") or []:
                protocol = Protocol.parse(port.get("protocol"))
                if protocol is None:
                    continue
                port_map = table.ports(protocol)
                name = port.get("name", "")
                lb_eps = port_map.setdefault(name, LbEndpoints())
                lb_eps.ips.append(address.get("ip", ""))
                lb_eps.port = port.get("port", 0)
    return table


def match_service_ports(svc: dict, protocol: Protocol, port_name: str) -> list[dict]:
    """Declared service ports with the given protocol and name."""
    return [
        sp for sp in (svc.get("spec") or {}).get("ports") or []
        if Protocol.parse(sp.get("protocol")) is protocol
        and sp.get("name", "") == port_name
    ]
