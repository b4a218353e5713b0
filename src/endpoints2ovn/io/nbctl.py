"""LoadBalancerClient backed by the ovn-nbctl command line."""

import subprocess
import sys

from endpoints2ovn.core.constants import CLUSTER_LB_EXTERNAL_ID, GATEWAY_LB_EXTERNAL_ID
from endpoints2ovn.pacts.helpers import join_host_port, vip_key
from endpoints2ovn.pacts.types import LoadBalancerClient, LoadBalancerError, Protocol

_FIND = ("--data=bare", "--no-heading", "--columns=_uuid", "find")


class NbctlClient(LoadBalancerClient):
    """Run ovn-nbctl against the northbound database.

    Cluster and default-gateway load balancers never change once created,
    so their UUIDs are cached per protocol.
    """

    def __init__(self, command: str = "ovn-nbctl", args: list[str] | None = None,
                 dry_run: bool = False):
        self.command = command
        self.args = list(args or [])
        self.dry_run = dry_run
        self._cluster_lb_cache: dict[Protocol, str] = {}
        self._gateway_lb_cache: dict[Protocol, str] = {}

    def run(self, *args: str, mutating: bool = False) -> str:
        """Run one ovn-nbctl command and return its stripped stdout."""
        cmd = [self.command, *self.args, *args]
        if mutating and self.dry_run:
            print(f"Would run: {' '.join(cmd)}", file=sys.stderr)
            return ""
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
        except FileNotFoundError as exc:
            raise LoadBalancerError(f"{self.command} not found") from exc
        except subprocess.CalledProcessError as exc:
            raise LoadBalancerError(
                f"{' '.join(args)} failed, stderr: {exc.stderr.strip()!r}") from exc
        return result.stdout.strip()

    def get_load_balancer(self, protocol):
        if protocol in self._cluster_lb_cache:
            return self._cluster_lb_cache[protocol]
        external_id = CLUSTER_LB_EXTERNAL_ID.format(proto=protocol.value.lower())
        out = self.run(*_FIND, "load_balancer", f"external_ids:{external_id}=yes")
        if not out:
            raise LoadBalancerError(f"no {protocol.value} load balancer found in the database")
        self._cluster_lb_cache[protocol] = out
        return out

    def get_gateway_load_balancer(self, gateway, protocol):
        external_id = GATEWAY_LB_EXTERNAL_ID.format(proto=protocol.value)
        return self.run(*_FIND, "load_balancer", f"external_ids:{external_id}={gateway}")

    def get_gateway_physical_ip(self, gateway):
        try:
            out = self.run("get", "logical_router", gateway, "external_ids:physical_ip")
        except LoadBalancerError:
            # the router or its key does not exist yet
            return ""
        return out.strip('"')

    def list_gateways(self):
        out = self.run("--data=bare", "--no-heading", "--columns=name", "find",
                       "logical_router", "options:chassis!=null")
        return sorted(line.strip() for line in out.splitlines() if line.strip())

    def get_default_gateway_load_balancer(self, protocol):
        if protocol in self._gateway_lb_cache:
            return self._gateway_lb_cache[protocol]
        try:
            gateways = self.list_gateways()
            if not gateways:
                return ""
            lb = self.get_gateway_load_balancer(gateways[0], protocol)
        except LoadBalancerError:
            return ""
        if lb:
            self._gateway_lb_cache[protocol] = lb
        return lb

    def create_vip(self, load_balancer, vip, vport, ips, target_port):
        endpoints = ",".join(join_host_port(ip, target_port) for ip in ips)
        target = f'vips:"{vip_key(vip, vport)}"="{endpoints}"'
        self.run("set", "load_balancer", load_balancer, target, mutating=True)

    def remove_vip(self, load_balancer, vip, vport):
        key = f'"{vip_key(vip, vport)}"'
        self.run("remove", "load_balancer", load_balancer, "vips", key, mutating=True)
