"""endpoints2ovn command line."""

import argparse
import os
import sys

from endpoints2ovn.core.constants import DEFAULT_CONFIG_FILE
from endpoints2ovn.core.gateway import handle_node_port_lb
from endpoints2ovn.core.sync import add_endpoints
from endpoints2ovn.core.teardown import delete_endpoints
from endpoints2ovn.io.config import load_config, save_config
from endpoints2ovn.io.kube import KubectlKube, ManifestKube
from endpoints2ovn.io.nbctl import NbctlClient
from endpoints2ovn.io.output import emit_report, emit_warnings
from endpoints2ovn.pacts.types import KubeError, SyncReport


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Program OVN load-balancer VIPs from Kubernetes Services/Endpoints"
    )
    parser.add_argument(
        "--from-dir",
        help="Read Services/Endpoints/Namespaces from rendered YAML in this directory "
             "instead of the live cluster",
    )
    parser.add_argument(
        "--config", default=DEFAULT_CONFIG_FILE,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILE})",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Print ovn-nbctl commands that would change the database instead of running them",
    )
    parser.add_argument(
        "--nodeport", action="store_true",
        help="Enable NodePort VIP programming (overrides gateway.nodeportEnable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Also print skipped objects and successful VIP operations")
    sub = parser.add_subparsers(dest="command", required=True)

    sync = sub.add_parser("sync", help="Create VIPs for every Endpoints object")
    sync.add_argument("-n", "--namespace", help="Only this namespace")

    delete = sub.add_parser("delete", help="Remove the cluster VIPs of deleted endpoints")
    delete.add_argument("endpoints", nargs="+", metavar="NAMESPACE/NAME")

    node = sub.add_parser("node", help="Backfill NodePort VIPs on newly joined nodes")
    node.add_argument("nodes", nargs="+", metavar="NODE")
    return parser


def _split_ref(ref: str) -> tuple[str, str]:
    namespace, _, name = ref.rpartition("/")
    return namespace or "default", name


def _run_sync(kube, client, config, args, report: SyncReport) -> None:
    if args.namespace:
        namespaces = [args.namespace]
    else:
        namespaces = [(ns.get("metadata") or {}).get("name", "")
                      for ns in kube.get_namespaces()]
    for ns in namespaces:
        try:
            endpoints_list = kube.get_endpoints(ns)
        except KubeError as exc:
            report.warnings.append(f"failed to get k8s endpoints in {ns}: {exc}")
            continue
        for ep in endpoints_list:
            report.merge(add_endpoints(kube, client, ep, config))


def _run_delete(kube, client, args, report: SyncReport) -> None:
    for ref in args.endpoints:
        namespace, name = _split_ref(ref)
        # The Endpoints object may be gone already; the service key is all we need
        ep = {"kind": "Endpoints", "metadata": {"namespace": namespace, "name": name}}
        report.merge(delete_endpoints(kube, client, ep))


def _run_node(kube, client, config, args, report: SyncReport) -> None:
    for node_name in args.nodes:
        print(f"Waiting for gateway of node {node_name}...", file=sys.stderr)
        report.merge(handle_node_port_lb(
            kube, client, {"kind": "Node", "metadata": {"name": node_name}},
            interval=float(config["poll"]["interval"]),
            timeout=float(config["poll"]["timeout"]),
        ))


def main(argv=None):
    """CLI entry point."""
    args = _build_parser().parse_args(argv)

    first_run = not os.path.exists(args.config)
    config = load_config(args.config)
    if first_run:
        save_config(args.config, config)
        print(f"Wrote {args.config}", file=sys.stderr)
    if args.nodeport:
        config["gateway"]["nodeportEnable"] = True

    warnings: list[str] = []
    if args.from_dir:
        if not os.path.isdir(args.from_dir):
            print(f"Manifest directory not found: {args.from_dir}", file=sys.stderr)
            sys.exit(1)
        kube = ManifestKube.from_dir(args.from_dir, warnings)
        print(f"Loaded {len(kube.services)} service(s), "
              f"{sum(len(v) for v in kube.endpoints.values())} endpoints object(s)",
              file=sys.stderr)
    else:
        kube = KubectlKube()
    emit_warnings(warnings)

    client = NbctlClient(config["nbctl"]["command"], config["nbctl"]["args"],
                         dry_run=args.dry_run)

    report = SyncReport()
    try:
        if args.command == "sync":
            _run_sync(kube, client, config, args, report)
        elif args.command == "delete":
            _run_delete(kube, client, args, report)
        else:
            _run_node(kube, client, config, args, report)
    except KubeError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    emit_report(report, verbose=args.verbose)

    if report.failures or report.warnings:
        sys.exit(1)


if __name__ == "__main__":
    main()
