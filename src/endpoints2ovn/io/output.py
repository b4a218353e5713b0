"""Report output on stderr."""

import sys

from endpoints2ovn.pacts.types import SyncReport


def emit_warnings(warnings: list[str]) -> None:
    """Print all warnings to stderr."""
    for w in warnings:
        print(f"⚠ {w}", file=sys.stderr)


def emit_report(report: SyncReport, verbose: bool = False) -> None:
    """Print failures, warnings, a summary line and (verbose) notes."""
    if verbose:
        for note in report.notes:
            print(f"  {note}", file=sys.stderr)
        for r in report.results:
            if r.ok:
                print(f"  {r.action} {r.vip} on {r.load_balancer}"
                      f" -> {','.join(r.backends)}", file=sys.stderr)
    emit_warnings(report.warnings)
    emit_warnings([f"failed to {r.action} VIP {r.vip} on {r.load_balancer}: {r.error}"
                   for r in report.failures])
    created = sum(1 for r in report.results if r.ok and r.action == "create")
    removed = sum(1 for r in report.results if r.ok and r.action == "remove")
    print(f"Created {created} VIP(s), removed {removed}, "
          f"{len(report.failures)} failure(s)", file=sys.stderr)
