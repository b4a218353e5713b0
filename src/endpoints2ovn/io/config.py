"""Load and save endpoints2ovn.yaml."""

import os

import yaml

from endpoints2ovn.core.constants import GATEWAY_POLL_INTERVAL, GATEWAY_POLL_TIMEOUT


def load_config(path: str) -> dict:
    """Load endpoints2ovn.yaml or return the default config."""
    if os.path.exists(path):
        with open(path) as f:
            cfg = yaml.safe_load(f) or {}
    else:
        cfg = {}
    cfg.setdefault("endpoints2ovnVersion", "v1")
    # A bare "gateway:" key loads as None
    for section in ("gateway", "poll", "nbctl"):
        cfg[section] = cfg.get(section) or {}
    cfg["gateway"].setdefault("nodeportEnable", False)
    cfg["poll"].setdefault("interval", GATEWAY_POLL_INTERVAL)
    cfg["poll"].setdefault("timeout", GATEWAY_POLL_TIMEOUT)
    cfg["nbctl"].setdefault("command", "ovn-nbctl")
    cfg["nbctl"].setdefault("args", [])
    return cfg


def save_config(path: str, config: dict) -> None:
    """Write endpoints2ovn.yaml."""
    header = "# Configuration for endpoints2ovn (Service/Endpoints → OVN load-balancer VIPs)\n\n"
    # Ensure version key comes first
    ordered = {"endpoints2ovnVersion": config.get("endpoints2ovnVersion", "v1")}
    for k, v in config.items():
        if k != "endpoints2ovnVersion":
            ordered[k] = v
    with open(path, "w", encoding="utf-8") as f:
        f.write(header)
        yaml.dump(ordered, f, default_flow_style=False, sort_keys=False)
