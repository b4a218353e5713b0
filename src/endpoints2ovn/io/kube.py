"""KubeAccessor implementations: rendered manifests on disk, or kubectl."""

import json
import subprocess
from pathlib import Path

import yaml

from endpoints2ovn.pacts.helpers import object_key
from endpoints2ovn.pacts.types import KubeAccessor, KubeError, KubeNotFound


def parse_manifests(manifest_dir: str, warnings: list[str] | None = None) -> dict[str, list[dict]]:
    """Load all YAML files from manifest_dir, classify by kind.

    ``List`` documents (``kubectl get -o yaml``) are flattened into their items.
    """
    manifests: dict[str, list[dict]] = {}
    for yaml_file in sorted(Path(manifest_dir).rglob("*.y*ml")):
        try:
            with open(yaml_file) as f:
                docs = list(yaml.safe_load_all(f))
        except yaml.YAMLError as exc:
            if warnings is not None:
                warnings.append(f"Skipping {yaml_file.name}: {exc.__class__.__name__}")
            continue
        for doc in docs:
            if not doc or not isinstance(doc, dict):
                continue
            items = (doc.get("items") or []) if doc.get("kind") == "List" else [doc]
            for item in items:
                kind = item.get("kind", "Unknown")
                manifests.setdefault(kind, []).append(item)
    return manifests


class ManifestKube(KubeAccessor):
    """Serve Services, Endpoints and Namespaces from parsed manifests."""

    def __init__(self, manifests: dict[str, list[dict]]):
        self.services = {object_key(s): s for s in manifests.get("Service", [])}
        self.endpoints: dict[str, list[dict]] = {}
        for ep in manifests.get("Endpoints", []):
            self.endpoints.setdefault(object_key(ep)[0], []).append(ep)
        self.namespaces = {object_key(ns)[1]: ns for ns in manifests.get("Namespace", [])}
        # Namespaces referenced by objects but not declared
        for ns, _name in list(self.services) + [(ns, "") for ns in self.endpoints]:
            self.namespaces.setdefault(ns, {"kind": "Namespace", "metadata": {"name": ns}})

    @classmethod
    def from_dir(cls, manifest_dir: str, warnings: list[str] | None = None) -> "ManifestKube":
        return cls(parse_manifests(manifest_dir, warnings))

    def get_service(self, namespace, name):
        return self.services.get((namespace, name))

    def get_namespaces(self):
        return [self.namespaces[name] for name in sorted(self.namespaces)]

    def get_endpoints(self, namespace):
        return list(self.endpoints.get(namespace, []))


class KubectlKube(KubeAccessor):
    """Fetch objects from the live cluster with ``kubectl get -o json``."""

    def __init__(self, command: str = "kubectl", context: str | None = None):
        self.command = command
        self.context = context

    def _get(self, *args: str) -> dict:
        cmd = [self.command]
        if self.context:
            cmd.extend(["--context", self.context])
        cmd.extend(["get", *args, "--output", "json"])
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=True)
            return json.loads(result.stdout)
        except FileNotFoundError as exc:
            raise KubeError(f"{self.command} not found") from exc
        except subprocess.CalledProcessError as exc:
            if "NotFound" in (exc.stderr or ""):
                raise KubeNotFound(exc.stderr.strip()) from exc
            raise KubeError(f"kubectl get {' '.join(args)} failed: {exc.stderr.strip()}") from exc
        except json.JSONDecodeError as exc:
            raise KubeError(f"kubectl get {' '.join(args)}: invalid JSON") from exc

    def get_service(self, namespace, name):
        try:
            return self._get("service", name, "--namespace", namespace)
        except KubeNotFound:
            return None

    def get_namespaces(self):
        return self._get("namespaces").get("items") or []

    def get_endpoints(self, namespace):
        return self._get("endpoints", "--namespace", namespace).get("items") or []
