"""Constants shared by the reconcilers and the OVN client."""

# Gateway routers are named after the node they serve: GR_<node-name>
GATEWAY_ROUTER_PREFIX = "GR_"

# Readiness poll for a joining node's gateway objects (seconds)
GATEWAY_POLL_INTERVAL = 0.5
GATEWAY_POLL_TIMEOUT = 300.0

# K8s service types exposing a node port / a cluster IP
NODE_PORT_SERVICE_TYPES = ("NodePort", "LoadBalancer")
CLUSTER_IP_SERVICE_TYPES = ("ClusterIP", "NodePort", "LoadBalancer")

# external_ids marking the cluster-wide load balancers: k8s-cluster-lb-tcp=yes
CLUSTER_LB_EXTERNAL_ID = "k8s-cluster-lb-{proto}"

# external_ids marking a gateway router's load balancers: TCP_lb_gateway_router=GR_x
GATEWAY_LB_EXTERNAL_ID = "{proto}_lb_gateway_router"

DEFAULT_CONFIG_FILE = "endpoints2ovn.yaml"
