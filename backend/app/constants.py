DEFAULTS = {
    # Title reported by the OpenAPI schema
    "APP_NAME": "graphcompose-backend",
    # Prefix mounted in front of every router
    "API_PREFIX": "",
    # Label that always resolves to a graph's root in add_edge_by_label
    "ROOT_ALIAS": "root",
    # Label of the synthetic root created by parallel composition
    "PARALLEL_ROOT_LABEL": "Parallel",
    # Label of the synthetic root created by choice composition
    "CHOICE_ROOT_LABEL": "Choice",
    # Reject operator results whose containment subgraph has a cycle
    "ENFORCE_ACYCLIC": True,
    # Emit a debug record for every committed operator result
    "LOG_COMMITS": True,
    # Root log level for run_graphcompose.py
    "LOG_LEVEL": "INFO",
}
