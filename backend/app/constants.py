DEFAULTS = {
    # Title reported by the OpenAPI schema
    "APP_NAME": "dagbuilder-backend",
    # Prefix prepended to every route
    "API_PREFIX": "",
    # Prefix of generated node ids
    "NODE_ID_PREFIX": "node",
    # Allocation box for nodes created without a position
    "POSITION_MIN_X": 100.0,
    "POSITION_MAX_X": 500.0,
    "POSITION_MIN_Y": 100.0,
    "POSITION_MAX_Y": 400.0,
    # Seed for initial node positions (None = nondeterministic)
    "POSITION_SEED": None,
    # JSON indentation of exported snapshots (None = compact)
    "EXPORT_INDENT": 2,
    # Download filename offered by the export route
    "EXPORT_FILENAME": "dag-graph.json",
    # Snapshot loaded into the store at startup, if present
    "SNAPSHOT_PATH": None,
}
