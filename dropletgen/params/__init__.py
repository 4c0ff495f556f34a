"""
Parameter catalog: flow-graph nodes to ParameterSpecs, with per-node-type
fallback bounds from NODE_PARAM_SCHEMA.
"""
from dropletgen.params.schema import NODE_PARAM_SCHEMA, is_ratio_param
from dropletgen.params.catalog import catalog_from_nodes, excluded_node_ids, find_spec, ratio_specs

__all__ = [
    "NODE_PARAM_SCHEMA",
    "is_ratio_param",
    "catalog_from_nodes",
    "excluded_node_ids",
    "find_spec",
    "ratio_specs",
]
