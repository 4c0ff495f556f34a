"""
Per-node-type parameter schema for the flow-graph devices.
Gives the fallback range and unit for a parameter when the editor sends a
node parameter without explicit bounds.
"""
from typing import Dict, Any, Literal

# Type definitions
NodeType = Literal["pump", "thermostat", "detector"]

# Schema entry structure: min, max, unit, is_ratio, description
ParamSchemaEntry = Dict[str, Any]


def _make_param(
    min_val: float,
    max_val: float,
    unit: str,
    description: str,
    is_ratio: bool = False,
) -> ParamSchemaEntry:
    """Helper to create a schema entry."""
    return {
        "min": min_val,
        "max": max_val,
        "unit": unit,
        "is_ratio": is_ratio,
        "description": description,
    }


# Used when neither the node nor the schema knows the range
GENERIC_RANGE: ParamSchemaEntry = _make_param(0.0, 100.0, "", "Unconstrained parameter")

RATIO_PARAM_NAMES = frozenset({"Ratio", "ratio"})

# -----------------------------------------------------------------------------
# NODE_PARAM_SCHEMA: fallback bounds per node type and parameter name
# -----------------------------------------------------------------------------

NODE_PARAM_SCHEMA: Dict[str, Dict[str, ParamSchemaEntry]] = {
    "pump": {
        "Flow Rate": _make_param(0.1, 10.0, "μL/s", "Volumetric flow rate"),
        "Ratio": _make_param(
            1.0, 100.0, "%", "Share of the combined flow delivered by this pump", is_ratio=True
        ),
    },
    "thermostat": {
        "Temperature": _make_param(4.0, 95.0, "°C", "Setpoint temperature"),
    },
    "detector": {
        "Integration Time": _make_param(0.1, 10.0, "s", "Detector integration time"),
    },
}


def is_ratio_param(node_type: str, param_name: str) -> bool:
    """Pump flow fractions must sum to 1 across sibling pumps."""
    return node_type == "pump" and param_name in RATIO_PARAM_NAMES


def get_param_schema(node_type: str, param_name: str) -> ParamSchemaEntry:
    """Schema entry for a node parameter, or GENERIC_RANGE when unknown."""
    return NODE_PARAM_SCHEMA.get(node_type, {}).get(param_name, GENERIC_RANGE)
