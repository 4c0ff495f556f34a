"""
Catalog contract: the only way flow-graph nodes become ParameterSpecs.
Every generation call reads the catalog fresh from the editor's node list;
nothing is cached between calls. In dev mode, log parameters that had to
fall back to schema bounds.
"""
from typing import Any, Dict, Iterable, List, Optional, Set
import logging

from dropletgen.config import DEV
from dropletgen.core.params import as_float, get_field
from dropletgen.core.types import ParamKey, ParameterSpec
from dropletgen.params.schema import get_param_schema, is_ratio_param

logger = logging.getLogger("dropletgen")


def _is_end_thermostat(node: Dict[str, Any]) -> bool:
    end = get_field(node, "data.end", False)
    return get_field(node, "data.type", "") == "thermostat" and str(end).lower() == "true"


def excluded_node_ids(
    nodes: Iterable[Dict[str, Any]],
    carrier_pump_ids: Iterable[str] = (),
    skip_end_thermostats: bool = False,
) -> Set[str]:
    """
    Node ids that never appear in droplets: carrier pumps, plus end-stage
    thermostats when building the droplet table.
    """
    excluded = {str(node_id) for node_id in carrier_pump_ids}
    if skip_end_thermostats:
        excluded.update(str(node["id"]) for node in nodes if _is_end_thermostat(node))
    return excluded


def spec_from_node_param(node: Dict[str, Any], param: Dict[str, Any]) -> ParameterSpec:
    """Build one ParameterSpec, filling missing bounds from NODE_PARAM_SCHEMA."""
    node_id = str(node["id"])
    node_type = get_field(node, "data.type", "")
    name = param["name"]
    schema = get_param_schema(node_type, name)

    missing = [k for k in ("min", "max") if param.get(k) is None]
    if missing and DEV:
        logger.warning(
            "[Catalog] %s.%s has no %s; using schema bounds [%s, %s]",
            node_id, name, "/".join(missing), schema["min"], schema["max"],
        )

    return ParameterSpec(
        node_id=node_id,
        name=name,
        label=param.get("label") or name,
        min=as_float(param.get("min"), schema["min"]),
        max=as_float(param.get("max"), schema["max"]),
        default=as_float(param.get("default"), 0.0),
        unit=param.get("unit") or schema["unit"],
        is_ratio=is_ratio_param(node_type, name),
        node_name=get_field(node, "data.label", "") or node_id,
        node_type=node_type,
    )


def catalog_from_nodes(
    nodes: Iterable[Dict[str, Any]],
    carrier_pump_ids: Iterable[str] = (),
    skip_end_thermostats: bool = False,
) -> List[ParameterSpec]:
    """
    Flatten editor nodes into an ordered ParameterSpec list.
    Node order, then parameter order within each node, is preserved.
    Nodes without parameters and excluded nodes are skipped.
    """
    nodes = list(nodes)
    excluded = excluded_node_ids(nodes, carrier_pump_ids, skip_end_thermostats)
    catalog: List[ParameterSpec] = []
    for node in nodes:
        if str(node["id"]) in excluded:
            continue
        for param in get_field(node, "data.parameters", []):
            catalog.append(spec_from_node_param(node, param))
    return catalog


def find_spec(catalog: Iterable[ParameterSpec], key: ParamKey) -> Optional[ParameterSpec]:
    for spec in catalog:
        if spec.key == key:
            return spec
    return None


def ratio_specs(catalog: Iterable[ParameterSpec]) -> List[ParameterSpec]:
    return [spec for spec in catalog if spec.is_ratio]
