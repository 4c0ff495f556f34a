"""
Tests for dropletgen/params/catalog: flow-graph nodes -> ParameterSpecs.
Run from project root: python -m pytest tests/test_catalog.py -v
"""
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from dropletgen.params.catalog import catalog_from_nodes, excluded_node_ids, find_spec, ratio_specs
from dropletgen.params.schema import get_param_schema, is_ratio_param

CARRIERS = ["carrier"]


def test_catalog_order_and_exclusions(catalog):
    assert [s.key for s in catalog] == [
        ("pump-1", "Flow Rate"),
        ("pump-1", "Ratio"),
        ("pump-2", "Flow Rate"),
        ("pump-2", "Ratio"),
        ("pump-3", "Ratio"),
        ("thermo-1", "Temperature"),
        ("detector-1", "Integration Time"),
    ]


def test_end_thermostat_kept_unless_skipped(nodes):
    catalog = catalog_from_nodes(nodes, CARRIERS)
    assert find_spec(catalog, ("thermo-end", "Temperature")) is not None
    assert find_spec(catalog, ("carrier", "Flow Rate")) is None


def test_excluded_node_ids(nodes):
    assert excluded_node_ids(nodes, CARRIERS) == {"carrier"}
    assert excluded_node_ids(nodes, CARRIERS, skip_end_thermostats=True) == {"carrier", "thermo-end"}


def test_ratio_flags(catalog):
    assert [s.node_id for s in ratio_specs(catalog)] == ["pump-1", "pump-2", "pump-3"]
    assert find_spec(catalog, ("pump-1", "Flow Rate")).is_ratio is False


def test_missing_bounds_fall_back_to_schema(catalog):
    spec = find_spec(catalog, ("detector-1", "Integration Time"))
    assert (spec.min, spec.max) == (0.1, 10.0)
    assert spec.default == 0.0
    assert spec.unit == "s"
    assert spec.label == "Integration Time"
    assert spec.node_name == "Spectrometer"
    assert spec.node_type == "detector"


def test_explicit_bounds_win(catalog):
    spec = find_spec(catalog, ("thermo-1", "Temperature"))
    assert (spec.min, spec.max, spec.default) == (20.0, 80.0, 25.0)


def test_unknown_type_uses_generic_range():
    nodes = [{"id": 7, "data": {"type": "mixer", "parameters": [{"name": "Speed", "default": "12"}]}}]
    (spec,) = catalog_from_nodes(nodes)
    assert spec.node_id == "7"
    assert spec.node_name == "7"
    assert (spec.min, spec.max, spec.default) == (0.0, 100.0, 12.0)


def test_catalog_read_fresh_each_call(nodes):
    first = catalog_from_nodes(nodes, CARRIERS)
    nodes[0]["data"]["parameters"][0]["max"] = 5.0
    second = catalog_from_nodes(nodes, CARRIERS)
    assert find_spec(first, ("pump-1", "Flow Rate")).max == 10.0
    assert find_spec(second, ("pump-1", "Flow Rate")).max == 5.0


@pytest.mark.parametrize("node_type,name,expected", [
    ("pump", "Ratio", True),
    ("pump", "ratio", True),
    ("pump", "Flow Rate", False),
    ("thermostat", "Ratio", False),
])
def test_is_ratio_param(node_type, name, expected):
    assert is_ratio_param(node_type, name) is expected


def test_schema_ratio_entry():
    entry = get_param_schema("pump", "Ratio")
    assert entry["is_ratio"] is True
    assert entry["unit"] == "%"
