"""
Shared flow-graph fixtures: three sample pumps, a carrier pump, two
thermostats (one end-stage) and a detector.
"""
import sys
import os
import copy

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

from dropletgen.params.catalog import catalog_from_nodes, excluded_node_ids

FLOWCHART_NODES = [
    {"id": "pump-1", "data": {"type": "pump", "label": "Pump A", "parameters": [
        {"name": "Flow Rate", "default": 1.0, "min": 0.1, "max": 10.0, "unit": "μL/s"},
        {"name": "Ratio", "default": 0.5, "min": 0.0, "max": 1.0},
    ]}},
    {"id": "pump-2", "data": {"type": "pump", "label": "Pump B", "parameters": [
        {"name": "Flow Rate", "default": 2.0, "min": 0.1, "max": 10.0, "unit": "μL/s"},
        {"name": "Ratio", "default": 0.3, "min": 0.0, "max": 1.0},
    ]}},
    {"id": "pump-3", "data": {"type": "pump", "label": "Pump C", "parameters": [
        {"name": "Ratio", "default": 0.2, "min": 0.0, "max": 1.0},
    ]}},
    {"id": "carrier", "data": {"type": "pump", "label": "Oil", "parameters": [
        {"name": "Flow Rate", "default": 5.0},
    ]}},
    {"id": "thermo-1", "data": {"type": "thermostat", "label": "Heater", "parameters": [
        {"name": "Temperature", "default": 25.0, "min": 20.0, "max": 80.0, "unit": "°C"},
    ]}},
    {"id": "thermo-end", "data": {"type": "thermostat", "label": "Cooler", "end": "true", "parameters": [
        {"name": "Temperature", "default": 10.0},
    ]}},
    {"id": "detector-1", "data": {"type": "detector", "label": "Spectrometer", "parameters": [
        {"name": "Integration Time"},
    ]}},
    {"id": "junction", "data": {"type": "junction", "label": "T", "parameters": []}},
]

CARRIERS = ["carrier"]


@pytest.fixture
def run_ids():
    """Deterministic droplet ids: run-0, run-1, ..."""
    return lambda index: f"run-{index}"


@pytest.fixture
def nodes():
    return copy.deepcopy(FLOWCHART_NODES)


@pytest.fixture
def catalog(nodes):
    """Droplet-table catalog: carrier pump and end-stage thermostat excluded."""
    return catalog_from_nodes(nodes, CARRIERS, skip_end_thermostats=True)


@pytest.fixture
def excluded(nodes):
    return excluded_node_ids(nodes, CARRIERS, skip_end_thermostats=True)
