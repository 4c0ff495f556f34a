"""
Batch droplet generation: the single entry point behind both generator UIs.

All user-input validation happens here, before any computation, so a batch is
either produced whole or not at all. The stages below (design, interpolation,
mapping, normalization, assembly) are pure and never raise on user input.

    catalog -> {level design | range sweep} -> mapping -> ratio normalization -> assembly
"""
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import logging
import math

from dropletgen.config import DEFAULT_STEPS, MIN_STEPS
from dropletgen.core.errors import (
    InsufficientFactorsError,
    InvalidRangeError,
    NoDropletsGeneratedError,
    UnknownParameterError,
)
from dropletgen.core.types import (
    Distribute,
    Droplet,
    NormalizationPolicy,
    ParamKey,
    ParameterSpec,
    ValueAssignment,
)
from dropletgen.design.assemble import IdFactory, assemble_droplet, batch_id_factory
from dropletgen.design.interpolate import interpolate_range
from dropletgen.design.levels import build_level_design
from dropletgen.design.mapping import map_design
from dropletgen.design.normalize import normalize_ratios
from dropletgen.params.catalog import find_spec

logger = logging.getLogger(__name__)

RangeOverrides = Mapping[ParamKey, Tuple[float, float]]


def _resolve(catalog: Sequence[ParameterSpec], key: ParamKey) -> ParameterSpec:
    spec = find_spec(catalog, tuple(key))
    if spec is None:
        raise UnknownParameterError(f"Parameter {key[1]!r} on node {key[0]!r} is not in the catalog")
    return spec


def _as_bound(raw, label: str) -> float:
    """Request-supplied range bound -> float; non-numeric input is an InvalidRangeError."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        raise InvalidRangeError(f"{label} value must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise InvalidRangeError(f"{label} value must be finite, got {raw!r}")
    return value


def _as_steps(raw) -> int:
    """Request-supplied step count -> int; non-numeric input falls back to MIN_STEPS."""
    try:
        steps = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        logger.warning("Interpolation steps %r is not a number; using %d", raw, MIN_STEPS)
        return MIN_STEPS
    if steps < MIN_STEPS:
        logger.warning("Interpolation steps %d clamped to %d", steps, MIN_STEPS)
        return MIN_STEPS
    return steps


def _normalize_assignment(
    assignment: ValueAssignment,
    ratio_params: Sequence[ParameterSpec],
    policy: NormalizationPolicy,
    driving: Optional[str] = None,
) -> ValueAssignment:
    """Run the ratio participants of one run through normalize_ratios."""
    raw = {s.node_id: assignment[s.key] for s in ratio_params}
    balanced = normalize_ratios(raw, policy, driving=driving)
    out = dict(assignment)
    for s in ratio_params:
        out[s.key] = balanced[s.node_id]
    return out


def _ratio_participants(specs: Iterable[ParameterSpec]) -> List[ParameterSpec]:
    """The first ratio parameter of each pump node; later ones on the same node are ignored."""
    seen = set()
    participants = []
    for s in specs:
        if s.is_ratio and s.node_id not in seen:
            seen.add(s.node_id)
            participants.append(s)
    return participants


# -----------------------------------------------------------------------------
# Response surface (level design)
# -----------------------------------------------------------------------------

def generate_factorial_droplets(
    catalog: Sequence[ParameterSpec],
    selected: Sequence[ParamKey],
    policy: NormalizationPolicy = Distribute(),
    excluded_node_ids: Sequence[str] = (),
    id_factory: Optional[IdFactory] = None,
    ranges: Optional[RangeOverrides] = None,
) -> List[Droplet]:
    """
    One droplet per design run over the selected parameters.

    Args:
        catalog: ParameterSpecs for the whole flow graph, in display order.
        selected: (node_id, name) keys of the design factors; at least two.
        policy: ratio normalization applied when two or more selected
            parameters are pump ratios.
        excluded_node_ids: nodes left out of every droplet (carrier pumps).
        id_factory: run index -> droplet id. Defaults to "rsm-<ms>-<i>".
        ranges: optional per-parameter (min, max) replacing catalog bounds.

    Raises:
        InsufficientFactorsError: fewer than two distinct parameters selected.
        UnknownParameterError: a selected key is not in the catalog.
        InvalidRangeError: a range override bound is not a number.
    """
    keys = list(dict.fromkeys(tuple(k) for k in selected))
    if len(keys) < 2:
        raise InsufficientFactorsError(
            "Please select at least 2 parameters for Response Surface Methodology"
        )
    specs = [_resolve(catalog, k) for k in keys]
    if ranges:
        specs = [
            replace(
                s,
                min=_as_bound(ranges[s.key][0], "Minimum"),
                max=_as_bound(ranges[s.key][1], "Maximum"),
            ) if s.key in ranges else s
            for s in specs
        ]

    design = build_level_design(len(specs))
    assignments = map_design(design, specs)

    ratio_params = _ratio_participants(specs)
    if len(ratio_params) > 1:
        assignments = [_normalize_assignment(a, ratio_params, policy) for a in assignments]

    make_id = id_factory or batch_id_factory("rsm")
    droplets = [
        assemble_droplet(make_id(i), a, catalog, excluded_node_ids)
        for i, a in enumerate(assignments)
    ]
    logger.info(
        "Generated %d response-surface droplets over %d factors (%d ratio)",
        len(droplets), len(specs), len(ratio_params),
    )
    return droplets


# -----------------------------------------------------------------------------
# Interpolation (single-parameter sweep)
# -----------------------------------------------------------------------------

def generate_interpolated_droplets(
    catalog: Sequence[ParameterSpec],
    selected: ParamKey,
    low: Optional[float] = None,
    high: Optional[float] = None,
    steps: int = DEFAULT_STEPS,
    policy: NormalizationPolicy = Distribute(),
    excluded_node_ids: Sequence[str] = (),
    id_factory: Optional[IdFactory] = None,
) -> List[Droplet]:
    """
    One droplet per step of a linear sweep of the selected parameter.

    low/high default to the parameter's catalog bounds. steps below 2, or not
    a number, become 2. When the swept parameter is a pump ratio, every other
    ratio parameter in the catalog starts from its default and is rebalanced
    around the swept value with `policy`.

    Raises:
        UnknownParameterError: selected key is not in the catalog.
        InvalidRangeError: low >= high, or a bound is not a number.
    """
    spec = _resolve(catalog, selected)
    low = spec.min if low is None else _as_bound(low, "Minimum")
    high = spec.max if high is None else _as_bound(high, "Maximum")
    if low >= high:
        raise InvalidRangeError("Minimum value must be less than maximum value")
    steps = _as_steps(steps)

    values = interpolate_range(low, high, steps)

    excluded = set(excluded_node_ids)
    ratio_params: List[ParameterSpec] = []
    if spec.is_ratio:
        ratio_params = [spec] + _ratio_participants(
            s for s in catalog
            if s.node_id != spec.node_id and s.node_id not in excluded
        )

    make_id = id_factory or batch_id_factory("interpolated")
    droplets = []
    for i, value in enumerate(values):
        assignment: Dict[ParamKey, float] = {s.key: s.default for s in ratio_params}
        assignment[spec.key] = value
        if len(ratio_params) > 1:
            assignment = _normalize_assignment(assignment, ratio_params, policy, driving=spec.node_id)
        droplets.append(assemble_droplet(make_id(i), assignment, catalog, excluded))

    logger.info(
        "Generated %d interpolated droplets for %s.%s over [%s, %s]",
        len(droplets), spec.node_id, spec.name, low, high,
    )
    return droplets


def require_droplets(droplets: Sequence[Droplet]) -> List[Droplet]:
    """Gate for the proceed step: the batch must not be empty."""
    if not droplets:
        raise NoDropletsGeneratedError("Please generate droplets first")
    return list(droplets)
