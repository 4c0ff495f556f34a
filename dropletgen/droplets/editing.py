"""
Manual droplet editing: the operations behind the droplet table.
Every function returns new objects; input droplets are never mutated.
"""
import copy
from typing import Collection, List, Optional, Sequence

from dropletgen.config import NUDGE_DECIMALS, NUDGE_FRACTION
from dropletgen.core.params import clamp_if_bounds, round_to
from dropletgen.core.types import Droplet, ParameterSpec
from dropletgen.design.assemble import IdFactory, assemble_droplet, random_id_factory


def default_droplet(droplet_id: str, catalog: Sequence[ParameterSpec]) -> Droplet:
    """A droplet with every catalog parameter at its default."""
    return assemble_droplet(droplet_id, {}, catalog)


def copy_droplets(
    droplets: Sequence[Droplet],
    ids: Collection[str],
    id_factory: Optional[IdFactory] = None,
) -> List[Droplet]:
    """Deep copies of the selected droplets with fresh ids, in selection order."""
    make_id = id_factory or random_id_factory()
    by_id = {d.id: d for d in droplets}
    copies = []
    for i, droplet_id in enumerate(ids):
        source = by_id.get(droplet_id)
        if source is None:
            continue
        clone = copy.deepcopy(source)
        clone.id = make_id(i)
        copies.append(clone)
    return copies


def delete_droplets(droplets: Sequence[Droplet], ids: Collection[str]) -> List[Droplet]:
    doomed = set(ids)
    return [d for d in droplets if d.id not in doomed]


def set_parameter_value(
    droplets: Sequence[Droplet],
    ids: Collection[str],
    node_id: str,
    name: str,
    value: float,
) -> List[Droplet]:
    """Set one parameter on the selected droplets; the others are copied as-is."""
    selected = set(ids)
    out = []
    for droplet in droplets:
        clone = copy.deepcopy(droplet)
        if clone.id in selected:
            for param in clone.parameters:
                if param.node_id == node_id and param.name == name:
                    param.value = float(value)
        out.append(clone)
    return out


def nudge_value(value: float, low: float, high: float, direction: int) -> float:
    """
    Step value by 5% of [low, high] in `direction` (+1 or -1), clamp to the
    range and round to 2 decimals. Used by scroll-wheel adjustment.
    """
    step = (high - low) * NUDGE_FRACTION
    stepped = float(value) + (1 if direction > 0 else -1) * step
    return round_to(clamp_if_bounds(stepped, low, high), NUDGE_DECIMALS)
