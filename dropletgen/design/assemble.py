"""
Droplet assembly: targeted values plus catalog defaults for everything else.
"""
import time
import uuid
from typing import Callable, Iterable, Mapping, Sequence

from dropletgen.core.types import Droplet, DropletParameter, ParamKey, ParameterSpec

# Maps a run index within a batch to a droplet id
IdFactory = Callable[[int], str]


def batch_id_factory(prefix: str) -> IdFactory:
    """
    Ids of the form "<prefix>-<epoch ms>-<index>". The timestamp is taken
    once per batch, so ids are unique within the batch as long as indices are.
    """
    stamp = int(time.time() * 1000)
    return lambda index: f"{prefix}-{stamp}-{index}"


def random_id_factory() -> IdFactory:
    return lambda index: str(uuid.uuid4())


def assemble_droplet(
    droplet_id: str,
    target_values: Mapping[ParamKey, float],
    catalog: Sequence[ParameterSpec],
    excluded_node_ids: Iterable[str] = (),
) -> Droplet:
    """
    One entry per catalog spec whose node is not excluded, in catalog order.
    Targeted specs take their generated value; the rest take their default.
    Target keys that are not in the catalog are ignored.
    """
    excluded = set(excluded_node_ids)
    parameters = []
    for spec in catalog:
        if spec.node_id in excluded:
            continue
        value = target_values.get(spec.key, spec.default)
        parameters.append(DropletParameter(
            node_id=spec.node_id,
            node_name=spec.node_name,
            name=spec.name,
            default=spec.default,
            value=value,
        ))
    return Droplet(id=droplet_id, parameters=parameters)
