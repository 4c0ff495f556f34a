from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple, Union

# (node_id, parameter name)
ParamKey = Tuple[str, str]

# Concrete value per targeted parameter
ValueAssignment = Dict[ParamKey, float]


@dataclass(frozen=True)
class ParameterSpec:
    node_id: str
    name: str
    label: str
    min: float
    max: float
    default: float
    unit: str = ""
    is_ratio: bool = False
    node_name: str = ""  # node label shown in droplet tables
    node_type: str = ""

    @property
    def key(self) -> ParamKey:
        return (self.node_id, self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "nodeType": self.node_type,
            "name": self.name,
            "label": self.label,
            "min": self.min,
            "max": self.max,
            "default": self.default,
            "unit": self.unit,
            "isRatio": self.is_ratio,
        }


@dataclass(frozen=True)
class Distribute:
    """Spread the ratio total proportionally across all participants."""


@dataclass(frozen=True)
class SingleBalance:
    """Keep every participant fixed except one balancing node."""
    balancing_node_id: str


NormalizationPolicy = Union[Distribute, SingleBalance]


@dataclass
class DropletParameter:
    node_id: str
    node_name: str
    name: str
    default: float
    value: float

    @property
    def key(self) -> ParamKey:
        return (self.node_id, self.name)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodeId": self.node_id,
            "nodeName": self.node_name,
            "name": self.name,
            "default": self.default,
            "value": self.value,
        }


@dataclass
class Droplet:
    id: str
    parameters: List[DropletParameter] = field(default_factory=list)

    def value_of(self, node_id: str, name: str):
        for param in self.parameters:
            if param.node_id == node_id and param.name == name:
                return param.value
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "parameters": [p.to_dict() for p in self.parameters],
        }
