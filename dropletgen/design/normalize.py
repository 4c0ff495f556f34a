"""
Ratio normalization: pump flow fractions on sibling pumps must sum to 1.

Two policies:
- Distribute: scale every participant proportionally. When a driving value
  is fixed (the swept or selected pump), only the others are scaled to fill
  the remainder `1 - driving`.
- SingleBalance: every participant keeps its value except the balancing
  pump, which takes `max(0, 1 - sum(others))`. If the others already exceed
  1 the balancing pump is clamped to 0 and the total stays above 1, unlike
  Distribute; check it with ratio_sum().

Returns a new dict (does not mutate input) and never raises.
"""
from typing import Dict, Iterable, List, Optional
import logging

from dropletgen.core.types import Distribute, NormalizationPolicy, ParameterSpec, SingleBalance

logger = logging.getLogger(__name__)


def ratio_sum(values: Dict[str, float]) -> float:
    return float(sum(values.values()))


def _equal_split(keys: List[str], total: float) -> Dict[str, float]:
    share = total / len(keys)
    return {k: share for k in keys}


def _distribute(raw: Dict[str, float], driving: Optional[str]) -> Dict[str, float]:
    result = dict(raw)
    if driving is not None and driving in raw:
        others = [k for k in raw if k != driving]
        remaining = 1.0 - raw[driving]
        other_sum = sum(raw[k] for k in others)
        if other_sum == 0:
            result.update(_equal_split(others, remaining))
        else:
            for k in others:
                result[k] = raw[k] / other_sum * remaining
        return result

    total = ratio_sum(raw)
    if total == 0:
        return _equal_split(list(raw), 1.0)
    return {k: v / total for k, v in raw.items()}


def _single_balance(raw: Dict[str, float], balancing: str, driving: Optional[str]) -> Dict[str, float]:
    result = dict(raw)
    if balancing not in raw or balancing == driving:
        logger.warning(
            "Balancing pump %r is not an adjustable ratio participant (%s); ratios left unchanged",
            balancing, sorted(raw),
        )
        return result
    fixed_sum = sum(v for k, v in raw.items() if k != balancing)
    result[balancing] = max(0.0, 1.0 - fixed_sum)
    if fixed_sum > 1.0:
        logger.warning(
            "Non-balancing ratios sum to %.4f > 1; %r clamped to 0 and total stays above 1 (= %.4f)",
            fixed_sum, balancing, ratio_sum(result),
        )
    return result


def policy_from_name(name: Optional[str], balancing_node_id: Optional[str] = None) -> NormalizationPolicy:
    """
    "single" with a balancing pump -> SingleBalance; anything else,
    including "single" without a pump, -> Distribute.
    """
    if (name or "").lower() == "single" and balancing_node_id:
        return SingleBalance(str(balancing_node_id))
    return Distribute()


def normalize_ratios(
    raw: Dict[str, float],
    policy: NormalizationPolicy = Distribute(),
    driving: Optional[str] = None,
) -> Dict[str, float]:
    """
    Rebalance ratio values keyed by node id.

    Args:
        raw: node id -> raw ratio value, for every participating pump.
        policy: Distribute() or SingleBalance(balancing_node_id).
        driving: node id whose value is fixed externally (the swept or
            selected pump). None when all participants are free.

    Fewer than two participants are returned unchanged.
    """
    if len(raw) < 2:
        return dict(raw)
    if isinstance(policy, SingleBalance):
        return _single_balance(raw, policy.balancing_node_id, driving)
    return _distribute(raw, driving)


# -----------------------------------------------------------------------------
# Helpers for the ratio controls
# -----------------------------------------------------------------------------

def max_ratio_sum(specs: Iterable[ParameterSpec]) -> float:
    """Sum of the upper bounds of the ratio parameters among specs."""
    return float(sum(s.max for s in specs if s.is_ratio))


def balancing_candidates(
    specs: Iterable[ParameterSpec],
    driving_node_id: Optional[str] = None,
) -> List[str]:
    """
    Pump node ids that can balance the ratios, in catalog order.
    The first entry is the default balancing pump.
    """
    candidates: List[str] = []
    for spec in specs:
        if spec.is_ratio and spec.node_id != driving_node_id and spec.node_id not in candidates:
            candidates.append(spec.node_id)
    return candidates
