"""
Heuristic weight profiles.

Each profile is a complete set of multipliers for the heuristic evaluator.
Profiles are frozen so a preset can be shared freely between searches.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Dict, Tuple


@dataclass(frozen=True)
class EvaluationWeights:
    empty_weight: float
    monotonicity_weight: float
    smoothness_weight: float
    max_tile_weight: float
    corner_weight: float
    # (empty ratio threshold, multiplier) checked in order; first hit wins
    phase_multipliers: Tuple[Tuple[float, float], ...] = ((0.2, 1.5),)
    merge_weight: float = 0.0

    def phase_multiplier(self, empty_ratio: float) -> float:
        """Empty cells are worth more when the board is nearly full."""
        for threshold, multiplier in self.phase_multipliers:
            if empty_ratio < threshold:
                return multiplier
        return 1.0

    def with_overrides(self, **kwargs) -> "EvaluationWeights":
        return replace(self, **kwargs)

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


BALANCED_WEIGHTS = EvaluationWeights(
    empty_weight=2.7,
    monotonicity_weight=1.0,
    smoothness_weight=0.1,
    max_tile_weight=1.0,
    corner_weight=1.5,
)

# Stronger corner pull, steeper scarcity scaling, rewards pending merges
OPTIMAL_WEIGHTS = EvaluationWeights(
    empty_weight=2.7,
    monotonicity_weight=1.0,
    smoothness_weight=0.1,
    max_tile_weight=1.0,
    corner_weight=2.0,
    phase_multipliers=((0.15, 2.0), (0.3, 1.5)),
    merge_weight=0.5,
)

PROFILES: Dict[str, EvaluationWeights] = {
    "balanced": BALANCED_WEIGHTS,
    "optimal": OPTIMAL_WEIGHTS,
}


def get_profile(name: str) -> EvaluationWeights:
    if name not in PROFILES:
        available = ", ".join(PROFILES.keys())
        raise ValueError(f"Unknown profile: {name}. Available: {available}")
    return PROFILES[name]
