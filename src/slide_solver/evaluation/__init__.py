"""
Evaluation module - heuristic and N-Tuple board scoring.
"""

from slide_solver.evaluation.heuristics import (
    corner_bonus,
    evaluate,
    evaluate_optimal,
    merge_potential,
    monotonicity,
    smoothness,
)
from slide_solver.evaluation.ntuple import (
    NTupleNetwork,
    PatternSet,
    WeightLoadError,
    evaluate_patterns,
)
from slide_solver.evaluation.ntuple_weights import (
    DEFAULT_PATTERNS,
    FULL_6TUPLE_PATTERNS,
    SIMPLE_4TUPLE_PATTERNS,
    PatternEvaluator,
    create_default_pattern_set,
    file_loader,
    load_pattern_set,
    load_pattern_set_async,
    save_pattern_set,
)
from slide_solver.evaluation.profiles import (
    BALANCED_WEIGHTS,
    OPTIMAL_WEIGHTS,
    EvaluationWeights,
)

__all__ = [
    # Heuristics
    "evaluate",
    "evaluate_optimal",
    "monotonicity",
    "smoothness",
    "corner_bonus",
    "merge_potential",
    "EvaluationWeights",
    "BALANCED_WEIGHTS",
    "OPTIMAL_WEIGHTS",
    # N-Tuple
    "NTupleNetwork",
    "PatternSet",
    "PatternEvaluator",
    "WeightLoadError",
    "DEFAULT_PATTERNS",
    "SIMPLE_4TUPLE_PATTERNS",
    "FULL_6TUPLE_PATTERNS",
    "evaluate_patterns",
    "create_default_pattern_set",
    "load_pattern_set",
    "load_pattern_set_async",
    "file_loader",
    "save_pattern_set",
]
