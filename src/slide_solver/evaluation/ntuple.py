"""
N-Tuple network evaluation.

A board is scored by summing lookup-table weights: every pattern (a fixed
ordered group of cells) turns the tile exponents it covers into a base-16
index into its own weight vector. Each pattern is also read under the 8
symmetries of the square board (4 rotations, each optionally mirrored), so
one trained pattern covers every orientation of the same shape.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from slide_solver.core.board import tile_exponents

Coord = Tuple[int, int]
Pattern = Tuple[Coord, ...]

# Exponents 0..15 per cell (empty, 2, 4, ..., 32768)
INDEX_BASE = 16
MAX_EXPONENT = INDEX_BASE - 1

WEIGHTS_DTYPE = np.float32

# Board size used when patterns are serialized as flat cell indices
DEFAULT_PATTERN_BOARD_SIZE = 4


class WeightLoadError(Exception):
    """Weight data is malformed or does not fit the patterns."""

    def __init__(self, message: str, details: Optional[Dict[str, int]] = None):
        super().__init__(message)
        self.details = details or {}


def lut_size(tuple_size: int) -> int:
    return INDEX_BASE ** tuple_size


def tuple_index(exponents: Sequence[int]) -> int:
    """Base-16 index of a tuple of exponents, first cell most significant."""
    index = 0
    for exp in exponents:
        index = index * INDEX_BASE + min(int(exp), MAX_EXPONENT)
    return index


# ---------------------------------------------------------------------------
# Symmetries
# ---------------------------------------------------------------------------

def symmetric_coords(coord: Coord, size: int) -> List[Coord]:
    """Images of one cell under the 8 board symmetries (identity first)."""
    r, c = coord
    n = size - 1
    return [
        (r, c),          # identity
        (c, n - r),      # rotate 90
        (n - r, n - c),  # rotate 180
        (n - c, r),      # rotate 270
        (r, n - c),      # mirror
        (n - c, n - r),  # mirror + rotate 90
        (n - r, c),      # mirror + rotate 180
        (c, r),          # mirror + rotate 270
    ]


def symmetric_patterns(pattern: Pattern, size: int) -> List[Pattern]:
    """The 8 symmetric images of a pattern on a size×size board."""
    images = [symmetric_coords(coord, size) for coord in pattern]
    return [tuple(cells[k] for cells in images) for k in range(8)]


def pattern_from_indices(indices: Sequence[int], size: int = DEFAULT_PATTERN_BOARD_SIZE) -> Pattern:
    return tuple((int(i) // size, int(i) % size) for i in indices)


def pattern_to_indices(pattern: Pattern, size: int = DEFAULT_PATTERN_BOARD_SIZE) -> List[int]:
    return [r * size + c for r, c in pattern]


# ---------------------------------------------------------------------------
# Pattern sets
# ---------------------------------------------------------------------------

@dataclass
class PatternSet:
    """
    Patterns plus one weight vector per pattern.

    `version` and `metadata` describe where the weights came from; they do
    not affect evaluation.
    """

    patterns: List[Pattern]
    weights: List[np.ndarray]
    version: int = 1
    metadata: Dict[str, Any] = field(default_factory=dict)
    board_size: int = DEFAULT_PATTERN_BOARD_SIZE

    def validate(self) -> None:
        """Raise WeightLoadError unless every pattern fits the board and has a full weight vector."""
        if not isinstance(self.version, int) or self.version < 1:
            raise WeightLoadError("Invalid config version")
        if not self.patterns:
            raise WeightLoadError("Patterns array is empty or invalid")
        if len(self.patterns) != len(self.weights):
            raise WeightLoadError(
                f"Pattern count ({len(self.patterns)}) does not match "
                f"weight count ({len(self.weights)})"
            )
        for i, (pattern, weights) in enumerate(zip(self.patterns, self.weights)):
            if not pattern:
                raise WeightLoadError(f"Pattern {i} is empty", {"tupleIndex": i})
            if not all(0 <= r < self.board_size and 0 <= c < self.board_size for r, c in pattern):
                raise WeightLoadError(
                    f"Pattern {i} has cells outside a {self.board_size}x{self.board_size} board",
                    {"tupleIndex": i},
                )
            if np.ndim(weights) != 1:
                raise WeightLoadError(f"Weights for tuple {i} must be a flat array", {"tupleIndex": i})
            expected = lut_size(len(pattern))
            if len(weights) != expected:
                raise WeightLoadError(
                    f"Weight dimension mismatch for tuple {i}",
                    {"expectedSize": expected, "actualSize": len(weights), "tupleIndex": i},
                )

    @classmethod
    def empty(cls, patterns: Sequence[Pattern], **kwargs) -> "PatternSet":
        """All-zero weights for the given patterns."""
        patterns = [tuple(p) for p in patterns]
        weights = [np.zeros(lut_size(len(p)), dtype=WEIGHTS_DTYPE) for p in patterns]
        return cls(patterns, weights, **kwargs)

    # -- serialization -----------------------------------------------------

    @classmethod
    def from_dict(cls, data: Dict[str, Any], validate: bool = True) -> "PatternSet":
        """
        Build from the JSON layout: {version, patterns, weights, metadata}.

        Patterns are lists of flat cell indices on a `board_size` grid
        (default 4), or lists of [row, col] pairs.
        """
        if not isinstance(data, dict):
            raise WeightLoadError("Weights config must be an object")
        try:
            size = int(data.get("board_size", DEFAULT_PATTERN_BOARD_SIZE))
            patterns = [_parse_pattern(p, size) for p in data["patterns"]]
            weights = [np.asarray(w, dtype=WEIGHTS_DTYPE) for w in data["weights"]]
        except (KeyError, TypeError, ValueError) as e:
            raise WeightLoadError(f"Invalid weights config: {e}") from e

        pattern_set = cls(
            patterns=patterns,
            weights=weights,
            version=data.get("version", 0),
            metadata=dict(data.get("metadata") or {}),
            board_size=size,
        )
        if validate:
            pattern_set.validate()
        return pattern_set

    @classmethod
    def from_json(cls, text: str, validate: bool = True) -> "PatternSet":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise WeightLoadError(f"Failed to parse JSON: {e}") from e
        return cls.from_dict(data, validate=validate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "board_size": self.board_size,
            "patterns": [pattern_to_indices(p, self.board_size) for p in self.patterns],
            "weights": [w.tolist() for w in self.weights],
            "metadata": dict(self.metadata),
        }

    def to_json(self, pretty: bool = False) -> str:
        return json.dumps(self.to_dict(), indent=2 if pretty else None)


def _parse_pattern(raw: Sequence[Any], size: int) -> Pattern:
    if raw and isinstance(raw[0], (list, tuple)):
        return tuple((int(r), int(c)) for r, c in raw)
    return pattern_from_indices(raw, size)


# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------

class NTupleNetwork:
    """Lookup-table evaluator over a fixed list of patterns."""

    def __init__(self, patterns: Sequence[Pattern]):
        self.patterns: List[Pattern] = [tuple(p) for p in patterns]
        self.lut_sizes = [lut_size(len(p)) for p in self.patterns]
        self.weights: List[np.ndarray] = [np.zeros(n, dtype=WEIGHTS_DTYPE) for n in self.lut_sizes]
        self._powers = [
            INDEX_BASE ** np.arange(len(p) - 1, -1, -1, dtype=np.int64) for p in self.patterns
        ]
        # board size -> per pattern (8, k) flat cell indices
        self._positions: Dict[int, List[np.ndarray]] = {}

    @classmethod
    def from_pattern_set(cls, pattern_set: PatternSet) -> "NTupleNetwork":
        network = cls(pattern_set.patterns)
        network.load_weights(pattern_set.weights)
        return network

    def _positions_for(self, size: int) -> List[np.ndarray]:
        positions = self._positions.get(size)
        if positions is None:
            positions = []
            for pattern in self.patterns:
                if any(r >= size or c >= size for r, c in pattern):
                    raise ValueError(f"Pattern {pattern} does not fit a {size}x{size} board")
                flat = [[r * size + c for r, c in image] for image in symmetric_patterns(pattern, size)]
                positions.append(np.array(flat, dtype=np.int64))
            self._positions[size] = positions
        return positions

    def evaluate(self, board: np.ndarray) -> float:
        """Sum of weights over all patterns and all 8 symmetric images."""
        exps = np.minimum(tile_exponents(board).ravel(), MAX_EXPONENT)
        total = 0.0
        for positions, powers, weights in zip(self._positions_for(board.shape[0]), self._powers, self.weights):
            indices = exps[positions] @ powers
            total += float(weights[indices].sum())
        return total

    def load_weights(self, weights_data: Sequence[Sequence[float]]) -> None:
        if len(weights_data) != len(self.patterns):
            raise WeightLoadError(
                f"Weight array count mismatch: expected {len(self.patterns)}, got {len(weights_data)}"
            )
        loaded = []
        for i, data in enumerate(weights_data):
            if len(data) != self.lut_sizes[i]:
                raise WeightLoadError(
                    f"Weight dimension mismatch for tuple {i}",
                    {"expectedSize": self.lut_sizes[i], "actualSize": len(data), "tupleIndex": i},
                )
            loaded.append(np.asarray(data, dtype=WEIGHTS_DTYPE))
        self.weights = loaded

    def export_weights(self) -> List[np.ndarray]:
        return [w.copy() for w in self.weights]

    def export_pattern_set(self, metadata: Optional[Dict[str, Any]] = None) -> PatternSet:
        return PatternSet(
            patterns=list(self.patterns),
            weights=self.export_weights(),
            version=1,
            metadata=dict(metadata or {}),
        )


def evaluate_patterns(board: np.ndarray, pattern_set: PatternSet) -> float:
    """One-shot evaluation; build an NTupleNetwork to evaluate repeatedly."""
    return NTupleNetwork.from_pattern_set(pattern_set).evaluate(board)
