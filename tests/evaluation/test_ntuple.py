"""
Tests for slide_solver.evaluation.ntuple

Tests tuple indexing, symmetries, pattern set validation and the network.
"""

import json

import numpy as np
import pytest

from slide_solver.core.board import as_board, new_board
from slide_solver.evaluation.ntuple import (
    WEIGHTS_DTYPE,
    NTupleNetwork,
    PatternSet,
    WeightLoadError,
    evaluate_patterns,
    lut_size,
    pattern_from_indices,
    pattern_to_indices,
    symmetric_coords,
    symmetric_patterns,
    tuple_index,
)


def one_hot_set(pattern, index, value=1.0):
    """Pattern set whose only non-zero weight sits at `index`."""
    pattern_set = PatternSet.empty([pattern])
    pattern_set.weights[0][index] = value
    return pattern_set


class TestTupleIndex:
    """Base-16 packing, first cell most significant."""

    def test_empty_cells(self):
        """An all-empty tuple indexes slot 0."""
        assert tuple_index([0, 0, 0, 0]) == 0

    def test_first_cell_most_significant(self):
        """The first cell carries the highest base-16 digit."""
        assert tuple_index([1, 0, 0, 0]) == 16 ** 3
        assert tuple_index([0, 0, 0, 1]) == 1

    def test_mixed(self):
        """Digits combine in base 16."""
        assert tuple_index([1, 2, 3, 4]) == ((1 * 16 + 2) * 16 + 3) * 16 + 4

    def test_exponent_capped(self):
        """Exponents above 15 are clipped."""
        assert tuple_index([20]) == 15

    def test_lut_size(self):
        """Tables hold 16^k entries."""
        assert lut_size(4) == 65536
        assert lut_size(2) == 256


class TestSymmetries:
    """The 8 images of the square."""

    def test_identity_first(self):
        """The first image is the cell itself."""
        assert symmetric_coords((0, 1), 4)[0] == (0, 1)

    def test_corner_maps_to_all_corners(self):
        """A corner visits every corner."""
        images = set(symmetric_coords((0, 0), 4))
        assert images == {(0, 0), (0, 3), (3, 0), (3, 3)}

    def test_generic_cell_has_eight_images(self):
        """An edge cell has eight distinct images."""
        assert len(set(symmetric_coords((0, 1), 4))) == 8

    def test_images_stay_on_board(self):
        """Images never leave the board, for any size."""
        for size in (4, 5, 7):
            for r in range(size):
                for c in range(size):
                    for rr, cc in symmetric_coords((r, c), size):
                        assert 0 <= rr < size and 0 <= cc < size

    def test_row_pattern_images_cover_all_edges(self):
        """The top row maps onto all four edges."""
        row = ((0, 0), (0, 1), (0, 2), (0, 3))
        cell_sets = {frozenset(p) for p in symmetric_patterns(row, 4)}
        edges = {
            frozenset((0, c) for c in range(4)),
            frozenset((3, c) for c in range(4)),
            frozenset((r, 0) for r in range(4)),
            frozenset((r, 3) for r in range(4)),
        }
        assert cell_sets == edges

    def test_flat_index_conversion(self):
        """Flat indices and coordinates convert both ways."""
        pattern = pattern_from_indices([0, 1, 5, 15])
        assert pattern == ((0, 0), (0, 1), (1, 1), (3, 3))
        assert pattern_to_indices(pattern) == [0, 1, 5, 15]


class TestNetworkEvaluate:
    """Sum of LUT weights over every symmetric image."""

    def test_zero_weights(self, midgame_board):
        """All-zero weights score zero."""
        network = NTupleNetwork([((0, 0), (0, 1))])
        assert network.evaluate(midgame_board) == 0.0

    def test_empty_board_hits_index_zero_eight_times(self, empty_board):
        """Each of the 8 images reads slot 0 on an empty board."""
        pattern_set = one_hot_set(((0, 0), (0, 1)), 0)
        assert evaluate_patterns(empty_board, pattern_set) == 8.0

    def test_single_image_match(self):
        """Only the identity image reads a 2 then a 4."""
        board = new_board(4)
        board[0, 0] = 2
        board[0, 1] = 4
        pattern_set = one_hot_set(((0, 0), (0, 1)), tuple_index([1, 2]), 5.0)
        assert evaluate_patterns(board, pattern_set) == 5.0

    def test_symmetric_boards_score_equal(self, midgame_board):
        """Rotations, mirrors and transposes score the same."""
        network = NTupleNetwork.from_pattern_set(PatternSet(
            patterns=[((0, 0), (0, 1), (1, 0))],
            weights=[np.arange(lut_size(3), dtype=WEIGHTS_DTYPE) % 97],
        ))
        base = network.evaluate(midgame_board)
        assert network.evaluate(np.rot90(midgame_board).copy()) == pytest.approx(base)
        assert network.evaluate(np.fliplr(midgame_board).copy()) == pytest.approx(base)
        assert network.evaluate(midgame_board.T.copy()) == pytest.approx(base)

    def test_larger_board(self):
        """Patterns are coordinates, so they apply to bigger boards too."""
        board = new_board(6)
        board[5, 5] = 2
        pattern_set = one_hot_set(((0, 0),), 1)
        assert evaluate_patterns(board, pattern_set) == 2.0  # corner cell seen by 2 images

    def test_pattern_outside_board(self, empty_board):
        """Evaluating a pattern that does not fit raises."""
        network = NTupleNetwork([((4, 4),)])
        with pytest.raises(ValueError, match="does not fit"):
            network.evaluate(empty_board)


class TestNetworkWeights:
    """load_weights / export."""

    def test_load_count_mismatch(self):
        """Too few weight arrays are rejected."""
        network = NTupleNetwork([((0, 0),), ((0, 1),)])
        with pytest.raises(WeightLoadError, match="count mismatch"):
            network.load_weights([[0.0] * 16])

    def test_load_size_mismatch_details(self):
        """Wrong array sizes report expected and actual sizes."""
        network = NTupleNetwork([((0, 0), (0, 1))])
        with pytest.raises(WeightLoadError) as exc_info:
            network.load_weights([[0.0] * 10])
        assert exc_info.value.details == {"expectedSize": 256, "actualSize": 10, "tupleIndex": 0}

    def test_export_is_copy(self):
        """Exported weights do not alias the network."""
        network = NTupleNetwork([((0, 0),)])
        exported = network.export_weights()
        exported[0][:] = 9.0
        assert not network.weights[0].any()

    def test_export_pattern_set(self):
        """Exporting yields a valid set carrying the metadata."""
        network = NTupleNetwork([((0, 0), (1, 1))])
        pattern_set = network.export_pattern_set({"trainedGames": 10})
        pattern_set.validate()
        assert pattern_set.metadata == {"trainedGames": 10}
        assert pattern_set.patterns == [((0, 0), (1, 1))]


class TestPatternSetValidation:
    """validate() failures carry readable messages."""

    def test_valid(self):
        """A complete zero set validates."""
        PatternSet.empty([((0, 0), (0, 1))]).validate()

    def test_bad_version(self):
        """Version 0 is rejected."""
        pattern_set = PatternSet.empty([((0, 0),)], version=0)
        with pytest.raises(WeightLoadError, match="version"):
            pattern_set.validate()

    def test_no_patterns(self):
        """An empty pattern list is rejected."""
        with pytest.raises(WeightLoadError, match="empty"):
            PatternSet([], []).validate()

    def test_count_mismatch(self):
        """Pattern and weight counts must match."""
        pattern_set = PatternSet.empty([((0, 0),), ((0, 1),)])
        pattern_set.weights.pop()
        with pytest.raises(WeightLoadError, match="does not match"):
            pattern_set.validate()

    def test_dimension_mismatch(self):
        """Weight vectors must have 16^k entries."""
        pattern_set = PatternSet.empty([((0, 0), (0, 1))])
        pattern_set.weights[0] = np.zeros(17, dtype=WEIGHTS_DTYPE)
        with pytest.raises(WeightLoadError) as exc_info:
            pattern_set.validate()
        assert exc_info.value.details["expectedSize"] == 256

    @pytest.mark.parametrize("pattern", [((0, 0), (4, 0)), ((-1, 3),), ((0, 4),)])
    def test_cells_off_board(self, pattern):
        """Cells outside the declared board are rejected with the tuple index."""
        pattern_set = PatternSet.empty([((0, 0),), pattern])
        with pytest.raises(WeightLoadError, match="outside a 4x4 board") as exc_info:
            pattern_set.validate()
        assert exc_info.value.details == {"tupleIndex": 1}

    def test_flat_index_past_board(self):
        """Flat index 16 on a 4x4 grid lands on row 4 and fails to load."""
        data = {"version": 1, "patterns": [[0, 1, 2, 16]], "weights": [[0.0] * 65536]}
        with pytest.raises(WeightLoadError, match="outside"):
            PatternSet.from_dict(data)

    def test_declared_size_allows_larger_cells(self):
        """A 6x6 set may use cells a 4x4 set may not."""
        data = {"version": 1, "board_size": 6, "patterns": [[35]], "weights": [[0.0] * 16]}
        assert PatternSet.from_dict(data).patterns == [((5, 5),)]

    def test_scalar_weights(self):
        """A bare number in place of a weight vector is a load error."""
        data = {"version": 1, "patterns": [[0]], "weights": [5]}
        with pytest.raises(WeightLoadError, match="flat array") as exc_info:
            PatternSet.from_dict(data)
        assert exc_info.value.details == {"tupleIndex": 0}

    def test_nested_weights(self):
        """Two-dimensional weight tables are rejected."""
        data = {"version": 1, "patterns": [[0]], "weights": [[[0.0] * 16]]}
        with pytest.raises(WeightLoadError, match="flat array"):
            PatternSet.from_dict(data)


class TestPatternSetSerialization:
    """JSON layout: {version, patterns, weights, metadata}."""

    def test_dict_round_trip(self):
        """to_dict then from_dict keeps patterns, weights and metadata."""
        original = one_hot_set(((0, 0), (0, 1)), 17, 2.5)
        original.metadata["avgScore"] = 1200
        restored = PatternSet.from_dict(original.to_dict())
        assert restored.patterns == original.patterns
        assert restored.metadata == {"avgScore": 1200}
        assert restored.weights[0][17] == 2.5

    def test_flat_indices(self):
        """Flat cell indices parse to coordinates."""
        data = {"version": 1, "patterns": [[0, 4]], "weights": [[0.0] * 256]}
        assert PatternSet.from_dict(data).patterns == [((0, 0), (1, 0))]

    def test_coordinate_pairs(self):
        """[row, col] pairs parse directly."""
        data = {"version": 1, "patterns": [[[2, 3], [3, 3]]], "weights": [[0.0] * 256]}
        assert PatternSet.from_dict(data).patterns == [((2, 3), (3, 3))]

    def test_missing_version_fails(self):
        """A missing version fails validation."""
        data = {"patterns": [[0]], "weights": [[0.0] * 16]}
        with pytest.raises(WeightLoadError, match="version"):
            PatternSet.from_dict(data)

    def test_missing_key(self):
        """A missing weights key is reported as invalid."""
        with pytest.raises(WeightLoadError, match="Invalid weights config"):
            PatternSet.from_dict({"version": 1, "patterns": [[0]]})

    def test_not_an_object(self):
        """Non-object JSON is rejected."""
        with pytest.raises(WeightLoadError, match="object"):
            PatternSet.from_dict([1, 2, 3])

    def test_bad_json(self):
        """Unparseable text raises WeightLoadError."""
        with pytest.raises(WeightLoadError, match="parse JSON"):
            PatternSet.from_json("{not json")

    def test_to_json_is_json(self):
        """to_json writes flat indices and full tables."""
        text = PatternSet.empty([((0, 0),)]).to_json()
        data = json.loads(text)
        assert data["patterns"] == [[0]]
        assert len(data["weights"][0]) == 16
