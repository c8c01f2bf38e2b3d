"""Tests for the GridRace track module."""

import pytest
import numpy as np

from gridrace.errors import InvalidTrackError, OutOfBoundsError
from gridrace.track.track import CellType, Track, TrackConfig


class TestCellType:
    """Test cell type symbols."""

    def test_symbols(self):
        """Test each cell type maps to its file symbol and back."""
        assert CellType.from_symbol("*") is CellType.WALL
        assert CellType.from_symbol(" ") is CellType.ROAD
        assert CellType.from_symbol("+") is CellType.START
        assert CellType.from_symbol("-") is CellType.FINISH
        assert CellType.WALL.symbol == "*"

    def test_unknown_symbol(self):
        """Test unknown symbols are rejected."""
        with pytest.raises(InvalidTrackError):
            CellType.from_symbol("x")

    def test_drivable(self):
        """Test only walls are not drivable."""
        assert not CellType.WALL.is_drivable
        assert CellType.START.is_drivable
        assert CellType.FINISH.is_drivable


class TestTrack:
    """Test track queries."""

    @pytest.fixture
    def track(self):
        return Track.from_rows([
            "*******",
            "*+   -*",
            "*+ * -*",
            "*******",
        ], TrackConfig(name="Box"))

    def test_dimensions(self, track):
        """Test width and height follow the rows."""
        assert track.width == 7
        assert track.height == 4
        assert track.name == "Box"

    def test_cell_at(self, track):
        """Test cell lookup uses (x, y) = (column, row)."""
        assert track.cell_at(0, 0) is CellType.WALL
        assert track.cell_at(1, 1) is CellType.START
        assert track.cell_at(2, 1) is CellType.ROAD
        assert track.cell_at(3, 2) is CellType.WALL
        assert track.cell_at(5, 2) is CellType.FINISH

    def test_cell_at_out_of_bounds(self, track):
        """Test coordinates off the grid raise OutOfBoundsError."""
        with pytest.raises(OutOfBoundsError):
            track.cell_at(7, 0)
        with pytest.raises(OutOfBoundsError):
            track.cell_at(0, -1)
        # Also catchable as IndexError
        with pytest.raises(IndexError):
            track.cell_at(-1, 2)

    def test_is_finish(self, track):
        """Test finish check, false off the grid."""
        assert track.is_finish(5, 1)
        assert not track.is_finish(4, 1)
        assert not track.is_finish(50, 50)

    def test_in_bounds(self, track):
        assert track.in_bounds(0, 0)
        assert track.in_bounds(6, 3)
        assert not track.in_bounds(7, 3)

    def test_start_positions_row_major(self, track):
        """Test start cells are listed row by row."""
        assert track.start_positions() == [(1, 1), (1, 2)]

    def test_finish_positions(self, track):
        assert track.finish_positions() == [(5, 1), (5, 2)]

    def test_grid_is_read_only(self, track):
        """Test the track cannot be mutated after construction."""
        with pytest.raises(ValueError):
            track.grid[1, 1] = int(CellType.WALL)

    def test_to_rows(self, track):
        """Test rendering back to symbols."""
        assert track.to_rows()[2] == "*+ * -*"

    def test_ragged_rows_rejected(self):
        """Test rows of different lengths are rejected."""
        with pytest.raises(InvalidTrackError):
            Track.from_rows(["***", "**"])

    @pytest.mark.parametrize("grid", [
        [[0, 0], [0]],
        [[0, "wall"], [0, 0]],
        [[0, 300], [0, 0]],
    ])
    def test_malformed_numeric_grid_rejected(self, grid):
        """Test ragged, non-numeric or oversized code grids raise InvalidTrackError."""
        with pytest.raises(InvalidTrackError):
            Track(grid)

    def test_unknown_cell_codes_rejected(self):
        """Test numeric grids with unknown codes are rejected."""
        with pytest.raises(InvalidTrackError):
            Track([[0, 1], [9, 0]])

    def test_state(self, track):
        state = track.get_state()
        assert state["width"] == 7
        assert state["start_positions"] == [(1, 1), (1, 2)]


class TestDistanceField:
    """Test distance-to-finish field."""

    def test_corridor(self):
        """Test distances count down toward the finish."""
        track = Track.from_rows(["+   -"])
        dist = track.distance_to_finish()
        assert np.array_equal(dist[0], [4.0, 3.0, 2.0, 1.0, 0.0])

    def test_routes_around_walls(self):
        """Test walls are impassable and unreachable cells are inf."""
        track = Track.from_rows([
            "+*- ",
            "    ",
            "***+",
        ])
        dist = track.distance_to_finish()
        assert dist[0, 2] == 0.0
        assert dist[1, 2] == 1.0
        assert dist[1, 1] == 2.0
        assert dist[0, 0] == 4.0
        assert np.isinf(dist[0, 1])
        assert dist[2, 3] == 3.0

    def test_cached(self):
        """Test the field is computed once."""
        track = Track.from_rows(["+  -"])
        assert track.distance_to_finish() is track.distance_to_finish()

    def test_finish_distance_lookup(self):
        """Test single-cell lookup, inf off the grid and on walls."""
        track = Track.from_rows(["+ * -"])
        assert track.finish_distance(3, 0) == 1.0
        assert np.isinf(track.finish_distance(2, 0))
        assert np.isinf(track.finish_distance(0, 0))
        assert np.isinf(track.finish_distance(-1, 0))
        assert isinstance(track.finish_distance(4, 0), float)
