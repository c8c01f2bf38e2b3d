"""
Track - Discrete race track grid.

Contains:
- Cell types and their text symbols
- Track metadata
- Start/finish line lookup
- Distance-to-finish field used by CPU strategies
"""

from collections import deque
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Sequence, Tuple
import numpy as np

from gridrace.errors import InvalidTrackError, OutOfBoundsError


Coordinate = Tuple[int, int]


class CellType(IntEnum):
    """Types of track cells."""
    ROAD = 0
    WALL = 1
    FINISH = 2
    START = 3      # Drivable road that also forms the start line

    @property
    def symbol(self) -> str:
        """Text symbol used in track files."""
        return CELL_SYMBOLS[self]

    @property
    def is_drivable(self) -> bool:
        return self is not CellType.WALL

    @classmethod
    def from_symbol(cls, symbol: str) -> "CellType":
        """Parse a track file symbol.

        Raises:
            InvalidTrackError: If the symbol is unknown
        """
        try:
            return SYMBOL_CELLS[symbol]
        except KeyError:
            raise InvalidTrackError(f"Invalid track symbol: {symbol!r}") from None


CELL_SYMBOLS: Dict[CellType, str] = {
    CellType.WALL: "*",
    CellType.ROAD: " ",
    CellType.START: "+",
    CellType.FINISH: "-",
}
SYMBOL_CELLS: Dict[str, CellType] = {v: k for k, v in CELL_SYMBOLS.items()}


@dataclass(frozen=True)
class TrackConfig:
    """Track metadata."""
    name: str = "Unnamed Track"
    num_players: int = 2
    direction: str = "cw"   # "cw" or "ccw"


class Track:
    """Immutable race track grid.

    The grid is indexed [y, x] internally; every public query takes
    (x, y) where x is the column and y the row.

    Usage:
        track = Track.from_rows([
            "*******",
            "*+   -*",
            "*******",
        ])
        track.cell_at(1, 1)   # CellType.START
    """

    def __init__(
        self,
        grid: np.ndarray | Sequence[Sequence[int]],
        config: TrackConfig | None = None,
    ):
        """Initialize track from a grid of cell type codes.

        Args:
            grid: 2D array-like of CellType values, shape (height, width)
            config: Track metadata. Uses defaults if None.
        """
        try:
            cells = np.array(grid, dtype=np.int8)
        except (ValueError, TypeError, OverflowError) as e:
            raise InvalidTrackError(f"Track grid is not a rectangular array of cell codes: {e}") from e
        if cells.ndim != 2 or cells.size == 0:
            raise InvalidTrackError("Track grid must be a non-empty 2D array")

        valid = set(int(c) for c in CellType)
        unknown = set(np.unique(cells).tolist()) - valid
        if unknown:
            raise InvalidTrackError(f"Unknown cell codes: {sorted(unknown)}")

        cells.setflags(write=False)
        self._grid = cells
        self.config = config or TrackConfig()

        self._start_positions = self._scan(CellType.START)
        self._finish_positions = self._scan(CellType.FINISH)
        self._distance_field: np.ndarray | None = None

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[str],
        config: TrackConfig | None = None,
    ) -> "Track":
        """Build a track from text rows of cell symbols.

        Args:
            rows: One string per grid row, all the same length
            config: Track metadata

        Returns:
            New track
        """
        if not rows:
            raise InvalidTrackError("Track has no rows")
        width = len(rows[0])
        grid = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidTrackError(
                    f"Row {y} has length {len(row)}, expected {width}"
                )
            grid.append([int(CellType.from_symbol(ch)) for ch in row])
        return cls(grid, config)

    @property
    def width(self) -> int:
        """Number of columns."""
        return int(self._grid.shape[1])

    @property
    def height(self) -> int:
        """Number of rows."""
        return int(self._grid.shape[0])

    @property
    def grid(self) -> np.ndarray:
        """Read-only cell code array indexed [y, x]."""
        return self._grid

    @property
    def name(self) -> str:
        return self.config.name

    def in_bounds(self, x: int, y: int) -> bool:
        """Check if (x, y) lies on the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> CellType:
        """Get the cell type at (x, y).

        Raises:
            OutOfBoundsError: If (x, y) is outside the grid
        """
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(x, y, self.width, self.height)
        return CellType(int(self._grid[y, x]))

    def is_finish(self, x: int, y: int) -> bool:
        """Check if (x, y) is a finish cell. False outside the grid."""
        return self.in_bounds(x, y) and bool(self._grid[y, x] == CellType.FINISH)

    def is_wall(self, x: int, y: int) -> bool:
        """Check if (x, y) is a wall cell. Off-grid counts as wall."""
        return not self.in_bounds(x, y) or bool(self._grid[y, x] == CellType.WALL)

    def start_positions(self) -> List[Coordinate]:
        """Start cells in row-major order."""
        return list(self._start_positions)

    def finish_positions(self) -> List[Coordinate]:
        """Finish cells in row-major order."""
        return list(self._finish_positions)

    def _scan(self, cell_type: CellType) -> Tuple[Coordinate, ...]:
        ys, xs = np.nonzero(self._grid == cell_type)
        # np.nonzero already walks in row-major order
        return tuple((int(x), int(y)) for y, x in zip(ys, xs))

    def distance_to_finish(self) -> np.ndarray:
        """Step distance from every cell to the nearest finish cell.

        Breadth-first search over 4-neighbours through drivable cells.
        Walls and cells with no route to the finish hold inf.

        Returns:
            Read-only float array of shape (height, width)
        """
        if self._distance_field is not None:
            return self._distance_field

        dist = np.full(self._grid.shape, np.inf)
        queue: deque = deque()
        for x, y in self._finish_positions:
            dist[y, x] = 0.0
            queue.append((x, y))

        while queue:
            x, y = queue.popleft()
            for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
                nx, ny = x + dx, y + dy
                if self.is_wall(nx, ny) or dist[ny, nx] != np.inf:
                    continue
                dist[ny, nx] = dist[y, x] + 1.0
                queue.append((nx, ny))

        dist.setflags(write=False)
        self._distance_field = dist
        return dist

    def finish_distance(self, x: int, y: int) -> float:
        """Step distance from (x, y) to the nearest finish. inf off the grid."""
        if not self.in_bounds(x, y):
            return float(np.inf)
        return float(self.distance_to_finish()[y, x])

    def to_rows(self) -> List[str]:
        """Render the grid back to text rows of cell symbols."""
        return [
            "".join(CellType(int(code)).symbol for code in row)
            for row in self._grid
        ]

    def get_state(self) -> Dict[str, object]:
        """Get track description as plain data."""
        return {
            "name": self.config.name,
            "width": self.width,
            "height": self.height,
            "direction": self.config.direction,
            "num_players": self.config.num_players,
            "start_positions": self.start_positions(),
            "finish_positions": self.finish_positions(),
        }

    def __repr__(self) -> str:
        return f"Track(name={self.config.name!r}, {self.width}x{self.height})"
