# game/world/game_map.py
from collections import deque
from typing import Final, List, NamedTuple, Set, Tuple

import numpy as np
import structlog

log = structlog.get_logger()

TILE_ID_FLOOR: Final[int] = 0
TILE_ID_WALL: Final[int] = 1

ITEM_NONE: Final[int] = 0
ITEM_ALMOND_WATER: Final[int] = 1

ITEM_NAMES: Final[dict[int, str]] = {
    ITEM_ALMOND_WATER: "almond_water",
}


class TileType(NamedTuple):
    name: str
    walkable: bool
    glyph: str


TILE_TYPES: Final[dict[int, TileType]] = {
    TILE_ID_FLOOR: TileType(name="floor", walkable=True, glyph="."),
    TILE_ID_WALL: TileType(name="wall", walkable=False, glyph="#"),
}


class Cell(NamedTuple):
    """Read-only view of a single grid cell."""
    terrain: str
    light: float
    seen: bool
    item: str | None
    is_goal: bool


class GameMap:
    def __init__(self, width: int, height: int):
        """
        Initializes the map with every cell set to unlit, unseen wall.
        """
        if width <= 0 or height <= 0:
            log.error("Invalid map dimensions", width=width, height=height)
            raise ValueError("Map width and height must be positive integers.")
        self._width = width
        self._height = height
        log.debug("Initializing GameMap", width=self._width, height=self._height)

        # Core map data arrays, indexed [y, x]
        self.tiles: np.ndarray = np.full(
            (height, width), fill_value=TILE_ID_WALL, dtype=np.uint8, order="C"
        )
        self.light: np.ndarray = np.zeros((height, width), dtype=np.float64, order="C")
        self.seen: np.ndarray = np.zeros((height, width), dtype=bool, order="C")
        self.items: np.ndarray = np.full(
            (height, width), fill_value=ITEM_NONE, dtype=np.uint8, order="C"
        )
        self.goal: np.ndarray = np.zeros((height, width), dtype=bool, order="C")

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def in_bounds(self, x: int, y: int) -> bool:
        """Checks if the given coordinates are within the map boundaries."""
        return 0 <= x < self._width and 0 <= y < self._height

    def is_walkable(self, x: int, y: int) -> bool:
        """Checks if the tile at (x, y) is walkable."""
        if not self.in_bounds(x, y):
            return False
        tile_type = TILE_TYPES.get(int(self.tiles[y, x]))
        return tile_type.walkable if tile_type else False

    def clamp(self, x: int, y: int) -> Tuple[int, int]:
        """Clamp a coordinate onto the map."""
        return (
            min(max(x, 0), self._width - 1),
            min(max(y, 0), self._height - 1),
        )

    def carve(self, x: int, y: int) -> None:
        if self.in_bounds(x, y):
            self.tiles[y, x] = TILE_ID_FLOOR

    def floor_positions(self) -> List[Tuple[int, int]]:
        """All floor coordinates as (x, y), row by row."""
        ys, xs = np.nonzero(self.tiles == TILE_ID_FLOOR)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    @property
    def floor_count(self) -> int:
        return int(np.count_nonzero(self.tiles == TILE_ID_FLOOR))

    @property
    def goal_position(self) -> Tuple[int, int] | None:
        positions = np.argwhere(self.goal)
        if positions.size == 0:
            return None
        y, x = positions[0]
        return int(x), int(y)

    def cell(self, x: int, y: int) -> Cell:
        tile_type = TILE_TYPES[int(self.tiles[y, x])]
        return Cell(
            terrain=tile_type.name,
            light=float(self.light[y, x]),
            seen=bool(self.seen[y, x]),
            item=ITEM_NAMES.get(int(self.items[y, x])),
            is_goal=bool(self.goal[y, x]),
        )

    def reachable_from(self, x: int, y: int) -> Set[Tuple[int, int]]:
        """Flood fill over floor tiles using 4-way adjacency."""
        if not self.is_walkable(x, y):
            return set()
        queue = deque([(x, y)])
        visited = {(x, y)}
        while queue:
            cx, cy = queue.popleft()
            for dx, dy in ((0, 1), (1, 0), (0, -1), (-1, 0)):
                nx, ny = cx + dx, cy + dy
                if (nx, ny) not in visited and self.is_walkable(nx, ny):
                    visited.add((nx, ny))
                    queue.append((nx, ny))
        return visited

    def copy(self) -> "GameMap":
        clone = GameMap(self._width, self._height)
        clone.tiles = self.tiles.copy()
        clone.light = self.light.copy()
        clone.seen = self.seen.copy()
        clone.items = self.items.copy()
        clone.goal = self.goal.copy()
        return clone
