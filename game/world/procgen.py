# game/world/procgen.py
from typing import List, NamedTuple, Tuple

import structlog

from game_rng import GameRNG
from game.world.game_map import TILE_ID_FLOOR, TILE_ID_WALL, GameMap
from game.world.lighting import LightSource, apply_light_source

log = structlog.get_logger()

# --- Configuration ---
MIN_MAP_SIZE = 3
ROOM_AREA_DIVISOR = 400
ROOM_MIN_WIDTH, ROOM_MAX_WIDTH = 5, 9
ROOM_MIN_HEIGHT, ROOM_MAX_HEIGHT = 4, 7
LIGHT_AREA_DIVISOR = 200
LIGHT_MARGIN = 2

# Two-cell steps keep one wall cell between neighbouring corridors.
MAZE_STEPS: Tuple[Tuple[int, int], ...] = ((2, 0), (-2, 0), (0, 2), (0, -2))


class Rect(NamedTuple):
    """A rectangle on the map."""
    x1: int
    y1: int
    x2: int
    y2: int

    @property
    def width(self) -> int:
        return self.x2 - self.x1 + 1

    @property
    def height(self) -> int:
        return self.y2 - self.y1 + 1

    def carve(self, game_map: GameMap) -> None:
        """Carves this rectangle as floor tiles onto the game map."""
        y_start = max(0, self.y1)
        y_end = min(game_map.height, self.y2 + 1)
        x_start = max(0, self.x1)
        x_end = min(game_map.width, self.x2 + 1)

        if y_start < y_end and x_start < x_end:
            game_map.tiles[y_start:y_end, x_start:x_end] = TILE_ID_FLOOR
            log.debug("Carved rectangle area", rect=self)
        else:
            log.warning("Attempted to carve zero-size area", rect=self)


def maze_start(map_width: int, map_height: int) -> Tuple[int, int]:
    """Map centre snapped to odd coordinates."""
    return (map_width // 2) | 1, (map_height // 2) | 1


def _carve_maze(game_map: GameMap, rng: GameRNG) -> int:
    """Randomized depth-first backtracker. Returns the number of cells carved."""
    sx, sy = maze_start(game_map.width, game_map.height)
    game_map.carve(sx, sy)
    stack: List[Tuple[int, int]] = [(sx, sy)]
    carved = 1

    while stack:
        cx, cy = stack[-1]
        order = rng.shuffled(MAZE_STEPS)
        for dx, dy in order:
            nx, ny = cx + dx, cy + dy
            if not game_map.in_bounds(nx, ny):
                continue
            if game_map.tiles[ny, nx] == TILE_ID_WALL:
                game_map.carve(nx, ny)
                game_map.carve(cx + dx // 2, cy + dy // 2)
                stack.append((nx, ny))
                carved += 2
                break
        else:
            stack.pop()

    log.debug("Maze carved", start=(sx, sy), cells=carved)
    return carved


def _carve_rooms(game_map: GameMap, rng: GameRNG) -> List[Rect]:
    """Punch rectangular rooms into the maze."""
    room_count = (game_map.width * game_map.height) // ROOM_AREA_DIVISOR
    rooms: List[Rect] = []
    for _ in range(room_count):
        room_w = rng.get_int(ROOM_MIN_WIDTH, ROOM_MAX_WIDTH)
        room_h = rng.get_int(ROOM_MIN_HEIGHT, ROOM_MAX_HEIGHT)
        max_x = game_map.width - room_w - 2
        max_y = game_map.height - room_h - 2
        if max_x < 1 or max_y < 1:
            log.debug("Skipped room (does not fit)", w=room_w, h=room_h)
            continue
        room_x = rng.get_int(1, max_x)
        room_y = rng.get_int(1, max_y)
        room = Rect(room_x, room_y, room_x + room_w - 1, room_y + room_h - 1)
        room.carve(game_map)
        rooms.append(room)
    log.info("Rooms carved", requested=room_count, count=len(rooms))
    return rooms


def _place_lights(game_map: GameMap, rng: GameRNG) -> List[LightSource]:
    """Drop light sources at random positions; wall hits are not retried."""
    light_count = (game_map.width * game_map.height) // LIGHT_AREA_DIVISOR
    max_x = game_map.width - 1 - LIGHT_MARGIN
    max_y = game_map.height - 1 - LIGHT_MARGIN
    placed: List[LightSource] = []
    if max_x < LIGHT_MARGIN or max_y < LIGHT_MARGIN:
        log.debug("Map too small for light sources", requested=light_count)
        return placed
    for _ in range(light_count):
        lx = rng.get_int(LIGHT_MARGIN, max_x)
        ly = rng.get_int(LIGHT_MARGIN, max_y)
        source = LightSource(lx, ly)
        if apply_light_source(game_map, source):
            placed.append(source)
    log.info("Light sources placed", requested=light_count, placed=len(placed))
    return placed


def generate_layout(map_width: int, map_height: int, rng: GameRNG) -> GameMap:
    """Build the wall/floor topology and static light field for one level."""
    if map_width < MIN_MAP_SIZE or map_height < MIN_MAP_SIZE:
        log.error("Map too small for generation", width=map_width, height=map_height)
        raise ValueError(
            f"Map must be at least {MIN_MAP_SIZE}x{MIN_MAP_SIZE} to generate a maze."
        )

    log.info(
        "Starting level generation",
        width=map_width,
        height=map_height,
        seed=rng.initial_seed,
    )
    game_map = GameMap(map_width, map_height)
    _carve_maze(game_map, rng)
    _carve_rooms(game_map, rng)
    _place_lights(game_map, rng)
    log.info(
        "Level layout complete",
        floor_tiles=game_map.floor_count,
        lit_tiles=int((game_map.light > 0).sum()),
    )
    return game_map
