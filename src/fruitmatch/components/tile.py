from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

NO_FRUIT = 0


@dataclass(slots=True)
class Tile:
    """Content of one board cell.

    fruit_type: 1..fruit_type_count for fruit tiles, 0 (NO_FRUIT) for obstacles.
    Obstacles never match, swap or fall; obstacle_health is carried for level
    data but the engine treats every obstacle as an inert blocker.
    """

    fruit_type: int = NO_FRUIT
    is_obstacle: bool = False
    obstacle_health: Optional[int] = None

    @classmethod
    def fruit(cls, fruit_type: int) -> Tile:
        if fruit_type <= NO_FRUIT:
            raise ValueError(f"fruit type must be positive, got {fruit_type}")
        return cls(fruit_type=fruit_type)

    @classmethod
    def obstacle(cls, health: Optional[int] = None) -> Tile:
        if health is not None and health <= 0:
            raise ValueError(f"obstacle health must be positive, got {health}")
        return cls(fruit_type=NO_FRUIT, is_obstacle=True, obstacle_health=health)

    @property
    def is_fruit(self) -> bool:
        return not self.is_obstacle and self.fruit_type > NO_FRUIT

    def copy(self) -> Tile:
        return Tile(self.fruit_type, self.is_obstacle, self.obstacle_health)
