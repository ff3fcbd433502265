"""
Tree collision volumes for Golf Caddy.

Each tree is a trunk cylinder (tight, ~0.3 yd radius) topped by a foliage
cylinder at 40% of the visual canopy radius. Positions are world units;
heights and radii are yards.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from golfcaddy.utils.constants import YARDS_TO_WORLD

TRUNK_RADIUS_YARDS = 0.3
FOLIAGE_RADIUS_FRACTION = 0.4
CANOPY_BOTTOM_FRACTION = 0.8  # Foliage starts slightly below the trunk top


class TreeType(str, Enum):
    TALL_PINE_1 = "tall_pine_1"
    TALL_PINE_2 = "tall_pine_2"
    TALL_PINE_3 = "tall_pine_3"
    BUSHY_PINE_1 = "bushy_pine_1"
    BUSHY_PINE_2 = "bushy_pine_2"
    BUSHY_PINE_3 = "bushy_pine_3"
    DECIDUOUS_1 = "deciduous_1"
    DECIDUOUS_2 = "deciduous_2"
    DECIDUOUS_3 = "deciduous_3"


# height / canopy_radius ranges in yards, trunk_ratio = trunk height / height
TREE_PROPERTIES = {
    TreeType.TALL_PINE_1: {"height": (25, 35), "canopy_radius": (3, 5), "trunk_ratio": 0.7},
    TreeType.TALL_PINE_2: {"height": (28, 38), "canopy_radius": (4, 6), "trunk_ratio": 0.65},
    TreeType.TALL_PINE_3: {"height": (22, 32), "canopy_radius": (3, 5), "trunk_ratio": 0.75},
    TreeType.BUSHY_PINE_1: {"height": (12, 16), "canopy_radius": (3, 5), "trunk_ratio": 0.35},
    TreeType.BUSHY_PINE_2: {"height": (10, 14), "canopy_radius": (3, 4), "trunk_ratio": 0.3},
    TreeType.BUSHY_PINE_3: {"height": (14, 18), "canopy_radius": (3, 5), "trunk_ratio": 0.4},
    TreeType.DECIDUOUS_1: {"height": (15, 22), "canopy_radius": (6, 10), "trunk_ratio": 0.35},
    TreeType.DECIDUOUS_2: {"height": (12, 18), "canopy_radius": (5, 8), "trunk_ratio": 0.4},
    TreeType.DECIDUOUS_3: {"height": (18, 25), "canopy_radius": (7, 11), "trunk_ratio": 0.3},
}


@dataclass(frozen=True)
class Tree:
    """A tree on the hole. Unset height/canopy use the midpoint of the type's range."""
    type: TreeType
    x: float
    y: float
    height: Optional[float] = None
    canopy_radius: Optional[float] = None

    @property
    def resolved_height(self) -> float:
        if self.height is not None:
            return self.height
        lo, hi = TREE_PROPERTIES[self.type]["height"]
        return (lo + hi) / 2

    @property
    def resolved_canopy_radius(self) -> float:
        if self.canopy_radius is not None:
            return self.canopy_radius
        lo, hi = TREE_PROPERTIES[self.type]["canopy_radius"]
        return (lo + hi) / 2


@dataclass(frozen=True)
class TreeCollision:
    """A ball position inside a tree.

    deflection is the direction away from the trunk scaled by how far the
    ball is knocked (world units) before speed loss.
    """
    tree: Tree
    hit_type: str
    deflection: tuple[float, float]


def check_tree_collision(trees: list[Tree], x: float, y: float,
                         ball_height: float) -> Optional[TreeCollision]:
    """Return the first tree whose trunk or foliage contains the ball."""
    for tree in trees:
        props = TREE_PROPERTIES.get(tree.type)
        if props is None:
            continue

        height = tree.resolved_height
        trunk_height = height * props["trunk_ratio"]

        dx = x - tree.x
        dy = y - tree.y
        dist = math.hypot(dx, dy)
        dir_x = dx / dist if dist > 0 else 0.0
        dir_y = dy / dist if dist > 0 else 0.0

        trunk_radius = TRUNK_RADIUS_YARDS * YARDS_TO_WORLD
        foliage_radius = tree.resolved_canopy_radius * FOLIAGE_RADIUS_FRACTION * YARDS_TO_WORLD

        # Trunk first: solid hit, ball bounces off
        if ball_height < trunk_height and dist < trunk_radius:
            knock = 2.0 * YARDS_TO_WORLD
            return TreeCollision(tree, "trunk", (dir_x * knock, dir_y * knock))

        # Foliage: soft hit, ball mostly drops through
        canopy_bottom = trunk_height * CANOPY_BOTTOM_FRACTION
        if canopy_bottom <= ball_height < height and dist < foliage_radius:
            knock = 0.3 * YARDS_TO_WORLD
            return TreeCollision(tree, "foliage", (dir_x * knock, dir_y * knock))

    return None
