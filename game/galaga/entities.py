"""
Game entity dataclasses
"""

from dataclasses import dataclass
from typing import Tuple

Rect = Tuple[float, float, float, float]


@dataclass
class Player:
    """Player ship pinned near the bottom of the field"""
    x: float
    y: float
    width: float = 36.0
    height: float = 18.0
    speed: float = 6.0  # px/frame
    cooldown: int = 0  # frames until the next shot

    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Bullet:
    """Player-fired projectile travelling up"""
    x: float
    y: float
    width: float = 4.0
    height: float = 12.0
    speed: float = 9.0
    alive: bool = True

    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Enemy:
    """Enemy that descends while weaving around its base anchor"""
    x: float
    y: float
    base_x: float
    speed: float
    amplitude: float
    frequency: float
    time: float = 0.0  # ms of oscillation elapsed
    width: float = 32.0
    height: float = 22.0
    alive: bool = True

    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    def center(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height / 2)


@dataclass
class EnemyBullet:
    """Enemy-fired projectile travelling down"""
    x: float
    y: float
    speed: float
    width: float = 4.0
    height: float = 10.0
    alive: bool = True

    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


@dataclass
class Explosion:
    """Expanding burst left behind by a kill or a hit"""
    x: float
    y: float
    radius: float = 4.0
    max_radius: float = 18.0


@dataclass
class InputIntent:
    """Latest input state, written by input handlers and read by update"""
    left: bool = False
    right: bool = False
    pointer_active: bool = False
