"""
Scene description for a GameSession.

``build_scene`` turns session state into draw commands in field
coordinates (origin top-left, y down). It reads the session and nothing
else, so the same scene can be painted by the arcade window or checked in
tests without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple, Optional

from .utils import hex_to_rgba
from .session import SessionPhase

Color = Tuple[int, int, int, int]

STAR_C = (255, 255, 255, 13)
PLAYER_C = hex_to_rgba("#38bdf8")
COCKPIT_C = hex_to_rgba("#0ea5e9")
BULLET_C = hex_to_rgba("#f8fafc")
ENEMY_BULLET_C = hex_to_rgba("#f87171")
ENEMY_C = hex_to_rgba("#f97316")
ENEMY_CORE_C = hex_to_rgba("#fb923c")

# Explosion gradient: bright core fading into transparent red
BLAST_CORE = (248, 250, 252)
BLAST_EDGE = (248, 113, 113)
BLAST_RINGS = 6

N_STARS = 60


@dataclass(frozen=True)
class DrawCommand:
    """A filled shape. Rects use x/y/width/height, circles x/y/radius."""
    shape: str
    x: float
    y: float
    color: Color
    width: float = 0.0
    height: float = 0.0
    radius: float = 0.0


def _rect(x, y, w, h, color) -> DrawCommand:
    return DrawCommand("rect", x, y, color, width=w, height=h)


def starfield(width: int, height: int, clock_ms: float) -> List[DrawCommand]:
    return [
        _rect((i * 70) % width, (i * 110 + clock_ms * 0.05) % height, 1, 1, STAR_C)
        for i in range(N_STARS)
    ]


def explosion_rings(x: float, y: float, radius: float) -> List[DrawCommand]:
    """Approximate a radial fade with concentric rings, outermost first"""
    rings = []
    for i in range(BLAST_RINGS):
        t = i / BLAST_RINGS  # 0 at the rim, approaching 1 at the core
        r = radius * (1 - t)
        if r <= 0:
            continue
        color = tuple(int(round(edge + (core - edge) * t)) for core, edge in zip(BLAST_CORE, BLAST_EDGE))
        alpha = int(round(0.8 * t * 255))
        rings.append(DrawCommand("circle", x, y, color + (alpha,), radius=r))
    return rings


def build_scene(session) -> List[DrawCommand]:
    cmds = starfield(session.width, session.height, session.clock_ms)

    p = session.player
    cmds.append(_rect(p.x, p.y, p.width, p.height, PLAYER_C))
    cmds.append(_rect(p.x + 6, p.y - 8, p.width - 12, 8, COCKPIT_C))

    for b in session.bullets:
        cmds.append(_rect(b.x, b.y, b.width, b.height, BULLET_C))

    for b in session.enemy_bullets:
        cmds.append(_rect(b.x, b.y, b.width, b.height, ENEMY_BULLET_C))

    for e in session.enemies:
        cmds.append(_rect(e.x, e.y, e.width, e.height, ENEMY_C))
        cmds.append(_rect(e.x + 6, e.y + 4, e.width - 12, e.height - 8, ENEMY_CORE_C))

    for ex in session.explosions:
        cmds.extend(explosion_rings(ex.x, ex.y, ex.radius))

    return cmds


def hud_text(session) -> Tuple[str, str]:
    lives = max(0, session.lives)
    hearts = "♥" * lives + "♡" * max(0, session.max_lives - lives)
    return f"score: {session.score}", f"lives: {hearts}"


@dataclass(frozen=True)
class Overlay:
    title: str
    detail: str
    action: str


def game_over_overlay(session) -> Optional[Overlay]:
    if session.phase is not SessionPhase.GAME_OVER:
        return None
    return Overlay(
        title="MISSION TERMINATED",
        detail=f"final score: {session.score}",
        action="play again (R / click)",
    )
