"""
Input and lifecycle wiring around a GameSession.

The controller is what a host surface (the arcade window, a test) talks
to: it launches at most one session, turns key and pointer events into
session input, steps frames and hands queued sound cues to a player
callable. Restart builds a brand new session instead of resetting the
old one.
"""

from __future__ import annotations

from typing import Callable, Optional, Dict, Any

from .session import GameSession, SessionPhase
from .render import hud_text, game_over_overlay, Overlay

LEFT_KEYS = ("left", "a")
RIGHT_KEYS = ("right", "d")
SHOOT_KEYS = ("space", "spacebar")


def _silent(cue: str):
    pass


class GameController:

    def __init__(
        self,
        session_factory: Callable[[], GameSession] = GameSession,
        play_sound: Callable[[str], None] = _silent,
    ):
        self.session_factory = session_factory
        self.play_sound = play_sound
        self.session: Optional[GameSession] = None
        self._keys: Dict[str, bool] = {}
        self._attached = False

    @property
    def active(self) -> bool:
        """True while a session is open (running or showing game over)"""
        return self._attached and self.session is not None

    # ----------------------------
    # Lifecycle
    # ----------------------------

    def launch(self) -> GameSession:
        if self.active:
            return self.session

        self.session = self.session_factory()
        self.session.start()
        self._keys = {}
        self._attached = True
        return self.session

    def close(self):
        if self.session is not None:
            self.session.close()
        self._keys = {}
        self._attached = False

    def restart(self) -> Optional[GameSession]:
        if not self.active or self.session.phase is not SessionPhase.GAME_OVER:
            return None
        self.close()
        return self.launch()

    def frame(self, dt: float):
        if not self.active:
            return
        self.session.update(dt)
        self._flush_sounds()

    def _flush_sounds(self):
        for cue in self.session.drain_sound_cues():
            try:
                self.play_sound(cue)
            except Exception:
                # Audio is cosmetic
                pass

    # ----------------------------
    # Input
    # ----------------------------

    def key_down(self, key: str):
        if not self.active:
            return
        key = key.lower()
        self._keys[key] = True
        self._sync_direction()
        if key in SHOOT_KEYS:
            self.session.shoot()
            self._flush_sounds()

    def key_up(self, key: str):
        if not self.active:
            return
        self._keys[key.lower()] = False
        self._sync_direction()

    def _sync_direction(self):
        intent = self.session.input
        intent.left = any(self._keys.get(k, False) for k in LEFT_KEYS)
        intent.right = any(self._keys.get(k, False) for k in RIGHT_KEYS)

    def pointer_down(self, x: float):
        if not self.active:
            return
        self.session.input.pointer_active = True
        self.session.move_to(x)
        self.session.shoot()
        self._flush_sounds()

    def pointer_move(self, x: float):
        if not self.active or not self.session.input.pointer_active:
            return
        self.session.move_to(x)

    def pointer_up(self):
        if not self.active:
            return
        self.session.input.pointer_active = False

    def blur(self):
        self.pointer_up()

    # ----------------------------
    # Presentation
    # ----------------------------

    def hud(self) -> Optional[tuple]:
        if self.session is None:
            return None
        return hud_text(self.session)

    def overlay(self) -> Optional[Overlay]:
        if not self.active:
            return None
        return game_over_overlay(self.session)

    def info(self) -> Dict[str, Any]:
        if self.session is None:
            return {"phase": SessionPhase.IDLE.value}
        return self.session.info()
