"""
Arcade window hosting the mini galaga game.

Run:
    python -m game.galaga.window [--seed N]

Controls: left / right (or A / D) to move, space or click to shoot,
drag to steer, R to play again after game over, Esc to close.
"""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

import arcade

from .session import GameSession
from .controller import GameController
from .render import DrawCommand, build_scene

HUD_H = 36

SOUNDS = {
    "shoot": ":resources:sounds/laser2.wav",
    "boom": ":resources:sounds/explosion1.wav",
}

KEY_NAMES = {
    arcade.key.LEFT: "left",
    arcade.key.RIGHT: "right",
    arcade.key.A: "a",
    arcade.key.D: "d",
    arcade.key.SPACE: "space",
}

_active_window: Optional["GalagaWindow"] = None


class SoundBoard:
    """Lazily loaded sound effects, played fire-and-forget"""

    def __init__(self, volume: float = 0.18):
        self.volume = volume
        self._cache = {}

    def play(self, cue: str):
        try:
            sound = self._cache.get(cue)
            if sound is None:
                sound = self._cache[cue] = arcade.load_sound(SOUNDS[cue])
            arcade.play_sound(sound, volume=self.volume)
        except Exception:
            # No audio device, missing resource, unknown cue: play silently
            pass


def draw_scene(commands: Sequence[DrawCommand], field_height: float, offset_y: float = 0.0):
    """Paint field-space draw commands (y down) on arcade's y-up canvas"""
    top = offset_y + field_height
    for cmd in commands:
        if cmd.shape == "rect":
            arcade.draw_lrbt_rectangle_filled(
                cmd.x, cmd.x + cmd.width,
                top - cmd.y - cmd.height, top - cmd.y,
                cmd.color,
            )
        elif cmd.shape == "circle":
            arcade.draw_circle_filled(cmd.x, top - cmd.y, cmd.radius, cmd.color)


class GalagaWindow(arcade.Window):
    """Arcade window driving a GameController"""

    def __init__(self, controller: GameController, width: int, height: int):
        super().__init__(width, height + HUD_H, "galaga.mini")
        self.controller = controller
        self.field_width = width
        self.field_height = height

        self.BG = (8, 11, 26)
        self.HUD_C = (148, 163, 184)
        self.OVERLAY_BG = (8, 10, 20, 224)
        self.TEXT_C = (226, 232, 240)
        arcade.set_background_color(self.BG)

    # ----------------------------
    # Frame loop
    # ----------------------------

    def on_update(self, delta_time: float):
        self.controller.frame(delta_time * 1000.0)

    def on_draw(self):
        self.clear()
        session = self.controller.session
        if session is None:
            return

        draw_scene(build_scene(session), self.field_height, HUD_H)

        score_txt, lives_txt = self.controller.hud()
        arcade.draw_text(score_txt, 12, 12, self.HUD_C, 13)
        arcade.draw_text(lives_txt, self.field_width - 12, 12, self.HUD_C, 13,
                         anchor_x="right")

        overlay = self.controller.overlay()
        if overlay is not None:
            arcade.draw_lrbt_rectangle_filled(
                0, self.field_width, HUD_H, HUD_H + self.field_height, self.OVERLAY_BG
            )
            cx = self.field_width / 2
            cy = HUD_H + self.field_height / 2
            arcade.draw_text(overlay.title, cx, cy + 30, self.TEXT_C, 18, anchor_x="center")
            arcade.draw_text(overlay.detail, cx, cy, self.TEXT_C, 14, anchor_x="center")
            arcade.draw_text(overlay.action, cx, cy - 30, (56, 189, 248), 12, anchor_x="center")

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        if symbol == arcade.key.R and self.controller.overlay() is not None:
            self.controller.restart()
            return
        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.controller.key_down(name)

    def on_key_release(self, symbol: int, modifiers: int):
        name = KEY_NAMES.get(symbol)
        if name is not None:
            self.controller.key_up(name)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.controller.overlay() is not None:
            self.controller.restart()
            return
        if y >= HUD_H:
            self.controller.pointer_down(x)

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.controller.pointer_move(x)

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        self.controller.pointer_move(x)

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.controller.pointer_up()

    def on_deactivate(self):
        self.controller.blur()

    def close(self):
        global _active_window
        self.controller.close()
        if _active_window is self:
            _active_window = None
        super().close()


def launch_game(seed: Optional[int] = None) -> GalagaWindow:
    """Open the game window, or return the one already open"""
    global _active_window
    if _active_window is not None:
        return _active_window

    sounds = SoundBoard()
    controller = GameController(
        session_factory=lambda: GameSession(seed=seed),
        play_sound=sounds.play,
    )
    session = controller.launch()
    _active_window = GalagaWindow(controller, session.width, session.height)
    return _active_window


def main(argv: Optional[Sequence[str]] = None):
    parser = argparse.ArgumentParser(description="Play the mini galaga arcade game")
    parser.add_argument("--seed", type=int, default=None, help="Seed for enemy spawns (default: random)")
    args = parser.parse_args(argv)

    window = launch_game(seed=args.seed)
    print("[galaga] Window open. Arrows/A/D move, space/click shoot, Esc closes.")
    arcade.run()
    print(f"[galaga] Session ended with score {window.controller.info().get('score', 0)}")


if __name__ == "__main__":
    main()
