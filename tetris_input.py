"""Keyboard to command translation, DAS/ARR hold repeat"""
import pygame

KEYMAP = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_UP: "rotate",
    pygame.K_x: "rotate",
    pygame.K_DOWN: "down",
    pygame.K_SPACE: "drop",
    pygame.K_p: "pause",
    pygame.K_r: "reset",
    pygame.K_RETURN: "start",
    pygame.K_KP_ENTER: "start",
}


def dispatch(game, command: str):
    if command == "left": return game.move(-1)
    if command == "right": return game.move(1)
    if command == "rotate": return game.rotate()
    if command == "down": return game.soft_drop()
    if command == "drop": return game.hard_drop()
    if command == "pause": return game.pause()
    if command == "reset": return game.reset()
    if command == "start": return game.start()
    raise ValueError(f"unknown command {command!r}")


class ShiftRepeat:
    """First step on press, then after das_ms one step every arr_ms (0 => every update)."""
    def __init__(self, das_ms, arr_ms):
        self.das_ms=das_ms; self.arr_ms=arr_ms
        self.dir=0; self.held_ms=0; self.last=0; self.initial=False
    def update(self, dt, neg, pos):
        nd=(-1 if neg else 0)+(1 if pos else 0)
        if nd!=self.dir:
            self.dir=nd; self.held_ms=0; self.last=0; self.initial=False
        if self.dir==0: return 0
        self.held_ms+=dt
        if not self.initial:
            self.initial=True; return self.dir
        if self.held_ms < self.das_ms: return 0
        if self.arr_ms==0: return self.dir
        self.last+=dt
        if self.last>=self.arr_ms:
            self.last=0; return self.dir
        return 0
