import logging
import random
import sys

import pygame

from tetris_audio import SoundBoard
from tetris_config import SCORES_PATH, load_settings, save_settings
from tetris_game import Game, GameState, Observers
from tetris_input import KEYMAP, ShiftRepeat, dispatch
from tetris_layout import compute_dims
from tetris_overlay import Overlay
from tetris_render import Renderer
from tetris_scores import HighScores

log = logging.getLogger("tetris")

HELD = ("left", "right", "down")


def recreate_window(dims, flags=pygame.DOUBLEBUF):
    try:
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags, vsync=1)
    except (TypeError, pygame.error):
        return pygame.display.set_mode((dims.total_w, dims.total_h), flags)


def main():
    settings = load_settings()
    logging.basicConfig(level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    dims = compute_dims(settings.CELL_SIZE)
    screen = recreate_window(dims)
    pygame.display.set_caption("Tetris")
    font = pygame.font.SysFont(None, 22)
    big_font = pygame.font.SysFont(None, 42)
    render = Renderer(dims, font, big_font)
    clock = pygame.time.Clock()

    sound = SoundBoard(settings.SFX_ENABLED, settings.MUSIC_ENABLED, settings.MUSIC_TRACK)
    scores = HighScores(SCORES_PATH, settings.PLAYER_NAME)
    rng = random.Random(settings.SEED)
    game = Game(settings.game_options(), Observers(sound.handle, scores.handle), rng)

    overlay = Overlay(settings)
    shift = ShiftRepeat(settings.DAS_MS, settings.ARR_MS)
    down = ShiftRepeat(settings.SOFT_DROP_REPEAT_MS, settings.SOFT_DROP_REPEAT_MS)
    held = dict.fromkeys(HELD, False)

    def apply_settings():
        nonlocal dims, screen, render
        if compute_dims(settings.CELL_SIZE) != dims:
            dims = compute_dims(settings.CELL_SIZE)
            screen = recreate_window(dims)
            render = Renderer(dims, font, big_font)
        shift.das_ms, shift.arr_ms = settings.DAS_MS, settings.ARR_MS
        sound.sfx_enabled = settings.SFX_ENABLED
        sound.select_track(settings.MUSIC_TRACK)
        if sound.music_enabled != settings.MUSIC_ENABLED:
            sound.toggle_music()
        # a change to the piece set only applies from the next game
        game.configure(settings.game_options(), rebuild=not game.running and not game.paused)
        save_settings(settings)

    while True:
        dt = clock.tick(60)

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                save_settings(settings)
                pygame.quit(); sys.exit()
            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_F1 and not overlay.active:
                    if game.running: game.pause()
                    overlay.toggle(); continue
                if overlay.active:
                    overlay.handle(e)
                    if not overlay.active and overlay.changed: apply_settings()
                    continue
                if e.key == pygame.K_m:
                    sound.toggle_music(); settings.MUSIC_ENABLED = sound.music_enabled; continue
                cmd = KEYMAP.get(e.key)
                if cmd in HELD:
                    held[cmd] = True
                elif cmd == "start":
                    if game.state in (GameState.READY, GameState.GAME_OVER):
                        sound.play("start")
                        game.start()
                        sound.start_music()
                elif cmd == "pause":
                    game.pause()
                    if game.running: sound.start_music()
                elif cmd == "reset":
                    game.reset(); sound.stop_music()
                elif cmd:
                    dispatch(game, cmd)
            if e.type == pygame.KEYUP:
                cmd = KEYMAP.get(e.key)
                if cmd in HELD:
                    held[cmd] = False

        if game.running and not overlay.active:
            step = shift.update(dt, held["left"], held["right"])
            if step:
                game.move(step)
            if down.update(dt, False, held["down"]):
                game.soft_drop()
        game.tick(dt)

        render.draw(screen, game.view(), pygame.time.get_ticks(), scores.entries)
        overlay.draw(screen, font, dims.total_w, dims.total_h)
        pygame.display.flip()


if __name__ == '__main__':
    main()
