"""Command-line entry point and the main loop of the game."""

from __future__ import annotations

import argparse
import random
import sys
from typing import Any, Callable, Iterable, Sequence

import pygame

from .constants import SCREEN_HEIGHT, SCREEN_WIDTH
from .game import WINDOW_TITLE, Game
from .level import MapFormatError
from .render import Renderer, ResourceError

FRAME_RATE = 60
AUDIO_FREQUENCY = 44100
AUDIO_SIZE = -16
AUDIO_CHANNELS = 2
AUDIO_BUFFER = 2048


def run(game: Any, events: Callable[[], Iterable[Any]]) -> int:
    """Run frames until the game stops; return how many frames were run.

    ``events`` is called once per frame and yields the input events of that frame.
    Each frame shows the main menu, pauses during a pause, or plays one step.
    """
    frames = 0
    while game.running:
        for event in events():
            game.handle_event(event)

        if game.menu.in_menu:
            game.render_main_menu()
        elif game.menu.paused:
            game.pause_music()
        else:
            game.play_music()
            game.step()
        frames += 1
    return frames


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tarnishedquest",
        description="Run through an endless castle, shooting skeletons before you starve.",
    )
    parser.add_argument(
        "--resources",
        default="res",
        help="directory holding the textures, sounds, maps and high score (default: res)",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for the map choice")
    return parser.parse_args(argv)


def _init_pygame() -> None:
    pygame.init()
    pygame.mixer.init(AUDIO_FREQUENCY, AUDIO_SIZE, AUDIO_CHANNELS, AUDIO_BUFFER)
    if not pygame.font.get_init():
        pygame.font.init()


def _build_game(resources: str, seed: int | None) -> Game:
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption(WINDOW_TITLE)
    game = Game(Renderer(screen), resources, random.Random(seed))
    game.load_media()
    game.create_maps()
    game.create_level()
    game.create_menu()
    game.create_player()
    game.create_skeletons()
    return game


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game; return the process exit status."""
    args = _parse_args(argv)
    try:
        try:
            _init_pygame()
        except pygame.error as exc:
            print(f"initialisation failed: {exc}", file=sys.stderr)
            return 1

        try:
            game = _build_game(args.resources, args.seed)
        except (ResourceError, MapFormatError, OSError, ValueError, pygame.error) as exc:
            print(f"failed to create game elements: {exc}", file=sys.stderr)
            return 1

        clock = pygame.time.Clock()

        def frame_events() -> list[Any]:
            clock.tick(FRAME_RATE)
            return pygame.event.get()

        run(game, frame_events)
        return 0
    finally:
        pygame.quit()


if __name__ == "__main__":
    sys.exit(main())