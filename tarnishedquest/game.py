"""The game world: maps, level generation, actors, score and the frame loop."""

from __future__ import annotations

import os
import random
import time
from pathlib import Path
from typing import Any, Callable, Sequence

import pygame

from .constants import (
    LEVEL_HEIGHT,
    LEVEL_WIDTH,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
    TOTAL_MAP,
    TOTAL_TILE_SPRITES,
    MapSpec,
)
from .level import LevelPart
from .menu import Menu
from .player import SPAWN_X, SPAWN_Y, STARVE_SECONDS, Player
from .render import ResourceError
from .skeleton import Skeleton
from .timer import Timer

WINDOW_TITLE = "Tarnished Quest"
TILESET_COLUMNS = 17
INITIAL_CAMERA_SPEED = 1.5
LEVEL_PARTS_KEPT = 5
FPS_CAP = 2_000_000
MUSIC_FADE_MS = 1000
MUSIC_VOLUME = 50 / 128

WHITE = (255, 255, 255, 255)
SCORE_YELLOW = (252, 226, 5, 255)
STARVE_YELLOW = (255, 255, 5, 255)

FPS_POSITION = (10, 10)
SCORE_POSITION = (1100, 30)
HIGH_SCORE_POSITION = (1100, 0)
STARVE_POSITION = (560, 30)

_SKELETON_LAYOUTS: tuple[tuple[str, tuple[float, ...]], ...] = (
    ("map1.map", ()),
    ("map2.map", (15, 5)),
    ("map3.map", (1, 9, 16, 6, 18, 7)),
    ("map4.map", (9, 9)),
    ("map5.map", (7, 12, 12, 12, 17, 12)),
    ("map6.map", (9, 12)),
    ("map7.map", (8, 12, 15, 4, 13, 3)),
    ("map8.map", (14, 6, 16, 11)),
    ("map9.map", (12, 13)),
    ("map10.map", (10, 12)),
    ("map11.map", (6, 11)),
    ("map12.map", (13, 12)),
    ("map13.map", (9, 12, 11, 11, 12, 10)),
    ("map14.map", (12, 11)),
    ("map_spawn.map", ()),
)


def _ticks_ms() -> int:
    return int(time.monotonic() * 1000)


def build_tile_clips() -> list[pygame.Rect]:
    """Source rectangles of every sprite in the tileset, row by row."""
    return [
        pygame.Rect(
            (i % TILESET_COLUMNS) * TILE_WIDTH,
            (i // TILESET_COLUMNS) * TILE_HEIGHT,
            TILE_WIDTH,
            TILE_HEIGHT,
        )
        for i in range(TOTAL_TILE_SPRITES)
    ]


def default_maps(resource_dir: str | os.PathLike) -> list[MapSpec]:
    """The map table; the last entry is the spawn map that always starts a run."""
    texture_dir = Path(resource_dir) / "texture"
    return [MapSpec(texture_dir / name, positions) for name, positions in _SKELETON_LAYOUTS]


def _pairs(values: Sequence[float]) -> list[tuple[float, float]]:
    it = iter(values)
    return list(zip(it, it))


class Game:
    """Owns every object of a run and advances them frame by frame."""

    def __init__(
        self,
        renderer: Any,
        resource_dir: str | os.PathLike = "res",
        rng: random.Random | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.renderer = renderer
        self.resource_dir = Path(resource_dir)
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else _ticks_ms

        self.knight_texture: Any = None
        self.skeleton_texture: Any = None
        self.tile_texture: Any = None
        self.bullet_texture: Any = None
        self.background_texture: Any = None
        self.button_texture: Any = None
        self.music_loaded = False
        self._music_paused = False
        self.player_sounds: list[Any] = []
        self.skeleton_sounds: list[Any] = []

        self.fps_timer = Timer(self.clock)
        self.score = 0
        self.high_score = 0
        self.counted_frames = 0

        self.tile_clips = build_tile_clips()
        self.camera = pygame.Rect(0, 0, SCREEN_WIDTH, SCREEN_HEIGHT)
        self.cam_vel = INITIAL_CAMERA_SPEED
        self.game_start = self.clock()
        self.running = True

        self.maps: list[MapSpec] = []
        self.level_parts: list[LevelPart] = []
        self.skeletons: list[Skeleton] = []
        self.player: Player | None = None
        self.menu: Menu | None = None

    @property
    def high_score_path(self) -> Path:
        return self.resource_dir / "highscore.txt"

    def load_media(self) -> None:
        """Load the font, textures, music and sound effects."""
        base = self.resource_dir
        textures = base / "texture"
        sfx = base / "sfx"
        self.renderer.load_font(base / "Pixel-UniCode.ttf")
        self.knight_texture = self.renderer.load_texture(textures / "Tarnished.png")
        self.tile_texture = self.renderer.load_texture(textures / "Tileset.png")
        self.bullet_texture = self.renderer.load_texture(textures / "Bullet.png")
        self.skeleton_texture = self.renderer.load_texture(textures / "Skeleton.png")
        self.background_texture = self.renderer.load_texture(textures / "MenuBg.png")
        self.button_texture = self.renderer.load_texture(textures / "Button.png")

        music = sfx / "Vault in Tower Fortress Soundtrack.mp3"
        try:
            pygame.mixer.music.load(os.fspath(music))
        except (pygame.error, OSError) as exc:
            raise ResourceError(f"cannot load music {music}: {exc}") from exc
        self.music_loaded = True

        self.player_sounds = [
            self._load_sound(sfx / "sfx_sounds_impact12 (hit).wav"),
            self._load_sound(sfx / "sfx_movement_jump1.wav"),
            self._load_sound(sfx / "sfx_sounds_impact1 (landing).wav"),
            self._load_sound(sfx / "sfx_wpn_laser7.wav"),
        ]
        self.skeleton_sounds = [
            self._load_sound(sfx / "sfx_exp_short_hard16.wav"),
            self._load_sound(sfx / "sfx_damage_hit2.wav"),
        ]

    @staticmethod
    def _load_sound(path: Path) -> Any:
        try:
            return pygame.mixer.Sound(os.fspath(path))
        except (pygame.error, OSError) as exc:
            raise ResourceError(f"cannot load sound {path}: {exc}") from exc

    def create_maps(self) -> None:
        """Fill the map table."""
        self.maps = default_maps(self.resource_dir)
        if len(self.maps) < TOTAL_MAP:
            raise ValueError(f"expected {TOTAL_MAP} maps, got {len(self.maps)}")

    def _random_map(self) -> MapSpec:
        return self.maps[self.rng.randrange(TOTAL_MAP - 1)]

    def _new_part(self, x: float, spec: MapSpec) -> LevelPart:
        part = LevelPart(x, 0, spec.path, self.tile_texture)
        part.skeleton_positions = tuple(spec.skeleton_positions)
        return part

    def create_level(self) -> None:
        """Lay out the first level parts, starting with the spawn map."""
        self.level_parts = []
        for i in range(3):
            spec = self._random_map()
            if i == 0:
                spec = self.maps[TOTAL_MAP - 1]
            self.level_parts.append(self._new_part(i * LEVEL_WIDTH, spec))

    def _spawn_skeletons(self, part: LevelPart) -> None:
        for column, row in _pairs(part.skeleton_positions):
            self.skeletons.append(
                Skeleton(
                    column * TILE_WIDTH + part.x,
                    row * TILE_WIDTH + part.y,
                    self.skeleton_texture,
                )
            )

    def create_skeletons(self) -> None:
        """Place a skeleton at every spawn position of every level part."""
        for part in self.level_parts:
            self._spawn_skeletons(part)

    def create_player(self) -> None:
        self.player = Player(SPAWN_X, SPAWN_Y, self.knight_texture)

    def create_menu(self) -> None:
        self.menu = Menu(self.button_texture, self.background_texture, self.background_texture)

    def play_music(self) -> None:
        """Start or resume the background music, and stop it once the player died."""
        if not self.music_loaded or not pygame.mixer.get_init():
            return
        music = pygame.mixer.music
        if self._music_paused:
            music.unpause()
            self._music_paused = False
        elif not music.get_busy():
            music.play(-1, fade_ms=MUSIC_FADE_MS)
            music.set_volume(MUSIC_VOLUME)
        elif self.player is not None and self.player.dead:
            music.stop()

    def pause_music(self) -> None:
        """Pause the music and the frame timer."""
        if self.music_loaded and pygame.mixer.get_init() and pygame.mixer.music.get_busy():
            pygame.mixer.music.pause()
            self._music_paused = True
        self.fps_timer.pause()

    def load_high_score(self) -> int:
        """Read the stored high score, creating the file from the current one if missing."""
        try:
            text = self.high_score_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self.save_high_score()
            return self.high_score
        tokens = text.split()
        if tokens:
            try:
                self.high_score = int(tokens[0])
            except ValueError:
                pass
        return self.high_score

    def save_high_score(self) -> None:
        self.high_score_path.parent.mkdir(parents=True, exist_ok=True)
        self.high_score_path.write_text(str(self.high_score), encoding="utf-8")

    def update_level_parts(self) -> None:
        """Append a part ahead of the camera, drop parts far behind, and draw them."""
        last = self.level_parts[-1]
        if last.x + LEVEL_WIDTH - self.camera.x < SCREEN_WIDTH:
            part = self._new_part(last.x + LEVEL_WIDTH, self._random_map())
            self._spawn_skeletons(part)
            self.level_parts.append(part)

        if len(self.level_parts) > LEVEL_PARTS_KEPT:
            first = self.level_parts[0]
            if first.x + LEVEL_WIDTH < self.camera.x - SCREEN_WIDTH:
                del self.level_parts[0]

        for part in self.level_parts:
            part.render(self.renderer, self.tile_clips, self.camera)

    def update_bullets(self) -> None:
        """Draw and move live bullets; discard those that stopped."""
        kept = []
        for bullet in self.player.bullets:
            if bullet is None:
                continue
            if bullet.moving:
                bullet.render(self.renderer, self.camera, self.bullet_texture)
                bullet.update(self.level_parts)
                kept.append(bullet)
        self.player.bullets = kept

    def update_player(self) -> None:
        self.player.update(self.level_parts, self.skeletons, self.player_sounds)
        self.cam_vel = self.player.follow_camera(self.camera, self.cam_vel)
        self.player.render(self.renderer, self.camera)

    def _reset_starve_timer(self) -> None:
        self.game_start = self.clock()
        if self.player is not None:
            self.player.starve = STARVE_SECONDS

    def update_skeletons(self) -> None:
        """Draw and move living skeletons; a kill removes one and refills the starve time."""
        alive = []
        for skeleton in self.skeletons:
            if skeleton is None:
                continue
            if not skeleton.dead:
                skeleton.render(self.renderer, self.camera)
                skeleton.update(self.player, self.level_parts, self.skeleton_sounds)
                alive.append(skeleton)
            else:
                self._reset_starve_timer()
        self.skeletons = alive

    def starve_seconds(self) -> int:
        """Seconds left before the player starves, never below zero."""
        elapsed = (self.clock() - self.game_start) // 1000
        return max(0, STARVE_SECONDS - int(elapsed))

    def _draw_text(self, text: str, color: Any, position: tuple[int, int]) -> None:
        texture = self.renderer.create_text(text, color)
        self.renderer.draw_texture(texture, *position)

    def _draw_fps(self) -> None:
        seconds = self.fps_timer.ticks() / 1000
        fps = int(self.counted_frames / seconds) if seconds > 0 else 0
        if fps > FPS_CAP:
            fps = 0
        self._draw_text(f"FPS: {fps}", WHITE, FPS_POSITION)
        self.counted_frames += 1

    def _draw_score(self) -> None:
        distance = self.player.x / TILE_WIDTH
        if self.score < distance:
            self.score = int(distance)
        self.load_high_score()
        self._draw_text(f"Score: {self.score}m", SCORE_YELLOW, SCORE_POSITION)
        self._draw_text(f"High Score: {self.high_score}m", WHITE, HIGH_SCORE_POSITION)

    def _draw_starve(self) -> None:
        starve = self.starve_seconds()
        self.player.starve = starve
        self._draw_text(f"Die In: {starve} S", STARVE_YELLOW, STARVE_POSITION)

    def step(self) -> None:
        """Update and draw one frame of play."""
        self.fps_timer.start()
        self.renderer.clear()

        self.update_level_parts()
        self.update_bullets()
        self.update_player()
        self.update_skeletons()
        self._draw_fps()
        self._draw_score()
        self._draw_starve()

        if self.player.dead:
            self.menu.render_retry_menu(self.renderer)
            if self.score > self.high_score:
                self.high_score = self.score
            self.save_high_score()
        self.fps_timer.unpause()

        if self.menu.reset_requested:
            self.reset()
        self.renderer.present()

    def render_main_menu(self) -> None:
        self.renderer.clear()
        self.menu.render_main_menu(self.renderer)
        self.renderer.present()

    def reset(self) -> None:
        """Start a new run on freshly chosen maps."""
        self.game_start = self.clock()
        self.player.reset()
        self.camera.x = 0
        self.camera.y = 0
        self.cam_vel = INITIAL_CAMERA_SPEED
        self.skeletons = []

        for i, part in enumerate(self.level_parts):
            spec = self._random_map()
            if i == 0:
                spec = self.maps[TOTAL_MAP - 1]
                part.move_to(0)
            else:
                part.place_after(self.level_parts[i - 1])
            part.load_tile_types(spec.path)
            part.skeleton_positions = tuple(spec.skeleton_positions)

        self.create_skeletons()
        self.menu.reset_requested = False
        self.fps_timer.stop()
        self.fps_timer.start()
        self.counted_frames = 0
        self.score = 0
        self.player.starve = STARVE_SECONDS

    def handle_event(self, event: Any, mouse: Sequence[int] | None = None) -> None:
        """Route one input event to the menu and, during play, to the player."""
        if event.type == pygame.QUIT:
            self.running = False
        if self.menu.handle_event(event, self.player.dead, mouse):
            self.running = False
        if not self.menu.in_menu and not self.menu.paused:
            self.player.handle_event(event, self.player_sounds)