"""The player character: input, physics, combat, camera and animation."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Sequence

import pygame

from .bullet import DEFAULT_BULLET_H, DEFAULT_BULLET_W, Bullet, BulletType
from .collision import ground_contact, touches_wall
from .constants import (
    GRAVITY,
    LEVEL_HEIGHT,
    MAX_GRAVITY,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_HEIGHT,
    TILE_WIDTH,
)
from .entity import Entity, Flip
from .level import LevelPart

PLAYER_WIDTH = 64
PLAYER_HEIGHT = 64
PLAYER_VEL = 6
JUMP_IMPULSE = 10
ATTACK_DELAY = 10
STARVE_SECONDS = 15
SPAWN_X = 64 * 3
SPAWN_Y = LEVEL_HEIGHT - TILE_HEIGHT * 5
KNOCK_BACK_LIFT = 4

# The sprite sheet is a grid of 4 columns and 7 rows of equally sized frames.
SHEET_COLUMNS = 4
SHEET_ROWS = 7

WALK_FRAME_TICKS = 4
IDLE_FRAME_TICKS = 12
JUMP_FRAME_TICKS = 10
FALL_FRAME_TICKS = 8
DEATH_FRAME_TICKS = 10


class Sound(IntEnum):
    """Indices of the player's sound effects."""

    HIT = 0
    JUMP = 1
    LAND = 2
    SHOOT = 3


def _play(sounds: Sequence[Any] | None, which: Sound) -> None:
    if not sounds or len(sounds) <= which:
        return
    sound = sounds[which]
    if sound is not None:
        sound.play()


def _row_clips(width: int, height: int, row: int, count: int) -> list[pygame.Rect]:
    return [pygame.Rect(i * width, row * height, width, height) for i in range(count)]


class Player(Entity):
    """The knight steered by the user."""

    def __init__(self, x: float, y: float, texture: Any) -> None:
        super().__init__(x, y, texture)
        self._hitbox = pygame.Rect(0, 0, PLAYER_WIDTH - 12, PLAYER_HEIGHT)
        self._sync_hitbox_x()
        self._sync_hitbox_y()

        frame = self.current_frame
        w, h = frame.w // SHEET_COLUMNS, frame.h // SHEET_ROWS
        self.idling_clips = _row_clips(w, h, 0, 4)
        self.walking_clips = _row_clips(w, h, 1, 4) + _row_clips(w, h, 2, 4)
        self.jumping_clips = _row_clips(w, h, 3, 4)
        self.falling_clips = _row_clips(w, h, 4, 4)
        self.death_clips = _row_clips(w, h, 5, 4)
        self.attacking_clips = [pygame.Rect(0, 6 * h, w, h)]

        self.attack_counter = 0
        self.attacking = False
        self._idle_counter = 0
        self._walk_counter = 0
        self._jump_counter = 0
        self._fall_counter = 0
        self._death_counter = 0

        self.grounded = False
        self.running = False
        self.idling = True
        self.jumping = False
        self.falling = True
        self.dead = False
        self.being_hit = False

        self.x_vel = 0.0
        self.y_vel = 0.0
        self.ground_index = 1
        self.level_index = 1

        self.bullets: list[Bullet] = []
        self.starve = STARVE_SECONDS

    @property
    def collision(self) -> pygame.Rect:
        return self._hitbox.copy()

    def _sync_hitbox_x(self) -> None:
        self._hitbox.x = int(self.x + PLAYER_WIDTH)

    def _sync_hitbox_y(self) -> None:
        self._hitbox.y = int(self.y + PLAYER_HEIGHT)

    def handle_event(self, event: Any, sounds: Sequence[Any] | None) -> None:
        """React to keyboard movement, jumping and mouse shooting."""
        if self.dead:
            return
        repeat = getattr(event, "repeat", 0)
        if event.type == pygame.KEYDOWN and repeat == 0:
            if event.key == pygame.K_a:
                self.x_vel -= PLAYER_VEL
            elif event.key == pygame.K_d:
                self.x_vel += PLAYER_VEL
            elif event.key == pygame.K_SPACE and self.grounded:
                self.jump()
                _play(sounds, Sound.JUMP)
        elif event.type == pygame.KEYUP and repeat == 0:
            if event.key == pygame.K_a:
                self.x_vel += PLAYER_VEL
            elif event.key == pygame.K_d:
                self.x_vel -= PLAYER_VEL
            elif event.key == pygame.K_SPACE and not self.grounded and self.jumping:
                self.y_vel *= 0.5
        elif event.type == pygame.MOUSEBUTTONDOWN:
            if getattr(event, "button", None) == pygame.BUTTON_LEFT:
                self._shoot(sounds)

    def _shoot(self, sounds: Sequence[Any] | None) -> None:
        self.attacking = True
        self.attack_counter = 0
        bullet = Bullet(self._hitbox.x + PLAYER_WIDTH * 1.25, self._hitbox.y, None)
        _play(sounds, Sound.SHOOT)
        bullet.aim(self.flip, DEFAULT_BULLET_W, DEFAULT_BULLET_H, self.x, self.y)
        bullet.bullet_type = BulletType.NORMAL
        bullet.moving = True
        self.bullets.append(bullet)

    def update(
        self,
        level_parts: Sequence[LevelPart],
        skeletons: Sequence[Any],
        sounds: Sequence[Any] | None,
    ) -> None:
        """Advance one frame of physics, damage and state."""
        self.apply_gravity()
        if not self.dead:
            self.check_hit(skeletons, sounds)

        alive = not self.dead
        airborne = not self.grounded
        self.idling = self.x_vel == 0 and self.grounded and alive
        self.running = self.x_vel != 0 and self.grounded and alive
        self.falling = self.y_vel > 0 and airborne and alive
        self.jumping = self.y_vel <= 0 and airborne and alive

        if not self.being_hit:
            if self.x_vel < 0:
                self.flip = Flip.HORIZONTAL
            if self.x_vel > 0:
                self.flip = Flip.NONE

        if self.attacking:
            self.idling = self.running = self.jumping = self.falling = False
            if self.attack_counter >= ATTACK_DELAY:
                self.attacking = False

        if alive:
            self.x += self.x_vel
            self._sync_hitbox_x()
            if self.x + PLAYER_WIDTH < 0:
                self.x = float(-PLAYER_WIDTH)
                self._sync_hitbox_x()
            if touches_wall(self._hitbox, level_parts):
                self.x -= self.x_vel
                self._sync_hitbox_x()

        self.y += self.y_vel
        self._sync_hitbox_y()
        if self.y + PLAYER_HEIGHT < 0:
            self.y = float(-PLAYER_HEIGHT)
            self._sync_hitbox_y()

        contact = ground_contact(self._hitbox, level_parts, self.grounded)
        self.grounded = contact.grounded
        if contact.ground_index is not None:
            self.ground_index = contact.ground_index
            self.level_index = contact.level_index
        if contact.hit:
            if self.y_vel > 0:
                ground = level_parts[self.level_index].tiles[self.ground_index]
                self.y = float(ground.y - TILE_HEIGHT * 2)
                if self.falling:
                    self.grounded = True
                    _play(sounds, Sound.LAND)
            elif self.y_vel < 0:
                self.y -= self.y_vel
                self.y_vel = 0.0
            self._sync_hitbox_y()

    def jump(self) -> None:
        """Leave the ground with an upward impulse."""
        if self.grounded:
            self.y_vel -= JUMP_IMPULSE
            self.grounded = False

    def apply_gravity(self) -> None:
        """Accelerate downwards in the air; rest lightly on the ground."""
        if not self.grounded:
            self.y_vel = min(self.y_vel + GRAVITY, MAX_GRAVITY)
        else:
            self.y_vel = GRAVITY

    def check_hit(self, skeletons: Sequence[Any], sounds: Sequence[Any] | None) -> None:
        """Die from a skeleton's strike, from falling off the map or from starving."""
        for skeleton in skeletons:
            if skeleton is None:
                continue
            if (
                skeleton.distance <= TILE_WIDTH * 1.5
                and skeleton.is_attacking()
                and skeleton.y - TILE_WIDTH <= self.y <= skeleton.y + TILE_WIDTH * 0.5
            ):
                self.dead = True
                _play(sounds, Sound.HIT)
        if self.y + PLAYER_HEIGHT >= LEVEL_HEIGHT:
            self.dead = True
            _play(sounds, Sound.HIT)
        if self.starve <= 0:
            self.dead = True
            _play(sounds, Sound.HIT)

    def knock_back(self) -> None:
        """Throw the player up and back while being hit."""
        if self.being_hit:
            self.y_vel -= KNOCK_BACK_LIFT
            if self.flip is Flip.NONE:
                self.x -= 100
            elif self.flip is Flip.HORIZONTAL:
                self.x += 10

    def follow_camera(self, camera: Any, cam_vel: float) -> float:
        """Centre the camera on the player within the level; return the new camera speed."""
        acc = 0.001
        if cam_vel > 4:
            acc = 0.0003
        if cam_vel > 5:
            acc = 0.00001
        cam_vel += acc

        camera.x = int(self.x + PLAYER_WIDTH // 2 - SCREEN_WIDTH // 2)
        camera.y = int(self.y + PLAYER_HEIGHT // 2 - SCREEN_HEIGHT // 2)

        if camera.x < 0:
            camera.x = 0
        if camera.y < 0:
            camera.y = 0
        if camera.y > LEVEL_HEIGHT - camera.h:
            camera.y = LEVEL_HEIGHT - camera.h
        return cam_vel

    def render(self, renderer: Any, camera: Any) -> None:
        """Draw the animations of every active state and advance their counters."""

        def draw(clip: pygame.Rect) -> None:
            renderer.draw_animation(self.texture, self.x, self.y, clip, camera, self.flip)

        if self.running:
            draw(self.walking_clips[self._walk_counter // WALK_FRAME_TICKS])
            self._walk_counter += 1
            if self._walk_counter // WALK_FRAME_TICKS >= len(self.walking_clips):
                self._walk_counter = 0

        if self.idling:
            draw(self.idling_clips[self._idle_counter // IDLE_FRAME_TICKS])
            self._idle_counter += 1
            if self._idle_counter // IDLE_FRAME_TICKS >= len(self.idling_clips):
                self._idle_counter = 0
        else:
            self._idle_counter = 0

        if self.jumping:
            draw(self.jumping_clips[self._jump_counter // JUMP_FRAME_TICKS])
            self._jump_counter += 1
            if self._jump_counter // JUMP_FRAME_TICKS >= len(self.jumping_clips):
                self._jump_counter = 0
        else:
            self._jump_counter = 0

        if self.falling:
            draw(self.falling_clips[self._fall_counter // FALL_FRAME_TICKS])
            self._fall_counter += 1
            if self._fall_counter // FALL_FRAME_TICKS >= len(self.falling_clips):
                self._fall_counter = 0
        else:
            self._fall_counter = 0

        if self.dead:
            draw(self.death_clips[self._death_counter // DEATH_FRAME_TICKS])
            if self._death_counter // DEATH_FRAME_TICKS < len(self.death_clips) - 1:
                self._death_counter += 1
        else:
            self._death_counter = 0

        if self.attacking:
            draw(self.attacking_clips[0])
            self.attack_counter += 1
            if self.attack_counter >= ATTACK_DELAY:
                self.attacking = False
                self.attack_counter = 0

    def reset(self) -> None:
        """Return to the spawn point, alive and at rest."""
        self.x = float(SPAWN_X)
        self.y = float(SPAWN_Y)
        self.x_vel = 0.0
        self.y_vel = 0.0
        self.dead = False
        self.flip = Flip.NONE