"""Skeleton enemies: patrolling, chasing the player, attacking and taking hits."""

from __future__ import annotations

import math
from typing import Any, Sequence

import pygame

from .collision import check_collision, ground_contact, touches_wall
from .constants import GRAVITY, LEVEL_HEIGHT, MAX_GRAVITY, TILE_HEIGHT, TILE_WIDTH
from .entity import Entity, Flip, Tile
from .level import LevelPart

SKELETON_WIDTH = 64
SKELETON_HEIGHT = 64
SKELETON_VEL = 4
MAX_HEALTH = 3

# The sprite sheet is a grid of 4 columns and 5 rows of equally sized frames.
SHEET_COLUMNS = 4
SHEET_ROWS = 5
ANIMATION_FRAMES = 4

WALK_FRAME_TICKS = 12
IDLE_FRAME_TICKS = 18
FALL_FRAME_TICKS = 12
ATTACK_FRAME_TICKS = 21
HIT_FRAME_TICKS = 7
# The attack only hurts from this animation frame on.
ATTACK_STRIKE_FRAME = 2

SIGHT_RANGE = TILE_WIDTH * 7
ATTACK_RANGE = TILE_WIDTH * 1.5
HIGH_ATTACK_RANGE = TILE_WIDTH * 2.5
KNOCK_BACK_LIFT = -3.0
KNOCK_BACK_PUSH = 4.0

_DIED_SOUND = 0
_HIT_SOUND = 1


def _play(sounds: Sequence[Any] | None, index: int) -> None:
    if not sounds or len(sounds) <= index:
        return
    sound = sounds[index]
    if sound is not None:
        sound.play()


def _row_clips(width: int, height: int, row: int) -> list[pygame.Rect]:
    return [pygame.Rect(i * width, row * height, width, height) for i in range(ANIMATION_FRAMES)]


class Skeleton(Entity):
    """A walking enemy that patrols its ground and strikes at a nearby player."""

    def __init__(self, x: float, y: float, texture: Any) -> None:
        super().__init__(x, y, texture)
        self._hitbox = pygame.Rect(0, 0, SKELETON_WIDTH - 12, SKELETON_HEIGHT - 2)
        self._sync_hitbox_x()
        self._sync_hitbox_y()

        frame = self.current_frame
        w, h = frame.w // SHEET_COLUMNS, frame.h // SHEET_ROWS
        self.idling_clips = _row_clips(w, h, 0)
        self.walking_clips = _row_clips(w, h, 1)
        self.being_hit_clips = _row_clips(w, h, 2)
        self.attacking_clips = _row_clips(w, h, 3)
        self.falling_clips = _row_clips(w, h, 4)

        self._idle_counter = 0
        self._walk_counter = 0
        self._fall_counter = 0
        self.attacking_counter = 0
        self.being_hit_counter = 0

        self.grounded = True
        self.walking = False
        self.idling = True
        self.falling = False
        self.attacking = False
        self.being_hit = False
        self.dead = False

        self.x_vel = 0.0
        self.y_vel = 0.0
        self.health = MAX_HEALTH
        self.ground_index = 1
        self.level_index = 1
        self.distance = math.inf

    @property
    def collision(self) -> pygame.Rect:
        return self._hitbox.copy()

    def _sync_hitbox_x(self) -> None:
        self._hitbox.x = int(self.x + SKELETON_WIDTH)

    def _sync_hitbox_y(self) -> None:
        self._hitbox.y = int(self.y + SKELETON_HEIGHT)

    def _tile(self, level_parts: Sequence[LevelPart], offset: int) -> Tile:
        index = self.ground_index + offset
        if index < 0:
            raise IndexError(f"tile index {index} out of range")
        return level_parts[self.level_index].tiles[index]

    def _gap(self, level_parts: Sequence[LevelPart], offset: int) -> bool:
        """Whether the tile ``offset`` places from the ground tile is not solid."""
        return not self._tile(level_parts, offset).is_solid

    def update(self, player: Any, level_parts: Sequence[LevelPart], sounds: Sequence[Any] | None) -> None:
        """Advance one frame of behaviour, physics and state."""
        if not self.being_hit:
            if self.x_vel < 0:
                self.flip = Flip.HORIZONTAL
            if self.x_vel > 0:
                self.flip = Flip.NONE

        self.apply_gravity()
        self.check_hit(player, sounds)
        self.auto_move(level_parts)
        self.chase(player, level_parts)
        self.knock_back()

        free = not self.attacking and not self.dead and not self.being_hit
        self.idling = self.x_vel == 0 and self.grounded and free
        self.walking = self.x_vel != 0 and self.grounded and free
        self.falling = (
            self.y_vel > 0 and not self.grounded and not self.dead and not self.being_hit
        )

        if not self.attacking:
            self.x += self.x_vel
            self._sync_hitbox_x()
            if self.x + SKELETON_WIDTH < 0:
                self.x = float(-SKELETON_WIDTH)
                self._sync_hitbox_x()
                self.x_vel *= -1
            if touches_wall(self._hitbox, level_parts):
                self.x -= self.x_vel
                self._sync_hitbox_x()
                self.x_vel *= -1

        self.y += self.y_vel
        self._sync_hitbox_y()
        if self.y + SKELETON_HEIGHT < 0:
            self.y = float(-SKELETON_HEIGHT)
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
            elif self.y_vel < 0:
                self.y -= self.y_vel
                self.y_vel = 0.0
            self._sync_hitbox_y()

    def apply_gravity(self) -> None:
        """Accelerate downwards in the air; rest lightly on the ground."""
        if not self.grounded:
            self.y_vel = min(self.y_vel + GRAVITY, MAX_GRAVITY)
        else:
            self.y_vel = GRAVITY

    def auto_move(self, level_parts: Sequence[LevelPart]) -> None:
        """Patrol the ground, turning back at gaps and stopping on narrow ledges."""
        if not self.grounded or self.being_hit:
            return
        patrol = SKELETON_VEL * 0.5
        if self._gap(level_parts, 1) and self._gap(level_parts, -2):
            self.x_vel = 0.0
        elif self._gap(level_parts, 1) and self.x_vel > 0:
            self.x_vel = -patrol
        elif self._gap(level_parts, -1) and self.x_vel < 0:
            self.x_vel = patrol
        elif self._gap(level_parts, 2) and self._gap(level_parts, -2):
            self.x_vel = 0.0
        elif self.flip is Flip.NONE:
            self.x_vel = patrol
        elif self.flip is Flip.HORIZONTAL:
            self.x_vel = -patrol

    def chase(self, player: Any, level_parts: Sequence[LevelPart]) -> None:
        """Walk towards a player in sight and start attacking one within reach."""
        dx = player.x - self.x
        dy = player.y - self.y
        self.distance = math.hypot(dx, dy)

        if not self.being_hit:
            level_with = self.y - TILE_WIDTH <= player.y <= self.y + TILE_WIDTH * 0.5
            if level_with and self.distance <= SIGHT_RANGE:
                if dx < 0:
                    self.x_vel = 0.0 if self._gap(level_parts, -1) else float(-SKELETON_VEL)
                elif self._gap(level_parts, 1):
                    self.x_vel = 0.0
                else:
                    self.x_vel = float(SKELETON_VEL)

        above = self.y - HIGH_ATTACK_RANGE <= player.y <= self.y - TILE_HEIGHT
        in_reach = self.distance <= ATTACK_RANGE or (above and self.distance <= HIGH_ATTACK_RANGE)
        self.attacking = in_reach and not self.dead and not self.being_hit and self.grounded

    def is_attacking(self) -> bool:
        """Whether the attack animation has reached the frames that hurt."""
        return self.attacking_counter // ATTACK_FRAME_TICKS >= ATTACK_STRIKE_FRAME

    def check_hit(self, player: Any, sounds: Sequence[Any] | None) -> None:
        """Take damage from the player's bullets and die when out of health or off the map."""
        for bullet in player.bullets:
            if bullet is None:
                continue
            if not check_collision(bullet.collision, self._hitbox):
                continue
            if self.x + SKELETON_WIDTH <= bullet.x <= self.x + SKELETON_WIDTH * 1.5:
                self.being_hit = True
                self.health -= 1
                bullet.moving = False

        if self.being_hit and self.being_hit_counter == 0:
            _play(sounds, _HIT_SOUND)

        if self.being_hit_counter // HIT_FRAME_TICKS >= ANIMATION_FRAMES:
            self.being_hit = False
            self.being_hit_counter = 0

        if self.health <= 0 or self.y + SKELETON_HEIGHT / 2 > LEVEL_HEIGHT:
            self.dead = True
            self.being_hit = False
            _play(sounds, _DIED_SOUND)

    def knock_back(self) -> None:
        """Throw the skeleton up and backwards at the start of a hit."""
        if self.being_hit and self.being_hit_counter == 0:
            self.y_vel = KNOCK_BACK_LIFT
            if self.flip is Flip.NONE:
                self.x_vel = -KNOCK_BACK_PUSH
            elif self.flip is Flip.HORIZONTAL:
                self.x_vel = KNOCK_BACK_PUSH

    def render(self, renderer: Any, camera: Any) -> None:
        """Draw the animations of every active state and advance their counters."""

        def draw(clip: pygame.Rect) -> None:
            renderer.draw_animation(self.texture, self.x, self.y, clip, camera, self.flip)

        if self.walking:
            draw(self.walking_clips[self._walk_counter // WALK_FRAME_TICKS])
            self._walk_counter += 1
            if self._walk_counter // WALK_FRAME_TICKS >= ANIMATION_FRAMES:
                self._walk_counter = 0

        if self.idling:
            draw(self.idling_clips[self._idle_counter // IDLE_FRAME_TICKS])
            self._idle_counter += 1
            if self._idle_counter // IDLE_FRAME_TICKS >= ANIMATION_FRAMES:
                self._idle_counter = 0
        else:
            self._idle_counter = 0

        if self.falling:
            draw(self.falling_clips[self._fall_counter // FALL_FRAME_TICKS])
            self._fall_counter += 1
            if self._fall_counter // FALL_FRAME_TICKS >= ANIMATION_FRAMES:
                self._fall_counter = 0
        else:
            self._fall_counter = 0

        if self.attacking:
            draw(self.attacking_clips[self.attacking_counter // ATTACK_FRAME_TICKS])
            self.attacking_counter += 1
            if self.attacking_counter // ATTACK_FRAME_TICKS >= ANIMATION_FRAMES:
                self.attacking_counter = 0
        else:
            self.attacking_counter = 0

        if self.being_hit:
            frame = min(self.being_hit_counter // HIT_FRAME_TICKS, ANIMATION_FRAMES - 1)
            draw(self.being_hit_clips[frame])
            self.being_hit_counter += 1
        else:
            self.being_hit_counter = 0