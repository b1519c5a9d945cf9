import pygame
import pytest

from tarnishedquest.bullet import Bullet
from tarnishedquest.constants import (
    GRAVITY,
    LEVEL_HEIGHT,
    MAX_GRAVITY,
    TILE_HEIGHT,
    TILES_PER_ROW,
    TOTAL_TILES,
)
from tarnishedquest.entity import Flip
from tarnishedquest.level import LevelPart
from tarnishedquest.player import Player
from tarnishedquest.skeleton import (
    ATTACK_FRAME_TICKS,
    HIT_FRAME_TICKS,
    MAX_HEALTH,
    SKELETON_HEIGHT,
    SKELETON_VEL,
    SKELETON_WIDTH,
    Skeleton,
)

SOLID = 0
EMPTY = 100
FLOOR_ROW = 10
GROUND_INDEX = FLOOR_ROW * TILES_PER_ROW + 11


class FakeSound:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw_animation(self, texture, x, y, clip, camera, flip):
        self.calls.append((x, y, pygame.Rect(clip), flip))


def make_part(tmp_path, types, name="part.map"):
    path = tmp_path / name
    path.write_text(" ".join(str(t) for t in types))
    return LevelPart(0, 0, path, None)


def floor_types():
    return [
        SOLID if index // TILES_PER_ROW == FLOOR_ROW else EMPTY for index in range(TOTAL_TILES)
    ]


def standing_skeleton():
    skeleton = Skeleton(640, 512, None)
    skeleton.level_index = 0
    skeleton.ground_index = GROUND_INDEX
    return skeleton


def sounds():
    return [FakeSound(), FakeSound()]


def test_collision_box_follows_position():
    skeleton = Skeleton(100, 200, None)
    box = skeleton.collision
    assert box.topleft == (100 + SKELETON_WIDTH, 200 + SKELETON_HEIGHT)
    assert box.size == (SKELETON_WIDTH - 12, SKELETON_HEIGHT - 2)


def test_collision_is_a_copy():
    skeleton = Skeleton(100, 200, None)
    box = skeleton.collision
    box.x += 50
    assert skeleton.collision.x == 100 + SKELETON_WIDTH


def test_initial_state():
    skeleton = Skeleton(0, 0, None)
    assert skeleton.grounded is True
    assert skeleton.idling is True
    assert skeleton.dead is False
    assert skeleton.health == MAX_HEALTH
    assert skeleton.is_attacking() is False


def test_clips_cut_from_five_row_sheet():
    texture = pygame.Surface((256, 320))
    skeleton = Skeleton(0, 0, texture)
    w, h = 256 // 4, 320 // 5
    assert skeleton.idling_clips[0] == pygame.Rect(0, 0, w, h)
    assert skeleton.walking_clips[3] == pygame.Rect(3 * w, h, w, h)
    assert skeleton.being_hit_clips[1].y == 2 * h
    assert skeleton.attacking_clips[2].y == 3 * h
    assert skeleton.falling_clips[0].y == 4 * h
    assert len(skeleton.attacking_clips) == 4


def test_gravity_on_ground_rests_lightly():
    skeleton = Skeleton(0, 0, None)
    skeleton.y_vel = 9.0
    skeleton.apply_gravity()
    assert skeleton.y_vel == GRAVITY


def test_gravity_in_air_is_capped():
    skeleton = Skeleton(0, 0, None)
    skeleton.grounded = False
    skeleton.apply_gravity()
    assert skeleton.y_vel == pytest.approx(GRAVITY)
    for _ in range(200):
        skeleton.apply_gravity()
    assert skeleton.y_vel == MAX_GRAVITY


@pytest.mark.parametrize("flip, direction", [(Flip.NONE, -1), (Flip.HORIZONTAL, 1)])
def test_knock_back_pushes_away_from_facing(flip, direction):
    skeleton = Skeleton(0, 0, None)
    skeleton.flip = flip
    skeleton.being_hit = True
    skeleton.knock_back()
    assert skeleton.y_vel == -3
    assert skeleton.x_vel == direction * 4


def test_knock_back_only_at_start_of_hit():
    skeleton = Skeleton(0, 0, None)
    skeleton.being_hit = True
    skeleton.being_hit_counter = 3
    skeleton.x_vel = 1.5
    skeleton.knock_back()
    assert skeleton.x_vel == 1.5


def test_bullet_in_range_hits():
    skeleton = Skeleton(100, 200, None)
    player = Player(0, 0, None)
    bullet = Bullet(skeleton.x + 70, skeleton.y + 60)
    bullet.moving = True
    player.bullets.append(bullet)
    fx = sounds()
    skeleton.check_hit(player, fx)
    assert skeleton.being_hit is True
    assert skeleton.health == MAX_HEALTH - 1
    assert bullet.moving is False
    assert fx[1].plays == 1
    assert fx[0].plays == 0


def test_bullet_beyond_front_misses():
    skeleton = Skeleton(100, 200, None)
    player = Player(0, 0, None)
    bullet = Bullet(skeleton.x + SKELETON_WIDTH * 1.5 + 1, skeleton.y + 60)
    bullet.moving = True
    player.bullets.append(bullet)
    skeleton.check_hit(player, sounds())
    assert skeleton.being_hit is False
    assert skeleton.health == MAX_HEALTH
    assert bullet.moving is True


def test_last_health_point_kills():
    skeleton = Skeleton(100, 200, None)
    skeleton.health = 1
    player = Player(0, 0, None)
    player.bullets.append(Bullet(skeleton.x + 70, skeleton.y + 60))
    fx = sounds()
    skeleton.check_hit(player, fx)
    assert skeleton.dead is True
    assert skeleton.being_hit is False
    assert fx[0].plays == 1


def test_falling_off_map_kills():
    skeleton = Skeleton(100, LEVEL_HEIGHT, None)
    skeleton.check_hit(Player(0, 0, None), None)
    assert skeleton.dead is True


def test_hit_ends_after_animation():
    skeleton = Skeleton(0, 0, None)
    skeleton.idling = False
    skeleton.being_hit = True
    renderer = RecordingRenderer()
    camera = pygame.Rect(0, 0, 10, 10)
    player = Player(0, 0, None)
    for _ in range(HIT_FRAME_TICKS * 4 - 1):
        skeleton.render(renderer, camera)
    skeleton.check_hit(player, None)
    assert skeleton.being_hit is True
    skeleton.render(renderer, camera)
    skeleton.check_hit(player, None)
    assert skeleton.being_hit is False
    assert skeleton.being_hit_counter == 0


def test_attack_hurts_only_from_strike_frame():
    skeleton = Skeleton(0, 0, None)
    skeleton.idling = False
    skeleton.attacking = True
    renderer = RecordingRenderer()
    camera = pygame.Rect(0, 0, 10, 10)
    for _ in range(ATTACK_FRAME_TICKS * 2 - 1):
        skeleton.render(renderer, camera)
    assert skeleton.is_attacking() is False
    skeleton.render(renderer, camera)
    assert skeleton.is_attacking() is True


def test_render_idle_draws_first_clip_at_position():
    texture = pygame.Surface((256, 320))
    skeleton = Skeleton(30, 40, texture)
    skeleton.flip = Flip.HORIZONTAL
    renderer = RecordingRenderer()
    skeleton.render(renderer, pygame.Rect(0, 0, 10, 10))
    assert renderer.calls == [(30.0, 40.0, skeleton.idling_clips[0], Flip.HORIZONTAL)]


def test_chase_walks_right_towards_player(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    player = Player(skeleton.x + 100, skeleton.y, None)
    skeleton.chase(player, parts)
    assert skeleton.distance == 100.0
    assert skeleton.x_vel == SKELETON_VEL
    assert skeleton.attacking is False


def test_chase_walks_left_towards_player(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    player = Player(skeleton.x - 200, skeleton.y, None)
    skeleton.chase(player, parts)
    assert skeleton.x_vel == -SKELETON_VEL


def test_chase_stops_at_gap(tmp_path):
    types = [SOLID] * TOTAL_TILES
    types[GROUND_INDEX + 1] = EMPTY
    parts = [make_part(tmp_path, types)]
    skeleton = standing_skeleton()
    skeleton.x_vel = 2.0
    skeleton.chase(Player(skeleton.x + 100, skeleton.y, None), parts)
    assert skeleton.x_vel == 0


def test_chase_ignores_distant_player(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    skeleton.x_vel = -2.0
    skeleton.chase(Player(skeleton.x + 5000, skeleton.y, None), parts)
    assert skeleton.x_vel == -2.0
    assert skeleton.attacking is False


def test_close_player_triggers_attack(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    skeleton.chase(Player(skeleton.x + 50, skeleton.y, None), parts)
    assert skeleton.attacking is True


def test_no_attack_while_airborne(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    skeleton.grounded = False
    skeleton.chase(Player(skeleton.x + 50, skeleton.y, None), parts)
    assert skeleton.attacking is False


@pytest.mark.parametrize("flip, direction", [(Flip.NONE, 1), (Flip.HORIZONTAL, -1)])
def test_patrol_follows_facing(tmp_path, flip, direction):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    skeleton.flip = flip
    skeleton.auto_move(parts)
    assert skeleton.x_vel == direction * SKELETON_VEL * 0.5


def test_patrol_turns_at_right_gap(tmp_path):
    types = [SOLID] * TOTAL_TILES
    types[GROUND_INDEX + 1] = EMPTY
    parts = [make_part(tmp_path, types)]
    skeleton = standing_skeleton()
    skeleton.x_vel = 2.0
    skeleton.auto_move(parts)
    assert skeleton.x_vel == -SKELETON_VEL * 0.5


def test_patrol_stops_on_narrow_ledge(tmp_path):
    types = [SOLID] * TOTAL_TILES
    types[GROUND_INDEX + 1] = EMPTY
    types[GROUND_INDEX - 2] = EMPTY
    parts = [make_part(tmp_path, types)]
    skeleton = standing_skeleton()
    skeleton.x_vel = 2.0
    skeleton.auto_move(parts)
    assert skeleton.x_vel == 0


def test_patrol_idle_in_air(tmp_path):
    parts = [make_part(tmp_path, [SOLID] * TOTAL_TILES)]
    skeleton = standing_skeleton()
    skeleton.grounded = False
    skeleton.x_vel = 1.25
    skeleton.auto_move(parts)
    assert skeleton.x_vel == 1.25


def test_update_bounces_off_left_edge():
    skeleton = Skeleton(-100, 100, None)
    skeleton.grounded = False
    skeleton.x_vel = -2.0
    skeleton.update(Player(5000, 0, None), [], None)
    assert skeleton.x == -SKELETON_WIDTH
    assert skeleton.x_vel == 2.0
    assert skeleton.flip is Flip.HORIZONTAL


def test_update_lands_on_floor_and_patrols(tmp_path):
    parts = [make_part(tmp_path, floor_types())]
    skeleton = Skeleton(640, 300, None)
    skeleton.grounded = False
    player = Player(5000, 300, None)
    for _ in range(100):
        skeleton.update(player, parts, None)
    rest_y = FLOOR_ROW * TILE_HEIGHT - TILE_HEIGHT * 2
    assert skeleton.grounded is True
    assert skeleton.dead is False
    assert rest_y <= skeleton.y < rest_y + 3
    assert skeleton.x > 640
    assert skeleton.level_index == 0