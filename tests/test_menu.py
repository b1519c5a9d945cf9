import pygame
import pytest

from tarnishedquest.constants import SCREEN_WIDTH
from tarnishedquest.entity import Flip
from tarnishedquest.menu import BUTTON_HEIGHT, BUTTON_STATES, BUTTON_WIDTH, Menu


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def draw_texture(self, texture, x, y, width=None, height=None, clip=None,
                     camera=None, flip=Flip.NONE):
        self.calls.append((texture, x, y, clip))


@pytest.fixture
def menu():
    return Menu("buttons", "background", "retry")


def click(menu, button, dead=False):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=pygame.BUTTON_LEFT, pos=button)
    return menu.handle_event(event, dead)


def move(menu, pos, dead=False):
    return menu.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=pos), dead)


def test_initial_state(menu):
    assert menu.in_menu is True
    assert menu.paused is False
    assert menu.reset_requested is False


def test_buttons_centred_and_stacked(menu):
    px, py = menu.primary_button
    sx, sy = menu.secondary_button
    assert px + BUTTON_WIDTH / 2 == SCREEN_WIDTH / 2
    assert px == sx
    assert sy > py + BUTTON_HEIGHT


def test_clip_rows(menu):
    assert len(menu.play_clips) == BUTTON_STATES
    assert [c.y for c in menu.play_clips] == [0] * BUTTON_STATES
    assert [c.y for c in menu.exit_clips] == [BUTTON_HEIGHT] * BUTTON_STATES
    assert [c.y for c in menu.retry_clips] == [2 * BUTTON_HEIGHT] * BUTTON_STATES
    assert [c.x for c in menu.play_clips] == [i * BUTTON_WIDTH for i in range(BUTTON_STATES)]


def test_is_hovered_edges_inclusive(menu):
    assert menu.is_hovered((0, 0), (BUTTON_WIDTH, BUTTON_HEIGHT))
    assert menu.is_hovered((0, 0), (0, 0))
    assert not menu.is_hovered((0, 0), (BUTTON_WIDTH + 1, 0))
    assert not menu.is_hovered((0, 0), (0, -1))


def test_click_play_leaves_menu(menu):
    assert click(menu, menu.primary_button) is False
    assert menu.in_menu is False


def test_click_exit_requests_quit(menu):
    assert click(menu, menu.secondary_button) is True
    assert menu.in_menu is True


def test_click_elsewhere_does_nothing(menu):
    assert click(menu, (0, 0)) is False
    assert menu.in_menu is True


def test_right_click_ignored(menu):
    event = pygame.event.Event(
        pygame.MOUSEBUTTONDOWN, button=pygame.BUTTON_RIGHT, pos=menu.primary_button
    )
    assert menu.handle_event(event, False) is False
    assert menu.in_menu is True


def test_retry_when_dead(menu):
    click(menu, menu.primary_button)
    assert menu.reset_requested is False
    click(menu, menu.primary_button, dead=True)
    assert menu.reset_requested is True
    assert click(menu, menu.secondary_button, dead=True) is True


def test_explicit_mouse_overrides_event(menu):
    event = pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=pygame.BUTTON_LEFT, pos=(0, 0))
    menu.handle_event(event, False, menu.primary_button)
    assert menu.in_menu is False


def test_escape_toggles_pause(menu):
    event = pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE)
    menu.handle_event(event, False)
    assert menu.paused is True
    menu.handle_event(event, False)
    assert menu.paused is False


def test_hover_selects_button(menu):
    move(menu, menu.primary_button)
    renderer = RecordingRenderer()
    menu.render_main_menu(renderer)
    assert renderer.calls[0][0] == "background"
    assert renderer.calls[1][3] == menu.play_clips[1]
    assert renderer.calls[2][3] == menu.exit_clips[0]


def test_pressed_then_released(menu):
    event = pygame.event.Event(
        pygame.MOUSEBUTTONDOWN, button=pygame.BUTTON_LEFT, pos=menu.secondary_button
    )
    menu.handle_event(event, False)
    renderer = RecordingRenderer()
    menu.render_main_menu(renderer)
    assert renderer.calls[2][3] == menu.exit_clips[2]

    menu.handle_event(pygame.event.Event(pygame.MOUSEBUTTONUP, button=1, pos=(0, 0)), False)
    renderer = RecordingRenderer()
    menu.render_main_menu(renderer)
    assert renderer.calls[2][3] == menu.exit_clips[0]


def test_main_menu_hidden_after_play(menu):
    click(menu, menu.primary_button)
    renderer = RecordingRenderer()
    menu.render_main_menu(renderer)
    assert renderer.calls == []


def test_retry_menu_buttons(menu):
    click(menu, menu.primary_button)
    move(menu, menu.secondary_button, dead=True)
    renderer = RecordingRenderer()
    menu.render_retry_menu(renderer)
    assert len(renderer.calls) == 2
    texture, x, y, clip = renderer.calls[0]
    assert (x, y) == menu.primary_button
    assert clip == menu.retry_clips[0]
    assert renderer.calls[1][3] == menu.exit_clips[1]