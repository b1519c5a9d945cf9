"""Drawing onto a target surface, loading textures and rendering text."""

from __future__ import annotations

import os
from typing import Any

import pygame

from .entity import Flip

CLEAR_COLOR = (0xFF, 0xFF, 0xFF, 0xFF)
DEFAULT_FONT_SIZE = 28


class ResourceError(RuntimeError):
    """A texture or font could not be loaded, or text could not be rendered."""


class Renderer:
    """Draws textures, tiles and animation frames onto one target surface."""

    def __init__(self, surface: pygame.Surface) -> None:
        self.surface = surface
        self.font: pygame.font.Font | None = None

    def load_texture(self, path: str | os.PathLike) -> pygame.Surface:
        """Load an image file as a texture."""
        try:
            return pygame.image.load(os.fspath(path))
        except (pygame.error, OSError) as exc:
            raise ResourceError(f"cannot load texture {os.fspath(path)}: {exc}") from exc

    def load_font(self, path: str | os.PathLike | None, size: int = DEFAULT_FONT_SIZE) -> None:
        """Replace the current font; ``None`` selects the built-in font."""
        self.font = None
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            self.font = pygame.font.Font(None if path is None else os.fspath(path), size)
        except (pygame.error, OSError) as exc:
            raise ResourceError(f"cannot load font {path}: {exc}") from exc

    def create_text(self, text: str, color: Any) -> pygame.Surface:
        """Render a line of text, without antialiasing, in the current font."""
        if self.font is None:
            raise ResourceError("no font loaded")
        try:
            return self.font.render(text, False, color)
        except pygame.error as exc:
            raise ResourceError(f"cannot render text {text!r}: {exc}") from exc

    def _blit(self, texture: Any, clip: pygame.Rect | None, dst: pygame.Rect, flip: Flip) -> None:
        if texture is None or dst.w <= 0 or dst.h <= 0:
            return
        if clip is None:
            image = texture
        else:
            area = clip.clip(texture.get_rect())
            if area.w <= 0 or area.h <= 0:
                return
            image = texture.subsurface(area)
        if flip is Flip.HORIZONTAL:
            image = pygame.transform.flip(image, True, False)
        if image.get_size() != dst.size:
            image = pygame.transform.scale(image, dst.size)
        self.surface.blit(image, dst.topleft)

    def draw_texture(
        self,
        texture: Any,
        x: float,
        y: float,
        width: float | None = None,
        height: float | None = None,
        clip: Any = None,
        camera: Any = None,
        flip: Flip = Flip.NONE,
    ) -> pygame.Rect:
        """Draw a texture, or the ``clip`` part of it, and return the target rectangle.

        Without a clip the target takes ``width`` and ``height``, or the texture's
        own size where they are omitted; with a clip it takes the clip's size.
        """
        natural = texture.get_size() if texture is not None else (0, 0)
        w = natural[0] if width is None else int(width)
        h = natural[1] if height is None else int(height)
        area = None
        if clip is not None:
            area = pygame.Rect(clip)
            w, h = area.w, area.h
        dst = pygame.Rect(int(x), int(y), w, h)
        if camera is not None:
            dst.move_ip(-camera.x, -camera.y)
        self._blit(texture, area, dst, flip)
        return dst

    def draw_tile(self, texture: Any, x: float, y: float, clip: Any, camera: Any) -> pygame.Rect:
        """Draw one tile sprite at a world position seen through the camera."""
        area = pygame.Rect(clip)
        dst = pygame.Rect(int(x - camera.x), int(y - camera.y), area.w, area.h)
        self._blit(texture, area, dst, Flip.NONE)
        return dst

    def draw_animation(
        self,
        texture: Any,
        x: float,
        y: float,
        clip: Any,
        camera: Any,
        flip: Flip = Flip.NONE,
    ) -> pygame.Rect:
        """Draw one animation frame at a world position seen through the camera."""
        area = pygame.Rect(clip)
        dst = pygame.Rect(int(x - camera.x), int(y - camera.y), area.w, area.h)
        self._blit(texture, area, dst, flip)
        return dst

    def clear(self) -> None:
        """Fill the target with the background colour."""
        self.surface.fill(CLEAR_COLOR)

    def present(self) -> None:
        """Show the finished frame when the target is the display surface."""
        if pygame.display.get_init() and pygame.display.get_surface() is self.surface:
            pygame.display.flip()