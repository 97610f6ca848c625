import math

import pygame

from config import *
from gridsnake.snake import Tile

# Sides of the cell a tile connects to
OPENINGS = {
    Tile.HEAD_UP: ("down",),
    Tile.HEAD_DOWN: ("up",),
    Tile.HEAD_RIGHT: ("left",),
    Tile.HEAD_LEFT: ("right",),
    Tile.TAIL_UP: ("up",),
    Tile.TAIL_DOWN: ("down",),
    Tile.TAIL_RIGHT: ("right",),
    Tile.TAIL_LEFT: ("left",),
    Tile.HORIZONTAL: ("left", "right"),
    Tile.VERTICAL: ("up", "down"),
    Tile.TURN_LEFT_DOWN: ("left", "down"),
    Tile.TURN_TOP_LEFT: ("up", "left"),
    Tile.TURN_RIGHT_UP: ("right", "up"),
    Tile.TURN_DOWN_RIGHT: ("down", "right"),
    Tile.UNKNOWN: (),
}

HEADS = {Tile.HEAD_UP: (0, -1), Tile.HEAD_DOWN: (0, 1), Tile.HEAD_RIGHT: (1, 0), Tile.HEAD_LEFT: (-1, 0)}
TAILS = {Tile.TAIL_UP, Tile.TAIL_DOWN, Tile.TAIL_RIGHT, Tile.TAIL_LEFT}


class PygameCanvas:
    """Draws the engine's primitive calls onto a pygame Surface."""

    def __init__(self, surface):
        self.surface = surface
        self._fonts = {}

    def font(self, spec):
        key = (spec.family, spec.size)
        if key not in self._fonts:
            if spec.family:
                self._fonts[key] = pygame.font.SysFont(spec.family, spec.size)
            else:
                self._fonts[key] = pygame.font.Font(None, spec.size)
        return self._fonts[key]

    def _blit(self, layer, rect, opacity):
        if opacity < 1:
            layer.set_alpha(int(255 * max(0.0, opacity)))
        self.surface.blit(layer, rect.topleft)

    def draw_grid(self, primary, secondary, cell_size):
        """Checkerboard: primary fill with every other cell in the secondary colour."""
        self.surface.fill(primary)
        if primary == secondary:
            return
        cell = int(cell_size)
        width, height = self.surface.get_size()
        for i, x in enumerate(range(0, width, cell)):
            for y in range((i % 2) * cell, height, cell * 2):
                pygame.draw.rect(self.surface, secondary, (x, y, cell, cell))

    def draw_apple(self, rect, opacity=1.0):
        if rect.width <= 0 or rect.height <= 0:
            return
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        w, h = rect.size
        radius = max(1, int(min(w, h) * 0.4))
        center = (w // 2, h // 2 + h // 16)
        pygame.draw.circle(layer, RED, center, radius)
        pygame.draw.circle(layer, DARK_RED, center, radius, max(1, radius // 6))
        # highlight, stem and leaf
        pygame.draw.circle(layer, WHITE, (center[0] - radius // 3, center[1] - radius // 3), max(1, radius // 5))
        pygame.draw.line(layer, DARK_RED, (w // 2, center[1] - radius), (w // 2 + w // 10, h // 12), max(1, w // 16))
        leaf = pygame.Rect(w // 2, h // 20, max(2, w // 4), max(2, h // 8))
        pygame.draw.ellipse(layer, LEAF_GREEN, leaf)
        self._blit(layer, rect, opacity)

    def draw_segment(self, rect, tile, opacity=1.0):
        if rect.width <= 0 or rect.height <= 0:
            return
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        w, h = rect.size
        inset = max(2, w // 8)
        if tile in TAILS:
            inset *= 2

        body = pygame.Rect(inset, inset, w - inset * 2, h - inset * 2)
        pygame.draw.rect(layer, SNAKE_BLUE, body, border_radius=inset * 2)
        for side in OPENINGS[tile]:
            if side == "left":
                bridge = pygame.Rect(0, body.top, w // 2, body.height)
            elif side == "right":
                bridge = pygame.Rect(w // 2, body.top, w - w // 2, body.height)
            elif side == "up":
                bridge = pygame.Rect(body.left, 0, body.width, h // 2)
            else:
                bridge = pygame.Rect(body.left, h // 2, body.width, h - h // 2)
            pygame.draw.rect(layer, SNAKE_BLUE, bridge)

        if tile in HEADS:
            self._draw_eyes(layer, HEADS[tile])
        self._blit(layer, rect, opacity)

    @staticmethod
    def _draw_eyes(layer, facing):
        w, h = layer.get_size()
        dx, dy = facing
        cx, cy = w / 2 + dx * w / 6, h / 2 + dy * h / 6
        # perpendicular to the heading
        px, py = -dy, dx
        radius = max(2, w // 8)
        for sign in (-1, 1):
            eye = (int(cx + sign * px * w / 5), int(cy + sign * py * h / 5))
            pygame.draw.circle(layer, WHITE, eye, radius)
            pupil = (int(eye[0] + dx * radius / 2), int(eye[1] + dy * radius / 2))
            pygame.draw.circle(layer, BLACK, pupil, max(1, radius // 2))

    def draw_crown(self, rect, opacity=1.0):
        layer = pygame.Surface(rect.size, pygame.SRCALPHA)
        w, h = rect.size
        points = [(w * 0.1, h * 0.8), (w * 0.1, h * 0.3), (w * 0.3, h * 0.55), (w * 0.5, h * 0.2),
                  (w * 0.7, h * 0.55), (w * 0.9, h * 0.3), (w * 0.9, h * 0.8)]
        pygame.draw.polygon(layer, GOLD, points)
        self._blit(layer, rect, opacity)

    def draw_text(self, lines, font, alpha=TEXT_ALPHA, y_offsets=None, bounds=None, x_offsets=None,
                  try_center=True):
        """Draw lines centred in ``bounds`` (the whole surface by default), shifted by per-line offsets."""
        if not lines or font is None:
            return
        face = self.font(font)
        if bounds is None:
            bounds = self.surface.get_rect()
        x_offsets = x_offsets or []
        y_offsets = y_offsets or []

        center = math.ceil(len(lines) / 2)
        line_height = face.size(lines[0])[1]

        for i, line in enumerate(lines):
            width, height = face.size(line)
            x = bounds.x + (bounds.width - width) / 2 + 5
            y = bounds.y + (bounds.height - height) / 2 + line_height * i
            if try_center and len(lines) > 1:
                y -= line_height * center
            x += x_offsets[i] if i < len(x_offsets) else 0
            y += y_offsets[i] if i < len(y_offsets) else 0

            text = face.render(line, True, TEXT_COLOR)
            text.set_alpha(alpha)
            self.surface.blit(text, (int(x), int(y)))

    def _draw_label(self, text, rect, face, alpha):
        label = face.render(text, True, TEXT_COLOR)
        label.set_alpha(alpha)
        # Bottom-left aligned, like the score labels in the title bar
        self.surface.blit(label, (rect.x, rect.bottom - label.get_height()))

    def draw_score(self, overlay, font):
        face = self.font(font)
        alpha = 100 if overlay.dimmed else overlay.alpha
        opacity = 0.3 if overlay.dimmed else overlay.opacity

        self.draw_apple(overlay.apple_rect, opacity)
        self._draw_label(str(overlay.score), overlay.score_rect, face, alpha)
        if overlay.crown_rect is not None:
            self.draw_crown(overlay.crown_rect, opacity)
            self._draw_label(str(overlay.best_score), overlay.best_rect, face, alpha)
