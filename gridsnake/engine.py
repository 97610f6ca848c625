"""Game engine: state machine, scoring, speed progression and scripted transitions.

The engine never touches pixels itself. It talks to a :class:`GameContext`
(play-area size, redraw trigger and a canvas accepting a handful of draw calls)
and owns a tick timer on a :class:`~gridsnake.timers.TimerQueue`.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional

import pygame

from config import *
from gridsnake.animator import Animator
from gridsnake.events import Signal
from gridsnake.food import Apples
from gridsnake.grid_object import GridObject
from gridsnake.snake import Direction, Snake
from gridsnake.timers import TimerQueue

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Raised by setup calls given an unusable configuration."""


class Phase(Enum):
    IDLE = "idle"
    READY = "ready"
    INTRO = "intro"
    PLAYING = "playing"
    PAUSED = "paused"
    RESUMING = "resuming"
    DYING = "dying"
    DEAD = "dead"


@dataclass(frozen=True)
class FontSpec:
    family: Optional[str] = None
    size: int = PROMPT_FONT_SIZE

    def sized(self, size: int) -> "FontSpec":
        return replace(self, size=size)


@dataclass(frozen=True)
class ScoreOverlay:
    """Layout of the full-screen score overlay (apple + score, crown + best)."""

    score: int
    best_score: int
    apple_rect: pygame.Rect
    score_rect: pygame.Rect
    crown_rect: Optional[pygame.Rect]
    best_rect: Optional[pygame.Rect]
    bounds: pygame.Rect
    alpha: int
    opacity: float
    dimmed: bool


class GameContext:
    """Display collaborator the engine draws through.

    ``get_canvas`` returns an object with ``draw_grid``, ``draw_apple``,
    ``draw_segment``, ``draw_text`` and ``draw_score``.
    """

    def get_canvas(self):
        raise NotImplementedError

    def redraw(self):
        raise NotImplementedError

    def get_width(self) -> int:
        raise NotImplementedError

    def get_height(self) -> int:
        raise NotImplementedError

    def get_client_area(self) -> pygame.Rect:
        return pygame.Rect(0, 0, self.get_width(), self.get_height())


class Game:
    """Snake game engine.

    Lifecycle: ``init_game`` → ``start_game`` → play (``set_direction``) →
    ``stop_game`` / ``resume_game`` → death → ``restart_game``. Guarded calls made
    in the wrong state are ignored.
    """

    def __init__(self, context: GameContext, timers: TimerQueue = None, rng=None):
        if context is None:
            raise ConfigurationError("a game context is required")
        self.context = context
        self.timers = timers if timers is not None else TimerQueue()

        self.start_text = START_TEXT
        self.resume_text = RESUME_TEXT
        self.restart_text = RESTART_TEXT
        self.primary_font = FontSpec(PRIMARY_FONT)
        self.secondary_font = FontSpec(SECONDARY_FONT)
        self.primary_grid_color = PRIMARY_GRID_COLOR
        self.secondary_grid_color = SECONDARY_GRID_COLOR

        self.snake_start_segments = SNAKE_START_SEGMENTS
        self.snake_start_direction = Direction[SNAKE_START_DIRECTION]
        self.apple_count = APPLE_COUNT
        self.auto_increase_speed = AUTO_INCREASE_SPEED
        self.full_screen = False

        self.cell_size = CELL_SIZE
        self.score = 0
        self.best_score = -1
        self.dead = False
        self.input_locked = False
        self.phase = Phase.IDLE

        self.snake = Snake()
        self.apples = Apples(rng)
        self.animator = Animator(self.timers)
        self.snake.moved.connect(self._handle_snake_move)

        self.score_changed = Signal("score_changed")
        self.best_score_changed = Signal("best_score_changed")
        self.game_started = Signal("game_started")
        self.game_stopped = Signal("game_stopped")
        self.snake_dead = Signal("snake_dead")

        self._previous_direction = self.snake_start_direction
        self._pending_growth = False
        self._overlay_paint = None
        self._tick_timer = self.timers.create(self._on_tick, BASE_SPEED_MS, enabled=False)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def playing(self) -> bool:
        return self._tick_timer.enabled

    @property
    def speed(self) -> int:
        """Tick interval in milliseconds."""
        return self._tick_timer.interval

    @speed.setter
    def speed(self, value: int):
        self._tick_timer.interval = max(1, int(value))

    @property
    def previous_direction(self) -> Direction:
        return self._previous_direction

    def _set_phase(self, phase: Phase):
        if phase is not self.phase:
            logger.debug("phase %s -> %s", self.phase.value, phase.value)
            self.phase = phase

    @staticmethod
    def _check_cell_size(cell_size):
        if not MIN_CELL_SIZE <= cell_size <= MAX_CELL_SIZE:
            raise ConfigurationError(
                f"cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}, got {cell_size}"
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def init_game(self, cell_size: int = CELL_SIZE):
        self._check_cell_size(cell_size)

        self.speed = BASE_SPEED_MS
        self.cell_size = cell_size
        self.score = 0
        self.score_changed.emit(self)

        self.snake.init(self._start_head(), self.snake_start_segments, self.snake_start_direction)
        self._previous_direction = self.snake_start_direction
        self.snake.direction = Direction.STOPPED
        self._pending_growth = False
        self._overlay_paint = None

        self.apples.clear()
        self.context.redraw()
        self._add_apples(self.apple_count)
        self._set_phase(Phase.READY)

    def _start_head(self) -> GridObject:
        column, row = SNAKE_START_CELL
        columns = max(self.context.get_width() // self.cell_size, 1)
        rows = max(self.context.get_height() // self.cell_size, 1)
        column = min(column, columns - 1)
        row = min(row, rows - 1)
        return GridObject.square(column * self.cell_size, row * self.cell_size, self.cell_size)

    def start(self):
        self.start_game()

    def start_game(self, first_time: bool = False):
        if self.playing:
            return
        if self.phase is Phase.IDLE:
            logger.debug("start_game ignored before init_game")
            return

        if (first_time or self.dead) and self.start_text:
            self.dead = False
            self._set_phase(Phase.INTRO)

            font = self.primary_font.sized(PROMPT_FONT_SIZE)
            offset = self.context.get_height() / 2 - 25 * (len(self.start_text) - 1)
            y_offsets = [offset] * len(self.start_text)

            def fade_in(frame):
                self._draw_scene(frame * 20, frame / ANIMATION_FRAMES)
                self._draw_text(self.start_text, font, frame * 20, y_offsets)
                self.context.redraw()

            self.animator.do_animation(fade_in, lambda: self._finish_intro(font, y_offsets))
        else:
            self.dead = False
            self._begin_play()

    def _finish_intro(self, font, y_offsets):
        # A resize may have cancelled the intro; the game then waits paused
        if self.phase is Phase.INTRO:
            self._begin_play(font, y_offsets)

    def _begin_play(self, prompt_font=None, y_offsets=None):
        self._tick_timer.enabled = True
        self._set_phase(Phase.PLAYING)
        self._on_start()
        self.animator.create_timer(lambda timer: self._await_first_move(timer, prompt_font, y_offsets))

    def _await_first_move(self, timer, prompt_font, y_offsets):
        if self.snake.direction is not Direction.STOPPED or not self.playing:
            timer.enabled = False
            if prompt_font is not None:
                self._fade_out_prompt(prompt_font, y_offsets)
        else:
            self._draw_scene()
            if prompt_font is not None:
                self._draw_text(self.start_text, prompt_font, TEXT_ALPHA, y_offsets)
            self.context.redraw()

    def _fade_out_prompt(self, font, y_offsets):
        lines = self.start_text

        def fade_out(frame):
            alpha = TEXT_ALPHA - frame * 20

            def paint(canvas):
                canvas.draw_text(lines, font, alpha, y_offsets, self.context.get_client_area())

            self._overlay_paint = paint

        self.animator.do_animation(fade_out, self._clear_overlay)

    def _clear_overlay(self):
        self._overlay_paint = None

    def restart_game(self, cell_size: int = CELL_SIZE):
        if self.playing or not self.dead or self.input_locked:
            return
        self._check_cell_size(cell_size)

        self.input_locked = True
        self.init_game(cell_size)
        self.start_game()

    def resume_game(self):
        if self.playing or self.dead or self.input_locked:
            return
        if self.phase in (Phase.IDLE, Phase.INTRO, Phase.RESUMING):
            return

        self._set_phase(Phase.RESUMING)
        font = self.primary_font.sized(OVERLAY_FONT_SIZE)

        def fade_in(frame):
            opacity = frame / ANIMATION_FRAMES
            canvas = self.context.get_canvas()
            canvas.draw_grid(self.primary_grid_color, self.secondary_grid_color, self.cell_size)
            self.apples.draw(canvas, BASE_SPEED_MS, opacity)
            self.snake.draw(canvas, opacity)
            self._draw_score(canvas)
            self._draw_text(self.resume_text, font, TEXT_ALPHA - frame * 20)
            self.context.redraw()

        self.animator.do_animation(fade_in, self._finish_resume)

    def _finish_resume(self):
        if self.phase is Phase.RESUMING:
            self.start_game()

    def stop(self):
        self.stop_game()

    def stop_game(self, paused: bool = False):
        if not self.playing or self.input_locked:
            return
        self._tick_timer.enabled = False
        self._set_phase(Phase.PAUSED)

        if paused:
            self.snake.direction = Direction.STOPPED
            self.animator.stop()
            self._draw_paused_overlay()
        self._on_stop()

    def set_direction(self, direction: Direction):
        if not isinstance(direction, Direction):
            raise ValueError(f"not a direction: {direction!r}")
        if not self.playing or self.dead or self.input_locked:
            return

        # No 180 degree turns relative to the heading used on the last tick
        if direction is Direction.STOPPED or direction is not self._previous_direction.opposite:
            self.snake.direction = direction

    def resize(self, width: int, height: int):
        if self.input_locked:
            return

        self.animator.stop()
        self.stop_game(paused=True)
        if self.phase in (Phase.INTRO, Phase.RESUMING):
            self._set_phase(Phase.PAUSED)

        self.apples.reposition(self.snake, width, height, self.cell_size)

        if self.snake.segments:
            # Any part of the head outside the area would die on the next tick
            head = self.snake.head
            if head.right > width:
                self.snake.translate(-(head.x - width / 2), 0)
            if head.bottom > height:
                self.snake.translate(0, -(head.y - height / 2))
            head = self.snake.head
            self.snake.translate(-(head.x % head.width), -(head.y % head.height))

        self._draw_paused_overlay()

    # ------------------------------------------------------------------
    # Tick loop and collisions
    # ------------------------------------------------------------------
    def _on_tick(self, timer):
        if self.snake.direction is Direction.STOPPED:
            return

        canvas = self.context.get_canvas()
        canvas.draw_grid(self.primary_grid_color, self.secondary_grid_color, self.cell_size)
        self.apples.draw(canvas, self.speed)

        # Growth earned during this move applies on the next one
        grow, self._pending_growth = self._pending_growth, False
        self.snake.move(grow)
        if self.dead:
            self.context.redraw()
            return

        self.snake.draw(canvas)
        self._draw_score(canvas)
        if self._overlay_paint is not None:
            self._overlay_paint(canvas)

        self.context.redraw()
        self._previous_direction = self.snake.direction

    def _handle_snake_move(self, snake, event):
        head = event.head

        if self.apples.eat(head):
            self._update_score()
        if not len(self.apples):
            self._add_apples(self.apple_count)
            if self.auto_increase_speed:
                self.speed -= self.speed // SPEED_DIVISOR
                logger.debug("speed now %d ms", self.speed)

        width = self.context.get_width()
        height = self.context.get_height()
        dead = head.x < 0 or head.y < 0 or head.right > width or head.bottom > height
        if not dead:
            dead = any(head.intersects(segment) for segment in event.segments[1:])
        if dead:
            self._on_dead()

    def _add_apples(self, count: int):
        self.apples.spawn(count, self.snake, self.context.get_width(), self.context.get_height(),
                          self.cell_size)

    def _update_score(self):
        self._pending_growth = True

        self.score += 1
        self.score_changed.emit(self)

        if self.best_score != -1 and self.score > self.best_score:
            self.best_score = self.score
            self.best_score_changed.emit(self)

    def _on_dead(self):
        self._tick_timer.enabled = False
        self.dead = True
        self.input_locked = True
        self.snake.direction = Direction.STOPPED
        self._set_phase(Phase.DYING)
        logger.info("snake died with score %d", self.score)
        self.snake_dead.emit(self)

        if self.score >= self.best_score:
            self.best_score = self.score
            self.best_score_changed.emit(self)

        font = self.primary_font.sized(OVERLAY_FONT_SIZE)

        def fade_out(frame):
            opacity = (ANIMATION_FRAMES - 1 - frame) / ANIMATION_FRAMES
            canvas = self.context.get_canvas()
            canvas.draw_grid(self.primary_grid_color, self.secondary_grid_color, self.cell_size)
            self.apples.draw(canvas, BASE_SPEED_MS, opacity)
            self.snake.draw(canvas, opacity)
            self._draw_score(canvas)
            self._draw_text(self.restart_text, font, frame * 20)
            self.context.redraw()

        self.animator.do_animation(fade_out, self._finish_death)

    def _finish_death(self):
        self.input_locked = False
        self._set_phase(Phase.DEAD)

    def _on_start(self):
        logger.info("game started")
        self.game_started.emit(self)
        self.input_locked = False

    def _on_stop(self):
        self.game_stopped.emit(self)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------
    def _draw_scene(self, alpha: int = TEXT_ALPHA, opacity: float = 1.0):
        canvas = self.context.get_canvas()
        canvas.draw_grid(self.primary_grid_color, self.secondary_grid_color, self.cell_size)
        self.apples.draw(canvas, BASE_SPEED_MS, opacity)
        self.snake.draw(canvas, opacity)
        self._draw_score(canvas, alpha, opacity)

    def _draw_text(self, lines, font, alpha, y_offsets=None):
        if lines:
            self.context.get_canvas().draw_text(lines, font, max(0, min(255, alpha)), y_offsets,
                                                self.context.get_client_area())

    def _draw_paused_overlay(self):
        canvas = self.context.get_canvas()
        canvas.draw_grid(self.primary_grid_color, self.secondary_grid_color, self.cell_size)
        self._draw_score(canvas)
        lines = self.restart_text if self.dead else self.resume_text
        self._draw_text(lines, self.primary_font.sized(OVERLAY_FONT_SIZE), TEXT_ALPHA)
        self.context.redraw()

    def score_overlay(self, alpha: int = TEXT_ALPHA, opacity: float = 1.0) -> ScoreOverlay:
        y = 5
        size = int(self.cell_size)
        apple_rect = pygame.Rect(10, y, size, size)
        score_rect = pygame.Rect(apple_rect.right + 5, y, 60, size)
        crown_rect = best_rect = None
        right = score_rect.right + 5

        if self.best_score != -1:
            crown_rect = pygame.Rect(score_rect.right + 5, y, size, size)
            best_rect = pygame.Rect(crown_rect.right + 5, y, 60, size)
            right = best_rect.right + 5

        bounds = pygame.Rect(0, 0, right, size + y * 2)
        dimmed = self.snake.contains_rect(bounds) and not self.dead
        return ScoreOverlay(self.score, self.best_score, apple_rect, score_rect, crown_rect,
                            best_rect, bounds, alpha, opacity, dimmed)

    def _draw_score(self, canvas, alpha: int = TEXT_ALPHA, opacity: float = 1.0):
        if not self.full_screen:
            return
        canvas.draw_score(self.score_overlay(alpha, opacity), self.secondary_font.sized(SCORE_FONT_SIZE))
