import logging

import pygame

from config import *
from gridsnake.audio import SoundBoard
from gridsnake.canvas import PygameCanvas
from gridsnake.engine import Game, GameContext
from gridsnake.snake import Direction
from gridsnake.timers import TimerQueue

logger = logging.getLogger(__name__)

KEY_DIRECTIONS = {
    pygame.K_w: Direction.UP,
    pygame.K_UP: Direction.UP,
    pygame.K_s: Direction.DOWN,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_a: Direction.LEFT,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_d: Direction.RIGHT,
    pygame.K_RIGHT: Direction.RIGHT,
}


def direction_for_key(key):
    return KEY_DIRECTIONS.get(key)


def fit_canvas(width, height, bar_height, cell_size) -> pygame.Rect:
    """Largest cell-aligned play area below the title bar, centred in the window."""
    height -= bar_height
    width_offset = width % cell_size
    height_offset = height % cell_size
    return pygame.Rect(width_offset // 2, bar_height + height_offset // 2,
                       max(0, width - width_offset), max(0, height - height_offset))


class SnakeWindow(GameContext):
    """pygame host: owns the window, feeds the timer queue and maps keys to the engine."""

    def __init__(self, cell_size=CELL_SIZE):
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        pygame.display.set_caption("Snake")
        self.clock = pygame.time.Clock()
        self.bar_font = pygame.font.Font(None, 32)

        self.cell_size = cell_size
        self.full_screen = False
        self.canvas_rect = fit_canvas(WINDOW_WIDTH, WINDOW_HEIGHT, TITLE_BAR_HEIGHT, cell_size)
        self.canvas = PygameCanvas(pygame.Surface(self.canvas_rect.size))
        self.bar_canvas = PygameCanvas(self.screen)

        self.timers = TimerQueue(pygame.time.get_ticks())
        self.game = Game(self, self.timers)
        self.sounds = SoundBoard()
        self.sounds.attach(self.game)

        self.score_label = "0"
        self.best_label = None
        self.game.score_changed.connect(self._on_score_changed)
        self.game.best_score_changed.connect(self._on_best_score_changed)

        self.running = True
        self._dirty = True

        self.game.init_game(cell_size)
        self.game.start_game(first_time=True)

    # GameContext
    def get_canvas(self):
        return self.canvas

    def redraw(self):
        self._dirty = True

    def get_width(self):
        return self.canvas_rect.width

    def get_height(self):
        return self.canvas_rect.height

    def get_client_area(self):
        return self.canvas.surface.get_rect()

    def _on_score_changed(self, game):
        self.score_label = str(game.score)
        self._dirty = True

    def _on_best_score_changed(self, game):
        self.best_label = str(game.best_score)
        self._dirty = True

    def handle_key(self, key):
        direction = direction_for_key(key)
        if direction is not None:
            self.game.set_direction(direction)
        elif key == pygame.K_SPACE:
            if self.game.dead:
                self.game.restart_game(self.cell_size)
            else:
                self.game.resume_game()
        elif key == pygame.K_F11 or (key == pygame.K_ESCAPE and self.full_screen):
            self.toggle_full_screen()
        elif key == pygame.K_m:
            muted = self.sounds.toggle_mute()
            logger.info("sound %s", "muted" if muted else "on")

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            self.handle_key(event.key)
        elif event.type == pygame.VIDEORESIZE and not self.full_screen:
            self.handle_resize(event.w, event.h)
        elif event.type == pygame.WINDOWFOCUSLOST:
            self.game.stop_game(paused=True)

    def handle_resize(self, width, height):
        bar_height = 0 if self.full_screen else TITLE_BAR_HEIGHT
        self.canvas_rect = fit_canvas(width, height, bar_height, self.cell_size)
        self.canvas.surface = pygame.Surface(self.canvas_rect.size)
        self.game.resize(self.canvas_rect.width, self.canvas_rect.height)
        self._dirty = True

    def toggle_full_screen(self):
        if self.full_screen:
            self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.RESIZABLE)
        else:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        self.bar_canvas.surface = self.screen
        self.full_screen = not self.full_screen
        self.game.full_screen = self.full_screen
        self.handle_resize(*self.screen.get_size())

    def draw_title_bar(self):
        """Apple and score, then crown and best score once a best exists."""
        y = (TITLE_BAR_HEIGHT - 32) // 2
        apple_rect = pygame.Rect(10, y, 32, 32)
        self.bar_canvas.draw_apple(apple_rect)
        score = self.bar_font.render(self.score_label, True, TEXT_COLOR)
        self.screen.blit(score, (apple_rect.right + 5, apple_rect.bottom - score.get_height()))

        if self.best_label is not None:
            crown_rect = pygame.Rect(apple_rect.right + 70, y, 32, 32)
            self.bar_canvas.draw_crown(crown_rect)
            best = self.bar_font.render(self.best_label, True, TEXT_COLOR)
            self.screen.blit(best, (crown_rect.right + 5, crown_rect.bottom - best.get_height()))

    def present(self):
        self.screen.fill(TITLE_BAR_COLOR)
        if not self.full_screen:
            self.draw_title_bar()
        self.screen.blit(self.canvas.surface, self.canvas_rect.topleft)
        pygame.display.flip()
        self._dirty = False

    def run(self):
        """Main loop: events, timers, then present whatever the engine redrew."""
        while self.running:
            for event in pygame.event.get():
                self.handle_event(event)

            self.timers.advance(pygame.time.get_ticks())

            if self._dirty:
                self.present()
            self.clock.tick(FPS)

        self.cleanup()

    def cleanup(self):
        self.running = False
        pygame.quit()
