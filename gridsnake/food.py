import logging
import random

from config import MAX_PLACEMENT_ATTEMPTS
from gridsnake.grid_object import GridObject

logger = logging.getLogger(__name__)


class Apples:
    """The apples on the board, kept in insertion order."""

    def __init__(self, rng=None):
        self.items = []
        self.rng = rng or random.Random()
        self.pulse_phase = 0.0

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def clear(self):
        self.items.clear()

    def overlaps(self, obj: GridObject) -> bool:
        return any(apple.intersects(obj) for apple in self.items)

    def spawn(self, count, snake, width, height, cell_size):
        """Place ``count`` apples on free, cell-aligned positions.

        Whole cells lying fully inside the area are sampled uniformly and rejected
        while they touch the snake or another apple. After MAX_PLACEMENT_ATTEMPTS
        misses the free cells are enumerated instead, so a crowded board cannot
        spin forever.
        """
        placed = []
        for _ in range(count):
            apple = self._sample(snake, width, height, cell_size)
            if apple is None:
                apple = self._pick_free_cell(snake, width, height, cell_size)
            if apple is None:
                logger.warning("No free cell left for an apple; %d apple(s) not placed", count - len(placed))
                break
            self.items.append(apple)
            placed.append(apple)
        return placed

    def _sample(self, snake, width, height, cell_size):
        columns = int(width) // cell_size
        rows = int(height) // cell_size
        if columns <= 0 or rows <= 0:
            return None
        for _ in range(MAX_PLACEMENT_ATTEMPTS):
            # Whole cells only, so every apple lies fully inside the area
            x = self.rng.randrange(columns) * cell_size
            y = self.rng.randrange(rows) * cell_size
            candidate = GridObject.square(x, y, cell_size)
            if snake.contains_object(candidate) or self.overlaps(candidate):
                continue
            return candidate
        return None

    def _pick_free_cell(self, snake, width, height, cell_size):
        free = []
        for x in range(0, int(width) - cell_size + 1, cell_size):
            for y in range(0, int(height) - cell_size + 1, cell_size):
                cell = GridObject.square(x, y, cell_size)
                if not snake.contains_object(cell) and not self.overlaps(cell):
                    free.append(cell)
        if not free:
            return None
        logger.debug("apple placement fell back to %d free cell(s)", len(free))
        return self.rng.choice(free)

    def eat(self, head: GridObject) -> int:
        """Remove every apple under the head and return how many were eaten."""
        count = len(self.items)
        self.items = [apple for apple in self.items if not apple.intersects(head)]
        return count - len(self.items)

    def reposition(self, snake, width, height, cell_size) -> int:
        """Drop apples that fell outside a smaller play area and respawn as many."""
        count = len(self.items)
        self.items = [apple for apple in self.items if apple.right <= width and apple.bottom <= height]
        missing = count - len(self.items)
        if missing > 0:
            self.spawn(missing, snake, width, height, cell_size)
        return missing

    def pulse(self, interval: int) -> float:
        """Advance the pulse animation one step and return the current growth in pixels."""
        limit = max(1000 // (interval * 2), 1)
        if self.pulse_phase >= limit:
            self.pulse_phase = -limit
        value = abs(self.pulse_phase) * interval / 100
        self.pulse_phase += 1
        return value

    def draw(self, canvas, interval: int, opacity: float = 1.0):
        value = self.pulse(interval)
        for apple in self.items:
            canvas.draw_apple(apple.extend(value).to_rect(), opacity)
