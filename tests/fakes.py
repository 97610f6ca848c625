"""Recording canvas and fake display context used to drive the engine headless."""

from gridsnake.engine import GameContext
from gridsnake.grid_object import GridObject


class RecordingCanvas:
    """Canvas double that records every draw call as a tuple."""

    def __init__(self):
        self.calls = []
        self.text_bounds = []

    def draw_grid(self, primary, secondary, cell_size):
        self.calls.append(("grid", cell_size))

    def draw_apple(self, rect, opacity=1.0):
        self.calls.append(("apple", rect, opacity))

    def draw_segment(self, rect, tile, opacity=1.0):
        self.calls.append(("segment", rect, tile, opacity))

    def draw_text(self, lines, font, alpha, y_offsets=None, bounds=None):
        self.calls.append(("text", tuple(lines), alpha))
        self.text_bounds.append(bounds)

    def draw_score(self, overlay, font):
        self.calls.append(("score", overlay))

    def kinds(self):
        return [call[0] for call in self.calls]

    def texts(self):
        return [call for call in self.calls if call[0] == "text"]

    def clear(self):
        self.calls.clear()
        self.text_bounds.clear()


class FakeContext(GameContext):
    def __init__(self, width=544, height=480):
        self.width = width
        self.height = height
        self.canvas = RecordingCanvas()
        self.redraws = 0

    def get_canvas(self):
        return self.canvas

    def redraw(self):
        self.redraws += 1

    def get_width(self):
        return self.width

    def get_height(self):
        return self.height


def place_apples(game, *cells):
    """Replace the apples with cell-aligned apples at the given (column, row) cells."""
    size = game.cell_size
    game.apples.items = [GridObject.square(c * size, r * size, size) for c, r in cells]


def run_for(timers, milliseconds, frame=1):
    """Advance the queue in small steps, the way the host calls it once per frame."""
    end = timers.now + milliseconds
    while timers.now < end:
        timers.advance(min(timers.now + frame, end))


def start_playing(game, timers, cell_size=32, intro=False):
    """Init and start a game, returning once the tick loop is running."""
    if not intro:
        game.start_text = ()
    game.init_game(cell_size)
    place_apples(game, (0, 0))
    game.start_game(first_time=True)
    if intro:
        run_for(timers, 1000)
    assert game.playing
