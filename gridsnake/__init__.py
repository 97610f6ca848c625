"""Snake game engine with a pygame host.

The engine pieces import without opening a window::

	from gridsnake import Game, Direction

``SnakeWindow`` (the pygame host) is loaded lazily on first access so the
engine can be used and tested without touching the display.
"""

__version__ = "0.2"

__all__ = ["Game", "GameContext", "ConfigurationError", "Direction", "GridObject",
           "Snake", "Animator", "TimerQueue", "SnakeWindow"]

def __getattr__(name: str):
	if name == "SnakeWindow":
		from .window import SnakeWindow

		return SnakeWindow
	if name in ("Game", "GameContext", "ConfigurationError"):
		from . import engine

		return getattr(engine, name)
	if name in ("Direction", "Snake"):
		from . import snake

		return getattr(snake, name)
	if name == "GridObject":
		from .grid_object import GridObject

		return GridObject
	if name == "Animator":
		from .animator import Animator

		return Animator
	if name == "TimerQueue":
		from .timers import TimerQueue

		return TimerQueue
	raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

def __dir__():
	return sorted(__all__)
