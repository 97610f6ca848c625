import logging

from config import ANIMATION_FRAMES, ANIMATION_INTERVAL_MS

logger = logging.getLogger(__name__)


class AnimationRun:
    """State of one animator run: its timer, frame counter and cancel flag."""

    def __init__(self, frames: int = 0):
        self.frames = frames
        self.frame = 0
        self.cancelled = False
        self.timer = None

    @property
    def finished(self) -> bool:
        return self.timer is None or not self.timer.enabled


class Animator:
    """Sequences short timed runs on a TimerQueue.

    ``create_timer`` starts a repeating run that lasts until the action disables
    its timer or the animator is stopped. ``do_animation`` runs a fixed number of
    frames and then calls its completion callback. ``stop`` cancels every run
    started so far; a cancelled animation still calls its completion callback on
    its next firing, a cancelled repeating run simply ends.
    """

    def __init__(self, timers):
        self._timers = timers
        self._runs = []

    def _track(self, run):
        # Drop finished runs before registering the new one
        self._runs = [r for r in self._runs if not r.finished]
        self._runs.append(run)

    def create_timer(self, action, interval: int = ANIMATION_INTERVAL_MS, tick_at_creation: bool = True):
        if action is None:
            return None
        run = AnimationRun()

        def fire(timer):
            if run.cancelled:
                timer.cancel()
                return
            action(timer)
            if not timer.enabled:
                timer.cancel()

        run.timer = self._timers.create(fire, interval)
        self._track(run)

        if tick_at_creation:
            action(run.timer)
            if not run.timer.enabled:
                run.timer.cancel()
        return run

    def do_animation(self, animation, callback=None, frames: int = ANIMATION_FRAMES,
                     interval: int = ANIMATION_INTERVAL_MS):
        if animation is None:
            if callback is not None:
                callback()
            return None

        run = AnimationRun(frames)

        def fire(timer):
            if run.cancelled or run.frame >= run.frames:
                timer.cancel()
                if callback is not None:
                    callback()
            else:
                animation(run.frame)
                run.frame += 1

        # The first firing happens at creation, like every other animator run
        run.timer = self._timers.create(fire, interval)
        self._track(run)
        fire(run.timer)
        return run

    def stop(self):
        logger.debug("stopping %d animator run(s)", len(self._runs))
        for run in self._runs:
            run.cancelled = True
        self._runs = []
