import random

import pytest

from fakes import FakeContext
from gridsnake.engine import Game
from gridsnake.timers import TimerQueue


@pytest.fixture
def context():
    return FakeContext()


@pytest.fixture
def timers():
    return TimerQueue()


@pytest.fixture
def game(context, timers):
    return Game(context, timers, rng=random.Random(1234))
