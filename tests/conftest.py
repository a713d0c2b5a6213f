"""
Shared pytest fixtures for exposewm tests.
"""

import pytest
from pubsub import pub

from exposewm.geometry import Area
from exposewm.objects import Window
from exposewm.layouts.packing import PackingBin, PackedRect


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a display")


@pytest.fixture(autouse=True)
def clean_bus():
    """Drop every pub/sub listener after each test."""
    yield
    pub.unsubAll()


@pytest.fixture
def make_window():
    """Factory fixture for creating windows."""

    def factory(object_id=1, width=800, height=600, x=0, y=0):
        return Window(object_id, width, height, x, y)

    return factory


@pytest.fixture
def square_area():
    """2000x2000 space used by the demo scene."""
    return Area(0, 0, 2000, 2000)


@pytest.fixture
def small_area():
    """1000x1000 space."""
    return Area(0, 0, 1000, 1000)


class FakeBin(PackingBin):
    """Deterministic row packer.

    Items are placed left to right and wrap to a new row when the current
    one is full. ``accept`` can veto items regardless of room.
    """

    def __init__(self, strategy, width, height, accept=None):
        self.strategy = strategy
        self.width = width
        self.height = height
        self.accept = accept
        self.insert_calls = 0
        self.clear_calls = 0
        self.batches = []
        self._placed = {}

    def insert_list(self, items):
        self.insert_calls += 1
        self.batches.append(list(items))
        accepted, rejected = [], []
        x = y = row_height = 0
        for item in items:
            w = item.width + 2 * item.padding
            h = item.height + 2 * item.padding
            if x + w > self.width:
                x, y, row_height = 0, y + row_height, 0
            fits = x + w <= self.width and y + h <= self.height
            if not fits or (self.accept is not None and not self.accept(item)):
                rejected.append(item)
                continue
            rect = PackedRect(
                item.id, x + item.padding, y + item.padding, item.width, item.height
            )
            self._placed[item.id] = rect
            accepted.append(rect)
            x += w
            row_height = max(row_height, h)
        return accepted, rejected

    def clear(self):
        self.clear_calls += 1
        self._placed = {}

    def find_by_id(self, item_id):
        return self._placed.get(item_id)


@pytest.fixture
def fake_bin_factory():
    """Bin factory recording every FakeBin it creates.

    Call ``factory.configure(accept=...)`` to set an acceptance predicate.
    """

    class Factory:
        def __init__(self):
            self.bins = []
            self.accept = None

        def configure(self, accept=None):
            self.accept = accept
            return self

        def __call__(self, strategy, width, height):
            packing_bin = FakeBin(strategy, width, height, accept=self.accept)
            self.bins.append(packing_bin)
            return packing_bin

    return Factory()
