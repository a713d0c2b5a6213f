"""
Unit tests for the MaxRects scale search and the rectpack adapter.
"""

import math
import pytest
from pubsub import pub

from exposewm import topics
from exposewm.geometry import AUTO, Area
from exposewm.objects import Window
from exposewm.layouts import (
    DegenerateInputError,
    MaxRectsPackLayout,
    PackingStrategy,
    PackItem,
    RectpackBin,
)


def overlaps(a, b):
    return not (
        a.x + a.width <= b.x
        or b.x + b.width <= a.x
        or a.y + a.height <= b.y
        or b.y + b.height <= a.y
    )


@pytest.mark.unit
class TestScaleSearch:
    """Test the retry loop against a deterministic fake packer."""

    def test_first_attempt_success_needs_no_retry(
        self, make_window, fake_bin_factory
    ):
        """A window that packs at the initial scale keeps that scale."""
        layout = MaxRectsPackLayout(1000, 500, padding=0, bin_factory=fake_bin_factory)
        window = make_window(object_id=1, width=2000, height=1000)

        search = layout.search_scale([window], Area(0, 0, 1000, 500))

        assert search.retries == 0
        assert search.complete
        assert search.scale_factor == pytest.approx(0.5)
        assert search.scale_factor == search.initial_scale_factor
        assert fake_bin_factory.bins[0].insert_calls == 1

    def test_first_attempt_scale_is_applied(self, make_window, fake_bin_factory):
        layout = MaxRectsPackLayout(1000, 500, padding=0, bin_factory=fake_bin_factory)
        window = make_window(object_id=1, width=2000, height=1000)

        result = layout.apply([window], Area(0, 0, 1000, 500))

        assert result[window].scale == pytest.approx(0.5)
        assert window.scale.x == pytest.approx(0.5)
        assert (window.position.x, window.position.y) == (0, 0)

    def test_scale_never_exceeds_one(self, make_window, fake_bin_factory):
        """Packed cells larger than the window do not upscale it."""
        layout = MaxRectsPackLayout(1000, 1000, padding=0, bin_factory=fake_bin_factory)
        window = make_window(object_id=1, width=100, height=100)

        search = layout.search_scale([window], Area(0, 0, 1000, 1000))
        result = layout.calculate([window], Area(0, 0, 1000, 1000))

        assert search.initial_scale_factor == pytest.approx(10.0)
        assert search.retries == 0
        assert result[window].scale == 1.0

    def test_items_use_rounded_scaled_size_and_padding(
        self, make_window, fake_bin_factory
    ):
        layout = MaxRectsPackLayout(2000, 2000, padding=20, bin_factory=fake_bin_factory)
        windows = [make_window(object_id=7, width=333, height=100)]

        layout.search_scale(windows, Area(0, 0, 2000, 2000))

        scale = math.sqrt(2000 * 2000 / (333 * 100))
        item = fake_bin_factory.bins[0].batches[0][0]
        assert item == PackItem(7, round(333 * scale), round(100 * scale), 20)

    def test_shrinks_until_everything_fits(self, make_window, fake_bin_factory):
        """Rejections trigger retries at a smaller scale."""
        fake_bin_factory.configure(accept=lambda item: item.width <= 500)
        layout = MaxRectsPackLayout(1000, 1000, padding=0, bin_factory=fake_bin_factory)
        windows = [make_window(object_id=i, width=400, height=400) for i in range(3)]

        search = layout.search_scale(windows, Area(0, 0, 1000, 1000))

        assert search.complete
        assert search.retries > 0
        assert search.scale_factor < search.initial_scale_factor
        packing_bin = fake_bin_factory.bins[0]
        assert packing_bin.clear_calls == search.retries
        assert all(item.width <= 500 for item in packing_bin.batches[-1])
        assert any(item.width > 500 for item in packing_bin.batches[-2])

    def test_retry_budget_is_bounded(self, make_window, fake_bin_factory, capsys):
        """A packer that never accepts stops after 40 retries."""
        fake_bin_factory.configure(accept=lambda item: False)
        layout = MaxRectsPackLayout(1000, 1000, bin_factory=fake_bin_factory)
        windows = [
            make_window(object_id=i, width=300, height=300, x=5 * i, y=5 * i)
            for i in range(3)
        ]

        search = layout.search_scale(windows, Area(0, 0, 1000, 1000))

        assert search.retries == 40
        assert not search.complete
        assert search.scale_factor == pytest.approx(
            search.initial_scale_factor * 0.99 ** 40
        )

        result = layout.apply(windows, Area(0, 0, 1000, 1000))

        assert result == {}
        for i, window in enumerate(windows):
            assert window.position.x == 5 * i
            assert window.scale.x == 1.0
        assert "MaxRectsPackLayout: window 0 not placed" in capsys.readouterr().out

    def test_scale_floor(self, make_window, fake_bin_factory):
        fake_bin_factory.configure(accept=lambda item: False)
        layout = MaxRectsPackLayout(
            1000, 1000, shrink_factor=0.5, bin_factory=fake_bin_factory
        )

        search = layout.search_scale(
            [make_window(width=500, height=500)], Area(0, 0, 1000, 1000)
        )

        assert search.retries == 40
        assert search.scale_factor == 0.1

    def test_unplaced_windows_are_published(self, make_window, fake_bin_factory):
        unplaced = []

        def listener(window, layout_name):
            unplaced.append((window.object_id, layout_name))

        pub.subscribe(listener, topics.WINDOW_UNPLACED)
        fake_bin_factory.configure(accept=lambda item: item.id != 2)
        # A 3:1 bin holds all three scaled squares in one row
        layout = MaxRectsPackLayout(
            3000, 1000, padding=0, max_retries=3, bin_factory=fake_bin_factory
        )
        windows = [make_window(object_id=i, width=50, height=50) for i in range(1, 4)]

        result = layout.apply(windows, Area(0, 0, 3000, 1000))

        assert unplaced == [(2, "maxrects")]
        assert windows[0] in result
        assert windows[2] in result
        assert windows[1] not in result

    def test_indefinite_windows_are_repositioned(self, make_window, fake_bin_factory):
        """AUTO sized windows pack as minimal items and keep unit scale."""
        layout = MaxRectsPackLayout(1000, 1000, padding=0, bin_factory=fake_bin_factory)
        sized = make_window(object_id=1, width=500, height=500)
        auto = Window(2, AUTO, AUTO, x=42, y=42)

        result = layout.apply([sized, auto], Area(0, 0, 1000, 1000))

        packing_bin = fake_bin_factory.bins[0]
        assert packing_bin.batches[0][1] == PackItem(2, 1, 1, 0)
        assert sized in result
        assert auto in result
        assert result[auto].scale == 1.0
        rect = packing_bin.find_by_id(2)
        assert (auto.position.x, auto.position.y) == (rect.x, rect.y)
        assert auto.position.x != 42

    def test_duplicate_window_ids_rejected(self, make_window, fake_bin_factory):
        layout = MaxRectsPackLayout(1000, 1000, bin_factory=fake_bin_factory)
        windows = [
            make_window(object_id=5, width=100, height=100),
            make_window(object_id=5, width=200, height=200),
        ]

        with pytest.raises(ValueError, match="duplicate window id 5"):
            layout.calculate(windows, Area(0, 0, 1000, 1000))
        assert fake_bin_factory.bins == []

    def test_bin_offset_by_area_origin(self, make_window, fake_bin_factory):
        layout = MaxRectsPackLayout(padding=0, bin_factory=fake_bin_factory)
        window = make_window(object_id=1, width=100, height=100)

        result = layout.calculate([window], Area(30, 40, 500, 500))

        assert (result[window].x, result[window].y) == (30, 40)
        assert (fake_bin_factory.bins[0].width, fake_bin_factory.bins[0].height) == (
            500,
            500,
        )

    def test_zero_total_area(self, fake_bin_factory):
        layout = MaxRectsPackLayout(1000, 1000, bin_factory=fake_bin_factory)

        with pytest.raises(DegenerateInputError):
            layout.calculate([Window(1, AUTO, AUTO)], Area(0, 0, 1000, 1000))

    def test_invalid_parameters(self):
        with pytest.raises(DegenerateInputError):
            MaxRectsPackLayout(0, 1000)
        with pytest.raises(ValueError):
            MaxRectsPackLayout(1000, 1000, shrink_factor=1.5)

    def test_empty_window_list(self, fake_bin_factory):
        layout = MaxRectsPackLayout(1000, 1000, bin_factory=fake_bin_factory)

        assert layout.calculate([], Area(0, 0, 1000, 1000)) == {}
        assert fake_bin_factory.bins == []


@pytest.mark.unit
class TestRectpackBin:
    """Test the rectpack adapter."""

    def test_insert_and_find(self):
        packing_bin = RectpackBin(PackingStrategy.MAX_RECTS, 500, 500)

        accepted, rejected = packing_bin.insert_list(
            [PackItem(1, 200, 100, 10), PackItem(2, 100, 100, 10)]
        )

        assert rejected == []
        assert sorted(rect.id for rect in accepted) == [1, 2]
        rect = packing_bin.find_by_id(1)
        assert (rect.width, rect.height) == (200, 100)
        assert rect.x >= 10 and rect.y >= 10
        assert rect.x + rect.width <= 490
        assert rect.y + rect.height <= 490
        assert not overlaps(packing_bin.find_by_id(1), packing_bin.find_by_id(2))

    def test_rejects_items_that_do_not_fit(self):
        packing_bin = RectpackBin(PackingStrategy.GUILLOTINE, 300, 300)

        accepted, rejected = packing_bin.insert_list(
            [PackItem(1, 250, 250), PackItem(2, 400, 10)]
        )

        assert [rect.id for rect in accepted] == [1]
        assert [item.id for item in rejected] == [2]
        assert packing_bin.find_by_id(2) is None

    def test_clear_forgets_placements(self):
        packing_bin = RectpackBin(PackingStrategy.SKYLINE, 300, 300)
        packing_bin.insert_list([PackItem(1, 100, 100)])

        packing_bin.clear()

        assert packing_bin.find_by_id(1) is None


@pytest.mark.unit
class TestMaxRectsScenario:
    """Ten 400x400 windows in a 2000x2000 bin with the real packer."""

    def test_all_windows_placed_at_natural_size(self, make_window, square_area):
        windows = [
            make_window(object_id=i, width=400, height=400, x=100 * i, y=50 * i)
            for i in range(1, 11)
        ]
        layout = MaxRectsPackLayout(2000, 2000)

        search = layout.search_scale(windows, square_area)
        result = layout.apply(windows, square_area)

        assert search.initial_scale_factor == pytest.approx(math.sqrt(2.5))
        assert search.complete
        assert search.retries <= 40
        assert len(result) == 10
        for window in windows:
            assert window.scale.x == 1.0
            assert 0 <= window.position.x <= 2000 - 400
            assert 0 <= window.position.y <= 2000 - 400

        rects = [search.packer.find_by_id(w.object_id) for w in windows]
        for i, a in enumerate(rects):
            for b in rects[i + 1 :]:
                assert not overlaps(a, b)
