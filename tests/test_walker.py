"""Tests for curve traversal in walker.py"""

import pytest

from glider_polar.walker import iter_samples, segment_controls, walk

from conftest import make_parabolic_polar


@pytest.fixture
def control_points():
    return make_parabolic_polar().control_points


class TestSegmentControls:
    """Tests for the segment_controls function."""

    def test_forward_segment(self, control_points):
        a, b = control_points[0], control_points[1]
        assert segment_controls(control_points, 0) == (a.anchor, a.next_handle, b.previous_handle, b.anchor)

    def test_backward_segment(self, control_points):
        a, b = control_points[1], control_points[2]
        assert segment_controls(control_points, 2, forward=False) == (
            b.anchor, b.previous_handle, a.next_handle, a.anchor
        )


class TestIterSamples:
    """Tests for the iter_samples generator."""

    def test_sample_count(self, control_points):
        """steps+1 samples per segment, endpoints included."""
        samples = list(iter_samples(control_points, steps=10))
        assert len(samples) == (len(control_points) - 1) * 11

    def test_forward_starts_at_first_anchor(self, control_points):
        first = next(iter_samples(control_points, steps=10))
        assert first == control_points[0].anchor

    def test_backward_starts_at_last_anchor(self, control_points):
        first = next(iter_samples(control_points, forward=False, steps=10))
        assert first == control_points[-1].anchor

    def test_backward_ends_near_first_anchor(self, control_points):
        last = list(iter_samples(control_points, forward=False, steps=10))[-1]
        assert last.speed == pytest.approx(control_points[0].anchor.speed)
        assert last.sink == pytest.approx(control_points[0].anchor.sink)

    def test_forward_speeds_increase(self, control_points):
        speeds = [p.speed for p in iter_samples(control_points, steps=20)]
        assert all(b >= a - 1e-9 for a, b in zip(speeds, speeds[1:]))

    def test_rejects_zero_steps(self, control_points):
        with pytest.raises(ValueError):
            list(iter_samples(control_points, steps=0))


class TestWalk:
    """Tests for the walk function."""

    def test_returns_first_accepted_sample(self, control_points):
        p = walk(control_points, lambda p: p.speed >= 120.0)
        assert p is not None
        assert p.speed == pytest.approx(120.0, abs=0.1)

    def test_backward_returns_first_accepted_from_the_end(self, control_points):
        p = walk(control_points, lambda p: p.speed <= 120.0, forward=False)
        assert p.speed == pytest.approx(120.0, abs=0.1)

    def test_exhausted_returns_none(self, control_points):
        calls = []

        def never(p):
            calls.append(p)
            return False

        assert walk(control_points, never, steps=100) is None
        assert len(calls) == (len(control_points) - 1) * 101

    def test_stops_immediately(self, control_points):
        calls = []

        def always(p):
            calls.append(p)
            return True

        assert walk(control_points, always) == control_points[0].anchor
        assert len(calls) == 1

    def test_predicate_sees_samples_in_order(self, control_points):
        seen = []

        def record(p):
            seen.append(p.speed)
            return len(seen) == 5

        walk(control_points, record, steps=1000)
        assert seen == sorted(seen)
        assert seen[0] == control_points[0].anchor.speed
