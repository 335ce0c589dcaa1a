"""Tests for the binary .pol reader and writer in polfile.py"""

import io
import struct

import numpy as np
import pytest

from glider_polar.domain import Point
from glider_polar.polar import Polar
from glider_polar.polfile import RECORD_SIZE, load_polar, read_polar, save_polar, write_polar

from conftest import make_parabolic_polar


RECORDS = [
    # anchor, previous handle, next handle
    (60.0, -0.75, 55.0, -0.8, 65.0, -0.7),
    (80.0, -0.625, 75.0, -0.6, 85.0, -0.65),
    (120.0, -1.0, 110.0, -0.875, 130.0, -1.125),
    (87.3, -0.72, 80.1, -0.69, 95.7, -0.77),
    (200.0, -3.5, 190.0, -3.0, 210.0, -4.0),
]


def encode(records, count=None):
    count = len(records) if count is None else count
    out = struct.pack("<i", count)
    for rec in records:
        out += struct.pack("<6f", *rec)
    return out


class TestReadPolar:
    """Tests for decoding .pol bytes."""

    def test_count_and_order(self):
        polar = read_polar(io.BytesIO(encode(RECORDS)))
        assert len(polar) == 5
        assert [cp.anchor.speed for cp in polar] == pytest.approx([60.0, 80.0, 120.0, 87.3, 200.0])

    def test_values_are_exact_float32(self):
        polar = read_polar(io.BytesIO(encode(RECORDS)))
        for cp, rec in zip(polar, RECORDS):
            expected = [float(np.float32(v)) for v in rec]
            got = [
                cp.anchor.speed, cp.anchor.sink,
                cp.previous_handle.speed, cp.previous_handle.sink,
                cp.next_handle.speed, cp.next_handle.sink,
            ]
            assert got == expected

    def test_record_layout(self):
        """Anchor first, then previous handle, then next handle."""
        cp = read_polar(io.BytesIO(encode(RECORDS)))[0]
        assert cp.anchor == Point(60.0, -0.75)
        assert cp.previous_handle == Point(55.0, float(np.float32(-0.8)))
        assert cp.next_handle == Point(65.0, float(np.float32(-0.7)))

    def test_steps_per_segment_passed_through(self):
        polar = read_polar(io.BytesIO(encode(RECORDS)), steps_per_segment=50)
        assert polar.steps_per_segment == 50

    def test_trailing_bytes_ignored(self):
        polar = read_polar(io.BytesIO(encode(RECORDS) + b"\x00" * 7))
        assert len(polar) == 5

    def test_truncated_records_raise(self):
        data = encode(RECORDS)[:-4]
        with pytest.raises(ValueError):
            read_polar(io.BytesIO(data))

    def test_count_larger_than_payload_raises(self):
        with pytest.raises(ValueError):
            read_polar(io.BytesIO(encode(RECORDS, count=9)))

    def test_empty_stream_raises(self):
        with pytest.raises(ValueError):
            read_polar(io.BytesIO(b""))

    def test_single_record_is_not_a_polar(self):
        with pytest.raises(ValueError):
            read_polar(io.BytesIO(encode(RECORDS[:1])))


class TestWritePolar:
    """Tests for encoding and file round trips."""

    def test_size(self):
        buf = io.BytesIO()
        write_polar(make_parabolic_polar(), buf)
        assert len(buf.getvalue()) == 4 + 3 * RECORD_SIZE

    def test_bytes_round_trip(self):
        data = encode(RECORDS)
        buf = io.BytesIO()
        write_polar(read_polar(io.BytesIO(data)), buf)
        assert buf.getvalue() == data

    def test_file_round_trip_narrows_to_float32(self, tmp_path):
        polar = make_parabolic_polar()
        path = tmp_path / "test.pol"
        save_polar(polar, path)
        loaded = load_polar(path)

        assert isinstance(loaded, Polar)
        for a, b in zip(polar, loaded):
            assert b.anchor.speed == float(np.float32(a.anchor.speed))
            assert b.next_handle.sink == float(np.float32(a.next_handle.sink))

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_polar(tmp_path / "nope.pol")
