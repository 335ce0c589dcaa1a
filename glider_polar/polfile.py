"""
Binary .pol polar files.

Layout (all little-endian):
    int32   count
    count x 6 float32   anchor speed, anchor sink,
                        previous handle speed, previous handle sink,
                        next handle speed, next handle sink

There is no header beyond the count, no footer and no checksum.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Union

import numpy as np

from .config import DEFAULT_STEPS_PER_SEGMENT
from .domain import ControlPoint, Point
from .polar import Polar

logger = logging.getLogger(__name__)

COUNT_DTYPE = np.dtype("<i4")
RECORD_DTYPE = np.dtype("<f4")
FLOATS_PER_RECORD = 6
RECORD_SIZE = FLOATS_PER_RECORD * RECORD_DTYPE.itemsize  # 24 bytes

PolSource = Union[str, Path]


def _control_point(row: np.ndarray) -> ControlPoint:
    # float32 -> Python float is exact
    v = [float(x) for x in row]
    return ControlPoint(
        anchor=Point(speed=v[0], sink=v[1]),
        previous_handle=Point(speed=v[2], sink=v[3]),
        next_handle=Point(speed=v[4], sink=v[5]),
    )


def read_polar(stream: IO[bytes], steps_per_segment: int = DEFAULT_STEPS_PER_SEGMENT) -> Polar:
    """
    Decode a polar from a binary stream.

    A short read surfaces as the ValueError numpy raises for a buffer that is
    smaller than requested.
    """
    count = int(np.frombuffer(stream.read(COUNT_DTYPE.itemsize), dtype=COUNT_DTYPE, count=1)[0])
    payload = stream.read(count * RECORD_SIZE)
    records = np.frombuffer(payload, dtype=RECORD_DTYPE, count=count * FLOATS_PER_RECORD)
    records = records.reshape(count, FLOATS_PER_RECORD)

    logger.debug("Decoded %d control points", count)
    return Polar(
        control_points=tuple(_control_point(row) for row in records),
        steps_per_segment=steps_per_segment,
    )


def load_polar(path: PolSource, steps_per_segment: int = DEFAULT_STEPS_PER_SEGMENT) -> Polar:
    """Read a .pol file from disk."""
    path = Path(path)
    logger.debug("Loading polar from %s", path)
    with path.open("rb") as fh:
        return read_polar(fh, steps_per_segment)


def write_polar(polar: Polar, stream: IO[bytes]) -> None:
    """Encode a polar; values are narrowed to float32."""
    records = np.array(
        [
            [
                cp.anchor.speed, cp.anchor.sink,
                cp.previous_handle.speed, cp.previous_handle.sink,
                cp.next_handle.speed, cp.next_handle.sink,
            ]
            for cp in polar
        ],
        dtype=RECORD_DTYPE,
    )
    stream.write(np.array([len(polar)], dtype=COUNT_DTYPE).tobytes())
    stream.write(records.tobytes())


def save_polar(polar: Polar, path: PolSource) -> None:
    path = Path(path)
    with path.open("wb") as fh:
        write_polar(polar, fh)
    logger.debug("Wrote %d control points to %s", len(polar), path)
