"""
Chunk analysis for the RLE codec.

A blob is partitioned into homogeneous chunks (runs of at least two identical
adjacent bytes) and the heterogeneous gaps between them. Runs are found with
a vectorized pass over the pairwise equality mask, which yields the same
borders as scanning the pairs (i, i+1) one by one: every maximal stretch of
equal pairs [a, b] is the run [a, b + 1].
"""
from typing import Iterator, List, NamedTuple, Tuple

import numpy as np

from rle_codec.rle_errors import InvalidInput
from rle_codec.size_prefix import SIZE_PREFIX_WIDTH

MAX_CHUNK_LENGTH = 255

HOMOGENEOUS = "homogeneous"
HETEROGENEOUS = "heterogeneous"


class Run(NamedTuple):
    """Inclusive byte interval [start, end] of identical bytes."""

    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


class ChunkStats(NamedTuple):
    """Record layout of a blob, as the encoder would write it."""

    blob_size: int
    homogeneous_records: int
    heterogeneous_records: int
    encoded_size: int

    @property
    def ratio(self) -> float:
        """Encoded size over original size (0.0 for an empty blob)."""
        if not self.blob_size:
            return 0.0
        return self.encoded_size / self.blob_size


def as_byte_view(blob) -> memoryview:
    """
    Returns a flat unsigned-byte view of any bytes-like object.
    Text and other non-buffer objects raise InvalidInput.
    """
    if isinstance(blob, str):
        raise InvalidInput("Expected a bytes-like object, got str")
    try:
        view = memoryview(blob)
        # strided slices have no flat buffer numpy can read
        if not view.c_contiguous:
            view = memoryview(view.tobytes())
        if view.ndim != 1 or view.format != "B":
            view = view.cast("B")
    except TypeError as exc:
        raise InvalidInput(
            f"Expected a bytes-like object, got {type(blob).__name__}"
        ) from exc
    return view


def find_homogeneous_chunks(blob) -> List[Run]:
    """
    Finds every maximal run of identical bytes of length >= 2.

    Single bytes are never reported; they end up in heterogeneous chunks.
    Blobs shorter than two bytes have no runs.
    """
    view = as_byte_view(blob)
    if len(view) < 2:
        return []

    data = np.frombuffer(view, dtype=np.uint8)
    same = data[1:] == data[:-1]
    # +1 where a stretch of equal pairs begins, -1 one past where it ends
    edges = np.diff(np.concatenate(([False], same, [False])).astype(np.int8))
    starts = np.flatnonzero(edges == 1)
    ends = np.flatnonzero(edges == -1)

    return [Run(int(start), int(end)) for start, end in zip(starts, ends)]


def split_long_chunks(runs: List[Run], max_length: int = MAX_CHUNK_LENGTH) -> List[Run]:
    """
    Caps every run at `max_length` bytes.

    A longer run is replaced by sub-runs of exactly `max_length` bytes
    followed by the remainder, earliest offset first.
    """
    result = []
    for run in runs:
        start = run.start
        while run.end - start + 1 > max_length:
            result.append(Run(start, start + max_length - 1))
            start += max_length
        result.append(Run(start, run.end))
    return result


def analyze(blob) -> List[Run]:
    """Returns the run list the encoder consumes."""
    return split_long_chunks(find_homogeneous_chunks(blob))


def iter_chunks(blob_size: int, runs: List[Run]) -> Iterator[Tuple[str, int, int]]:
    """
    Yields (kind, start, length) for every record covering the blob, in order.

    Gaps between runs are cut into heterogeneous chunks of at most
    MAX_CHUNK_LENGTH bytes.
    """
    pos = 0
    next_run = 0

    while pos < blob_size:
        if next_run < len(runs) and runs[next_run].start == pos:
            run = runs[next_run]
            yield HOMOGENEOUS, pos, run.length
            pos += run.length
            next_run += 1
        else:
            remaining = blob_size - pos
            if next_run < len(runs):
                gap = runs[next_run].start - pos
            else:
                gap = remaining
            length = min(gap, remaining, MAX_CHUNK_LENGTH)
            yield HETEROGENEOUS, pos, length
            pos += length


def chunk_stats(blob) -> ChunkStats:
    """
    Counts the records `blob` encodes to and the exact encoded size,
    without producing the encoding.
    """
    view = as_byte_view(blob)
    size = len(view)
    homogeneous = 0
    heterogeneous = 0
    encoded_size = SIZE_PREFIX_WIDTH

    for kind, _, length in iter_chunks(size, analyze(view)):
        if kind == HOMOGENEOUS:
            homogeneous += 1
            encoded_size += 2
        else:
            heterogeneous += 1
            encoded_size += 2 + length

    return ChunkStats(size, homogeneous, heterogeneous, encoded_size)
