"""
Fixed-width header of an encoded RLE stream.

The original blob length is stored as an unsigned 64-bit little-endian
integer, independent of the platform word size.
"""
import struct

from rle_codec.rle_errors import MalformedStream, SizePrefixOverflow

SIZE_PREFIX_FORMAT = "<Q"
SIZE_PREFIX_WIDTH = struct.calcsize(SIZE_PREFIX_FORMAT)
MAX_BLOB_SIZE = (1 << (8 * SIZE_PREFIX_WIDTH)) - 1


def pack_size(size: int) -> bytes:
    """Returns the 8-byte header for a blob of `size` bytes."""
    if size < 0 or size > MAX_BLOB_SIZE:
        raise SizePrefixOverflow(
            f"Blob size {size} does not fit in a {SIZE_PREFIX_WIDTH}-byte prefix"
        )
    return struct.pack(SIZE_PREFIX_FORMAT, size)


def unpack_size(header: bytes) -> int:
    """
    Reads the blob size from the first 8 bytes of `header`.
    Anything after the prefix is ignored.
    """
    if len(header) < SIZE_PREFIX_WIDTH:
        raise MalformedStream(
            f"Size prefix needs {SIZE_PREFIX_WIDTH} bytes, got {len(header)}"
        )
    (size,) = struct.unpack_from(SIZE_PREFIX_FORMAT, header)
    return size
