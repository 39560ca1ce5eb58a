"""
Run-Length Encoding (RLE) Compression Module

The encoding uses 2 kinds of chunks:

- homogeneous chunks are runs of identical bytes, stored as
    1. "count" byte (1-255)
    2. "value" byte (0-255)

- heterogeneous chunks are stretches with no two equal adjacent bytes,
  stored as literals. A homogeneous count is never 0, so a leading 0 marks
  a heterogeneous chunk:
    1. "count" byte (0)
    2. "length" byte (1-255)
    3. "length" literal bytes

The records are preceded by the original blob size as an 8-byte
little-endian integer, so the decoder knows how much to produce.
"""
import sys
from typing import BinaryIO, Callable, Optional

from rle_codec.chunk_analyzer import HOMOGENEOUS, MAX_CHUNK_LENGTH, analyze, as_byte_view, iter_chunks
from rle_codec.compressor_ABC import Compressor
from rle_codec.rle_errors import MalformedStream, SizePrefixOverflow, UnsupportedStreamSource
from rle_codec.rle_utils.byte_reader import ByteReader
from rle_codec.rle_utils.byte_writer import ByteWriter
from rle_codec.size_prefix import SIZE_PREFIX_WIDTH, pack_size, unpack_size

HETEROGENEOUS_MARKER = 0

ProgressCallback = Callable[[int, int], None]


def _encode(view: memoryview, writer: ByteWriter, update_progress: Optional[ProgressCallback] = None) -> int:
    update_progress = update_progress or (lambda done, total: None)
    size = len(view)

    # both passes: runs must be known (and split) before anything is written
    runs = analyze(view)
    writer.write_bytes(pack_size(size))

    for kind, start, length in iter_chunks(size, runs):
        if kind == HOMOGENEOUS:
            writer.write_bytes(bytes((length, view[start])))
        else:
            record = bytes((HETEROGENEOUS_MARKER, length)) + view[start:start + length].tobytes()
            writer.write_bytes(record)
        update_progress(start + length, size)

    return writer.bytes_written


def _decode(reader: ByteReader, exact: bool, update_progress: Optional[ProgressCallback] = None) -> bytes:
    update_progress = update_progress or (lambda done, total: None)
    size = unpack_size(reader.read_bytes(SIZE_PREFIX_WIDTH))

    remaining = reader.remaining
    if remaining is not None:
        # every record takes at least 2 bytes and yields at most 255
        if size > (remaining // 2) * MAX_CHUNK_LENGTH:
            raise SizePrefixOverflow(
                f"Declared blob size {size} cannot be produced by "
                f"{remaining} byte(s) of records"
            )
        blob = bytearray(size)
    else:
        blob = bytearray()

    pos = 0
    while pos < size:
        offset = reader.pos
        count = reader.read_byte()

        if count == HETEROGENEOUS_MARKER:
            length = reader.read_byte()
            if length == 0:
                raise MalformedStream(f"Empty heterogeneous record at offset {offset}")
        else:
            length = count

        if length > size - pos:
            raise MalformedStream(
                f"Record at offset {offset} holds {length} byte(s), "
                f"only {size - pos} left of declared size {size}"
            )

        if count == HETEROGENEOUS_MARKER:
            blob[pos:pos + length] = reader.read_bytes(length)
        else:
            blob[pos:pos + length] = bytes((reader.read_byte(),)) * length

        pos += length
        update_progress(pos, size)

    if exact and reader.remaining:
        raise MalformedStream(
            f"{reader.remaining} trailing byte(s) after the last record"
        )

    return bytes(blob)


def encode(blob: bytes) -> bytes:
    """
    Encodes an in-memory blob.

    Args:
        blob: Any bytes-like object

    Returns:
        The encoded stream (size prefix followed by records)
    """
    buffer = bytearray()
    _encode(as_byte_view(blob), ByteWriter(buffer))
    return bytes(buffer)


def decode(encoded: bytes) -> bytes:
    """
    Decodes a complete encoded stream.

    `encoded` must be exactly the stream `encode` produced: a truncated
    stream or one with trailing bytes raises MalformedStream.
    """
    return _decode(ByteReader(as_byte_view(encoded)), exact=True)


def encode_to_stream(sink, blob: bytes, update_progress: Optional[ProgressCallback] = None) -> int:
    """
    Encodes `blob` straight into `sink`.

    Args:
        sink: Binary file-like object with write(), or a bytearray
        blob: Any bytes-like object
        update_progress: Optional callback(done, total) in blob bytes

    Returns:
        Number of encoded bytes written
    """
    if sink is blob:
        # a bytearray cannot grow while a view of it is held
        blob = bytes(blob)
    return _encode(as_byte_view(blob), ByteWriter(sink), update_progress)


def decode_from_stream(source, update_progress: Optional[ProgressCallback] = None) -> bytes:
    """
    Decodes one encoded blob from a binary file-like object.

    Reading stops right after the last record, so the source is left
    positioned on whatever follows it.
    """
    return _decode(ByteReader(source), exact=False, update_progress=update_progress)


def peek_blob_size(encoded_header: bytes) -> int:
    """
    Returns the original blob size stored in the first 8 bytes of an
    encoded stream, without decoding any record.
    """
    return unpack_size(as_byte_view(encoded_header))


def encode_to_file(path: str, blob: bytes) -> int:
    """Encodes `blob` into the file at `path`, replacing it."""
    with open(path, "wb") as f:
        return encode_to_stream(f, blob)


def decode_from_file(path: str) -> bytes:
    """Decodes the blob stored in the file at `path`."""
    with open(path, "rb") as f:
        return decode_from_stream(f)


class RLECompressor(Compressor):
    """Stream compressor built on the RLE codec."""

    def __init__(self, show_progress: bool = False):
        self.show_progress = show_progress
        self.last_percent = -1
        self.log = []

    def update_progress(self, done: int, total: int):
        if self.show_progress and total:
            percent = done * 100 // total
            if percent != self.last_percent:
                print(f"{percent}%", file=sys.stderr)
                self.last_percent = percent

    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Reads the whole input stream, encodes it and writes the encoded
        stream to output_stream. Returns log information.
        """
        self.log.clear()
        self.last_percent = -1

        data = input_stream.read()
        if isinstance(data, str):
            raise UnsupportedStreamSource("Input stream returned text (opened in text mode?)")

        written = encode_to_stream(output_stream, data, self.update_progress)
        self.log.append(f"Encoded {len(data)} bytes into {written} bytes")
        self.log_sizes(len(data), written)
        return "\n".join(self.log)

    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Decodes one blob from input_stream and writes it to output_stream.
        Returns log information.

        Like decode_from_stream, reading stops after the last record:
        anything that follows stays unread in input_stream. Use decode()
        to reject trailing bytes of an in-memory stream.
        """
        self.log.clear()
        self.last_percent = -1

        reader = ByteReader(input_stream)
        data = _decode(reader, exact=False, update_progress=self.update_progress)
        ByteWriter(output_stream).write_bytes(data)

        self.log.append(f"Decoded {reader.pos} bytes into {len(data)} bytes")
        return "\n".join(self.log)
