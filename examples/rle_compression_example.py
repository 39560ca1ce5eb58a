"""
Example script demonstrating RLE compression of files and in-memory blobs.
"""

import os
import sys
from pathlib import Path

# Add the parent directory to Python path
sys.path.append(str(Path(__file__).parent.parent))

from rle_codec.chunk_analyzer import chunk_stats
from rle_codec.RLE import RLECompressor, decode, encode, peek_blob_size


def main():
    # Example 1: in-memory blob with long runs and literal stretches
    blob = bytes([0x05] * 600) + bytes(range(40)) + b"\xaa\xaa\xaa\xbb\xbb"
    encoded = encode(blob)
    stats = chunk_stats(blob)

    print(f"Original size: {len(blob)} bytes")
    print(f"Encoded size: {len(encoded)} bytes")
    print(f"Homogeneous records: {stats.homogeneous_records}")
    print(f"Heterogeneous records: {stats.heterogeneous_records}")
    print(f"Size stored in header: {peek_blob_size(encoded)}")
    assert decode(encoded) == blob

    # Example 2: file compression
    file_input = "input.bmp"
    file_output = "compressed_rle.bin"

    if os.path.exists(file_input):
        print(f"\nCompressing file: {file_input}")
        print(RLECompressor.compress_file(file_input, file_output, show_progress=True))

        decompressed = "decompressed_rle.bmp"
        print(RLECompressor.decompress_file(file_output, decompressed))

        with open(file_input, "rb") as f1, open(decompressed, "rb") as f2:
            print(f"Files match: {f1.read() == f2.read()}")
    else:
        print(f"\n{file_input} not found, skipping file example")


if __name__ == "__main__":
    main()
