"""
Command-line interface for the RLE codec.

    rle-codec [-d] [-i] [--progress] [infile] [outfile]
"""
import argparse
import sys
from typing import List, Optional

from rle_codec.chunk_analyzer import chunk_stats
from rle_codec.RLE import RLECompressor, peek_blob_size
from rle_codec.rle_errors import RLEError
from rle_codec.size_prefix import SIZE_PREFIX_WIDTH


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='rle-codec',
        description='Byte-oriented run-length encoding.',
    )

    parser.add_argument('-d', '--decompress', action='store_true',
                        help='Perform decompression instead of compression.')

    parser.add_argument('-i', '--info', action='store_true',
                        help='Print chunk statistics (or, with -d, the stored blob size) '
                             'instead of writing output.')

    parser.add_argument('--progress', action='store_true',
                        help='Print progress percentages to STDERR.')

    parser.add_argument('infile', nargs='?', type=argparse.FileType('rb'), default=None,
                        help='Input binary file; default: STDIN.')

    parser.add_argument('outfile', nargs='?', type=argparse.FileType('wb'), default=None,
                        help='Output binary file; default: STDOUT.')

    return parser


def print_info(in_file, decompress: bool) -> None:
    if decompress:
        header = in_file.read(SIZE_PREFIX_WIDTH)
        print(f"Blob size: {peek_blob_size(header)} bytes")
        return

    stats = chunk_stats(in_file.read())
    print(f"Blob size: {stats.blob_size} bytes")
    print(f"Homogeneous records: {stats.homogeneous_records}")
    print(f"Heterogeneous records: {stats.heterogeneous_records}")
    print(f"Encoded size: {stats.encoded_size} bytes ({stats.ratio:.3f} of original)")


def run(args, in_file, out_file) -> int:
    if args.info:
        print_info(in_file, args.decompress)
        return 0

    compressor = RLECompressor(show_progress=args.progress)
    if args.decompress:
        log_info = compressor.decompress(in_file, out_file)
    else:
        log_info = compressor.compress(in_file, out_file)
    out_file.flush()

    print(log_info, file=sys.stderr)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    in_file = args.infile or sys.stdin.buffer
    out_file = args.outfile or sys.stdout.buffer

    try:
        return run(args, in_file, out_file)
    except (RLEError, OSError) as exc:
        print(f"rle-codec: {exc}", file=sys.stderr)
        return 1
    finally:
        for f in (args.infile, args.outfile):
            # '-' maps to the standard streams, which stay open
            if f is not None and getattr(f, 'name', None) not in ('<stdin>', '<stdout>'):
                f.close()


if __name__ == '__main__':  # pragma: no cover
    sys.exit(main())
