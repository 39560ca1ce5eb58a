"""
Exceptions raised by the RLE codec.
"""


class RLEError(Exception):
    """Base class for all RLE codec errors."""


class InvalidInput(RLEError, TypeError):
    """The blob handed to the encoder is not a bytes-like object."""


class MalformedStream(RLEError, ValueError):
    """
    The encoded stream is truncated, has trailing data, or contains a record
    that does not fit the declared blob size.
    """


class SizePrefixOverflow(MalformedStream):
    """
    The blob size cannot be stored in the 8-byte prefix, or the prefix read
    back does not agree with the rest of the stream.
    """


class UnsupportedStreamSource(RLEError, TypeError):
    """The object used as a byte source or sink cannot read or write bytes."""
