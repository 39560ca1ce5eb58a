from typing import Optional

from rle_codec.chunk_analyzer import as_byte_view
from rle_codec.rle_errors import MalformedStream, UnsupportedStreamSource


class ByteReader:
    """
    Клас для послідовного зчитування байтів закодованого потоку.

    Джерелом може бути буфер у пам'яті (bytes, bytearray, memoryview),
    тоді читання йде за індексом-курсором, або двійковий файловий об'єкт
    з методом read(n).
    """

    def __init__(self, source):
        """
        :param source: буфер у пам'яті або двійковий потік
        """
        self._stream = None
        self._view = None
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._view = as_byte_view(source)
        elif callable(getattr(source, "read", None)):
            self._stream = source
        else:
            raise UnsupportedStreamSource(
                f"Cannot read bytes from {type(source).__name__!r}"
            )
        self.pos = 0  # кількість уже прочитаних байтів

    @property
    def remaining(self) -> Optional[int]:
        """
        Кількість непрочитаних байтів буфера; None для потоку,
        довжина якого наперед невідома.
        """
        if self._view is None:
            return None
        return len(self._view) - self.pos

    def read_byte(self) -> int:
        """
        Зчитує один байт і повертає його як int 0..255.
        """
        return self.read_bytes(1)[0]

    def read_bytes(self, n: int) -> bytes:
        """
        Зчитує рівно n байтів.
        Якщо джерело закінчилось раніше, кидає MalformedStream.
        """
        if n < 0:
            raise ValueError("Довжина не може бути негативною")
        if self._view is not None:
            if self.pos + n > len(self._view):
                raise MalformedStream(
                    f"Stream ended at byte {len(self._view)}, "
                    f"needed {n} more byte(s) at offset {self.pos}"
                )
            data = self._view[self.pos:self.pos + n].tobytes()
        else:
            data = self._read_stream(n)
        self.pos += n
        return data

    def _read_stream(self, n: int) -> bytes:
        parts = []
        missing = n
        while missing:
            chunk = self._stream.read(missing)
            if chunk is None:
                raise UnsupportedStreamSource("Non-blocking sources are not supported")
            if isinstance(chunk, str):
                raise UnsupportedStreamSource(
                    "Source returned text (opened in text mode?)"
                )
            if not chunk:
                raise MalformedStream(
                    f"Stream ended after {self.pos + n - missing} byte(s), "
                    f"needed {missing} more"
                )
            parts.append(chunk)
            missing -= len(chunk)
        return b"".join(parts)
