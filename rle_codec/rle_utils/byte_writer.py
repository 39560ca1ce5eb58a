from rle_codec.rle_errors import UnsupportedStreamSource


class ByteWriter:
    """
    Простий записувач байтів у двійковий потік (файл, BytesIO, сокет)
    або напряму у bytearray.
    """

    def __init__(self, sink):
        """
        :param sink: bytearray або об'єкт з методом write(bytes)
        """
        if isinstance(sink, bytearray):
            self._buffer = sink
            self._stream = None
        elif callable(getattr(sink, "write", None)):
            self._buffer = None
            self._stream = sink
        else:
            raise UnsupportedStreamSource(
                f"Cannot write bytes to {type(sink).__name__!r}"
            )
        self.bytes_written = 0

    def write_byte(self, value: int):
        """
        Записує один байт (0..255).
        """
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Byte value out of range: {value}")
        self.write_bytes(bytes((value,)))

    def write_bytes(self, data: bytes):
        """
        Записує послідовність байтів одразу, без внутрішньої буферизації.
        Помилки потоку (OSError) не перехоплюються.
        """
        if not data:
            return
        if self._buffer is not None:
            self._buffer += data
        else:
            self._write_all(bytes(data))
        self.bytes_written += len(data)

    def _write_all(self, data: bytes):
        # raw-потоки можуть записати лише частину даних
        while data:
            try:
                written = self._stream.write(data)
            except TypeError as exc:
                raise UnsupportedStreamSource(
                    "Sink does not accept bytes (opened in text mode?)"
                ) from exc
            if written is None:
                return
            if written <= 0:
                raise OSError("Sink accepted no bytes")
            data = data[written:]
