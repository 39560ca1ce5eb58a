from abc import ABC, abstractmethod
import io
from typing import BinaryIO, List, Tuple


class Compressor(ABC):
    """
    Інтерфейс потокового компресора: стиснення та розпакування
    з двійкового вхідного потоку у двійковий вихідний потік.

    Реалізації збирають повідомлення у self.log і повертають їх
    одним рядком з compress / decompress.
    """

    log: List[str]

    @abstractmethod
    def compress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Стискає всі байти вхідного потоку і записує результат у вихідний.

        Args:
            input_stream: Вхідний потік для даних
            output_stream: Вихідний потік для запису стиснених даних

        Returns:
            Рядок з інформацією для логування
        """

    @abstractmethod
    def decompress(self, input_stream: BinaryIO, output_stream: BinaryIO) -> str:
        """
        Розпаковує стиснений потік і записує відновлені дані у вихідний.

        Args:
            input_stream: Вхідний потік для стиснених даних
            output_stream: Вихідний потік для запису розпакованих даних

        Returns:
            Рядок з інформацією для логування
        """

    def log_sizes(self, original_size: int, encoded_size: int):
        """
        Додає до self.log рядок про зміну розміру після стиснення.
        """
        diff = original_size - encoded_size
        if diff > 0:
            ratio = diff / original_size * 100
            self.log.append(f"Size reduced by {diff} bytes ({ratio:.1f}% total saving)")
        else:
            self.log.append(f"Size increased by {-diff} bytes")

    @classmethod
    def compress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Допоміжний метод для стиснення файлу.

        Args:
            input_file: Шлях до вхідного файлу
            output_file: Шлях до вихідного файлу
            options: Параметри конструктора компресора

        Returns:
            Інформація про стиснення
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.compress(in_file, out_file)

    @classmethod
    def decompress_file(cls, input_file: str, output_file: str, **options) -> str:
        """
        Допоміжний метод для розпакування файлу.
        """
        compressor = cls(**options)
        with open(input_file, 'rb') as in_file, open(output_file, 'wb') as out_file:
            return compressor.decompress(in_file, out_file)

    @classmethod
    def compress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Стискає байти в пам'яті.

        Returns:
            Кортеж (стиснені дані, інформація про стиснення)
        """
        compressor = cls(**options)
        out_buffer = io.BytesIO()
        log_info = compressor.compress(io.BytesIO(data), out_buffer)
        return out_buffer.getvalue(), log_info

    @classmethod
    def decompress_bytes(cls, data: bytes, **options) -> Tuple[bytes, str]:
        """
        Розпаковує байти в пам'яті.

        Returns:
            Кортеж (розпаковані дані, інформація про розпакування)
        """
        compressor = cls(**options)
        out_buffer = io.BytesIO()
        log_info = compressor.decompress(io.BytesIO(data), out_buffer)
        return out_buffer.getvalue(), log_info
