"""Форматы экспорта и результат кодирования."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExportFormat(Enum):
    """Целевой формат: PNG без потерь или JPEG с потерями."""
    PNG = "png"
    JPEG = "jpg"

    @property
    def extension(self) -> str:
        return self.value

    @property
    def pil_format(self) -> str:
        return "PNG" if self is ExportFormat.PNG else "JPEG"

    @property
    def is_lossless(self) -> bool:
        return self is ExportFormat.PNG

    @classmethod
    def from_tag(cls, tag: str) -> "ExportFormat":
        """Принимает "lossless"/"lossy" или расширение ("png", "jpg", "jpeg").

        Raises:
            ValueError: для неизвестного тега.
        """
        key = tag.strip().lower().lstrip(".")
        if key in ("lossless", "png"):
            return cls.PNG
        if key in ("lossy", "jpg", "jpeg"):
            return cls.JPEG
        raise ValueError(f"Неизвестный формат экспорта: {tag!r}")


@dataclass(frozen=True)
class ExportResult:
    """Закодированные байты и предлагаемое имя файла.

    Fields:
        data: Содержимое PNG/JPEG файла.
        filename: Имя исходника без расширения + расширение формата.
        format: Формат, в котором закодированы `data`.
    """
    data: bytes
    filename: str
    format: ExportFormat
