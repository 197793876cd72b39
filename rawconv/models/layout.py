"""Раскладки каналов для «сырых» буферов без заголовка.

Принципы:
- Закрытый перечень: три варианта, без наследования и расширения в рантайме.
- Чистая функция поиска: `bytes_per_pixel` определён для каждого варианта.
"""
from __future__ import annotations

from enum import Enum
from typing import Tuple


class ChannelLayout(Enum):
    """Порядок байтов одного пикселя в исходном буфере."""
    GRAYSCALE = "grayscale"
    RGB = "rgb"
    RGBA = "rgba"

    @property
    def bytes_per_pixel(self) -> int:
        return _BYTES_PER_PIXEL[self]

    @property
    def label(self) -> str:
        """Подпись для выпадающего списка в UI."""
        return _LABELS[self]

    @classmethod
    def labels(cls) -> Tuple[str, ...]:
        return tuple(layout.label for layout in cls)

    @classmethod
    def from_label(cls, text: str) -> "ChannelLayout":
        """Находит раскладку по подписи UI или по значению ("rgb", "RGBA"...).

        Raises:
            ValueError: если строка не соответствует ни одной раскладке.
        """
        key = text.strip()
        for layout in cls:
            if key == layout.label or key.lower() == layout.value:
                return layout
        raise ValueError(f"Неизвестная раскладка: {text!r}")


_BYTES_PER_PIXEL = {
    ChannelLayout.GRAYSCALE: 1,
    ChannelLayout.RGB: 3,
    ChannelLayout.RGBA: 4,
}

_LABELS = {
    ChannelLayout.GRAYSCALE: "Grayscale (1 byte per pixel)",
    ChannelLayout.RGB: "RGB (3 bytes per pixel)",
    ChannelLayout.RGBA: "RGBA (4 bytes per pixel)",
}
