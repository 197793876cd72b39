"""Модели данных для «сырых» изображений.

Принципы:
- SRP: только структуры данных, без логики декодирования.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from rawconv.models.layout import ChannelLayout


@dataclass(frozen=True)
class RawAsset:
    """Исходный файл: имя (для имени экспорта) и все его байты.

    Fields:
        name: Имя файла, например "frame.raw".
        data: Содержимое файла целиком.
    """
    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class DecodeRequest:
    """Параметры одного декодирования. Отрицательные размеры приводятся к нулю."""
    layout: ChannelLayout
    width: int
    height: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "width", max(0, int(self.width)))
        object.__setattr__(self, "height", max(0, int(self.height)))

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def byte_count(self) -> int:
        """Сколько байт нужно, чтобы заполнить все пиксели без дополнения."""
        return self.pixel_count * self.layout.bytes_per_pixel


@dataclass(frozen=True, eq=False)
class PixelBuffer:
    """Нормализованный RGBA-буфер вместе с размерами, под которые он собран.

    Fields:
        width: Ширина, px.
        height: Высота, px.
        pixels: `np.uint8` массив формы (height, width, 4), только для чтения.
    """
    width: int
    height: int
    pixels: np.ndarray

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.pixel_count == 0

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def pixel(self, index: int) -> Tuple[int, int, int, int]:
        """RGBA пикселя по индексу в построчном порядке."""
        r, g, b, a = self.pixels.reshape(-1, 4)[index]
        return int(r), int(g), int(b), int(a)

    def tobytes(self) -> bytes:
        return self.pixels.tobytes()
