"""Оценка размеров изображения по длине файла.

Без метаданных о пропорциях самым нейтральным предположением считается квадрат.
Результат лишь стартовая подсказка: пользователь может переопределить
ширину и высоту независимо.
"""
from __future__ import annotations

import logging
import math
from typing import Tuple

from rawconv.models.layout import ChannelLayout

logger = logging.getLogger("rawconv.inference")


class InferenceService:
    def infer_dimensions(self, size: int, layout: ChannelLayout) -> Tuple[int, int]:
        """Возвращает (side, side), где side = floor(sqrt(size / bpp)).

        Деление вещественное: «хвост» из неполного пикселя просто не попадает в квадрат.

        Raises:
            ValueError: если `size` отрицателен.
        """
        if size < 0:
            raise ValueError(f"Размер файла не может быть отрицательным: {size}")
        pixel_count = size / layout.bytes_per_pixel
        side = math.floor(math.sqrt(pixel_count))
        logger.debug("inferred %dx%d from %d bytes (%s)", side, side, size, layout.value)
        return side, side
