"""Геометрия предпросмотра без зависимости от Tk.

Масштабируется только видимая часть изображения, поэтому объём памяти
ограничен размером окна, а не размером буфера и зумом.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

ZOOM_MIN = 10
ZOOM_MAX = 1600
ZOOM_STEPS = (10, 25, 50, 100, 200, 400, 800, 1600)


def clamp_zoom(percent: float) -> int:
    """Приводит масштаб к целому числу процентов в [ZOOM_MIN, ZOOM_MAX]."""
    return max(ZOOM_MIN, min(ZOOM_MAX, int(round(percent))))


def next_zoom_step(percent: int, direction: int) -> int:
    """Соседняя ступень масштаба вверх (direction > 0) или вниз."""
    if direction > 0:
        bigger = [step for step in ZOOM_STEPS if step > percent]
        return bigger[0] if bigger else ZOOM_STEPS[-1]
    smaller = [step for step in ZOOM_STEPS if step < percent]
    return smaller[-1] if smaller else ZOOM_STEPS[0]


def fit_zoom(image_size: Tuple[int, int], view_size: Tuple[int, int]) -> int:
    """Наибольшая ступень, при которой изображение целиком помещается в окно."""
    img_w, img_h = image_size
    view_w, view_h = view_size
    if img_w <= 0 or img_h <= 0:
        return 100
    fit = min(max(1, view_w) / img_w, max(1, view_h) / img_h) * 100
    fitting = [step for step in ZOOM_STEPS if step <= fit]
    return fitting[-1] if fitting else ZOOM_STEPS[0]


@dataclass(frozen=True)
class Tile:
    """Видимый фрагмент: что вырезать из изображения и куда положить результат.

    Fields:
        box: (x0, y0, x1, y1) в пикселях исходного изображения.
        offset: левый верхний угол фрагмента в масштабированных координатах.
        size: размер фрагмента после масштабирования.
    """
    box: Tuple[int, int, int, int]
    offset: Tuple[int, int]
    size: Tuple[int, int]


def scaled_size(image_size: Tuple[int, int], percent: int) -> Tuple[int, int]:
    scale = percent / 100.0
    img_w, img_h = image_size
    return max(1, int(img_w * scale)), max(1, int(img_h * scale))


def visible_tile(
    image_size: Tuple[int, int],
    percent: int,
    view_origin: Tuple[float, float],
    view_size: Tuple[int, int],
) -> Optional[Tile]:
    """Считает фрагмент изображения, попадающий в окно просмотра.

    Args:
        image_size: (ширина, высота) исходного изображения.
        percent: масштаб в процентах.
        view_origin: левый верхний угол окна в масштабированных координатах изображения.
        view_size: размер окна в пикселях экрана.

    Returns:
        `Tile` или None, если окно не пересекает изображение.
    """
    img_w, img_h = image_size
    if img_w <= 0 or img_h <= 0:
        return None
    scale = percent / 100.0
    full_w, full_h = scaled_size(image_size, percent)

    left = max(0.0, view_origin[0])
    top = max(0.0, view_origin[1])
    right = min(float(full_w), view_origin[0] + view_size[0])
    bottom = min(float(full_h), view_origin[1] + view_size[1])
    if right <= left or bottom <= top:
        return None

    # целые пиксели источника, покрывающие окно
    x0 = min(img_w - 1, int(left / scale))
    y0 = min(img_h - 1, int(top / scale))
    x1 = max(x0 + 1, min(img_w, math.ceil(right / scale)))
    y1 = max(y0 + 1, min(img_h, math.ceil(bottom / scale)))

    offset = (int(round(x0 * scale)), int(round(y0 * scale)))
    size = (
        max(1, int(round(x1 * scale)) - offset[0]),
        max(1, int(round(y1 * scale)) - offset[1]),
    )
    return Tile(box=(x0, y0, x1, y1), offset=offset, size=size)
