"""Состояние сеанса и события, на которые реагирует конвейер.

Сеанс неизменяем: каждое событие порождает новый `Session` через
`dataclasses.replace`, поэтому переходы тестируются без UI.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from rawconv.models.layout import ChannelLayout
from rawconv.models.raw_model import DecodeRequest, PixelBuffer, RawAsset
from rawconv.models.export_model import ExportFormat


@dataclass(frozen=True)
class Session:
    """Текущий файл, раскладка, размеры и последний декодированный буфер.

    Fields:
        asset: Загруженный файл или None до первого выбора.
        layout: Выбранная раскладка каналов.
        width: Ширина (из оценки или введённая вручную).
        height: Высота (из оценки или введённая вручную).
        pixels: Результат последнего декодирования (кэш).
        generation: Номер последнего запрошенного чтения файла.
    """
    asset: Optional[RawAsset] = None
    layout: ChannelLayout = ChannelLayout.GRAYSCALE
    width: int = 0
    height: int = 0
    pixels: Optional[PixelBuffer] = None
    generation: int = 0

    @property
    def has_asset(self) -> bool:
        return self.asset is not None

    def decode_request(self) -> DecodeRequest:
        return DecodeRequest(layout=self.layout, width=self.width, height=self.height)


@dataclass(frozen=True)
class FileSelected:
    """Файл прочитан. `generation` = None означает синхронную загрузку без билета."""
    asset: RawAsset
    generation: Optional[int] = None


@dataclass(frozen=True)
class LayoutChanged:
    layout: ChannelLayout


@dataclass(frozen=True)
class WidthEdited:
    width: int


@dataclass(frozen=True)
class HeightEdited:
    height: int


@dataclass(frozen=True)
class ExportRequested:
    format: ExportFormat


Event = Union[FileSelected, LayoutChanged, WidthEdited, HeightEdited, ExportRequested]
