"""Конвейер: оценка размеров -> декодирование -> экспорт.

SOLID:
- SRP: здесь только реакции на события и владение текущим сеансом.
- DIP: сервисы передаются извне; UI сюда не проникает.
Переходы выражены чистой функцией `reduce(session, event) -> Session`,
`PipelineCoordinator` лишь хранит последний результат.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Optional

from rawconv.models.export_model import ExportFormat, ExportResult
from rawconv.models.session import (
    Event,
    ExportRequested,
    FileSelected,
    HeightEdited,
    LayoutChanged,
    Session,
    WidthEdited,
)
from rawconv.services.decode_service import DecodeService
from rawconv.services.export_service import ExportService
from rawconv.services.inference_service import InferenceService

logger = logging.getLogger("rawconv.pipeline")


def reduce(
    session: Session,
    event: Event,
    inference: InferenceService,
    decoder: DecodeService,
) -> Session:
    """Применяет событие к сеансу и возвращает новый сеанс.

    `ExportRequested` состояние не меняет и возвращает сеанс как есть.
    """
    if isinstance(event, FileSelected):
        if event.generation is not None and event.generation != session.generation:
            logger.debug("dropping stale read #%d (current #%d)", event.generation, session.generation)
            return session
        session = replace(session, asset=event.asset)
        return _redecode(_reinfer(session, inference), decoder)

    if isinstance(event, LayoutChanged):
        session = replace(session, layout=event.layout)
        if not session.has_asset:
            return session
        return _redecode(_reinfer(session, inference), decoder)

    if isinstance(event, WidthEdited):
        session = replace(session, width=int(event.width))
        return _redecode(session, decoder) if session.has_asset else session

    if isinstance(event, HeightEdited):
        session = replace(session, height=int(event.height))
        return _redecode(session, decoder) if session.has_asset else session

    if isinstance(event, ExportRequested):
        return session

    raise TypeError(f"Неизвестное событие: {event!r}")


def _reinfer(session: Session, inference: InferenceService) -> Session:
    width, height = inference.infer_dimensions(session.asset.size, session.layout)
    return replace(session, width=width, height=height)


def _redecode(session: Session, decoder: DecodeService) -> Session:
    pixels = decoder.decode_request(session.asset.data, session.decode_request())
    return replace(session, pixels=pixels)


@dataclass
class PipelineCoordinator:
    """Единственный владелец сеанса; все события проходят через `dispatch`.

    Ответственности:
    - Выдача билетов на чтение файла (`begin_read`), чтобы устаревшее чтение
      не перезаписало более новое.
    - Применение событий через `reduce`.
    - Экспорт последнего буфера по запросу.
    """
    inference: InferenceService = field(default_factory=InferenceService)
    decoder: DecodeService = field(default_factory=DecodeService)
    exporter: ExportService = field(default_factory=ExportService)
    session: Session = field(default_factory=Session)

    def begin_read(self) -> int:
        """Регистрирует новое чтение файла и возвращает его билет."""
        self.session = replace(self.session, generation=self.session.generation + 1)
        return self.session.generation

    def is_current(self, ticket: int) -> bool:
        """True, если после чтения с этим билетом новых чтений не начиналось."""
        return ticket == self.session.generation

    def dispatch(self, event: Event) -> Optional[ExportResult]:
        """Обрабатывает событие. Для `ExportRequested` возвращает результат экспорта."""
        if isinstance(event, ExportRequested):
            return self.export(event.format)
        self.session = reduce(self.session, event, self.inference, self.decoder)
        return None

    def export(self, fmt: ExportFormat) -> Optional[ExportResult]:
        """Кодирует текущий буфер; без файла или при пустом буфере ничего не делает."""
        pixels = self.session.pixels
        if pixels is None or self.session.asset is None:
            logger.debug("export skipped: nothing loaded")
            return None
        if pixels.is_empty:
            logger.debug("export skipped: empty %dx%d buffer", pixels.width, pixels.height)
            return None
        return self.exporter.export(pixels, fmt, self.session.asset.name)
