"""Кодирование RGBA-буфера в PNG/JPEG и запись результата на диск.

Принципы:
- SRP: класс отвечает только за сериализацию готового буфера.
- Ошибки кодека Pillow пробрасываются без изменений, повторов нет.
"""
from __future__ import annotations

import io
import logging
import re
from pathlib import Path

from PIL import Image

from rawconv.models.export_model import ExportFormat, ExportResult
from rawconv.models.raw_model import PixelBuffer

logger = logging.getLogger("rawconv.export")

_EXTENSION_RE = re.compile(r"\.[^/.]+$")


def suggested_filename(source_name: str, fmt: ExportFormat) -> str:
    """`frame.raw` -> `frame.png`; отбрасывается только последнее расширение."""
    stem = _EXTENSION_RE.sub("", Path(source_name).name)
    return f"{stem}.{fmt.extension}"


class ExportService:
    def to_image(self, buffer: PixelBuffer) -> Image.Image:
        """Собирает `PIL.Image` в режиме RGBA из буфера (копия данных)."""
        return Image.fromarray(buffer.pixels.copy())

    def export(self, buffer: PixelBuffer, fmt: ExportFormat, source_name: str) -> ExportResult:
        """Кодирует буфер в выбранный формат.

        Args:
            buffer: Декодированный буфер; размеры берутся из него самого.
            fmt: PNG (без потерь) или JPEG (качество кодека по умолчанию).
            source_name: Имя исходного файла для предлагаемого имени.

        Returns:
            `ExportResult` с байтами файла и именем `{stem}.{png|jpg}`.
        """
        image = self.to_image(buffer)
        if fmt is ExportFormat.JPEG:
            image = self._flatten_on_black(image)

        out = io.BytesIO()
        image.save(out, format=fmt.pil_format)
        data = out.getvalue()
        logger.debug("encoded %dx%d as %s (%d bytes)", buffer.width, buffer.height, fmt.pil_format, len(data))
        return ExportResult(data=data, filename=suggested_filename(source_name, fmt), format=fmt)

    def save(self, result: ExportResult, target: str | Path) -> Path:
        """Записывает результат в файл или в каталог (тогда имя берётся из `result.filename`)."""
        path = Path(target)
        if path.is_dir():
            path = path / result.filename
        path.write_bytes(result.data)
        logger.info("saved %s", path)
        return path

    # ---------- Вспомогательные функции ----------
    def _flatten_on_black(self, image: Image.Image) -> Image.Image:
        """
        JPEG не хранит альфу: полупрозрачные пиксели накладываются на чёрный фон,
        как это делает canvas браузера при сохранении в JPEG.
        """
        background = Image.new("RGB", image.size, (0, 0, 0))
        background.paste(image, mask=image.getchannel("A"))
        return background
