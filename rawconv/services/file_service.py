"""Чтение «сырых» файлов с диска.

Принципы:
- SRP: класс отвечает только за загрузку байтов, без интерпретации.
- Возвращает `RawAsset` с предсказуемыми полями.
"""
from __future__ import annotations

import logging
from pathlib import Path

from rawconv.models.raw_model import RawAsset

logger = logging.getLogger("rawconv.files")


class RawFileService:
    def load_raw(self, file_path: str | Path) -> RawAsset:
        """Читает файл целиком и возвращает его вместе с именем.

        Args:
            file_path: Путь до файла.

        Returns:
            `RawAsset` с именем файла (без каталога) и его байтами.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            OSError: при ошибке чтения.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        data = path.read_bytes()
        logger.debug("read %d bytes from %s", len(data), path)
        return RawAsset(name=path.name, data=data)
