"""Контроллер приложения: связывает UI с конвейером декодирования.

SOLID:
- SRP: класс управляет связями между UI и `PipelineCoordinator` (без логики декодирования).
- DIP: зависит от координатора и сервисов; конкретные виджеты получает извне.
Clean Code:
- Обработчики компактны; переходы состояния выполняет координатор.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from tkinter import filedialog, messagebox, TclError
from typing import Optional, Tuple

import customtkinter as ctk

from rawconv.controllers.pipeline import PipelineCoordinator
from rawconv.models.export_model import ExportFormat
from rawconv.models.layout import ChannelLayout
from rawconv.models.raw_model import RawAsset
from rawconv.models.session import (
    ExportRequested,
    FileSelected,
    HeightEdited,
    LayoutChanged,
    WidthEdited,
)
from rawconv.services.file_service import RawFileService
from rawconv.ui.image_viewer import ImageViewer
from rawconv.ui.sidebar import Sidebar
from rawconv.ui.bottom_bar import BottomBar

logger = logging.getLogger("rawconv.app")

READ_POLL_MS = 30


@dataclass
class AppController:
    """Связывает элементы UI с конвейером.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Чтение файла в фоновом потоке с билетом от координатора.
    - Перевод действий пользователя в события `PipelineCoordinator`.
    - Синхронизация панелей и предпросмотра с текущим сеансом.
    """
    viewer: ImageViewer
    sidebar: Sidebar
    bottom: BottomBar
    window: ctk.CTk

    _coordinator: PipelineCoordinator = field(default_factory=PipelineCoordinator)
    _file_service: RawFileService = field(default_factory=RawFileService)
    _executor: ThreadPoolExecutor = field(
        default_factory=lambda: ThreadPoolExecutor(max_workers=1, thread_name_prefix="raw-read")
    )

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами.

        Компоненты UI ничего не знают друг о друге, общаются через контроллер.
        """
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_layout_change = self._handle_layout_change
        self.sidebar.on_width_change = self._handle_width_change
        self.sidebar.on_height_change = self._handle_height_change

        self.viewer.on_cursor_move = self._handle_cursor_move
        self.viewer.on_zoom_change = self._handle_viewer_zoom_changed

        self.bottom.on_zoom_change = self._handle_zoom_preset
        self.bottom.on_zoom_preset = self._handle_zoom_preset
        self.bottom.on_zoom_fit = self._handle_zoom_fit
        self.bottom.on_export = self._handle_export

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите RAW-файл",
                filetypes=(
                    ("Raw files", "*.raw *.bin *.data"),
                    ("All files", "*.*"),
                ),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        ticket = self._coordinator.begin_read()
        future = self._executor.submit(self._file_service.load_raw, file_path)
        self._poll_read(ticket, future)

    def _poll_read(self, ticket: int, future: Future) -> None:
        # the session is only touched from the Tk main loop
        if not future.done():
            self.window.after(READ_POLL_MS, self._poll_read, ticket, future)
            return
        try:
            asset: RawAsset = future.result()
        except OSError as exc:
            logger.warning("read #%d failed: %s", ticket, exc)
            if self._coordinator.is_current(ticket):
                messagebox.showerror("Ошибка чтения", f"Не удалось прочитать файл: {exc}")
            return
        if not self._coordinator.is_current(ticket):
            logger.debug("read #%d superseded, view left as is", ticket)
            return

        self._coordinator.dispatch(FileSelected(asset=asset, generation=ticket))
        self._refresh(reset_view=True)

    def _handle_layout_change(self, label: str) -> None:
        self._coordinator.dispatch(LayoutChanged(ChannelLayout.from_label(label)))
        self._refresh(reset_view=True)

    def _handle_width_change(self, width: int) -> None:
        self._coordinator.dispatch(WidthEdited(width))
        self._refresh(reset_view=False)

    def _handle_height_change(self, height: int) -> None:
        self._coordinator.dispatch(HeightEdited(height))
        self._refresh(reset_view=False)

    def _handle_export(self, fmt: ExportFormat) -> None:
        try:
            result = self._coordinator.dispatch(ExportRequested(fmt))
        except (OSError, ValueError) as exc:
            logger.error("encoding %s failed: %s", fmt.pil_format, exc)
            messagebox.showerror("Ошибка кодирования", str(exc))
            return
        if result is None:
            return

        try:
            target = filedialog.asksaveasfilename(
                title="Сохранить как",
                initialfile=result.filename,
                defaultextension=f".{fmt.extension}",
                filetypes=((fmt.pil_format, f"*.{fmt.extension}"), ("All files", "*.*")),
            )
        except TclError:
            return
        if not target:
            return

        try:
            self._coordinator.exporter.save(result, target)
        except OSError as exc:
            messagebox.showerror("Ошибка сохранения", str(exc))

    def _handle_cursor_move(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        self.sidebar.update_cursor_info(x, y, rgba)

    def _handle_zoom_preset(self, zoom_percent: int) -> None:
        self.viewer.set_zoom_percent(zoom_percent)

    def _handle_viewer_zoom_changed(self, zoom_percent: int) -> None:
        # Ctrl+wheel and fit change the zoom inside the viewer
        self.bottom.set_zoom_percent(zoom_percent)

    def _handle_zoom_fit(self) -> None:
        self.viewer.set_zoom_to_fit()

    # ---- Helpers ----
    def _refresh(self, reset_view: bool) -> None:
        """Переносит текущий сеанс в панели и предпросмотр."""
        session = self._coordinator.session
        self.sidebar.set_session_info(session)

        pixels = session.pixels
        if pixels is None or pixels.is_empty:
            self.viewer.clear()
            self.bottom.set_export_enabled(False)
            return

        image = self._coordinator.exporter.to_image(pixels)
        self.viewer.set_image(image, keep_view=not reset_view)
        self.bottom.set_zoom_percent(self.viewer.get_zoom_percent())
        self.bottom.set_export_enabled(True)
