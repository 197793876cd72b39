"""Боковая панель: открытие файла, информация, раскладка и размеры.

Принципы:
- SRP: управляет только UI параметров, не содержит декодирования.
- ISP: события наружу через `on_*`, синхронизация из контроллера через `set_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk

from rawconv.models.layout import ChannelLayout
from rawconv.models.session import Session


def _format_size(size_bytes: int) -> str:
    """Человекочитаемый размер файла."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    if size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    return f"{size_bytes / (1024 * 1024):.1f} MB"


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, раскладка, размеры."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)
        self.grid_columnconfigure(1, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_layout_change: Optional[Callable[[str], None]] = None
        self.on_width_change: Optional[Callable[[int], None]] = None
        self.on_height_change: Optional[Callable[[int], None]] = None

        # File
        self._title = ctk.CTkLabel(self, text="Файл", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть RAW-файл…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, columnspan=2, padx=8, pady=(0, 8), sticky="ew")

        self._name_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._info_name = ctk.CTkLabel(self, textvariable=self._name_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_name.grid(row=2, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=3, column=0, columnspan=2, padx=8, pady=(0, 10), sticky="ew")

        # Layout
        self._layout_title = ctk.CTkLabel(self, text="Формат пикселя", font=ctk.CTkFont(size=16, weight="bold"))
        self._layout_title.grid(row=4, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._layout_menu = ctk.CTkOptionMenu(self, values=list(ChannelLayout.labels()), command=self._on_layout_change)
        self._layout_menu.set(ChannelLayout.GRAYSCALE.label)
        self._layout_menu.grid(row=5, column=0, columnspan=2, padx=8, pady=(0, 10), sticky="ew")

        # Dimensions
        self._dims_title = ctk.CTkLabel(self, text="Размеры", font=ctk.CTkFont(size=16, weight="bold"))
        self._dims_title.grid(row=6, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._width_val = ctk.StringVar(value="0")
        self._height_val = ctk.StringVar(value="0")
        self._width_label = ctk.CTkLabel(self, text="Ширина:")
        self._height_label = ctk.CTkLabel(self, text="Высота:")
        self._width_entry = ctk.CTkEntry(self, textvariable=self._width_val, width=100)
        self._height_entry = ctk.CTkEntry(self, textvariable=self._height_val, width=100)
        self._width_label.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="w")
        self._height_label.grid(row=7, column=1, padx=8, pady=(0, 2), sticky="w")
        self._width_entry.grid(row=8, column=0, padx=8, pady=(0, 4), sticky="w")
        self._height_entry.grid(row=8, column=1, padx=8, pady=(0, 4), sticky="w")
        self._width_entry.bind("<Return>", self._on_width_commit)
        self._width_entry.bind("<FocusOut>", self._on_width_commit)
        self._height_entry.bind("<Return>", self._on_height_commit)
        self._height_entry.bind("<FocusOut>", self._on_height_commit)

        self._decoded_val = ctk.StringVar(value="—")
        self._info_decoded = ctk.CTkLabel(self, textvariable=self._decoded_val, anchor="w", justify="left")
        self._info_decoded.grid(row=9, column=0, columnspan=2, padx=8, pady=(4, 10), sticky="ew")

        # Cursor section
        self._cursor_title = ctk.CTkLabel(self, text="Курсор", font=ctk.CTkFont(size=16, weight="bold"))
        self._cursor_title.grid(row=10, column=0, columnspan=2, padx=8, pady=(8, 4), sticky="w")

        self._cursor_xy_val = ctk.StringVar(value="—")
        self._cursor_rgba_val = ctk.StringVar(value="—")
        self._cursor_xy = ctk.CTkLabel(self, textvariable=self._cursor_xy_val, anchor="w", justify="left")
        self._cursor_rgba = ctk.CTkLabel(self, textvariable=self._cursor_rgba_val, anchor="w", justify="left")
        self._cursor_xy.grid(row=11, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")
        self._cursor_rgba.grid(row=12, column=0, columnspan=2, padx=8, pady=(0, 2), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        # последние применённые значения, чтобы не слать повторные события
        self._committed_width = 0
        self._committed_height = 0

    # ---- Public API ----
    def set_session_info(self, session: Session) -> None:
        """Обновляет все поля панели по текущему сеансу."""
        if session.asset is None:
            self._name_val.set("—")
            self._size_val.set("—")
        else:
            self._name_val.set(f"Файл: {session.asset.name}")
            self._size_val.set(f"Размер: {_format_size(session.asset.size)} ({session.asset.size} байт)")

        self._layout_menu.set(session.layout.label)
        self.set_dimensions(session.width, session.height)

        pixels = session.pixels
        if pixels is None:
            self._decoded_val.set("—")
        else:
            needed = session.decode_request().byte_count
            available = session.asset.size if session.asset is not None else 0
            note = "" if available >= needed else f", дополнено {needed - available} байт"
            self._decoded_val.set(f"Декодировано: {pixels.width}×{pixels.height}{note}")

    def update_cursor_info(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        """Показывает координаты под курсором и RGBA пикселя буфера."""
        if x is None or y is None or rgba is None:
            self._cursor_xy_val.set("—")
            self._cursor_rgba_val.set("—")
            return
        r, g, b, a = rgba
        self._cursor_xy_val.set(f"X: {x}  Y: {y}")
        self._cursor_rgba_val.set(f"RGBA: {r}, {g}, {b}, {a}  #{r:02X}{g:02X}{b:02X}")

    def set_dimensions(self, width: int, height: int) -> None:
        self._committed_width = width
        self._committed_height = height
        self._width_val.set(str(width))
        self._height_val.set(str(height))

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _on_layout_change(self, value: str) -> None:
        if self.on_layout_change:
            self.on_layout_change(value)

    def _on_width_commit(self, _event=None) -> None:
        value = self._parse_int(self._width_val.get())
        if value is None:
            self._width_val.set(str(self._committed_width))
            return
        if value == self._committed_width:
            return
        self._committed_width = value
        if self.on_width_change:
            self.on_width_change(value)

    def _on_height_commit(self, _event=None) -> None:
        value = self._parse_int(self._height_val.get())
        if value is None:
            self._height_val.set(str(self._committed_height))
            return
        if value == self._committed_height:
            return
        self._committed_height = value
        if self.on_height_change:
            self.on_height_change(value)

    @staticmethod
    def _parse_int(text: str) -> Optional[int]:
        try:
            return int(text.strip())
        except ValueError:
            return None
