"""Виджет предпросмотра декодированного буфера.

Принципы:
- SRP: только отображение и чтение пикселя под курсором; геометрия в `viewport`.
- Пиксели увеличиваются без сглаживания (NEAREST), чтобы была видна сетка «сырых» данных.
"""
from __future__ import annotations

from typing import Callable, Optional, Tuple

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk

from rawconv.ui.viewport import clamp_zoom, fit_zoom, next_zoom_step, scaled_size, visible_tile


class ImageViewer(ctk.CTkFrame):
    """Канва с полосами прокрутки и перетаскиванием; масштаб задаётся в процентах."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        bg = "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"
        self._canvas = tk.Canvas(self, highlightthickness=0, bg=bg)
        self._vbar = ctk.CTkScrollbar(self, orientation="vertical", command=self._on_yview)
        self._hbar = ctk.CTkScrollbar(self, orientation="horizontal", command=self._on_xview)
        self._canvas.configure(xscrollcommand=self._hbar.set, yscrollcommand=self._vbar.set)
        self._canvas.grid(row=0, column=0, sticky="nsew")
        self._vbar.grid(row=0, column=1, sticky="ns")
        self._hbar.grid(row=1, column=0, sticky="ew")

        self._image: Optional[Image.Image] = None
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._zoom_percent: int = 100
        self._origin: Tuple[int, int] = (0, 0)

        self.on_cursor_move: Optional[Callable[[Optional[int], Optional[int], Optional[Tuple[int, int, int, int]]], None]] = None
        self.on_zoom_change: Optional[Callable[[int], None]] = None

        self._canvas.bind("<Configure>", lambda _e: self._render())
        self._canvas.bind("<Motion>", self._on_mouse_move)
        self._canvas.bind("<Leave>", lambda _e: self._emit_cursor(None, None, None))
        # Ctrl + wheel zooms, plain wheel scrolls
        self._canvas.bind("<Control-MouseWheel>", lambda e: self._step_zoom(1 if e.delta > 0 else -1))
        self._canvas.bind("<Control-Button-4>", lambda _e: self._step_zoom(1))
        self._canvas.bind("<Control-Button-5>", lambda _e: self._step_zoom(-1))
        self._canvas.bind("<MouseWheel>", lambda e: self._on_yview("scroll", -1 if e.delta > 0 else 1, "units"))
        self._canvas.bind("<Button-4>", lambda _e: self._on_yview("scroll", -1, "units"))
        self._canvas.bind("<Button-5>", lambda _e: self._on_yview("scroll", 1, "units"))

        # Panning with left mouse drag
        self._canvas.bind("<ButtonPress-1>", self._on_pan_start)
        self._canvas.bind("<B1-Motion>", self._on_pan_move)

    # ---- Public API ----
    def set_image(self, image: Image.Image, keep_view: bool = False) -> None:
        """Показывает изображение; без `keep_view` подбирает масштаб под окно."""
        self._image = image if image.mode == "RGBA" else image.convert("RGBA")
        if keep_view:
            self._render()
        else:
            self.set_zoom_to_fit()

    def clear(self) -> None:
        self._image = None
        self._photo = None
        self._canvas.delete("all")
        self._canvas.configure(scrollregion=(0, 0, 0, 0))

    def set_zoom_to_fit(self) -> None:
        if self._image is None:
            return
        view = (self._canvas.winfo_width(), self._canvas.winfo_height())
        self._canvas.xview_moveto(0)
        self._canvas.yview_moveto(0)
        self.set_zoom_percent(fit_zoom(self._image.size, view))

    def set_zoom_percent(self, zoom_percent: float) -> None:
        self._zoom_percent = clamp_zoom(zoom_percent)
        self._render()
        if self.on_zoom_change:
            self.on_zoom_change(self._zoom_percent)

    def get_zoom_percent(self) -> int:
        return self._zoom_percent

    # ---- Internals ----
    def _render(self) -> None:
        self._canvas.delete("all")
        if self._image is None:
            return
        view_w = self._canvas.winfo_width()
        view_h = self._canvas.winfo_height()
        full_w, full_h = scaled_size(self._image.size, self._zoom_percent)

        # center when the image is smaller than the canvas
        x = max(0, (view_w - full_w) // 2)
        y = max(0, (view_h - full_h) // 2)
        self._origin = (x, y)
        self._canvas.configure(scrollregion=(0, 0, x + full_w, y + full_h))

        view_origin = (self._canvas.canvasx(0) - x, self._canvas.canvasy(0) - y)
        tile = visible_tile(self._image.size, self._zoom_percent, view_origin, (view_w, view_h))
        if tile is None:
            self._photo = None
            return
        part = self._image.crop(tile.box).resize(tile.size, Image.Resampling.NEAREST)
        self._photo = ImageTk.PhotoImage(part)
        self._canvas.create_image(x + tile.offset[0], y + tile.offset[1], image=self._photo, anchor="nw")

    def _on_xview(self, *args) -> None:
        self._canvas.xview(*args)
        self._render()

    def _on_yview(self, *args) -> None:
        self._canvas.yview(*args)
        self._render()

    def _on_pan_start(self, event: tk.Event) -> None:
        self._canvas.focus_set()
        self._canvas.scan_mark(event.x, event.y)

    def _on_pan_move(self, event: tk.Event) -> None:
        if self._image is None:
            return
        self._canvas.scan_dragto(event.x, event.y, gain=1)
        self._render()

    def _step_zoom(self, direction: int) -> None:
        if self._image is None:
            return
        self.set_zoom_percent(next_zoom_step(self._zoom_percent, direction))

    def _on_mouse_move(self, event: tk.Event) -> None:
        if self._image is None:
            return
        scale = self._zoom_percent / 100.0
        cx = self._canvas.canvasx(event.x) - self._origin[0]
        cy = self._canvas.canvasy(event.y) - self._origin[1]
        x, y = int(cx // scale), int(cy // scale)
        img_w, img_h = self._image.size
        if 0 <= x < img_w and 0 <= y < img_h:
            self._emit_cursor(x, y, self._image.getpixel((x, y)))
        else:
            self._emit_cursor(None, None, None)

    def _emit_cursor(self, x: Optional[int], y: Optional[int], rgba: Optional[Tuple[int, int, int, int]]) -> None:
        if self.on_cursor_move:
            self.on_cursor_move(x, y, rgba)
