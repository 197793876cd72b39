from __future__ import annotations

from typing import Callable, Optional

import customtkinter as ctk

from rawconv.models.export_model import ExportFormat
from rawconv.ui.viewport import ZOOM_MAX, ZOOM_MIN, ZOOM_STEPS, clamp_zoom

FIT = "Fit"


class BottomBar(ctk.CTkFrame):
    """Масштаб предпросмотра (ползунок и ступени) и кнопки экспорта."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, height=56, **kwargs)

        self.on_zoom_change: Optional[Callable[[int], None]] = None
        self.on_zoom_preset: Optional[Callable[[int], None]] = None
        self.on_zoom_fit: Optional[Callable[[], None]] = None
        self.on_export: Optional[Callable[[ExportFormat], None]] = None

        self.grid_columnconfigure(1, weight=1)  # slider stretches

        self._zoom_label = ctk.CTkLabel(self, text="Масштаб")
        self._zoom_label.grid(row=0, column=0, padx=(10, 6), pady=8, sticky="w")

        self._zoom_slider = ctk.CTkSlider(
            self, from_=ZOOM_MIN, to=ZOOM_MAX, number_of_steps=ZOOM_MAX - ZOOM_MIN, command=self._on_slider_change
        )
        self._zoom_slider.set(100)
        self._zoom_slider.grid(row=0, column=1, padx=6, pady=8, sticky="ew")

        self._zoom_menu = ctk.CTkOptionMenu(
            self,
            values=[FIT] + [f"{step}%" for step in ZOOM_STEPS],
            width=96,
            command=self._on_zoom_choice,
        )
        self._zoom_menu.set("100%")
        self._zoom_menu.grid(row=0, column=2, padx=6, pady=8, sticky="w")

        self._png_btn = ctk.CTkButton(self, text="Сохранить PNG", width=130,
                                      command=lambda: self._emit_export(ExportFormat.PNG))
        self._jpg_btn = ctk.CTkButton(self, text="Сохранить JPG", width=130,
                                      command=lambda: self._emit_export(ExportFormat.JPEG))
        self._png_btn.grid(row=0, column=3, padx=6, pady=8, sticky="e")
        self._jpg_btn.grid(row=0, column=4, padx=(0, 10), pady=8, sticky="e")
        self.set_export_enabled(False)

    # public API (sync from controller)
    def set_zoom_percent(self, percent: int) -> None:
        self._zoom_slider.set(percent)
        self._zoom_menu.set(f"{percent}%")

    def set_export_enabled(self, enabled: bool) -> None:
        state = "normal" if enabled else "disabled"
        self._png_btn.configure(state=state)
        self._jpg_btn.configure(state=state)

    # events
    def _on_slider_change(self, value: float) -> None:
        percent = clamp_zoom(value)
        self._zoom_menu.set(f"{percent}%")
        if self.on_zoom_change:
            self.on_zoom_change(percent)

    def _on_zoom_choice(self, value: str) -> None:
        if value == FIT:
            if self.on_zoom_fit:
                self.on_zoom_fit()
            return
        if self.on_zoom_preset:
            self.on_zoom_preset(int(value.rstrip("%")))

    def _emit_export(self, fmt: ExportFormat) -> None:
        if self.on_export:
            self.on_export(fmt)
