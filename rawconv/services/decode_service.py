from __future__ import annotations

import logging
from typing import Union

import numpy as np

from rawconv.models.layout import ChannelLayout
from rawconv.models.raw_model import DecodeRequest, PixelBuffer

logger = logging.getLogger("rawconv.decode")

BytesLike = Union[bytes, bytearray, memoryview]


class DecodeService:
    def decode(self, data: BytesLike, layout: ChannelLayout, width: int, height: int) -> PixelBuffer:
        """
        Раскладывает сырые байты в RGBA-буфер размера width x height.
        Пиксель i читается со смещения i * bpp, строки идут подряд.
        Недостающие байты дополняются: 0 для R/G/B, 255 для альфы RGBA.
        Ошибок по границам не бывает: декодирование определено для любых входов.
        """
        return self.decode_request(data, DecodeRequest(layout=layout, width=width, height=height))

    def decode_request(self, data: BytesLike, request: DecodeRequest) -> PixelBuffer:
        src = np.frombuffer(data, dtype=np.uint8)
        count = request.pixel_count
        bpp = request.layout.bytes_per_pixel

        samples = self._padded_samples(src, count, bpp)
        rgba = np.empty((count, 4), dtype=np.uint8)

        if request.layout is ChannelLayout.GRAYSCALE:
            rgba[:, 0:3] = samples[:, 0:1]
            rgba[:, 3] = 255
        elif request.layout is ChannelLayout.RGB:
            rgba[:, 0:3] = samples
            rgba[:, 3] = 255
        else:
            rgba[:] = samples
            # байт альфы пикселя i есть только при i < len(data) // 4
            rgba[src.size // 4:, 3] = 255

        pixels = rgba.reshape(request.height, request.width, 4)
        pixels.setflags(write=False)
        if src.size < request.byte_count:
            logger.debug(
                "padded %d missing bytes for %dx%d %s",
                request.byte_count - src.size, request.width, request.height, request.layout.value,
            )
        return PixelBuffer(width=request.width, height=request.height, pixels=pixels)

    # ---------- Вспомогательные функции ----------
    def _padded_samples(self, src: np.ndarray, count: int, bpp: int) -> np.ndarray:
        """
        Возвращает массив (count, bpp) из первых count*bpp байт источника,
        дополненный нулями, если источник короче.
        """
        needed = count * bpp
        padded = np.zeros(needed, dtype=np.uint8)
        available = min(int(src.size), needed)
        padded[:available] = src[:available]
        return padded.reshape(count, bpp)
