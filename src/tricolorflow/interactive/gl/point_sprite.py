# どこで: `src/tricolorflow/interactive/gl/point_sprite.py`。
# 何を: 点スプライト用の円形テクスチャ（RGBA8）を numpy で生成する。
# なぜ: 四角い点を丸く見せるマスクを、GL コンテキストなしで作ってテストできるようにするため。

from __future__ import annotations

import numpy as np

DEFAULT_SPRITE_SIZE = 64


def build_circle_sprite(size: int = DEFAULT_SPRITE_SIZE) -> np.ndarray:
    """白い塗りつぶし円の RGBA 画像 shape (size, size, 4), uint8 を返す。

    Notes
    -----
    円はテクスチャに内接し、円外は alpha=0。縁は 1px 幅で alpha をなだらかに落とす。
    """

    n = int(size)
    if n <= 0:
        raise ValueError(f"size は正の値である必要がある: got={size!r}")
    radius = n / 2.0
    # ピクセル中心の座標で距離を測る。
    coords = np.arange(n, dtype=np.float64) + 0.5 - radius
    dist = np.sqrt(coords[None, :] ** 2 + coords[:, None] ** 2)
    coverage = np.clip(radius - dist + 0.5, 0.0, 1.0)

    out = np.zeros((n, n, 4), dtype=np.uint8)
    out[..., :3] = 255
    out[..., 3] = np.round(coverage * 255.0).astype(np.uint8)
    return out
