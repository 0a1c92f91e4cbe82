# どこで: `src/tricolorflow/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、描画側（点スプライト/残像/時間倍率）の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from tricolorflow.core.field_config import DEFAULT_CANVAS_SIZE

# フレーム時刻 [ms] * 0.00032 と同じ進み方にするための秒あたり倍率。
DEFAULT_TIME_SCALE = 0.32


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。

    Notes
    -----
    `trail_alpha` は毎フレーム背景色を重ねるときの alpha。1.0 で通常のクリア、
    小さいほど前フレームが残って残像が長くなる。
    """

    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    canvas_size: tuple[int, int] = DEFAULT_CANVAS_SIZE
    render_scale: float = 0.5
    point_size: float = 3.0
    alpha_test: float = 0.1
    trail_alpha: float = 0.05
    time_scale: float = DEFAULT_TIME_SCALE

    def __post_init__(self) -> None:
        w, h = self.canvas_size
        if int(w) <= 0 or int(h) <= 0:
            raise ValueError(f"canvas_size は正の (width, height) である必要がある: got={self.canvas_size!r}")
        if float(self.render_scale) <= 0:
            raise ValueError(f"render_scale は正の値である必要がある: got={self.render_scale!r}")
        if not 0.0 < float(self.trail_alpha) <= 1.0:
            raise ValueError(f"trail_alpha は (0, 1] である必要がある: got={self.trail_alpha!r}")
        object.__setattr__(self, "canvas_size", (int(w), int(h)))

    @property
    def window_size(self) -> tuple[int, int]:
        """ウィンドウのピクセルサイズを返す。"""

        w, h = self.canvas_size
        return int(w * self.render_scale), int(h * self.render_scale)
