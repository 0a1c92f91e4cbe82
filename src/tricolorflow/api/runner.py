"""
どこで: `src/tricolorflow/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL のウィンドウを開き、曲線場を毎フレーム生成して点群として描画し続ける。
なぜ: `main.py` を実行して実際のアニメーションをプレビューできる経路を用意するため。
"""

from __future__ import annotations

from pathlib import Path

import pyglet

from tricolorflow.core.field_config import FieldConfig
from tricolorflow.core.noise import Noise2D, PerlinNoise2D
from tricolorflow.core.runtime_config import runtime_config, set_config_path
from tricolorflow.interactive.render_settings import DEFAULT_TIME_SCALE, RenderSettings
from tricolorflow.interactive.runtime.field_window_system import FieldWindowSystem
from tricolorflow.interactive.runtime.window_loop import FrameLoop


def run(
    config: FieldConfig | None = None,
    *,
    canvas_size: tuple[int, int] = (1080, 1920),
    render_scale: float = 0.5,
    background_color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    point_size: float = 3.0,
    trail_alpha: float = 0.05,
    time_scale: float = DEFAULT_TIME_SCALE,
    noise_seed: float = 0,
    noise: Noise2D | None = None,
    fps: float = 60.0,
    config_path: str | Path | None = None,
) -> None:
    """pyglet ウィンドウを生成し、曲線場をリアルタイム描画する。

    Parameters
    ----------
    config : FieldConfig | None
        ジェネレータ設定。None の場合は `FieldConfig.from_canvas(*canvas_size)`。
    canvas_size : tuple[int, int]
        キャンバス寸法（ワールド単位、中心原点）。
    render_scale : float
        キャンバス寸法に掛けるウィンドウのピクセル倍率。
    background_color : tuple[float, float, float]
        背景色 RGB。
    point_size : float
        点スプライトの大きさ [px]（render_scale 倍される）。
    trail_alpha : float
        毎フレーム背景色を重ねる alpha。1.0 で残像なし。
    time_scale : float
        経過秒に掛ける倍率。既定 0.32（= フレーム時刻 [ms] * 0.00032）。
    noise_seed : float
        `noise` 未指定時に使う Perlin ノイズの seed。
    noise : Noise2D | None
        `(x, y) -> float` のノイズ場。指定時は noise_seed を無視する。
    fps : float
        目標フレームレート。`<=0` の場合はスロットリングしない。
    config_path : str | Path | None
        実行時設定 YAML の明示パス。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    if config_path is not None:
        set_config_path(config_path)
    cfg = runtime_config()

    # vsync はウィンドウ作成時に参照されるため、ここで固定しておく。
    pyglet.options["vsync"] = True

    settings = RenderSettings(
        background_color=background_color,
        canvas_size=canvas_size,
        render_scale=render_scale,
        point_size=point_size,
        trail_alpha=trail_alpha,
        time_scale=time_scale,
    )
    field_config = config if config is not None else FieldConfig.from_canvas(*settings.canvas_size)
    noise_fn = noise if noise is not None else PerlinNoise2D(seed=noise_seed)

    system = FieldWindowSystem(
        field_config,
        settings=settings,
        noise=noise_fn,
    )
    system.window.set_location(*cfg.window_pos_draw)

    loop = FrameLoop(system.window, system.draw_frame, fps=fps)
    try:
        loop.run()
    finally:
        # 例外でも確実に後始末する。
        system.close()
