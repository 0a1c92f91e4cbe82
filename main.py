"""
どこで: リポジトリ直下 `main.py`。
何を: 既定設定（1080x1920 キャンバス, 30 本 x 100 点）で曲線場アニメーションを表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

from tricolorflow import ColorZones, FieldConfig, run

CANVAS_WIDTH = 1080
CANVAS_HEIGHT = 1920


if __name__ == "__main__":
    config = FieldConfig.from_canvas(
        CANVAS_WIDTH,
        CANVAS_HEIGHT,
        line_count=30,
        segment_count=100,
        zones=ColorZones(left_solid=0.28, left_blend=0.15, center_white=0.02, right_blend=0.15),
    )
    print(f"right_solid = {config.zones.right_solid:.2f}")
    run(
        config,
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        render_scale=0.5,
        trail_alpha=0.05,
    )
