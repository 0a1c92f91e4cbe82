# どこで: `src/tricolorflow/__init__.py`。
# 何を: ルート `tricolorflow` パッケージを定義し、曲線場ジェネレータと run を公開する。
# なぜ: import 起点を `tricolorflow` に統一するため。

from __future__ import annotations

from tricolorflow.api import run
from tricolorflow.core.color_zones import ColorZones
from tricolorflow.core.curve_field import (
    LineBuffers,
    LineFrame,
    allocate_field_buffers,
    generate_field,
    generate_line,
)
from tricolorflow.core.field_config import AmplitudeParams, FieldConfig, OpacityParams
from tricolorflow.core.noise import PerlinNoise2D
from tricolorflow.export.svg import export_svg

__all__ = [
    "AmplitudeParams",
    "ColorZones",
    "FieldConfig",
    "LineBuffers",
    "LineFrame",
    "OpacityParams",
    "PerlinNoise2D",
    "allocate_field_buffers",
    "export_svg",
    "generate_field",
    "generate_line",
    "run",
]
