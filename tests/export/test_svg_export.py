"""SVG export（`tricolorflow.export.svg.export_svg`）のテスト。"""

from __future__ import annotations

import xml.etree.ElementTree as ET

import numpy as np
import pytest

from tricolorflow.core.curve_field import LineFrame, generate_field
from tricolorflow.core.field_config import FieldConfig
from tricolorflow.core.runtime_config import set_config_path
from tricolorflow.export.svg import default_svg_output_path, export_svg

_SVG_NS = "http://www.w3.org/2000/svg"
_NS = {"svg": _SVG_NS}


def _frame(
    *,
    index: int = 0,
    positions: list[list[float]],
    colors: list[list[float]],
    opacity: float = 1.0,
) -> LineFrame:
    return LineFrame(
        index=index,
        positions=np.asarray(positions, dtype=np.float64),
        colors=np.asarray(colors, dtype=np.float64),
        opacity=opacity,
    )


def _parse_svg(text: str) -> ET.Element:
    root = ET.fromstring(text)
    assert root.tag == f"{{{_SVG_NS}}}svg"
    return root


def test_export_svg_writes_valid_svg(tmp_path) -> None:
    frames = [
        _frame(
            index=3,
            positions=[[0.0, 0.0, 0.0], [-50.0, 100.0, 0.0]],
            colors=[[1.0, 0.6, 0.2], [1.0, 1.0, 1.0]],
            opacity=0.5,
        )
    ]
    out_path = tmp_path / "nested" / "out.svg"

    returned = export_svg(frames, out_path, canvas_size=(100, 200), point_radius=2.0)
    assert returned == out_path
    assert out_path.exists()

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    assert root.attrib["viewBox"] == "0 0 100 200"
    assert root.attrib["width"] == "100"
    assert root.attrib["height"] == "200"

    rects = root.findall("svg:rect", _NS)
    assert len(rects) == 1
    assert rects[0].attrib["fill"] == "#000000"

    groups = root.findall("svg:g", _NS)
    assert len(groups) == 1
    assert groups[0].attrib["data-line"] == "3"
    assert groups[0].attrib["opacity"] == "0.500"

    circles = groups[0].findall("svg:circle", _NS)
    assert len(circles) == 2
    # 中心原点・y 上向きから左上原点・y 下向きへ変換される。
    assert (circles[0].attrib["cx"], circles[0].attrib["cy"]) == ("50.000", "100.000")
    assert (circles[1].attrib["cx"], circles[1].attrib["cy"]) == ("0.000", "0.000")
    assert circles[0].attrib["r"] == "2.000"
    assert circles[0].attrib["fill"] == "#FF9933"
    assert circles[1].attrib["fill"] == "#FFFFFF"


def test_export_svg_clamps_opacity_and_omits_background(tmp_path) -> None:
    frames = [
        _frame(positions=[[0.0, 0.0, 0.0]], colors=[[0.0, 0.0, 0.0]], opacity=1.25),
        _frame(index=1, positions=[[0.0, 0.0, 0.0]], colors=[[0.0, 0.0, 0.0]], opacity=-0.1),
    ]
    out_path = tmp_path / "out.svg"
    export_svg(frames, out_path, canvas_size=(10, 10), background_color=None)

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    assert root.findall("svg:rect", _NS) == []
    groups = root.findall("svg:g", _NS)
    assert [g.attrib["opacity"] for g in groups] == ["1.000", "0.000"]


def test_export_svg_writes_generated_field(tmp_path) -> None:
    config = FieldConfig(line_count=4, segment_count=20)
    frames = generate_field(0.5, config)
    out_path = tmp_path / "field.svg"
    export_svg(frames, out_path, canvas_size=(1080, 1920))

    root = _parse_svg(out_path.read_text(encoding="utf-8"))
    groups = root.findall("svg:g", _NS)
    assert [g.attrib["data-line"] for g in groups] == ["0", "1", "2", "3"]
    for g in groups:
        assert len(g.findall("svg:circle", _NS)) == 20


def test_export_svg_is_deterministic(tmp_path) -> None:
    frames = [
        _frame(
            positions=[[-0.0001, 0.0, 0.0], [10.0, 20.0, 0.0]],
            colors=[[0.1, 0.2, 0.3], [0.1, 0.2, 0.3]],
        )
    ]

    a = tmp_path / "a.svg"
    b = tmp_path / "b.svg"
    export_svg(frames, a, canvas_size=(100, 100))
    export_svg(frames, b, canvas_size=(100, 100))

    assert a.read_bytes() == b.read_bytes()
    assert "-0.000" not in a.read_text(encoding="utf-8")


@pytest.mark.parametrize("canvas_size", [None, (0, 100), (100, -5)])
def test_export_svg_rejects_invalid_canvas_size(tmp_path, canvas_size) -> None:
    frames = [_frame(positions=[[0.0, 0.0, 0.0]], colors=[[0.0, 0.0, 0.0]])]
    with pytest.raises(ValueError):
        export_svg(frames, tmp_path / "out.svg", canvas_size=canvas_size)


def test_default_svg_output_path_uses_output_dir(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    set_config_path(None)
    try:
        path = default_svg_output_path(stem="flow")
        assert path.parts[:3] == ("data", "output", "svg")
        assert path.name == "flow.svg"

        auto = default_svg_output_path()
        assert auto.name.startswith("tricolorflow_")
        assert auto.suffix == ".svg"
    finally:
        set_config_path(None)
