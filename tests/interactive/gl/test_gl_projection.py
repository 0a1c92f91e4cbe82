import numpy as np
import pytest

from tricolorflow.interactive.gl.utils import build_projection


def test_projection_maps_canvas_edges_to_clip_space():
    proj = build_projection(1080.0, 1920.0)
    assert proj.dtype == np.float32
    # ModernGL へは転置済みで渡すため、列ベクトル変換には .T を使う。
    m = proj.T.astype(np.float64)
    for (x, y), expected in [
        ((540.0, 960.0), (1.0, 1.0)),
        ((-540.0, -960.0), (-1.0, -1.0)),
        ((0.0, 0.0), (0.0, 0.0)),
    ]:
        clip = m @ np.array([x, y, 123.0, 1.0])
        assert clip[0] == pytest.approx(expected[0])
        assert clip[1] == pytest.approx(expected[1])
        assert clip[2] == 0.0
        assert clip[3] == 1.0


@pytest.mark.parametrize(("w", "h"), [(0.0, 10.0), (10.0, -1.0)])
def test_projection_rejects_non_positive_size(w, h):
    with pytest.raises(ValueError):
        build_projection(w, h)
