import numpy as np
import pytest

from tricolorflow.interactive.gl.point_mesh import PointMesh, interleave_vertices


class _FakeBuffer:
    def __init__(self, reserve: int) -> None:
        self.size = int(reserve)
        self.data = b""
        self.released = False

    def orphan(self) -> None:
        self.data = b""

    def write(self, data) -> None:
        self.data = bytes(np.asarray(data).tobytes())

    def release(self) -> None:
        self.released = True


class _FakeVertexArray:
    def __init__(self, content) -> None:
        self.content = content
        self.released = False

    def release(self) -> None:
        self.released = True


class _FakeContext:
    def __init__(self) -> None:
        self.buffers: list[_FakeBuffer] = []

    def buffer(self, *, reserve: int, dynamic: bool) -> _FakeBuffer:
        assert dynamic
        buf = _FakeBuffer(reserve)
        self.buffers.append(buf)
        return buf

    def vertex_array(self, program, content) -> _FakeVertexArray:
        return _FakeVertexArray(content)


def test_interleave_vertices_packs_float32_rows():
    pos = np.array([[1.0, 2.0, 0.0], [3.0, 4.0, 0.0]])
    col = np.array([[1.0, 0.6, 0.2], [0.0, 0.5, 0.0]])
    out = interleave_vertices(pos, col)
    assert out.dtype == np.float32
    assert out.shape == (2, 6)
    np.testing.assert_allclose(out[:, :3], pos)
    np.testing.assert_allclose(out[:, 3:], col, rtol=1e-6)


def test_interleave_vertices_rejects_mismatch():
    with pytest.raises(ValueError):
        interleave_vertices(np.zeros((3, 3)), np.zeros((2, 3)))
    with pytest.raises(ValueError):
        interleave_vertices(np.zeros((3, 2)), np.zeros((3, 2)))


def test_point_mesh_uploads_and_grows_buffer():
    ctx = _FakeContext()
    mesh = PointMesh(ctx, program=object(), initial_reserve=64)
    assert mesh.vertex_count == 0

    mesh.upload(np.zeros((2, 3)), np.ones((2, 3)))
    assert mesh.vertex_count == 2
    assert len(ctx.buffers) == 1
    first_vao = mesh.vao

    # 2 * 6 * 4 = 48 bytes は収まる、100 点は収まらないので再確保する。
    mesh.upload(np.zeros((100, 3)), np.ones((100, 3)))
    assert mesh.vertex_count == 100
    assert len(ctx.buffers) == 2
    assert ctx.buffers[0].released
    assert first_vao.released
    assert mesh.vbo.size == 100 * 6 * 4
    assert len(mesh.vbo.data) == 100 * 6 * 4

    mesh.release()
    assert mesh.vbo.released
    assert mesh.vao.released
