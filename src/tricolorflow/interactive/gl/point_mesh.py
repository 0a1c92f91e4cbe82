"""
どこで: `src/tricolorflow/interactive/gl/point_mesh.py`。
何を: 1 本の線の点群（位置 + 色）を載せる VBO/VAO の確保・更新・解放を担当する。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

# 1 頂点 = 位置 3 float + 色 3 float。
VERTEX_FORMAT = "3f 3f"
VERTEX_ATTRIBUTES = ("in_vert", "in_color")
FLOATS_PER_VERTEX = 6


def interleave_vertices(positions: np.ndarray, colors: np.ndarray) -> np.ndarray:
    """positions (N,3) と colors (N,3) を float32 の (N,6) 配列へ詰めて返す。"""
    pos = np.asarray(positions)
    col = np.asarray(colors)
    if pos.ndim != 2 or pos.shape[1] != 3 or pos.shape != col.shape:
        raise ValueError("positions と colors は同じ shape (N,3) である必要がある")
    out = np.empty((pos.shape[0], FLOATS_PER_VERTEX), dtype=np.float32)
    out[:, :3] = pos
    out[:, 3:] = col
    return out


class PointMesh:
    """
    GPUに点群の頂点データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 1 本の線は数百点程度なので小さく確保し、必要に応じて自動拡張する。
        initial_reserve: int = 64 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: 点スプライト用のシェーダープログラム（in_vert / in_color を持つ）
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)

        self.vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [(self.vbo, VERTEX_FORMAT, *VERTEX_ATTRIBUTES)],
        )

    # ---------- バッファ操作 ----------
    def _ensure_capacity(self, vbo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        if vbo_size <= self.vbo.size:
            return
        self.vbo.release()
        self.vbo = self.ctx.buffer(reserve=max(vbo_size, self.initial_reserve), dynamic=True)
        # VAO は VBO が差し替わるときだけ張り直す。
        self.vao.release()
        self.vao = self._build_vao()

    def upload(self, positions: np.ndarray, colors: np.ndarray) -> None:
        """実際にデータをGPUへ送り込む"""
        vertices = interleave_vertices(positions, colors)
        self._ensure_capacity(vertices.nbytes)

        self.vbo.orphan()
        self.vbo.write(vertices)
        self.vertex_count = int(vertices.shape[0])

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.vao.release()
