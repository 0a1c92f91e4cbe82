"""
どこで: `src/tricolorflow/core/catmull_rom.py`。
何を: 制御点列を厳密に通過する Catmull-Rom 曲線と、その等間隔パラメータサンプリングを提供する。
なぜ: 5 つの制御点から滑らかな線を作る処理を、描画ライブラリに依存しない純関数として持つため。
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

CURVE_TYPES = ("centripetal", "chordal", "catmullrom")

# 隣接制御点がほぼ重なるときの区間長の下限。
_MIN_SEGMENT_DT = 1e-4


@dataclass(frozen=True, slots=True)
class CatmullRomCurve:
    """開いた Catmull-Rom 曲線。

    Parameters
    ----------
    points : np.ndarray
        shape (M, 3) の制御点。M >= 2。
    curve_type : str, default "centripetal"
        `"centripetal"`（距離^0.5 のノット間隔）、`"chordal"`（距離）、
        `"catmullrom"`（一様、`tension` を使用）。
    tension : float, default 0.5
        `curve_type="catmullrom"` のときの接線係数。

    Notes
    -----
    端点の外側には `2*P0 - P1` / `2*P[-1] - P[-2]` の仮想点を置いて、
    最初と最後の区間も内部区間と同じ式で扱う。
    """

    points: np.ndarray
    curve_type: str = "centripetal"
    tension: float = 0.5

    def __post_init__(self) -> None:
        pts = np.asarray(self.points, dtype=np.float64)
        if pts.ndim == 2 and pts.shape[1] == 2:
            # 2D 入力は z=0 を補完して (M,3) に揃える。
            pts = np.concatenate([pts, np.zeros((pts.shape[0], 1), dtype=np.float64)], axis=1)
        if pts.ndim != 2 or pts.shape[1] != 3:
            raise ValueError("points は shape (M,3) の 2 次元配列である必要がある")
        if pts.shape[0] < 2:
            raise ValueError("points は少なくとも 2 点必要")
        if self.curve_type not in CURVE_TYPES:
            raise ValueError(f"未対応の curve_type: {self.curve_type!r}")
        pts = pts.copy()
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)
        object.__setattr__(self, "tension", float(self.tension))

    def coefficients(self) -> np.ndarray:
        """区間ごとの 3 次多項式係数 shape (M-1, 4, 3) を返す（c0 + c1 s + c2 s^2 + c3 s^3）。"""

        pts = self.points
        ext = np.concatenate(
            [
                (2.0 * pts[0] - pts[1])[None, :],
                pts,
                (2.0 * pts[-1] - pts[-2])[None, :],
            ],
            axis=0,
        )
        x0 = ext[:-3]
        x1 = ext[1:-2]
        x2 = ext[2:-1]
        x3 = ext[3:]

        if self.curve_type == "catmullrom":
            t1 = self.tension * (x2 - x0)
            t2 = self.tension * (x3 - x1)
        else:
            power = 0.25 if self.curve_type == "centripetal" else 0.5
            dt0 = np.power(np.sum((x1 - x0) ** 2, axis=1), power)
            dt1 = np.power(np.sum((x2 - x1) ** 2, axis=1), power)
            dt2 = np.power(np.sum((x3 - x2) ** 2, axis=1), power)

            dt1 = np.where(dt1 < _MIN_SEGMENT_DT, 1.0, dt1)
            dt0 = np.where(dt0 < _MIN_SEGMENT_DT, dt1, dt0)
            dt2 = np.where(dt2 < _MIN_SEGMENT_DT, dt1, dt2)

            d0 = dt0[:, None]
            d1 = dt1[:, None]
            d2 = dt2[:, None]
            # 非一様 Catmull-Rom の接線を [0,1] 区間へ正規化する。
            t1 = (x1 - x0) / d0 - (x2 - x0) / (d0 + d1) + (x2 - x1) / d1
            t2 = (x2 - x1) / d1 - (x3 - x1) / (d1 + d2) + (x3 - x2) / d2
            t1 = t1 * d1
            t2 = t2 * d1

        c0 = x1
        c1 = t1
        c2 = -3.0 * x1 + 3.0 * x2 - 2.0 * t1 - t2
        c3 = 2.0 * x1 - 2.0 * x2 + t1 + t2
        return np.stack([c0, c1, c2, c3], axis=1)

    def evaluate(self, u: np.ndarray) -> np.ndarray:
        """曲線パラメータ u∈[0,1] の配列に対する点列 shape (K,3) を返す。"""

        u_arr = np.clip(np.asarray(u, dtype=np.float64).reshape(-1), 0.0, 1.0)
        m = self.points.shape[0]
        p = (m - 1) * u_arr
        idx = np.floor(p).astype(np.int64)
        weight = p - idx
        # u=1 は最後の区間の終端（weight=1）として扱う。
        last = idx >= m - 1
        idx[last] = m - 2
        weight[last] = 1.0

        coeffs = self.coefficients()[idx]
        s = weight[:, None]
        return coeffs[:, 0] + s * (coeffs[:, 1] + s * (coeffs[:, 2] + s * coeffs[:, 3]))

    def get_points(self, divisions: int) -> np.ndarray:
        """パラメータを `divisions` 等分した `divisions + 1` 点を返す。"""

        d = int(divisions)
        if d < 0:
            raise ValueError(f"divisions は 0 以上である必要がある: got={divisions!r}")
        if d == 0:
            return self.evaluate(np.zeros((1,), dtype=np.float64))
        return self.evaluate(np.arange(d + 1, dtype=np.float64) / float(d))


__all__ = ["CURVE_TYPES", "CatmullRomCurve"]
