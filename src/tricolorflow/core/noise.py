"""2 次元 Perlin（勾配）ノイズ。曲線中間点の縦方向変位の元になる連続な擬似乱数場。"""

from __future__ import annotations

import math
from typing import Callable

import numpy as np
from numba import njit  # type: ignore[import-untyped]

Noise2D = Callable[[float, float], float]

# Ken Perlin improved noise の標準置換テーブル。
_PERM_256 = [
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
]

# 2D では z 成分を使わない（x, y 成分のみで内積を取る）。
_GRAD3_12 = [
    [1, 1, 0],
    [-1, 1, 0],
    [1, -1, 0],
    [-1, -1, 0],
    [1, 0, 1],
    [-1, 0, 1],
    [1, 0, -1],
    [-1, 0, -1],
    [0, 1, 1],
    [0, -1, 1],
    [0, 1, -1],
    [0, -1, -1],
]

NOISE_GRADIENTS_3D = np.asarray(_GRAD3_12, dtype=np.float64)


def build_permutation(seed: float = 0) -> np.ndarray:
    """seed から長さ 512 の置換テーブル（int32）を作って返す。

    Notes
    -----
    seed が (0, 1) の小数なら 65536 倍してから整数化する。
    256 未満の seed は上位バイトへ複製し、奇数/偶数 index で別バイトを XOR する。
    seed=0 のときは標準テーブルそのものになる。
    """

    s = float(seed)
    if 0.0 < s < 1.0:
        s *= 65536.0
    s_i = int(math.floor(s))
    if s_i < 256:
        s_i |= s_i << 8

    base = np.asarray(_PERM_256, dtype=np.int32)
    out = np.empty((512,), dtype=np.int32)
    for i in range(256):
        if i & 1:
            v = int(base[i]) ^ (s_i & 255)
        else:
            v = int(base[i]) ^ ((s_i >> 8) & 255)
        out[i] = v
        out[i + 256] = v
    return out


@njit(fastmath=True, cache=True)
def fade(t):
    """Perlin ノイズ用のフェード関数。"""
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit(fastmath=True, cache=True)
def lerp(a, b, t):
    """線形補間。"""
    return (1 - t) * a + t * b


@njit(fastmath=True, cache=True)
def grad2(hash_val, x, y, grad3_array):
    """勾配ベクトルと (x, y) の内積。"""
    g = grad3_array[hash_val % 12]
    return g[0] * x + g[1] * y


@njit(fastmath=True, cache=True)
def perlin_noise_2d(x, y, perm_table, grad3_array):
    """2 次元 Perlin ノイズ。値域はおおよそ [-1, 1]。"""
    fx = math.floor(x)
    fy = math.floor(y)
    X = int(fx) & 255
    Y = int(fy) & 255
    x = x - fx
    y = y - fy

    n00 = grad2(perm_table[X + perm_table[Y]], x, y, grad3_array)
    n01 = grad2(perm_table[X + perm_table[Y + 1]], x, y - 1, grad3_array)
    n10 = grad2(perm_table[X + 1 + perm_table[Y]], x - 1, y, grad3_array)
    n11 = grad2(perm_table[X + 1 + perm_table[Y + 1]], x - 1, y - 1, grad3_array)

    u = fade(x)
    return lerp(lerp(n00, n10, u), lerp(n01, n11, u), fade(y))


@njit(fastmath=True, cache=True)
def perlin_core_2d(xs, ys, perm_table, grad3_array):
    """(xs[i], ys[i]) ごとに 2D ノイズを評価した配列を返す。"""
    n = xs.shape[0]
    result = np.zeros((n,), dtype=np.float64)
    for i in range(n):
        result[i] = perlin_noise_2d(xs[i], ys[i], perm_table, grad3_array)
    return result


class PerlinNoise2D:
    """seed 付きの 2D Perlin ノイズ場。

    `noise(x, y)` で単点、`noise.sample(xs, ys)` で配列をまとめて評価する。
    同じ seed・同じ入力に対しては常に同じ値を返す。
    """

    def __init__(self, seed: float = 0) -> None:
        self.seed = seed
        self._perm = build_permutation(seed)

    def __call__(self, x: float, y: float) -> float:
        return float(perlin_noise_2d(float(x), float(y), self._perm, NOISE_GRADIENTS_3D))

    def sample(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """同形状の xs, ys に対するノイズ値（float64）を返す。"""
        xs_f = np.ascontiguousarray(xs, dtype=np.float64).reshape(-1)
        ys_f = np.ascontiguousarray(ys, dtype=np.float64).reshape(-1)
        if xs_f.shape != ys_f.shape:
            raise ValueError("xs と ys は同じ要素数である必要がある")
        if xs_f.size == 0:
            return np.zeros((0,), dtype=np.float64)
        return perlin_core_2d(xs_f, ys_f, self._perm, NOISE_GRADIENTS_3D)


__all__ = ["NOISE_GRADIENTS_3D", "Noise2D", "PerlinNoise2D", "build_permutation", "perlin_noise_2d"]
