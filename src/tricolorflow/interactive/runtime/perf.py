"""
どこで: `src/tricolorflow/interactive/runtime/perf.py`。
何を: フレーム内の区間計測（生成 / upload+描画）を集計し、周期的に平均を出力する。
なぜ: 1 フレームの時間が曲線生成（CPU）と GPU 転送のどちらに寄っているかを切り分けるため。
"""

from __future__ import annotations

import contextlib
import os
import time
from collections.abc import Iterator

ENV_PERF = "TRICOLORFLOW_PERF"
ENV_PERF_EVERY = "TRICOLORFLOW_PERF_EVERY"
ENV_PERF_GPU_FINISH = "TRICOLORFLOW_PERF_GPU_FINISH"


def _env_flag(name: str) -> bool:
    value = os.environ.get(name)
    if value is None:
        return False
    return str(value).strip().lower() not in {"", "0", "false", "no", "off"}


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None:
        return int(default)
    try:
        return int(value)
    except ValueError:
        return int(default)


class PerfCollector:
    """フレーム区間計測の集計器。

    Notes
    -----
    無効時は `section()` / `frame()` とも何もしない。
    """

    def __init__(
        self,
        *,
        enabled: bool,
        print_every: int = 60,
        gpu_finish: bool = False,
    ) -> None:
        self.enabled = bool(enabled)
        self.print_every = int(print_every) if int(print_every) > 0 else 60
        self.gpu_finish = bool(gpu_finish)

        self._frames = 0
        self._sum_ns: dict[str, int] = {}
        self._calls: dict[str, int] = {}

    @classmethod
    def from_env(cls) -> "PerfCollector":
        """環境変数から設定して作成する。

        - `TRICOLORFLOW_PERF=1` で有効化する。
        - `TRICOLORFLOW_PERF_EVERY=60` で何フレームごとに出力するかを指定する。
        - `TRICOLORFLOW_PERF_GPU_FINISH=1` で `ctx.finish()` を含む GPU 同期計測を有効化する。
        """
        return cls(
            enabled=_env_flag(ENV_PERF),
            print_every=_env_int(ENV_PERF_EVERY, 60),
            gpu_finish=_env_flag(ENV_PERF_GPU_FINISH),
        )

    @contextlib.contextmanager
    def section(self, name: str) -> Iterator[None]:
        """`with` で囲った区間の時間を加算する。"""
        if not self.enabled:
            yield
            return
        t0 = time.perf_counter_ns()
        try:
            yield
        finally:
            self.add(str(name), time.perf_counter_ns() - t0)

    @contextlib.contextmanager
    def frame(self) -> Iterator[None]:
        """1フレーム全体の計測と周期出力を行う。"""
        if not self.enabled:
            yield
            return

        t0 = time.perf_counter_ns()
        try:
            yield
        finally:
            self.add("frame", time.perf_counter_ns() - t0)
            self._frames += 1
            if self._frames % self.print_every == 0:
                print("[tricolorflow-perf]", self.summary())
                self.reset()

    def add(self, name: str, dt_ns: int) -> None:
        """区間 `name` に `dt_ns` ナノ秒を加算する。"""
        self._sum_ns[name] = self._sum_ns.get(name, 0) + int(dt_ns)
        self._calls[name] = self._calls.get(name, 0) + 1

    @property
    def frames(self) -> int:
        return int(self._frames)

    def summary(self) -> str:
        """集計中のフレームあたり平均 [ms] を 1 行の文字列で返す。"""
        frames = max(int(self._frames), 1)

        def _ms(total_ns: int) -> float:
            return float(total_ns) / float(frames) / 1_000_000.0

        parts = [f"frame={_ms(self._sum_ns.get('frame', 0)):.3f}ms"]
        for name in sorted(k for k in self._sum_ns if k != "frame"):
            calls_per_frame = float(self._calls.get(name, 0)) / float(frames)
            text = f"{name}={_ms(self._sum_ns[name]):.3f}ms"
            if calls_per_frame >= 1.5:
                text += f" ({calls_per_frame:.1f}x)"
            parts.append(text)
        return " ".join(parts)

    def reset(self) -> None:
        """集計をリセットする。"""
        self._frames = 0
        self._sum_ns.clear()
        self._calls.clear()
