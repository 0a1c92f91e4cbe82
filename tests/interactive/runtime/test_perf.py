import pytest

from tricolorflow.interactive.runtime.perf import PerfCollector


def test_disabled_collector_records_nothing():
    perf = PerfCollector(enabled=False)
    with perf.frame():
        with perf.section("generate"):
            pass
    assert perf.frames == 0
    assert perf.summary() == "frame=0.000ms"


def test_summary_averages_per_frame_and_marks_repeated_sections():
    perf = PerfCollector(enabled=True, print_every=1000)
    for _ in range(2):
        perf.add("frame", 4_000_000)
        perf.add("generate", 1_000_000)
        perf.add("upload", 500_000)
        perf.add("upload", 500_000)
        perf._frames += 1
    assert perf.summary() == "frame=4.000ms generate=1.000ms upload=1.000ms (2.0x)"


def test_frame_prints_and_resets_every_n_frames(capsys: pytest.CaptureFixture[str]):
    perf = PerfCollector(enabled=True, print_every=2)
    for _ in range(2):
        with perf.frame():
            with perf.section("render"):
                pass
    out = capsys.readouterr().out
    assert out.startswith("[tricolorflow-perf] frame=")
    assert "render=" in out
    assert perf.frames == 0


def test_from_env_reads_flags(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRICOLORFLOW_PERF", "1")
    monkeypatch.setenv("TRICOLORFLOW_PERF_EVERY", "10")
    monkeypatch.setenv("TRICOLORFLOW_PERF_GPU_FINISH", "off")
    perf = PerfCollector.from_env()
    assert perf.enabled
    assert perf.print_every == 10
    assert not perf.gpu_finish


def test_from_env_defaults_when_unset_or_invalid(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("TRICOLORFLOW_PERF", raising=False)
    monkeypatch.setenv("TRICOLORFLOW_PERF_EVERY", "often")
    monkeypatch.delenv("TRICOLORFLOW_PERF_GPU_FINISH", raising=False)
    perf = PerfCollector.from_env()
    assert not perf.enabled
    assert perf.print_every == 60
