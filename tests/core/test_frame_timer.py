import pytest

from perflayer.core.frame_timer import DEFAULT_WINDOW_SIZE, FrameTimeWindow


def _run_frames(window, clock, durations_ms):
    window.record_frame_boundary()
    for ms in durations_ms:
        clock.advance(ms)
        window.record_frame_boundary()


def test_rejects_empty_window(clock):
    with pytest.raises(ValueError):
        FrameTimeWindow(0, clock)
    with pytest.raises(ValueError):
        FrameTimeWindow(-3, clock)


def test_default_capacity_is_40(clock):
    assert FrameTimeWindow(clock=clock).capacity == DEFAULT_WINDOW_SIZE == 40


def test_first_boundary_only_seeds(clock):
    window = FrameTimeWindow(4, clock)

    assert window.record_frame_boundary() is None
    assert window.sample_count == 0
    assert window.frames_per_second() == 0.0
    assert window.frame_index == 1


def test_boundary_returns_frame_seconds(clock):
    window = FrameTimeWindow(4, clock)
    window.record_frame_boundary()

    clock.advance(20)
    assert window.record_frame_boundary() == pytest.approx(0.020)


def test_fps_is_count_over_sum_during_warmup(clock):
    """Numerator is the number of samples, not the window capacity."""
    window = FrameTimeWindow(40, clock)
    _run_frames(window, clock, [10, 20, 30])

    assert window.sample_count == 3
    assert window.total_time == pytest.approx(0.060)
    assert window.frames_per_second() == pytest.approx(3 / 0.060)


def test_fps_uses_average_not_latest_frame(clock):
    window = FrameTimeWindow(4, clock)
    _run_frames(window, clock, [10, 40])

    # 1 / 0.040 would be 25
    assert window.frames_per_second() == pytest.approx(2 / 0.050)


def test_oldest_sample_is_evicted_once_full(clock):
    window = FrameTimeWindow(3, clock)
    _run_frames(window, clock, [10, 20, 30, 40, 50])

    assert window.sample_count == 3
    assert window.samples() == pytest.approx([0.030, 0.040, 0.050])
    assert window.total_time == pytest.approx(0.120)
    assert window.frames_per_second() == pytest.approx(3 / 0.120)


def test_sum_matches_samples_after_many_wraps(clock):
    window = FrameTimeWindow(5, clock)
    durations = [(i % 7) + 1 for i in range(97)]
    _run_frames(window, clock, durations)

    assert window.total_time == pytest.approx(sum(window.samples()))
    assert window.samples() == pytest.approx([d / 1000 for d in durations[-5:]])


def test_zero_clock_never_produces_samples(clock):
    clock.ticks = 0
    window = FrameTimeWindow(4, clock)

    window.record_frame_boundary()
    window.record_frame_boundary()

    assert window.sample_count == 0
    assert window.frames_per_second() == 0.0


def test_zero_duration_frames_do_not_divide_by_zero(clock):
    window = FrameTimeWindow(4, clock)
    window.record_frame_boundary()
    window.record_frame_boundary()

    assert window.sample_count == 1
    assert window.frames_per_second() == 0.0


def test_reset(clock):
    window = FrameTimeWindow(4, clock)
    _run_frames(window, clock, [10, 10])

    window.reset()

    assert window.sample_count == 0
    assert window.samples() == []
    assert window.record_frame_boundary() is None
