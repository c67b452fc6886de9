import pytest

from perflayer.core.options import ReportOption
from perflayer.debug.trace import traced


def test_traced_reports_each_call(profiler, clock):
    profiler.options.enable(ReportOption.PROFILE_INFO)

    @traced(profiler)
    def upload(n):
        clock.advance(n)
        return n * 2

    assert upload(3) == 6
    assert upload(1) == 2

    [row] = profiler.drain_ranked()
    assert row.name.endswith("upload")
    assert row.call_count == 2
    assert row.total_time == pytest.approx(4.0)


def test_traced_custom_name_and_errors(profiler, captured):
    profiler.options.enable(ReportOption.PROFILE_INFO)
    profiler.options.enable(ReportOption.DEBUG_INFO)

    @traced(profiler, name="vkQueueSubmit")
    def submit():
        raise RuntimeError("device lost")

    with pytest.raises(RuntimeError):
        submit()

    assert "[DEBUG_INFO] - vkQueueSubmit returned ERROR" in captured
    assert [r.name for r in profiler.drain_ranked()] == ["vkQueueSubmit"]


def test_traced_keeps_metadata(profiler):
    @traced(profiler)
    def documented():
        """Docstring."""

    assert documented.__name__ == "documented"
    assert documented.__doc__ == "Docstring."
