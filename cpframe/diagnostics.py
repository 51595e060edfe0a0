"""Frame timing, FPS metrics and named timer statistics."""

from __future__ import annotations

import sys
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

_UINT32_MAX = 0xFFFFFFFF

Clock = Callable[[], int]


def _now_us() -> int:
    return time.monotonic_ns() // 1000


class HighResolutionTimer:
    """Microsecond timer measuring the span between start() and end()."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _now_us
        self._start = 0
        self._end = 0

    def start(self) -> None:
        self._start = self._clock()

    def end(self) -> None:
        self._end = self._clock()

    def elapsed_seconds(self) -> float:
        return (self._end - self._start) * 1e-6


@dataclass
class TimerSampler:
    """Collects millisecond samples and keeps running statistics."""

    samples: List[float] = field(default_factory=list)
    average: float = 0.0
    min: float = sys.float_info.max
    max: float = 0.0
    sample_count: int = 0

    def add_sample(self, milliseconds: float) -> None:
        self.samples.append(milliseconds)
        self.sample_count += 1
        if milliseconds < self.min:
            self.min = milliseconds
        if milliseconds > self.max:
            self.max = milliseconds
        self.average = (self.average * (self.sample_count - 1) + milliseconds) / self.sample_count


@dataclass
class TimeInfo:
    delta_time: float = 0.0


@dataclass
class FpsInfo:
    current: int = 0
    average: int = 0
    min: int = _UINT32_MAX
    max: int = 0


@dataclass
class FrameData:
    total_frames: int = 0
    time_info: TimeInfo = field(default_factory=TimeInfo)
    fps_info: FpsInfo = field(default_factory=FpsInfo)


class FrameCounter:
    """Measures frame durations and FPS, ignoring an initial warm-up period."""

    def __init__(self, warmup_frames: int = 10, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _now_us
        self._warmup_frames = warmup_frames
        self._frame_count = 0
        self._started = False
        self._last_time = 0
        self.frame_data = FrameData()

    def start_frame(self) -> None:
        if self._started:
            return
        self._started = True
        self._last_time = self._clock()

    def end_frame(self) -> None:
        if not self._started:
            return
        delta = (self._clock() - self._last_time) * 1e-6
        self._frame_count += 1

        if self._frame_count > self._warmup_frames:
            data = self.frame_data
            data.time_info.delta_time = delta
            data.total_frames += 1

            fps = _UINT32_MAX if delta <= 0 else min(int(1.0 / delta), _UINT32_MAX)
            info = data.fps_info
            info.current = fps
            if data.total_frames == 1:
                info.average = info.min = info.max = fps
            else:
                info.average = (info.average * (data.total_frames - 1) + fps) // data.total_frames
                info.min = min(info.min, fps)
                info.max = max(info.max, fps)

        self._started = False


class DiagnosticsManager:
    """Tracks FPS and named timers."""

    def __init__(self, warmup_frames: int = 10, clock: Optional[Clock] = None) -> None:
        self._clock = clock or _now_us
        self._frame_counter = FrameCounter(warmup_frames, clock=self._clock)
        self._timer_start_times: Dict[str, int] = {}
        self._timer_samplers: Dict[str, TimerSampler] = {}

    @property
    def frame_data(self) -> FrameData:
        return self._frame_counter.frame_data

    def begin_frame(self) -> None:
        self._frame_counter.start_frame()

    def end_frame(self) -> None:
        self._frame_counter.end_frame()

    def start_timer(self, name: str) -> None:
        self._timer_start_times[name] = self._clock()

    def stop_timer(self, name: str) -> None:
        """Record the time since start_timer(name); ignored if it was never started."""
        started = self._timer_start_times.pop(name, None)
        if started is None:
            return
        elapsed_ms = (self._clock() - started) * 1e-3
        self._timer_samplers.setdefault(name, TimerSampler()).add_sample(elapsed_ms)

    def get_timer_sampler(self, name: str) -> TimerSampler:
        """Return the named sampler, or an empty one if none exists."""
        sampler = self._timer_samplers.get(name)
        return sampler if sampler is not None else TimerSampler()

    def summary(self) -> str:
        fps = self.frame_data.fps_info
        lines = [
            f"FPS {fps.current} (avg {fps.average}, min {fps.min}, max {fps.max})\n",
            "Samplers:\n",
        ]
        lines.extend(
            f"   *{name} : {s.average:f} ms (min {s.min:f}, max {s.max:f})\n"
            for name, s in self._timer_samplers.items()
        )
        return "".join(lines)