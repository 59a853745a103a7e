"""Structured timing log for WAD decoding, written as JSONL.

Usage:
    from wadmap.perf import perf

    perf.start()
    perf.stage("directory")
    with perf.timer("decode_lump", lump="LINEDEFS", map="E1M1"):
        records = decoder.decode(stream, entry)

    perf.finish()
    perf.summary()       # table on the console
    perf.save("runs")    # writes runs/YYYYMMDD_HHMMSS.jsonl

Events are only collected between start() and finish(); outside that window
stage(), event() and timer() record nothing. Nothing is printed unless
summary() is called.
"""

import json
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from rich.table import Table

from wadmap.config import console


@dataclass
class PerfEvent:
    timestamp: float
    elapsed_s: float
    stage: str
    operation: str
    duration_ms: float
    success: bool = True
    error: str | None = None
    meta: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        d = {
            "timestamp": self.timestamp,
            "elapsed_s": round(self.elapsed_s, 3),
            "stage": self.stage,
            "operation": self.operation,
            "duration_ms": round(self.duration_ms, 3),
            "success": self.success,
        }
        if self.error:
            d["error"] = self.error
        d.update(self.meta)
        return d


class PerfLogger:
    def __init__(self):
        self.reset()

    def reset(self):
        self._t0: float = time.time()
        self._events: list[PerfEvent] = []
        self._current_stage: str = ""
        self._stage_starts: dict[str, float] = {}
        self.enabled = False

    def start(self):
        self.reset()
        self.enabled = True

    def _close_stage(self, now: float):
        if self._current_stage and self._current_stage in self._stage_starts:
            dur = (now - self._stage_starts[self._current_stage]) * 1000
            self._events.append(PerfEvent(
                timestamp=now,
                elapsed_s=now - self._t0,
                stage=self._current_stage,
                operation="stage_end",
                duration_ms=dur,
            ))

    def stage(self, name: str):
        """Mark entry into a decode stage, closing the previous one."""
        if not self.enabled:
            return
        now = time.time()
        self._close_stage(now)
        self._current_stage = name
        self._stage_starts[name] = now
        self._events.append(PerfEvent(
            timestamp=now,
            elapsed_s=now - self._t0,
            stage=name,
            operation="stage_start",
            duration_ms=0,
        ))

    def event(self, operation: str, duration_ms: float, success: bool = True,
              error: str | None = None, **meta):
        """Record a single timed event."""
        if not self.enabled:
            return
        now = time.time()
        self._events.append(PerfEvent(
            timestamp=now,
            elapsed_s=now - self._t0,
            stage=self._current_stage,
            operation=operation,
            duration_ms=duration_ms,
            success=success,
            error=error,
            meta=meta,
        ))

    @contextmanager
    def timer(self, operation: str, **meta):
        """Time a block and record it; exceptions are recorded and re-raised."""
        if not self.enabled:
            yield
            return
        t = time.perf_counter()
        err = None
        ok = True
        try:
            yield
        except Exception as e:
            err = f"{type(e).__name__}: {e}"
            ok = False
            raise
        finally:
            dur = (time.perf_counter() - t) * 1000
            self.event(operation, dur, success=ok, error=err, **meta)

    def finish(self):
        """Close the final stage and stop recording. Events are kept for summary()/save()."""
        if self.enabled:
            self._close_stage(time.time())
        self._current_stage = ""
        self.enabled = False

    def summary(self):
        """Print per-stage and per-operation timings to the console."""
        stages: dict[str, float] = {}
        for ev in self._events:
            if ev.operation == "stage_end":
                stages[ev.stage] = ev.duration_ms

        table = Table(title="Decode timings (ms)")
        table.add_column("operation")
        table.add_column("count", justify="right")
        table.add_column("min", justify="right")
        table.add_column("median", justify="right")
        table.add_column("max", justify="right")
        table.add_column("total", justify="right")

        ops: dict[str, list[float]] = {}
        for ev in self._events:
            if ev.operation in ("stage_start", "stage_end"):
                continue
            ops.setdefault(ev.operation, []).append(ev.duration_ms)

        for op, durations in sorted(ops.items()):
            durations.sort()
            n = len(durations)
            table.add_row(
                op, str(n),
                f"{durations[0]:.2f}", f"{durations[n // 2]:.2f}",
                f"{durations[-1]:.2f}", f"{sum(durations):.2f}",
            )

        for name, dur in stages.items():
            console.print(f"  {name:<20s} {dur:>10.2f} ms")
        console.print(table)

        errors = [ev for ev in self._events if not ev.success]
        if errors:
            console.print(f"  Errors: {len(errors)}", style="red")
            for ev in errors[:5]:
                console.print(f"    [{ev.stage}] {ev.operation}: {ev.error}", markup=False)

    def save(self, directory: str = "runs") -> str:
        """Write all events as JSONL. Returns the file path."""
        Path(directory).mkdir(parents=True, exist_ok=True)
        ts = time.strftime("%Y%m%d_%H%M%S", time.localtime(self._t0))
        path = os.path.join(directory, f"{ts}.jsonl")
        with open(path, "w") as f:
            for ev in self._events:
                f.write(json.dumps(ev.to_dict()) + "\n")
        return path

    @property
    def events(self) -> list[PerfEvent]:
        return list(self._events)


# Module-level singleton
perf = PerfLogger()
