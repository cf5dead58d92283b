"""Reference lifecycle plugins."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
import json
from pathlib import Path

from changepack.plugins.base import DiffEndEvent, DiffStartEvent, LifecyclePlugin


@dataclass(slots=True)
class LifecycleTracePlugin(LifecyclePlugin):
    """Appends every diff lifecycle hook to an NDJSON file."""

    output_path: str = "runs/plugins/diff-trace.ndjson"
    name: str = "lifecycle-trace"

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self._append("on_diff_start", event)

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self._append("on_diff_end", event)

    def _append(self, hook: str, event: object) -> None:
        path = Path(self.output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"hook": hook, "plugin": self.name, "event": asdict(event)}
        with path.open("a", encoding="utf-8") as handle:
            handle.write(
                json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
                + "\n"
            )


@dataclass(slots=True)
class RecordingPlugin(LifecyclePlugin):
    """Keeps lifecycle events in memory."""

    name: str = "recording"
    events: list[tuple[str, object]] = field(default_factory=list)

    def on_diff_start(self, event: DiffStartEvent) -> None:
        self.events.append(("on_diff_start", event))

    def on_diff_end(self, event: DiffEndEvent) -> None:
        self.events.append(("on_diff_end", event))

    def hooks(self) -> list[str]:
        return [hook for hook, _ in self.events]
