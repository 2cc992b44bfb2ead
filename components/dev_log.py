"""components.dev_log — Structured fighter / match event log.

A ring-buffer resource that records timestamped AI decisions, hits,
ring-outs and round transitions.  Debug views and tests read it to see
what every fighter did and why.

Usage:
    log = world.res(DevLog)
    log.record(eid, "ai", "roam → chase", name="ai1", t=12.4)

Each entry is a dict:
    {"t": float, "eid": int, "name": str, "cat": str,
     "msg": str, "details": dict | None}
"""

from __future__ import annotations
from dataclasses import dataclass, field


@dataclass
class DevLog:
    """Ring-buffer of AI / match events."""

    entries: list[dict] = field(default_factory=list)
    max_entries: int = 500

    def record(self, eid: int, cat: str, msg: str, *,
               name: str = "", t: float = 0.0,
               details: dict | None = None) -> None:
        self.entries.append({
            "t": t,
            "eid": eid,
            "name": name,
            "cat": cat,
            "msg": msg,
            "details": details,
        })
        if len(self.entries) > self.max_entries:
            self.entries = self.entries[-self.max_entries:]

    def recent(self, n: int = 50) -> list[dict]:
        """Return the *n* most recent entries (newest last)."""
        return self.entries[-n:]

    def for_cat(self, cat: str, n: int = 50) -> list[dict]:
        """Return last *n* entries in a category."""
        return [e for e in self.entries if e["cat"] == cat][-n:]


def log_to(world, eid: int, cat: str, msg: str, **kw) -> None:
    """Write to the world's DevLog if one is installed.

    Stamps the entry with the fighter's display name and GameClock time.
    """
    log = world.res(DevLog)
    if log is None:
        return
    from components.rendering import Identity
    from components.resources import GameClock
    ident = world.get(eid, Identity)
    clock = world.res(GameClock)
    log.record(eid, cat, msg,
               name=ident.name if ident else f"e{eid}",
               t=clock.time if clock else 0.0, **kw)
