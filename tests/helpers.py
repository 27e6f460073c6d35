from __future__ import annotations

from weekgrid.model import Course


def course(cid: str, days: list[str], start: str, end: str, name: str | None = None) -> Course:
    return Course(id=cid, name=name or cid, days_of_week=days, start_time=start, end_time=end)
