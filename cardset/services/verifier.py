import json
import re
from pathlib import Path
from typing import Any, Optional

from cardset.schemas.cards import CardRecord, VerifyEntry, VerifyReport

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def parse_collector_number(value: Any) -> Optional[int]:
    """Lenient integer parse: "12a" -> 12, "★1" -> None."""
    if value is None:
        return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def load_dataset(path: str | Path) -> list[CardRecord]:
    with Path(path).open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError("Dataset json must be a list")
    return [CardRecord.model_validate(c) for c in raw]


def verify_dataset(records: list[CardRecord]) -> VerifyReport:
    entries = [
        VerifyEntry(name=r.name, collector_number=parse_collector_number(r.collector_number))
        for r in records
    ]
    # unparseable numbers go last, ties keep file order
    entries.sort(key=lambda e: (e.collector_number is None, e.collector_number or 0))
    unique_ids = {r.id for r in records}
    return VerifyReport(entries=entries, total=len(records), unique_ids=len(unique_ids))


def format_report(report: VerifyReport) -> list[str]:
    lines = ["Ordered Card List:"]
    for e in report.entries:
        number = "NaN" if e.collector_number is None else e.collector_number
        lines.append(f"#{number}: {e.name}")
    lines.append("")
    lines.append(f"Total Count of Cards: {report.total}")
    lines.append(f"Are there any duplicates? {'Yes' if report.has_duplicates else 'No'}")
    return lines
