"""
In-memory trace of the interactions performed during one test.

Each observed operation appends an ActionRecord, so a test (or a fixture
teardown) can inspect what ran, what failed, and how long it took.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class ActionRecord:
    """Outcome of a single interaction."""
    operation: str  # "click", "fill", "goto", ...
    label: str
    passed: bool
    error: Optional[str] = None
    duration_ms: Optional[float] = None
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "operation": self.operation,
            "label": self.label,
            "result": "PASS" if self.passed else "FAIL",
            "error": self.error,
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp.isoformat(),
        }


@dataclass
class ActionTrace:
    """
    Ordered record of interactions.

    Usage:
        trace = ActionTrace()
        actions = ElementActions(page, trace=trace)

        actions.click(page.get_by_role("button", name="Submit"))

        assert not trace.failures
        print(trace.summary())
    """
    records: List[ActionRecord] = field(default_factory=list)

    def add(self, record: ActionRecord) -> None:
        self.records.append(record)

    @property
    def failures(self) -> List[ActionRecord]:
        return [r for r in self.records if not r.passed]

    @property
    def operations(self) -> List[str]:
        return [r.operation for r in self.records]

    def clear(self) -> None:
        self.records.clear()

    def summary(self) -> Dict[str, Any]:
        """Counts and total time across all records."""
        durations = [r.duration_ms for r in self.records if r.duration_ms is not None]
        return {
            "actions": len(self.records),
            "passed": len(self.records) - len(self.failures),
            "failed": len(self.failures),
            "total_ms": round(sum(durations), 1),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "summary": self.summary(),
            "records": [r.to_dict() for r in self.records],
        }
