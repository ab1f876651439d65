from __future__ import annotations
import threading
from typing import List, Optional

from ..models import LogicalTarget


class Snapshot:
    """Latest report, handed over from the scheduler thread to readers.

    Stored as plain dicts so readers see the targets as they were when the
    report was taken.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.report: Optional[dict] = None
        self.targets: List[dict] = []

    def update(self, report, targets: List[LogicalTarget]) -> None:
        with self.lock:
            self.report = report.to_dict()
            self.targets = [t.to_dict() for t in targets]

    def report_dict(self) -> Optional[dict]:
        with self.lock:
            return self.report
