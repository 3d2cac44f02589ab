import threading
from typing import Dict, List, Optional, Sequence, Tuple

from tabulate import tabulate

from index_bench.models.index_cost_record import IndexCostRecord

ResultRow = Tuple[str, Tuple[IndexCostRecord, ...]]


class ResultAggregator:
    """
    Ordered per-test index cost results of one benchmark run.

    A label keeps the position of its first insertion; recording it again
    replaces its records in place. Producers running concurrently can
    reserve() their labels up front so the report order does not depend on
    which producer finishes first.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._results: Dict[str, Optional[Tuple[IndexCostRecord, ...]]] = {}

    def reserve(self, label: str) -> None:
        with self._lock:
            self._results.setdefault(label, None)

    def record(self, label: str, records: Sequence[IndexCostRecord]) -> None:
        with self._lock:
            self._results[label] = tuple(records)

    def results(self) -> Tuple[ResultRow, ...]:
        with self._lock:
            return tuple(
                (label, records) for label, records in self._results.items() if records is not None
            )

    def render(self) -> str:
        return render_results(self.results())

    def __len__(self) -> int:
        return len(self.results())


def render_results(results: Sequence[ResultRow]) -> str:
    """
    Render results as a github-style table, one row per test.

    Each record contributes a time and a size column headed by its kind label;
    header columns come from the widest row.
    """
    if not results:
        return ""

    widest = max(results, key=lambda row: len(row[1]))[1]
    headers: List[str] = ["Test"]
    for record in widest:
        headers += [f"{record.kind_label} Time (ms)", f"{record.kind_label} Size"]

    table_data = []
    for label, records in results:
        row = [label]
        for record in records:
            row += [record.format_time(), record.size]
        row += [""] * (len(headers) - len(row))
        table_data.append(row)

    return tabulate(table_data, headers=headers, tablefmt="github", stralign="left", disable_numparse=True)
