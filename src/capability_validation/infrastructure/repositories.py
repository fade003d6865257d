"""
Case and execution repositories

The core reads cases and writes executions through these interfaces. The in-memory
implementations back the CLI runner and tests; any external data-access layer can
take their place.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import asdict
from pathlib import Path

import pandas as pd

from capability_validation.domain.entities import Case, Execution


class CaseRepository(ABC):
    """Read access to cases"""

    @abstractmethod
    def get(self, case_id: str) -> Case | None:
        """Return the case with the given id, or None"""
        pass


class InMemoryCaseRepository(CaseRepository):
    """Dictionary-backed case repository"""

    def __init__(self, cases: list[Case] | None = None):
        self._cases: dict[str, Case] = {}
        for case in cases or []:
            self.add(case)

    def add(self, case: Case) -> None:
        self._cases[case.id] = case

    def get(self, case_id: str) -> Case | None:
        return self._cases.get(case_id)

    def all(self) -> list[Case]:
        return list(self._cases.values())

    def __len__(self) -> int:
        return len(self._cases)


class ExecutionStore(ABC):
    """Write and query access to executions"""

    @abstractmethod
    def save(self, execution: Execution) -> Execution:
        pass

    @abstractmethod
    def find_by_case_id(self, case_id: str) -> list[Execution]:
        pass

    @abstractmethod
    def find_by_tool(self, tool: str) -> list[Execution]:
        """Executions of a tool, most recent first"""
        pass


class InMemoryExecutionStore(ExecutionStore):
    """Thread-safe list-backed execution store"""

    def __init__(self):
        self._executions: list[Execution] = []
        self._lock = threading.Lock()

    def save(self, execution: Execution) -> Execution:
        with self._lock:
            self._executions.append(execution)
        return execution

    def find_by_case_id(self, case_id: str) -> list[Execution]:
        with self._lock:
            return [e for e in self._executions if e.case_id == case_id]

    def find_by_tool(self, tool: str) -> list[Execution]:
        with self._lock:
            found = [e for e in self._executions if e.tool == tool]
        return sorted(found, key=lambda e: e.executed_at, reverse=True)

    def all(self) -> list[Execution]:
        with self._lock:
            return list(self._executions)

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten executions (scores as columns) into a DataFrame"""
        rows = []
        for execution in self.all():
            row = asdict(execution)
            scores = row.pop("scores")
            row.pop("config", None)
            row["status"] = execution.status.value
            for key in ("accuracy", "completeness", "creativity", "efficiency", "overall"):
                row[f"score_{key}"] = scores[key]
            rows.append(row)
        return pd.DataFrame(rows)

    def save_csv(self, path: Path) -> None:
        """Save all executions to CSV."""
        path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(path, index=False)
