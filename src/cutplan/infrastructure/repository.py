"""Plan repositories: in-memory and JSON file storage.

Both repositories allocate traceability sequence numbers from a counter
guarded by a lock, so concurrent callers in one process never receive the
same number. The JSON store also holds a lock file for each whole
read-modify-write, which extends that guarantee across processes.
``save`` still rejects a plan whose traceability code is already stored
(SequenceConflictError), which lets callers holding a stale number
re-stamp and retry.

Deletion is soft: deleted plans stay stored, keep their codes reserved
and are excluded from listings.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from cutplan.domain.entities import CuttingPlan
from cutplan.domain.exceptions import PlanNotFoundError, SequenceConflictError
from cutplan.domain.services.traceability import (
    next_sequence_from_codes,
    parse_traceability_code,
)
from cutplan.infrastructure.serialization import plan_from_dict, plan_to_dict

logger = logging.getLogger(__name__)

STORE_FORMAT_VERSION = 1

_HAS_FCNTL = os.name != "nt"
if _HAS_FCNTL:
    import fcntl

_PATH_LOCKS: dict[str, threading.Lock] = {}


@contextmanager
def _exclusive_lock(target: Path) -> Iterator[None]:
    """Hold an exclusive lock on ``.{name}.lock`` next to ``target``.

    Uses ``flock`` where available, so other processes are kept out too.
    Elsewhere only threads of this process are serialized.
    """
    lock_path = target.with_name(f".{target.name}.lock")
    lock_path.parent.mkdir(parents=True, exist_ok=True)

    if _HAS_FCNTL:
        fd = os.open(lock_path, os.O_CREAT | os.O_RDWR, 0o666)
        try:
            fcntl.flock(fd, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(fd, fcntl.LOCK_UN)
        finally:
            os.close(fd)
    else:
        lock = _PATH_LOCKS.setdefault(str(lock_path.resolve()), threading.Lock())
        with lock:
            yield


class InMemoryPlanRepository:
    """Plan repository held in process memory.

    Attributes:
        plans: Stored plans keyed by plan id (including deleted ones).
    """

    def __init__(self, plans: list[CuttingPlan] | None = None) -> None:
        self._lock = threading.RLock()
        self.plans: dict[str, CuttingPlan] = {}
        self._deleted: set[str] = set()
        for plan in plans or []:
            self.plans[plan.plan_id] = plan
        self._next = next_sequence_from_codes(
            p.traceability_code for p in self.plans.values()
        )

    # Storage hooks, overridden by file-backed repositories.
    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def _load(self) -> None:
        pass

    def _persist(self) -> None:
        pass

    def next_sequence(self) -> int:
        """Atomically reserve and return the next sequence number."""
        with self._locked():
            self._load()
            sequence = self._next
            self._next += 1
            self._persist()
            return sequence

    def save(self, plan: CuttingPlan) -> None:
        """Store a plan, or replace the stored plan with the same id.

        Raises:
            SequenceConflictError: If another plan already has this code.
        """
        with self._locked():
            self._load()
            for other in self.plans.values():
                if (
                    other.plan_id != plan.plan_id
                    and other.traceability_code == plan.traceability_code
                ):
                    raise SequenceConflictError(plan.traceability_code)

            self.plans[plan.plan_id] = plan
            number = parse_traceability_code(plan.traceability_code)
            if number is not None and number >= self._next:
                self._next = number + 1
            self._persist()
            logger.info("Saved cutting plan %s (%s)", plan.traceability_code, plan.plan_id)

    def get(self, plan_id: str) -> CuttingPlan:
        with self._locked():
            self._load()
            try:
                return self.plans[plan_id]
            except KeyError:
                raise PlanNotFoundError(plan_id) from None

    def get_by_code(self, traceability_code: str) -> CuttingPlan:
        """Look up a plan by its traceability code.

        Raises:
            PlanNotFoundError: If no stored plan has this code.
        """
        with self._locked():
            self._load()
            for plan in self.plans.values():
                if plan.traceability_code == traceability_code:
                    return plan
            raise PlanNotFoundError(traceability_code)

    def is_deleted(self, plan_id: str) -> bool:
        with self._locked():
            self._load()
            if plan_id not in self.plans:
                raise PlanNotFoundError(plan_id)
            return plan_id in self._deleted

    def list_active(self) -> list[CuttingPlan]:
        """Return active plans, newest first."""
        with self._locked():
            self._load()
            active = [p for pid, p in self.plans.items() if pid not in self._deleted]
        return sorted(
            active, key=lambda p: (p.created_at, p.traceability_code), reverse=True
        )

    def search(self, term: str) -> list[CuttingPlan]:
        """Case-insensitive match on code, material name and description."""
        needle = term.strip().lower()
        plans = self.list_active()
        if not needle:
            return plans
        return [
            p
            for p in plans
            if any(
                needle in (value or "").lower()
                for value in (
                    p.traceability_code,
                    p.metadata.material_name,
                    p.metadata.material_description,
                )
            )
        ]

    def find_active(
        self, order_id: str | None, material_name: str | None
    ) -> list[CuttingPlan]:
        return [
            p
            for p in self.list_active()
            if p.metadata.order_id == order_id
            and p.metadata.material_name == material_name
        ]

    def mark_deleted(self, plan_id: str) -> None:
        with self._locked():
            self._load()
            if plan_id not in self.plans:
                raise PlanNotFoundError(plan_id)
            self._deleted.add(plan_id)
            self._persist()
            logger.info("Marked cutting plan %s as deleted", plan_id)

    def mark_all_deleted(self) -> int:
        with self._locked():
            self._load()
            active = [pid for pid in self.plans if pid not in self._deleted]
            self._deleted.update(active)
            self._persist()
        logger.info("Marked %d cutting plans as deleted", len(active))
        return len(active)


class JsonFilePlanRepository(InMemoryPlanRepository):
    """Plan repository persisted to a single JSON file.

    Every operation runs under a lock file next to the store and re-reads
    the file inside it, so a read-modify-write never works on a stale copy
    and two processes never hand out the same sequence number. Changes are
    written atomically (temporary file plus ``os.replace``).

    Attributes:
        path: Location of the JSON store.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__()
        with self._locked():
            self._load()

    @contextmanager
    def _locked(self) -> Iterator[None]:
        with self._lock, _exclusive_lock(self.path):
            yield

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Corrupt plan store {self.path}: {e.msg}") from e

        plans: dict[str, CuttingPlan] = {}
        deleted: set[str] = set()
        for record in data.get("plans", []):
            plan = plan_from_dict(record["plan"])
            plans[plan.plan_id] = plan
            if record.get("deleted", False):
                deleted.add(plan.plan_id)

        self.plans = plans
        self._deleted = deleted
        self._next = max(
            int(data.get("next_sequence", 1)),
            next_sequence_from_codes(p.traceability_code for p in plans.values()),
        )

    def _persist(self) -> None:
        payload: dict[str, Any] = {
            "version": STORE_FORMAT_VERSION,
            "next_sequence": self._next,
            "plans": [
                {"plan": plan_to_dict(plan), "deleted": plan.plan_id in self._deleted}
                for plan in self.plans.values()
            ],
        }
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
