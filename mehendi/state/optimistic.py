"""Two-phase local changes: stage, then confirm or roll back."""
import enum
import threading
import uuid
from dataclasses import dataclass, field


class StageStatus(enum.Enum):
    STAGED = "staged"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"


class ChangeKind(enum.Enum):
    INSERT = "insert"
    REMOVE = "remove"


@dataclass
class PendingChange:
    kind: ChangeKind
    entities: list
    positions: list = field(default_factory=list)
    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: StageStatus = StageStatus.STAGED


class OptimisticList:
    """A list of entities with staged inserts/removals.

    ``on_change`` is called with the current items after every change.
    """

    def __init__(self, items=None, on_change=None):
        self._items = list(items or [])
        self._on_change = on_change
        self._lock = threading.RLock()

    @property
    def items(self):
        with self._lock:
            return list(self._items)

    def replace(self, items):
        with self._lock:
            self._items = list(items)
            self._changed()

    def find(self, predicate):
        with self._lock:
            return [item for item in self._items if predicate(item)]

    def append(self, entity):
        with self._lock:
            self._items.append(entity)
            self._changed()
            return entity

    def upsert(self, entity):
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == entity.id:
                    self._items[index] = entity
                    break
            else:
                self._items.append(entity)
            self._changed()
            return entity

    def stage_insert(self, entity):
        with self._lock:
            self._items.append(entity)
            self._changed()
            return PendingChange(kind=ChangeKind.INSERT, entities=[entity])

    def stage_removal(self, predicate):
        with self._lock:
            positions = [i for i, item in enumerate(self._items) if predicate(item)]
            removed = [self._items[i] for i in positions]
            self._items = [item for item in self._items if not predicate(item)]
            self._changed()
            return PendingChange(kind=ChangeKind.REMOVE, entities=removed, positions=positions)

    def confirm(self, change, authoritative=None):
        """Promote a staged change; an insert swaps in ``authoritative``."""
        with self._lock:
            self._check_staged(change)
            if change.kind is ChangeKind.INSERT and authoritative is not None:
                placeholder = change.entities[0]
                self._items = [authoritative if item is placeholder else item for item in self._items]
                self._changed()
            change.status = StageStatus.CONFIRMED

    def rollback(self, change):
        with self._lock:
            self._check_staged(change)
            if change.kind is ChangeKind.INSERT:
                placeholder = change.entities[0]
                self._items = [item for item in self._items if item is not placeholder]
            else:
                for position, entity in zip(change.positions, change.entities):
                    self._items.insert(min(position, len(self._items)), entity)
            self._changed()
            change.status = StageStatus.ROLLED_BACK

    def _check_staged(self, change):
        if change.status is not StageStatus.STAGED:
            raise RuntimeError(f"Change {change.correlation_id} is already {change.status.value}")

    def _changed(self):
        if self._on_change is not None:
            self._on_change(list(self._items))

    def __len__(self):
        with self._lock:
            return len(self._items)
