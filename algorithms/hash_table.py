"""
hash_table.py — Hash Table with Three Collision Policies
==========================================================
    chaining   – every slot is a list; a key match updates in place
    linear     – open addressing, probe i lands on (home + i) % size
    quadratic  – open addressing, probe i lands on (home + i²) % size

Both open-addressing policies stop after `size` probes, so a quadratic
table can report "full" while some slots are still empty.

Hash: the 32-bit signed rolling hash h = h·31 + c over the key's UTF-16
code units, reduced as |h| % size.  It is order-dependent, the same
function as Java's String.hashCode.

Deletion under open addressing (`deletion=`):
    "tombstone" – default.  Walk the probe sequence; the found slot
                  becomes a tombstone that searches probe past and
                  inserts may reuse.
    "scan"      – legacy simplification: scan slots 0..size-1 for the
                  first matching key and empty that slot.  Ignores the
                  probe order, so it can cut other keys' probe chains.

Every operation runs against a table rebuilt silently from the prior
`entries` of the input; only the requested operation is animated.
"""

from typing import Any, Dict, Iterator, List, Optional, Tuple

from algorithms.inputs import as_int, as_str, in_range, one_of, require
from algorithms.step import StepKind
from engine.emitter import run_silently
from engine.errors import InvalidInput


POLICIES      = ("chaining", "linear", "quadratic")
DELETIONS     = ("tombstone", "scan")
DEFAULT_SIZE  = 10
MAX_SIZE      = 64

PSEUDOCODE: List[str] = [
    "i ← hash(key) mod size",
    "chaining:  append to / search bucket[i]",
    "linear:    probe i, i+1, i+2, …       (mod size)",
    "quadratic: probe i, i+1², i+2², …     (mod size)",
    "stop at the key, an empty slot, or after size probes",
]


class _Tombstone:
    def __repr__(self) -> str:
        return "<deleted>"


TOMBSTONE = _Tombstone()


def hash_key(key: str, size: int) -> int:
    h = 0
    data = key.encode("utf-16-le")
    for i in range(0, len(data), 2):
        h = (h * 31 + int.from_bytes(data[i:i + 2], "little")) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h) % size


class HashTable:
    """
    Attributes:
        size       : Number of slots.
        policy     : One of POLICIES.
        deletion   : One of DELETIONS (open addressing only).
        slots      : chaining → list of [key, value] lists per slot;
                     probing  → None | TOMBSTONE | (key, value) per slot.
        items      : Live entries.
        collisions : Inserts placed away from their home slot, or into a
                     non-empty chain.
    """

    def __init__(self, size: int = DEFAULT_SIZE, policy: str = "chaining", deletion: str = "tombstone"):
        self.size       = size
        self.policy     = policy
        self.deletion   = deletion
        self.items      = 0
        self.collisions = 0
        if policy == "chaining":
            self.slots: List[Any] = [[] for _ in range(size)]
        else:
            self.slots = [None] * size

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def chaining(self) -> bool:
        return self.policy == "chaining"

    @property
    def load_factor(self) -> float:
        return round(self.items / self.size, 3)

    def home(self, key: str) -> int:
        return hash_key(key, self.size)

    def probe_sequence(self, home: int) -> Iterator[Tuple[int, int]]:
        """(attempt, slot) pairs, `size` of them."""
        for attempt in range(self.size):
            offset = attempt if self.policy == "linear" else attempt * attempt
            yield attempt, (home + offset) % self.size

    def snapshot(self) -> List[Any]:
        if self.chaining:
            return [[{"key": k, "value": v} for k, v in bucket] for bucket in self.slots]
        out = []
        for slot in self.slots:
            if slot is None:
                out.append(None)
            elif slot is TOMBSTONE:
                out.append({"deleted": True})
            else:
                out.append({"key": slot[0], "value": slot[1]})
        return out

    def get(self, key: str) -> Optional[Any]:
        """Silent lookup, used by tests and presets."""
        return run_silently(self.search, key)["value"]

    def _stats(self, emit) -> None:
        emit.set_metric("items", self.items)
        emit.set_metric("collisions", self.collisions)
        emit.set_metric("load_factor", self.load_factor)

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------
    def insert(self, key: str, value: Any, emit):
        home = self.home(key)
        self._stats(emit)
        yield emit(StepKind.START, f'hash("{key}") = {home}.', key=key, value=value, home=home, policy=self.policy)

        if self.chaining:
            bucket = self.slots[home]
            emit.count("probes")
            yield emit(StepKind.PROBE, f"Look in bucket {home} ({len(bucket)} item(s)).", index=home, attempt=0)
            for pair in bucket:
                if pair[0] == key:
                    pair[1] = value
                    yield emit(StepKind.UPDATE, f'"{key}" already in bucket {home}: update its value.',
                               index=home, key=key, value=value)
                    return (yield from self._inserted(emit, key, home, updated=True))
            if bucket:
                self.collisions += 1
                self._stats(emit)
                yield emit(StepKind.COLLISION, f"Bucket {home} is occupied: chain the new item.", index=home)
            bucket.append([key, value])
            self.items += 1
            self._stats(emit)
            yield emit(StepKind.INSERT, f'Append "{key}" to bucket {home}.', index=home, key=key, value=value)
            return (yield from self._inserted(emit, key, home, updated=False))

        reuse: Optional[int] = None
        for attempt, index in self.probe_sequence(home):
            slot = self.slots[index]
            emit.count("probes")
            yield emit(StepKind.PROBE, f"Probe {attempt}: slot {index}.", index=index, attempt=attempt)

            if slot is None:
                target = index if reuse is None else reuse
                break
            if slot is TOMBSTONE:
                if reuse is None:
                    reuse = index
                yield emit(StepKind.HIGHLIGHT, f"Slot {index} held a deleted item: reusable, keep probing for the key.",
                           index=index)
                continue
            if slot[0] == key:
                self.slots[index] = (key, value)
                yield emit(StepKind.UPDATE, f'"{key}" found at slot {index}: update its value.',
                           index=index, key=key, value=value)
                return (yield from self._inserted(emit, key, index, updated=True))
            yield emit(StepKind.COLLISION, f'Slot {index} holds "{slot[0]}": collision, probe on.',
                       index=index, occupant=slot[0])
        else:
            target = reuse

        if target is None:
            yield emit.final(StepKind.NO_SOLUTION, f"Table full: no free slot on the probe sequence of \"{key}\".",
                             key=key, table=self.snapshot())
            return {"inserted": False, "updated": False, "index": None, "table": self.snapshot()}

        if target != home:
            self.collisions += 1
        self.slots[target] = (key, value)
        self.items += 1
        self._stats(emit)
        yield emit(StepKind.INSERT, f'Place "{key}" in slot {target}.', index=target, key=key, value=value)
        return (yield from self._inserted(emit, key, target, updated=False))

    def _inserted(self, emit, key: str, index: int, updated: bool):
        verb = "Updated" if updated else "Inserted"
        yield emit.final(StepKind.DONE, f'{verb} "{key}" at index {index}.', key=key, index=index,
                         table=self.snapshot())
        return {"inserted": not updated, "updated": updated, "index": index, "table": self.snapshot()}

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------
    def search(self, key: str, emit):
        home = self.home(key)
        self._stats(emit)
        yield emit(StepKind.START, f'hash("{key}") = {home}.', key=key, home=home, policy=self.policy)

        index = yield from self._locate(key, home, emit)
        if index is None:
            yield emit.final(StepKind.NOT_FOUND, f'"{key}" not found in the hash table.', key=key)
            return {"found": False, "index": None, "value": None}

        value = self._value_at(index, key)
        yield emit.final(StepKind.FOUND, f'Found "{key}: {value}" at index {index}.', key=key, index=index, value=value)
        return {"found": True, "index": index, "value": value}

    def _locate(self, key: str, home: int, emit):
        """Walk the policy's search order; returns the slot index or None."""
        if self.chaining:
            emit.count("probes")
            yield emit(StepKind.PROBE, f"Look in bucket {home}.", index=home, attempt=0)
            for pos, (k, _) in enumerate(self.slots[home]):
                emit.count("comparisons")
                yield emit(StepKind.COMPARE, f'Compare "{k}" with "{key}".', index=home, position=pos, key=k)
                if k == key:
                    return home
            return None

        for attempt, index in self.probe_sequence(home):
            slot = self.slots[index]
            emit.count("probes")
            yield emit(StepKind.PROBE, f"Probe {attempt}: slot {index}.", index=index, attempt=attempt)
            if slot is None:
                yield emit(StepKind.HIGHLIGHT, f"Slot {index} is empty: the key cannot be further along.", index=index)
                return None
            if slot is not TOMBSTONE and slot[0] == key:
                return index
        return None

    def _value_at(self, index: int, key: str) -> Any:
        if self.chaining:
            return next(v for k, v in self.slots[index] if k == key)
        return self.slots[index][1]

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------
    def delete(self, key: str, emit):
        home = self.home(key)
        self._stats(emit)
        yield emit(StepKind.START, f'hash("{key}") = {home}.', key=key, home=home,
                   policy=self.policy, deletion=None if self.chaining else self.deletion)

        if not self.chaining and self.deletion == "scan":
            index = yield from self._scan(key, emit)
        else:
            index = yield from self._locate(key, home, emit)

        if index is None:
            yield emit.final(StepKind.NOT_FOUND, f'"{key}" not found in the hash table.', key=key)
            return {"deleted": False, "index": None, "table": self.snapshot()}

        if self.chaining:
            bucket = self.slots[index]
            bucket[:] = [pair for pair in bucket if pair[0] != key]
            explanation = f'Remove "{key}" from bucket {index}.'
        elif self.deletion == "scan":
            self.slots[index] = None
            explanation = f'Empty slot {index}.'
        else:
            self.slots[index] = TOMBSTONE
            explanation = f'Mark slot {index} as deleted so later probes walk past it.'
        self.items -= 1
        self._stats(emit)
        yield emit(StepKind.DELETE, explanation, index=index, key=key)
        yield emit.final(StepKind.DONE, f'Deleted "{key}".', key=key, index=index, table=self.snapshot())
        return {"deleted": True, "index": index, "table": self.snapshot()}

    def _scan(self, key: str, emit):
        for index, slot in enumerate(self.slots):
            emit.count("probes")
            yield emit(StepKind.PROBE, f"Scan slot {index}.", index=index, attempt=index)
            if slot is not None and slot is not TOMBSTONE and slot[0] == key:
                return index
        return None


# ---------------------------------------------------------------------------
# Registry entry points
# ---------------------------------------------------------------------------
def _prepare_table(data: Dict[str, Any]) -> HashTable:
    size = in_range(as_int(data.get("size", DEFAULT_SIZE), "size"), 1, MAX_SIZE, "size")
    policy = one_of(data.get("policy", "chaining"), POLICIES, "policy")
    deletion = one_of(data.get("deletion", "tombstone"), DELETIONS, "deletion")
    table = HashTable(size=size, policy=policy, deletion=deletion)

    entries = data.get("entries", [])
    if not isinstance(entries, list):
        raise InvalidInput("entries must be a list of [key, value] pairs")
    for entry in entries:
        if isinstance(entry, dict):
            key, value = entry.get("key"), entry.get("value")
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            key, value = entry
        else:
            raise InvalidInput(f"Bad hash-table entry: {entry!r}")
        run_silently(table.insert, _key(key), _value(value))
    return table


def _key(value: Any) -> str:
    key = as_str(value, "key")
    if not key:
        raise InvalidInput("key must not be empty")
    return key


def _value(value: Any) -> Any:
    if value is None or value == "":
        raise InvalidInput("value must not be empty")
    return value


def prepare_insert(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"table": _prepare_table(data), "key": _key(require(data, "key")), "value": _value(require(data, "value"))}


def prepare_lookup(data: Dict[str, Any]) -> Dict[str, Any]:
    return {"table": _prepare_table(data), "key": _key(require(data, "key"))}


def hash_insert(table: HashTable, key: str, value: Any, emit):
    return (yield from table.insert(key, value, emit))


def hash_search(table: HashTable, key: str, emit):
    return (yield from table.search(key, emit))


def hash_delete(table: HashTable, key: str, emit):
    return (yield from table.delete(key, emit))
