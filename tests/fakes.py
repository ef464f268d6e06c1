"""In-memory stand-ins for the collaborators the services talk to.

FakeDatabase covers the pymongo subset used by the repositories:
equality/dotted-path filters, `$ne`, `$exists`, `$in`, `$text`,
`$set`/`$unset`/`$push`/`$pull`, multi-key sort and unique indexes.
"""
import copy
import re
from types import SimpleNamespace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from bson import ObjectId
from pymongo.errors import DuplicateKeyError

_WORD = re.compile(r"\w+")


def _tokens(text: str) -> set:
    return {t.lower() for t in _WORD.findall(text or "")}


def _values(doc: Any, path: str) -> List[Any]:
    current = [doc]
    for part in path.split("."):
        nxt = []
        for item in current:
            if isinstance(item, dict) and part in item:
                nxt.append(item[part])
            elif isinstance(item, list) and part.isdigit():
                if int(part) < len(item):
                    nxt.append(item[int(part)])
            elif isinstance(item, list):
                nxt.extend(e[part] for e in item if isinstance(e, dict) and part in e)
        current = nxt
    return current


def _eq(candidate: Any, expected: Any) -> bool:
    if candidate == expected:
        return True
    return isinstance(candidate, list) and expected in candidate


def _match_field(doc: Dict[str, Any], path: str, cond: Any) -> bool:
    values = _values(doc, path)
    if isinstance(cond, dict) and cond and all(k.startswith("$") for k in cond):
        for op, arg in cond.items():
            if op == "$ne":
                if any(_eq(v, arg) for v in values):
                    return False
            elif op == "$exists":
                if bool(values) != bool(arg):
                    return False
            elif op == "$in":
                if not any(_eq(v, a) for v in values for a in arg):
                    return False
            else:
                raise NotImplementedError(op)
        return True
    return any(_eq(v, cond) for v in values)


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]) -> None:
        self._docs = docs

    def sort(self, key_or_list, direction: Optional[int] = None) -> "FakeCursor":
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction or 1)]
        for key, dirn in reversed(keys):
            self._docs.sort(key=lambda d: d.get(key), reverse=dirn < 0)
        return self

    def __iter__(self):
        return iter(self._docs)


class FakeCollection:
    def __init__(self, name: str, text_fields: Iterable[str] = ()) -> None:
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.text_fields = tuple(text_fields)
        self.unique_keys: List[Tuple[str, ...]] = []

    # --- helpers ---
    def _matches(self, doc: Dict[str, Any], flt: Optional[Dict[str, Any]]) -> bool:
        for key, cond in (flt or {}).items():
            if key == "$text":
                wanted = _tokens(cond["$search"])
                have = set()
                for field in self.text_fields:
                    have |= _tokens(doc.get(field, ""))
                if not wanted & have:
                    return False
            elif not _match_field(doc, key, cond):
                return False
        return True

    def _first(self, flt) -> Optional[Dict[str, Any]]:
        return next((d for d in self.docs if self._matches(d, flt)), None)

    def _check_unique(self, candidate: Dict[str, Any], ignore: Optional[Dict[str, Any]] = None) -> None:
        for other in self.docs:
            if other is ignore:
                continue
            if other["_id"] == candidate["_id"]:
                raise DuplicateKeyError("duplicate _id")
            for keys in self.unique_keys:
                if all(other.get(k) == candidate.get(k) for k in keys):
                    raise DuplicateKeyError(f"duplicate key {keys}")

    def _apply(self, doc: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
        out = copy.deepcopy(doc)
        for op, fields in update.items():
            for field, value in fields.items():
                if op == "$set":
                    out[field] = copy.deepcopy(value)
                elif op == "$unset":
                    *parents, last = field.split(".")
                    target = out
                    for part in parents:
                        target = target[int(part)] if isinstance(target, list) else target.get(part, {})
                    if isinstance(target, list) and last.isdigit() and int(last) < len(target):
                        # array slots are nulled, not removed
                        target[int(last)] = None
                    elif isinstance(target, dict):
                        target.pop(last, None)
                elif op == "$push":
                    out.setdefault(field, []).append(copy.deepcopy(value))
                elif op == "$pull":
                    current = out.get(field) or []
                    if isinstance(value, dict):
                        out[field] = [
                            e for e in current
                            if not (isinstance(e, dict) and all(e.get(k) == v for k, v in value.items()))
                        ]
                    else:
                        out[field] = [e for e in current if e != value]
                else:
                    raise NotImplementedError(op)
        return out

    # --- pymongo surface ---
    def create_index(self, keys, unique: bool = False, name: Optional[str] = None, **kwargs) -> str:
        if unique:
            self.unique_keys.append(tuple(k for k, _ in keys))
        return name or "_".join(k for k, _ in keys)

    def insert_one(self, doc: Dict[str, Any]):
        doc.setdefault("_id", ObjectId())
        stored = copy.deepcopy(doc)
        self._check_unique(stored)
        self.docs.append(stored)
        return SimpleNamespace(inserted_id=doc["_id"])

    def find_one(self, flt: Optional[Dict[str, Any]] = None, *args, **kwargs):
        doc = self._first(flt)
        return copy.deepcopy(doc) if doc else None

    def find(self, flt: Optional[Dict[str, Any]] = None, *args, **kwargs) -> FakeCursor:
        return FakeCursor([copy.deepcopy(d) for d in self.docs if self._matches(d, flt)])

    def count_documents(self, flt: Optional[Dict[str, Any]] = None) -> int:
        return sum(1 for d in self.docs if self._matches(d, flt))

    def update_one(self, flt, update):
        doc = self._first(flt)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        new = self._apply(doc, update)
        self._check_unique(new, ignore=doc)
        changed = new != doc
        self.docs[self.docs.index(doc)] = new
        return SimpleNamespace(matched_count=1, modified_count=int(changed))

    def find_one_and_update(self, flt, update, return_document=False, **kwargs):
        doc = self._first(flt)
        if doc is None:
            return None
        new = self._apply(doc, update)
        self._check_unique(new, ignore=doc)
        self.docs[self.docs.index(doc)] = new
        # ReturnDocument.AFTER is True
        return copy.deepcopy(new if return_document else doc)

    def delete_one(self, flt):
        doc = self._first(flt)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)


class FakeDatabase:
    TEXT_FIELDS = {"note": ("content",)}

    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, self.TEXT_FIELDS.get(name, ()))
        return self.collections[name]


class FakeResponse:
    """Enough of requests.Response for the provider adapters."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "", reason: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text
        self.reason = reason or ("OK" if status_code < 400 else "Error")

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload

    def raise_for_status(self) -> None:
        import requests

        if not self.ok:
            raise requests.HTTPError(f"{self.status_code} {self.reason}", response=self)
