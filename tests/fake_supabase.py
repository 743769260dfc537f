# tests/fake_supabase.py

"""
In-memory stand-in for the supabase-py client used by the tests.

Covers the PostgREST builder calls the gateway makes:
table().select()/insert()/update()/delete()/upsert(), .eq(), .order(),
.limit(), .execute(), plus the "*, profiles(name)" embed on attendance.
`fail(table, op)` makes the next matching execute() raise.
"""

import itertools
import uuid
from types import SimpleNamespace
from unittest.mock import Mock


class FakeAPIError(Exception):
    def __init__(self, message):
        super().__init__(message)
        self.message = message


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.on_conflict = ""
        self.filters = []
        self.order_by = None
        self.desc = False
        self.limit_n = None

    # -- verbs --------------------------------------------------
    def select(self, columns="*", **kwargs):
        self.op = "select"
        self.columns = columns
        return self

    def insert(self, payload, **kwargs):
        self.op = "insert"
        self.payload = payload
        return self

    def update(self, payload, **kwargs):
        self.op = "update"
        self.payload = payload
        return self

    def delete(self, **kwargs):
        self.op = "delete"
        return self

    def upsert(self, payload, on_conflict="", **kwargs):
        self.op = "upsert"
        self.payload = payload
        self.on_conflict = on_conflict
        return self

    # -- modifiers ----------------------------------------------
    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False, **kwargs):
        self.order_by = column
        self.desc = desc
        return self

    def limit(self, n):
        self.limit_n = n
        return self

    # -- execution ----------------------------------------------
    def _matches(self, row):
        return all(row.get(c) == v for c, v in self.filters)

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if (self.table, self.op) in self.db.failures:
            self.db.failures.remove((self.table, self.op))
            raise FakeAPIError(f"connection refused ({self.table}.{self.op})")

        rows = self.db.tables.setdefault(self.table, [])
        return SimpleNamespace(data=getattr(self, f"_{self.op}")(rows))

    def _select(self, rows):
        out = [dict(r) for r in rows if self._matches(r)]
        if self.order_by:
            out.sort(key=lambda r: (r.get(self.order_by) is None, r.get(self.order_by)), reverse=self.desc)
        if "profiles(name)" in self.columns:
            for r in out:
                profile = self.db.find("profiles", id=r.get("user_id"))
                r["profiles"] = {"name": profile["name"]} if profile else None
        if self.limit_n is not None:
            out = out[: self.limit_n]
        return out

    def _insert(self, rows):
        payload = self.payload if isinstance(self.payload, list) else [self.payload]
        created = []
        for item in payload:
            row = dict(item)
            row.setdefault("id", str(uuid.uuid4()))
            row.setdefault("created_at", next(self.db.clock))
            rows.append(row)
            created.append(dict(row))
        return created

    def _update(self, rows):
        changed = []
        for r in rows:
            if self._matches(r):
                r.update(self.payload)
                changed.append(dict(r))
        return changed

    def _delete(self, rows):
        removed = [r for r in rows if self._matches(r)]
        rows[:] = [r for r in rows if not self._matches(r)]
        return removed

    def _upsert(self, rows):
        keys = [k.strip() for k in self.on_conflict.split(",") if k.strip()]
        row = dict(self.payload)
        for existing in rows:
            if keys and all(existing.get(k) == row.get(k) for k in keys):
                existing.update(row)
                return [dict(existing)]
        rows.append(row)
        return [dict(row)]


class FakeSupabase:
    def __init__(self):
        self.tables = {"profiles": [], "events": [], "attendance": []}
        self.failures = []
        self.calls = []
        self.clock = itertools.count(1)
        self.auth = Mock()
        self.postgrest = Mock()

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, op):
        self.failures.append((table, op))

    def find(self, table, **criteria):
        return next(
            (r for r in self.tables.get(table, []) if all(r.get(k) == v for k, v in criteria.items())),
            None,
        )

    def rows(self, table, **criteria):
        return [r for r in self.tables.get(table, []) if all(r.get(k) == v for k, v in criteria.items())]

    # -- seeding --------------------------------------------------
    def add_profile(self, user_id, name, role="MEMBER", is_approved=True, email=None):
        row = {
            "id": user_id,
            "name": name,
            "email": email or f"{user_id}@example.com",
            "role": role,
            "position": None,
            "avatar": None,
            "is_approved": is_approved,
            "created_at": next(self.clock),
        }
        self.tables["profiles"].append(row)
        return row

    def add_event(self, event_id, title, date, type="PRACTICE", location="Court A"):
        row = {
            "id": event_id,
            "title": title,
            "type": type,
            "date": date,
            "start_time": "19:00:00",
            "end_time": "21:00:00",
            "location": location,
            "description": "",
        }
        self.tables["events"].append(row)
        return row

    def add_attendance(self, event_id, user_id, status="GOING", comment=None):
        row = {
            "event_id": event_id,
            "user_id": user_id,
            "status": status,
            "comment": comment,
            "updated_at": "2024-05-15T10:00:00Z",
        }
        self.tables["attendance"].append(row)
        return row
