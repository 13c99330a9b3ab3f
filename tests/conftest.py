import os

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-anon-key")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "test"

import copy
import itertools
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from postgrest.exceptions import APIError

from paymirror.database.supabase_client import get_supabase
from paymirror.main import app


UNIQUE_COLUMNS = {
    "rback_pages": ("pagename", "pageurl"),
    "roles": ("name",),
    "users": ("email",),
}

ROW_DEFAULTS = {
    "rback_pages": {"group_name": "General"},
    "rback_roles_pages": {
        "userid": None,
        "isview": False,
        "isadd": False,
        "isedit": False,
        "isdelete": False,
        "isupdate": False,
        "filters": None,
    },
}


class FakeQuery:
    """In-memory stand-in for the postgrest request builder"""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.columns = "*"
        self.payload = None
        self.want_count = False
        self.filters = []
        self.order_by = None
        self.max_rows = None

    def select(self, columns="*", count=None):
        self.op = "select"
        self.columns = columns
        self.want_count = count is not None
        return self

    def insert(self, rows):
        self.op = "insert"
        self.payload = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, patch):
        self.op = "update"
        self.payload = patch
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def is_(self, column, value):
        assert value == "null"
        self.filters.append(lambda row: row.get(column) is None)
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def limit(self, size):
        self.max_rows = size
        return self

    def _matching(self):
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def _project(self, row):
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        names = [c.strip() for c in self.columns.split(",")]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    def execute(self):
        self.db.calls.append((self.table, self.op))
        if self.table in self.db.broken_tables:
            raise RuntimeError(f"connection to {self.table} lost")

        if self.op == "insert":
            return SimpleNamespace(data=self.db.insert(self.table, self.payload), count=None)
        if self.op == "update":
            return SimpleNamespace(data=self.db.update(self.table, self._matching(), self.payload), count=None)
        if self.op == "delete":
            matched = self._matching()
            self.db.tables[self.table] = [r for r in self.db.rows(self.table) if r not in matched]
            return SimpleNamespace(data=copy.deepcopy(matched), count=None)

        rows = self._matching()
        if self.order_by:
            column, desc = self.order_by
            rows = sorted(rows, key=lambda r: (r.get(column) is None, r.get(column)), reverse=desc)
        count = len(rows) if self.want_count else None
        if self.max_rows is not None:
            rows = rows[:self.max_rows]
        return SimpleNamespace(data=[self._project(r) for r in rows], count=count)


class FakeAuth:
    def __init__(self):
        self.tokens = {}
        self.passwords = {}

    def register(self, email, password, token):
        self.passwords[email] = password
        self.tokens[token] = email

    def get_user(self, jwt=None):
        if jwt not in self.tokens:
            raise Exception("invalid JWT: unable to parse or verify signature")
        return SimpleNamespace(user=SimpleNamespace(email=self.tokens[jwt]))

    def sign_in_with_password(self, credentials):
        email = credentials["email"]
        if self.passwords.get(email) != credentials["password"]:
            raise Exception("Invalid login credentials")
        token = next(t for t, e in self.tokens.items() if e == email)
        return SimpleNamespace(
            user=SimpleNamespace(email=email),
            session=SimpleNamespace(access_token=token)
        )


class FakeSupabase:
    """Enough of supabase.Client for the services: tables, unique keys and auth"""

    def __init__(self):
        self.tables = {}
        self.sequences = {}
        self.calls = []
        self.broken_tables = set()
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)

    def rows(self, table):
        return self.tables.setdefault(table, [])

    def seed(self, table, rows):
        for row in rows:
            self.rows(table).append(dict(row))
        top = max((r["id"] for r in self.rows(table)), default=0)
        self.sequences[table] = itertools.count(top + 1)

    def _next_id(self, table):
        return next(self.sequences.setdefault(table, itertools.count(1)))

    def _check_unique(self, table, candidate, others):
        for column in UNIQUE_COLUMNS.get(table, ()):
            value = candidate.get(column)
            if value is not None and any(o.get(column) == value for o in others):
                raise APIError({
                    "code": "23505",
                    "message": f'duplicate key value violates unique constraint "{table}_{column}_key"',
                    "details": f"Key ({column})=({value}) already exists.",
                    "hint": None,
                })

    def insert(self, table, payload):
        pending = []
        for item in payload:
            row = {**ROW_DEFAULTS.get(table, {}), **copy.deepcopy(item)}
            self._check_unique(table, row, self.rows(table) + pending)
            pending.append(row)
        for row in pending:
            row["id"] = self._next_id(table)
            self.rows(table).append(row)
        return copy.deepcopy(pending)

    def update(self, table, matched, patch):
        for row in matched:
            others = [r for r in self.rows(table) if r is not row]
            self._check_unique(table, {**row, **patch}, others)
        for row in matched:
            row.update(copy.deepcopy(patch))
        return copy.deepcopy(matched)


ADMIN_TOKEN = "admin-token"
EDITOR_TOKEN = "editor-token"


@pytest.fixture
def db():
    fake = FakeSupabase()
    fake.seed("roles", [{"id": 1, "name": "admin"}, {"id": 2, "name": "editor"}])
    fake.seed("users", [
        {"id": 1, "email": "admin@paymirror.io", "first_name": "Ada", "last_name": "Admin", "role_id": 1},
        {"id": 7, "email": "editor@paymirror.io", "first_name": "Eddie", "last_name": "Editor", "role_id": 2},
    ])
    fake.auth.register("admin@paymirror.io", "admin-pass", ADMIN_TOKEN)
    fake.auth.register("editor@paymirror.io", "editor-pass", EDITOR_TOKEN)
    return fake


@pytest.fixture
def client(db):
    app.dependency_overrides[get_supabase] = lambda: db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def editor_headers():
    return {"Authorization": f"Bearer {EDITOR_TOKEN}"}


@pytest.fixture
def pages(db):
    db.seed("rback_pages", [
        {"id": 1, "pagename": "Dashboard", "pageurl": "/dashboard", "group_name": "Dashboard"},
        {"id": 2, "pagename": "Invoices", "pageurl": "/invoices", "group_name": "Billing"},
        {"id": 3, "pagename": "Reports", "pageurl": "/reports", "group_name": "General"},
    ])
    return db.rows("rback_pages")
