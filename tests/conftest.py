"""Shared test fixtures."""

import copy
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from memberportal.api.tokens import create_access_token
from memberportal.comments.authorization import AdminDirectory
from memberportal.config import settings
from memberportal.db.base import Base
# Import all models to register with Base.metadata
import memberportal.db.models  # noqa: F401
from memberportal.db.models.portal_user import PortalUserRow
from memberportal.models.member import Viewer
from memberportal.store.base import RecordNotFoundError, RecordStore, RowFilter, RowPage
from memberportal.store import fields as F

LINK_FIELDS = {F.COMMENT_DEAL, F.COMMENT_AUTHOR, F.COMMENT_TARGET_MEMBERS, F.DEAL_STEERCO_MEMBERS}

DEALS = settings.deals_table_id
MEMBERS = settings.members_table_id
MEMBER_COMMENTS = settings.deal_comments_table_id
STEERCO_COMMENTS = settings.steerco_comments_table_id
SAMIRA_COMMENTS = settings.samira_comments_table_id


class InMemoryRecordStore(RecordStore):
    """Record store fake mimicking Baserow's link-row and timestamp behaviour."""

    def __init__(self):
        self.tables: dict[int, dict[int, dict[str, Any]]] = {}
        self.names: dict[int, str] = {}
        self.writes: list[tuple[str, int, int | None, dict]] = []
        self._next_id = 1000
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    # -- helpers ---------------------------------------------------------

    def _tick(self) -> str:
        self._clock += timedelta(seconds=1)
        return self._clock.isoformat().replace("+00:00", "Z")

    def _links(self, values) -> list[dict]:
        out = []
        for value in values or []:
            link_id = value["id"] if isinstance(value, dict) else value
            out.append({"id": link_id, "value": self.names.get(link_id, f"Row {link_id}")})
        return out

    def _apply(self, row: dict, fields: dict) -> None:
        for name, value in fields.items():
            row[name] = self._links(value) if name in LINK_FIELDS else value

    def seed(self, table_id: int, row: dict) -> dict:
        """Insert a row verbatim (no write recorded)."""
        stored = copy.deepcopy(row)
        if "id" not in stored:
            self._next_id += 1
            stored["id"] = self._next_id
        for name in LINK_FIELDS & stored.keys():
            stored[name] = self._links(stored[name])
        self.tables.setdefault(table_id, {})[stored["id"]] = stored
        return copy.deepcopy(stored)

    def raw(self, table_id: int, row_id: int) -> dict:
        return self.tables[table_id][row_id]

    @staticmethod
    def _matches(row: dict, f: RowFilter) -> bool:
        value = row.get(f.field)
        if f.type == "link_row_has":
            return any(item.get("id") == int(f.value) for item in value or [])
        if f.type == "boolean":
            return bool(value) == bool(f.value)
        if f.type == "equal":
            return value == f.value
        raise ValueError(f"unsupported filter {f.type}")

    # -- RecordStore -----------------------------------------------------

    async def list_rows(self, table_id, filters=None, page=1, size=100, search=None) -> RowPage:
        rows = list(self.tables.get(table_id, {}).values())
        rows = [r for r in rows if all(self._matches(r, f) for f in filters or [])]
        if search:
            needle = search.lower()
            rows = [r for r in rows if any(isinstance(v, str) and needle in v.lower() for v in r.values())]
        start = (page - 1) * size
        chunk = rows[start:start + size]
        more = start + size < len(rows)
        return RowPage(
            count=len(rows),
            results=copy.deepcopy(chunk),
            next=f"?page={page + 1}" if more else None,
            previous=f"?page={page - 1}" if page > 1 else None,
        )

    async def get_row(self, table_id, row_id):
        try:
            return copy.deepcopy(self.tables[table_id][row_id])
        except KeyError:
            raise RecordNotFoundError(f"row {row_id} not found", status_code=404) from None

    async def create_row(self, table_id, fields):
        self._next_id += 1
        now = self._tick()
        row = {"id": self._next_id, F.COMMENT_CREATED: now, F.COMMENT_UPDATED: now}
        self._apply(row, fields)
        self.tables.setdefault(table_id, {})[row["id"]] = row
        self.writes.append(("create", table_id, row["id"], copy.deepcopy(fields)))
        return copy.deepcopy(row)

    async def update_row(self, table_id, row_id, fields):
        row = self.tables.get(table_id, {}).get(row_id)
        if row is None:
            raise RecordNotFoundError(f"row {row_id} not found", status_code=404)
        self._apply(row, fields)
        row[F.COMMENT_UPDATED] = self._tick()
        self.writes.append(("update", table_id, row_id, copy.deepcopy(fields)))
        return copy.deepcopy(row)


class FakeAdminDirectory(AdminDirectory):
    def __init__(self, emails=()):
        self.emails = {e.lower() for e in emails}

    async def is_admin(self, email: str) -> bool:
        return bool(email) and email.lower() in self.emails


ADMIN_EMAIL = "samira@example.com"


@pytest.fixture
def store():
    s = InMemoryRecordStore()
    s.names.update({1: "Member One", 2: "Member Two", 3: "Member Three", 9: "Samira Admin"})
    s.seed(DEALS, {"id": 10, "Name": "Acme Series A", F.DEAL_STEERCO_MEMBERS: [3]})
    s.seed(DEALS, {"id": 20, "Name": "Globex Seed", F.DEAL_STEERCO_MEMBERS: [1]})
    return s


@pytest.fixture
def admin_directory():
    return FakeAdminDirectory([ADMIN_EMAIL])


@pytest.fixture
def viewers() -> dict[str, Viewer]:
    return {
        "m1": Viewer(member_id=1, user_id="usr_m1", email="one@example.com", name="Member One"),
        "m2": Viewer(member_id=2, user_id="usr_m2", email="two@example.com", name="Member Two"),
        "m3": Viewer(member_id=3, user_id="usr_m3", email="three@example.com", name="Member Three"),
        "admin": Viewer(member_id=9, user_id="usr_admin", email=ADMIN_EMAIL, name="Samira Admin"),
    }


@pytest.fixture
async def db_engine(viewers):
    """In-memory SQLite engine seeded with the test portal users."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)() as session:
        for viewer in viewers.values():
            session.add(
                PortalUserRow(
                    user_id=viewer.user_id,
                    email=viewer.email,
                    display_name=viewer.name,
                    member_id=viewer.member_id,
                )
            )
        session.add(PortalUserRow(user_id="usr_unlinked", email="unlinked@example.com", member_id=None))
        await session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
def app(db_engine, store, admin_directory):
    """Test application wired to the in-memory store and database."""
    from memberportal.main import create_app

    _app = create_app()
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    _app.state.record_store = store
    _app.state.admin_directory = admin_directory
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers(viewers):
    """Return bearer headers for a named test viewer."""

    def _headers(name: str) -> dict[str, str]:
        viewer = viewers[name]
        return {"Authorization": f"Bearer {create_access_token(viewer.user_id, viewer.email)}"}

    return _headers
