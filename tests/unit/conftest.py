"""Pytest configuration for unit tests.

Provides in-memory stand-ins for the credential store, throttle store and
notification gateway.
"""

import asyncio
import copy
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

import pytest

from authority.core.config import Settings
from authority.domain.entities import Group, ThrottleRecord, User, normalize_email
from authority.domain.exceptions import DuplicateUserError, UserNotFoundError
from authority.domain.interfaces import CredentialStore, NotificationGateway, ThrottleStore
from authority.domain.services import AccountLifecycleService, ThrottleTracker


class InMemoryCredentialStore(CredentialStore):
    """Credential store keeping copies of users in a dict."""

    def __init__(self, groups: list[Group] | None = None) -> None:
        self.users: dict[str, User] = {}
        self.groups: list[Group] = list(groups or [])
        self.fail_next_save: Exception | None = None
        self.save_calls = 0
        self._lock = asyncio.Lock()

    async def find_by_id(self, user_id: str) -> User | None:
        await asyncio.sleep(0)
        user = self.users.get(user_id)
        return copy.deepcopy(user) if user else None

    async def find_by_login(self, email: str) -> User | None:
        login = normalize_email(email)
        found = next((user for user in self.users.values() if user.email == login), None)
        # Yield after the lookup so concurrent callers race between check and create
        await asyncio.sleep(0)
        return copy.deepcopy(found) if found else None

    async def create(
        self,
        email: str,
        password_hash: str,
        activation_code_hash: str | None = None,
    ) -> User:
        async with self._lock:
            login = normalize_email(email)
            if any(user.email == login for user in self.users.values()):
                raise DuplicateUserError("User already exists.")
            user = User(
                id=str(uuid.uuid4()),
                email=login,
                password_hash=password_hash,
                activation_code_hash=activation_code_hash,
            )
            self.users[user.id] = user
            return copy.deepcopy(user)

    async def save(self, user: User) -> User:
        self.save_calls += 1
        if self.fail_next_save is not None:
            error, self.fail_next_save = self.fail_next_save, None
            raise error
        if user.id not in self.users:
            raise UserNotFoundError("User not found")
        self.users[user.id] = copy.deepcopy(user)
        return copy.deepcopy(user)

    async def delete(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    async def list_users(self) -> list[User]:
        return [copy.deepcopy(user) for user in self.users.values()]

    async def list_all_groups(self) -> list[Group]:
        return list(self.groups)


class InMemoryThrottleStore(ThrottleStore):
    def __init__(self) -> None:
        self.records: dict[str, ThrottleRecord] = {}
        self.writes = 0

    async def get(self, user_id: str) -> ThrottleRecord | None:
        record = self.records.get(user_id)
        return copy.deepcopy(record) if record else None

    async def save(self, record: ThrottleRecord) -> ThrottleRecord:
        self.writes += 1
        self.records[record.user_id] = copy.deepcopy(record)
        return copy.deepcopy(record)


@dataclass
class SentNotification:
    template_name: str
    data: dict[str, Any]
    recipient: str
    subject: str


@dataclass
class RecordingGateway(NotificationGateway):
    sent: list[SentNotification] = field(default_factory=list)

    def send(
        self,
        template_name: str,
        data: Mapping[str, Any],
        recipient: str,
        subject: str,
    ) -> None:
        self.sent.append(SentNotification(template_name, dict(data), recipient, subject))

    @property
    def last_code(self) -> str:
        return self.sent[-1].data["activation_code"]


class FakeClock:
    """Settable clock for throttle tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def groups() -> list[Group]:
    return [
        Group(id="grp-a", name="Admins"),
        Group(id="grp-b", name="Editors"),
        Group(id="grp-c", name="Readers"),
    ]


@pytest.fixture
def credential_store(groups) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(groups)


@pytest.fixture
def throttle_store() -> InMemoryThrottleStore:
    return InMemoryThrottleStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def tracker(throttle_store, settings: Settings, clock) -> ThrottleTracker:
    return ThrottleTracker(throttle_store, settings=settings, clock=clock)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def service(credential_store, tracker, gateway, settings) -> AccountLifecycleService:
    """Lifecycle service wired to in-memory collaborators and a cheap hasher."""
    return AccountLifecycleService(
        store=credential_store,
        throttle=tracker,
        notifications=gateway,
        settings=settings,
        password_hasher=lambda password: f"hashed:{password}",
    )
