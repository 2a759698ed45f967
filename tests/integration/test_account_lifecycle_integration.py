"""End-to-end account lifecycle against SQLite and the console email provider."""

import re

import pytest

from authority.domain.exceptions import ErrorKind
from authority.domain.services import UserStatus
from authority.infrastructure.persistence import SQLCredentialStore
from authority.infrastructure.service_factory import (
    create_account_service,
    create_throttle_tracker,
)
from authority.infrastructure.services.email import ConsoleEmailProvider, EmailNotificationGateway


@pytest.fixture
def outbox() -> ConsoleEmailProvider:
    return ConsoleEmailProvider()


@pytest.fixture
def gateway(outbox, settings) -> EmailNotificationGateway:
    return EmailNotificationGateway(outbox, settings=settings)


@pytest.fixture
def service(db_session, gateway, settings):
    return create_account_service(db_session, gateway, settings)


def _code_from(message: dict[str, str]) -> str:
    match = re.search(r"activation code: (\S+)", message["text_body"])
    assert match, message["text_body"]
    return match.group(1)


@pytest.mark.asyncio
async def test_register_activate_and_list(service, gateway, outbox):
    """Test the full flow from registration to an active listing."""
    registered = await service.register("alice@example.com", "s3cret")
    await gateway.drain()

    assert registered.success is True
    [message] = outbox.outbox
    assert message["to"] == "alice@example.com"
    assert f"/users/{registered.user_id}/activate/" in message["text_body"]

    [view] = await service.list_all()
    assert view.status is UserStatus.NOT_ACTIVE

    activated = await service.activate(registered.user_id, _code_from(message))
    assert activated.success is True

    [view] = await service.list_all()
    assert view.status is UserStatus.ACTIVE

    user = await service.get_by_id(registered.user_id)
    assert user.password_hash.startswith("$argon2id$")


@pytest.mark.asyncio
async def test_duplicate_registration_creates_no_second_row(service, db_session):
    await service.register("alice@example.com", "s3cret")

    outcome = await service.register("ALICE@example.com", "other")

    assert outcome.error is ErrorKind.DUPLICATE_USER
    assert len(await SQLCredentialStore(db_session).list_users()) == 1


@pytest.mark.asyncio
async def test_resend_replaces_code(service, gateway, outbox):
    registered = await service.register("alice@example.com", "s3cret")
    resent = await service.resend_activation("alice@example.com")
    await gateway.drain()

    assert resent.success is True
    old_code, new_code = (_code_from(m) for m in outbox.outbox)

    assert (await service.activate(registered.user_id, old_code)).error is ErrorKind.ACTIVATION_FAILED
    assert (await service.activate(registered.user_id, new_code)).success is True


@pytest.mark.asyncio
async def test_update_synchronizes_groups(service, db_session):
    store = SQLCredentialStore(db_session)
    groups = [await store.create_group(name) for name in ("A", "B", "C")]
    registered = await service.register("alice@example.com", "s3cret")

    await service.update(registered.user_id, "Alice", None, [g.id for g in groups])
    outcome = await service.update(registered.user_id, "Alice", "Liddell", [groups[1].id])

    assert outcome.success is True
    assert outcome.removed_group_ids == frozenset({groups[0].id, groups[2].id})
    user = await service.get_by_id(registered.user_id)
    assert user.group_ids == {groups[1].id}
    assert user.full_name == "Alice Liddell"


@pytest.mark.asyncio
async def test_listing_reflects_throttle(service, db_session, settings):
    tracker = create_throttle_tracker(db_session, settings)
    suspended = await service.register("suspended@example.com", "pw")
    banned = await service.register("banned@example.com", "pw")
    await tracker.suspend(suspended.user_id)
    await tracker.suspend(banned.user_id)
    await tracker.ban(banned.user_id)

    statuses = {view.email: view.status for view in await service.list_all()}

    assert statuses["suspended@example.com"] is UserStatus.SUSPENDED
    assert statuses["banned@example.com"] is UserStatus.BANNED


@pytest.mark.asyncio
async def test_remove_user_with_throttle_record(service, db_session, settings):
    registered = await service.register("alice@example.com", "s3cret")
    await create_throttle_tracker(db_session, settings).add_login_attempt(registered.user_id)

    assert await service.remove(registered.user_id) is True
    assert await service.get_by_id(registered.user_id) is None
    assert await service.list_all() == []
    assert await service.remove(registered.user_id) is False
