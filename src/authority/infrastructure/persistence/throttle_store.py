"""SQLAlchemy implementation of the throttle store."""

from sqlalchemy.ext.asyncio import AsyncSession

from authority.domain.entities import ThrottleRecord
from authority.domain.interfaces import ThrottleStore
from authority.infrastructure.persistence.credential_store import ensure_utc
from authority.infrastructure.persistence.models import ThrottleModel
from authority.infrastructure.persistence.repositories import ThrottleRepository


def to_record(model: ThrottleModel) -> ThrottleRecord:
    return ThrottleRecord(
        user_id=model.user_id,
        failed_attempts=model.failed_attempts,
        last_attempt_at=ensure_utc(model.last_attempt_at),
        suspended_until=ensure_utc(model.suspended_until),
        banned_at=ensure_utc(model.banned_at),
    )


class SQLThrottleStore(ThrottleStore):
    """Throttle store backed by the throttle table."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.throttles = ThrottleRepository(session)

    async def get(self, user_id: str) -> ThrottleRecord | None:
        model = await self.throttles.get_by_user_id(user_id)
        return to_record(model) if model else None

    async def save(self, record: ThrottleRecord) -> ThrottleRecord:
        model = await self.throttles.upsert(
            ThrottleModel(
                user_id=record.user_id,
                failed_attempts=record.failed_attempts,
                last_attempt_at=record.last_attempt_at,
                suspended_until=record.suspended_until,
                banned_at=record.banned_at,
            )
        )
        await self.session.commit()
        return to_record(model)
