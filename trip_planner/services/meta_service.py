"""
Meta Service - process-wide key/value settings shared by all clients
"""
import logging

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from trip_planner.core.exceptions import FieldValidationError, NotFoundError
from trip_planner.core.identifiers import now_iso
from trip_planner.core.validation import JsonBody, has_any_key
from trip_planner.models import AppMeta

logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class MetaService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_meta(self, key: str) -> AppMeta:
        stmt = select(AppMeta).where(AppMeta.key == key).execution_options(populate_existing=True)
        result = await self.db.execute(stmt)
        item = result.scalar_one_or_none()
        if item is None:
            raise NotFoundError("Meta key not found")
        return item

    async def put_meta(self, key: str, body: JsonBody) -> AppMeta:
        """
        Insert or replace the value stored under ``key``.

        ``value`` may be any JSON value, including null, but must be present.

        Raises:
            FieldValidationError: If the body has no ``value`` key
        """
        if not has_any_key(body, ("value",)):
            raise FieldValidationError("value is required", field="value")

        insert = _UPSERT_DIALECTS[self.db.bind.dialect.name]
        stmt = insert(AppMeta).values(key=key, value=body["value"], updated_at=now_iso())
        stmt = stmt.on_conflict_do_update(
            index_elements=[AppMeta.key],
            set_={"value": stmt.excluded["value"], "updated_at": stmt.excluded["updated_at"]},
        )
        await self.db.execute(stmt)
        await self.db.commit()

        logger.debug(f"Stored meta key {key}")
        return await self.get_meta(key)
