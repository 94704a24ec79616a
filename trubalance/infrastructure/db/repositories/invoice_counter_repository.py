# trubalance/infrastructure/db/repositories/invoice_counter_repository.py
"""Repository for the per-(user, financial year) invoice sequence counter."""

from __future__ import annotations

import uuid

from sqlalchemy import and_, case, func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from trubalance.infrastructure.db.models import InvoiceCounter


class InvoiceCounterRepository:
    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    def _insert(self):
        """Dialect-specific INSERT that supports ON CONFLICT ... DO UPDATE."""
        dialect = self.db.get_bind().dialect.name
        return sqlite_insert if dialect == "sqlite" else pg_insert

    async def next_sequence(
        self,
        user_id: str,
        financial_year: int,
        floor: int = 0,
    ) -> int:
        """
        Atomically advance and return the counter for (user_id, financial_year).

        One INSERT ... ON CONFLICT DO UPDATE ... RETURNING statement, so two
        concurrent callers can never read the same value. ``floor`` is the
        highest sequence already in use elsewhere (legacy invoices); the
        result is always greater than it.
        """
        insert = self._insert()
        stmt = insert(InvoiceCounter).values(
            id=uuid.uuid4(),
            user_id=user_id,
            financial_year=financial_year,
            last_sequence=floor + 1,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "financial_year"],
            set_={
                "last_sequence": case(
                    (InvoiceCounter.last_sequence >= floor, InvoiceCounter.last_sequence + 1),
                    else_=floor + 1,
                ),
                "updated_at": func.now(),
            },
        ).returning(InvoiceCounter.last_sequence)

        result = await self.db.execute(stmt)
        sequence = result.scalar_one()
        await self.db.commit()
        return int(sequence)

    async def get_current(
        self,
        user_id: str,
        financial_year: int,
    ) -> int:
        """Last issued sequence, 0 if nothing was issued yet this FY."""
        stmt = select(InvoiceCounter.last_sequence).where(
            and_(
                InvoiceCounter.user_id == user_id,
                InvoiceCounter.financial_year == financial_year,
            )
        )
        result = await self.db.execute(stmt)
        return int(result.scalar_one_or_none() or 0)
