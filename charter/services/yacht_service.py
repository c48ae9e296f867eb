from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from charter.core.change_feed import change_feed
from charter.core.service_utils import ensure_exists, ensure_no_related_records
from charter.models.booking import Booking
from charter.models.yacht import Yacht, YachtOption
from charter.schemas.yacht import (
    YachtCreate,
    YachtOptionCreate,
    YachtOptionUpdate,
    YachtUpdate,
)


class YachtService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_all(self, available: Optional[bool] = None) -> List[Yacht]:
        stmt = select(Yacht).options(selectinload(Yacht.options)).order_by(Yacht.id)
        if available is not None:
            stmt = stmt.where(Yacht.is_available == available)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, yacht_id: int) -> Optional[Yacht]:
        stmt = (
            select(Yacht)
            .options(selectinload(Yacht.options))
            .where(Yacht.id == yacht_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, yacht_id: int) -> Yacht:
        return ensure_exists(await self.get_by_id(yacht_id), "Yacht", yacht_id)

    async def create(self, yacht_data: YachtCreate) -> Yacht:
        db_yacht = Yacht(**yacht_data.model_dump())
        self.db.add(db_yacht)
        await self.db.commit()
        change_feed.publish("yachts", "INSERT")

        # Eagerly load options to avoid lazy loading during serialization
        return await self.get(db_yacht.id)

    async def update(self, yacht_id: int, yacht_data: YachtUpdate) -> Yacht:
        db_yacht = await self.get(yacht_id)

        update_data = yacht_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_yacht, field, value)

        await self.db.commit()
        change_feed.publish("yachts", "UPDATE")
        return await self.get(yacht_id)

    async def delete(self, yacht_id: int) -> bool:
        db_yacht = await self.get(yacht_id)

        bookings = await self.db.execute(
            select(func.count(Booking.id)).where(Booking.yacht_id == yacht_id)
        )
        ensure_no_related_records(bookings.scalar_one(), "yacht", "bookings")

        await self.db.delete(db_yacht)
        await self.db.commit()
        change_feed.publish("yachts", "DELETE")
        return True

    # Yacht options

    async def get_options(
        self, yacht_id: int, active_only: bool = True
    ) -> List[YachtOption]:
        await self.get(yacht_id)
        stmt = (
            select(YachtOption)
            .where(YachtOption.yacht_id == yacht_id)
            .order_by(YachtOption.display_order, YachtOption.id)
        )
        if active_only:
            stmt = stmt.where(YachtOption.is_active)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_option(self, option_id: int) -> YachtOption:
        result = await self.db.execute(
            select(YachtOption).where(YachtOption.id == option_id)
        )
        return ensure_exists(result.scalar_one_or_none(), "Yacht option", option_id)

    async def create_option(
        self, yacht_id: int, option_data: YachtOptionCreate
    ) -> YachtOption:
        await self.get(yacht_id)
        db_option = YachtOption(yacht_id=yacht_id, **option_data.model_dump())
        self.db.add(db_option)
        await self.db.commit()
        await self.db.refresh(db_option)
        change_feed.publish("yacht_options", "INSERT")
        return db_option

    async def update_option(
        self, option_id: int, option_data: YachtOptionUpdate
    ) -> YachtOption:
        db_option = await self.get_option(option_id)

        update_data = option_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(db_option, field, value)

        await self.db.commit()
        await self.db.refresh(db_option)
        change_feed.publish("yacht_options", "UPDATE")
        return db_option

    async def delete_option(self, option_id: int) -> bool:
        """Delete an option. Bookings keep their snapshot of its name and price."""
        db_option = await self.get_option(option_id)
        await self.db.delete(db_option)
        await self.db.commit()
        change_feed.publish("yacht_options", "DELETE")
        return True
