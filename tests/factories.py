"""Factory classes for creating test objects."""

import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from bizpass.core.passes import build_verification_url, generate_pass_code
from bizpass.models import BusinessItem, Document, EntryPass, Event, User
from bizpass.models.business import Business
from bizpass.utils.datetime import now_utc


class UserFactory:
    """Factory for creating User objects."""

    @staticmethod
    async def create(
        session: AsyncSession,
        email: Optional[str] = None,
        full_name: str = "Test User",
        **kwargs,
    ) -> User:
        user = User(
            id=kwargs.get("id", uuid.uuid4()),
            email=email or f"user_{uuid.uuid4().hex[:8]}@example.com",
            full_name=full_name,
            meta=kwargs.get("meta"),
        )

        session.add(user)
        await session.commit()
        await session.refresh(user)

        return user


class BusinessFactory:
    """Factory for creating Business objects."""

    @staticmethod
    async def create(
        session: AsyncSession,
        user_id: Optional[uuid.UUID] = None,
        name: str = "Test Enterprise",
        email: Optional[str] = "hello@test-enterprise.com",
        phone: Optional[str] = "+233 20 123 4567",
        **kwargs,
    ) -> Business:
        if user_id is None:
            user = await UserFactory.create(session)
            user_id = user.id

        business = Business(
            id=kwargs.pop("id", uuid.uuid4()),
            user_id=user_id,
            name=name,
            email=email,
            phone=phone,
            **kwargs,
        )

        session.add(business)
        await session.commit()
        await session.refresh(business)

        return business


class ItemFactory:
    """Factory for creating BusinessItem objects."""

    @staticmethod
    async def create(
        session: AsyncSession,
        business_id: Optional[uuid.UUID] = None,
        name: str = "Consulting hour",
        price: Optional[Decimal] = Decimal("150.00"),
        **kwargs,
    ) -> BusinessItem:
        if business_id is None:
            business = await BusinessFactory.create(session)
            business_id = business.id

        item = BusinessItem(
            id=kwargs.pop("id", uuid.uuid4()),
            business_id=business_id,
            name=name,
            price=price,
            **kwargs,
        )

        session.add(item)
        await session.commit()
        await session.refresh(item)

        return item


class DocumentFactory:
    """Factory for creating Document rows directly, bypassing numbering."""

    @staticmethod
    async def create(
        session: AsyncSession,
        business_id: Optional[uuid.UUID] = None,
        type: str = "invoice",
        number: Optional[str] = None,
        status: str = "draft",
        total_amount: Decimal = Decimal("0.00"),
        title: Optional[str] = None,
        content: Optional[dict[str, Any]] = None,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> Document:
        if business_id is None:
            business = await BusinessFactory.create(session)
            business_id = business.id

        prefix = "INV" if type == "invoice" else "RCPT"
        document = Document(
            id=kwargs.pop("id", uuid.uuid4()),
            business_id=business_id,
            type=type,
            number=number or f"{prefix}-T{uuid.uuid4().hex[:6].upper()}",
            title=title,
            status=status,
            total_amount=total_amount,
            content=content or {"client": {}, "items": []},
            created_at=created_at or now_utc(),
            **kwargs,
        )

        session.add(document)
        await session.commit()
        await session.refresh(document)

        return document


class EventFactory:
    """Factory for creating Event objects."""

    @staticmethod
    async def create(
        session: AsyncSession,
        business_id: Optional[uuid.UUID] = None,
        name: str = "Launch Night",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        is_active: bool = True,
        created_at: Optional[datetime] = None,
        **kwargs,
    ) -> Event:
        if business_id is None:
            business = await BusinessFactory.create(session)
            business_id = business.id

        event = Event(
            id=kwargs.pop("id", uuid.uuid4()),
            business_id=business_id,
            name=name,
            start_date=start_date,
            end_date=end_date,
            is_active=is_active,
            created_at=created_at or now_utc(),
            **kwargs,
        )

        session.add(event)
        await session.commit()
        await session.refresh(event)

        return event


class EntryPassFactory:
    """Factory for creating EntryPass objects with a plain verification URL and no QR."""

    @staticmethod
    async def create(
        session: AsyncSession,
        event: Optional[Event] = None,
        holder_name: str = "Esi Holder",
        status: str = "active",
        valid_from: Optional[datetime] = None,
        valid_until: Optional[datetime] = None,
        **kwargs,
    ) -> EntryPass:
        if event is None:
            event = await EventFactory.create(session)

        pass_id = kwargs.pop("id", uuid.uuid4())
        entry_pass = EntryPass(
            id=pass_id,
            event=event,
            pass_code=kwargs.pop("pass_code", generate_pass_code()),
            holder_name=holder_name,
            status=status,
            valid_from=valid_from,
            valid_until=valid_until,
            qr_code_url="",
            verification_url=build_verification_url("http://test", pass_id),
            **kwargs,
        )

        session.add(entry_pass)
        await session.commit()

        return entry_pass


def hours_from_now(hours: float) -> datetime:
    return now_utc() + timedelta(hours=hours)
