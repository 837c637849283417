"""Pytest configuration and fixtures for the RentConnect test suite."""

import os
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from pathlib import Path

# Settings are read at import time, so CONFIG must point at the test file first.
os.environ["CONFIG"] = str(Path(__file__).parent / "resources" / "test.yaml")

import pytest  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import (  # noqa: E402
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rentconnect_backend.core.unit_of_work import UnitOfWork  # noqa: E402
from rentconnect_backend.database import Base, import_models  # noqa: E402
from rentconnect_backend.modules.property_management.models import (  # noqa: E402
    Landlord,
    Property,
    PropertyStatus,
)
from rentconnect_backend.modules.tenant_management.schemas import (  # noqa: E402
    TenantCreateRequest,
)
from rentconnect_backend.modules.tenant_management.services import (  # noqa: E402
    HouseholdPolicy,
)


@dataclass
class SentEmail:
    to_address: str
    subject: str
    html_body: str


class FakeNotifier:
    """Records every email; can raise for or refuse chosen addresses."""

    def __init__(self):
        self.sent: list[SentEmail] = []
        self.fail_for: set[str] = set()
        self.refuse_for: set[str] = set()

    async def send_email(self, to_address, subject, html_body, attachments=None):
        if to_address in self.fail_for:
            raise ConnectionError(f"SMTP connection dropped for {to_address}")
        if to_address in self.refuse_for:
            return False
        self.sent.append(SentEmail(to_address, subject, html_body))
        return True

    def sent_to(self, address: str) -> list[SentEmail]:
        return [mail for mail in self.sent if mail.to_address == address]


@dataclass
class FakeDocumentStore:
    """In-memory document store; set ``fail`` to make every store call raise."""

    fail: bool = False
    stored: list[tuple[str, bytes]] = field(default_factory=list)

    async def store(self, content, file_name, owner, category):
        if self.fail:
            raise OSError("document storage unavailable")
        url = (
            f"https://files.rentconnect.in/{owner.owner_type.value}/{owner.id}/"
            f"{category.value}/{file_name}"
        )
        self.stored.append((url, content))
        return url


@dataclass
class Seed:
    landlord_id: int
    landlord_email: str
    property_id: int
    property_title: str
    other_landlord_id: int
    other_property_id: int


@pytest.fixture
async def engine(tmp_path):
    """A fresh file-backed SQLite database per test."""
    import_models()
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'rentconnect.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def new_uow(session_factory):
    """Build a unit of work the way a request would get one."""

    def factory() -> UnitOfWork:
        return UnitOfWork(session_factory)

    return factory


@pytest.fixture
async def uow(new_uow):
    async with new_uow() as unit_of_work:
        yield unit_of_work


@pytest.fixture
async def seed(session_factory) -> Seed:
    """Two landlords, each with one draft property."""
    async with session_factory() as session:
        landlord = Landlord(
            name="Meera Iyer", email="meera.iyer@rentmail.in", phone_number="9876500001"
        )
        other = Landlord(name="Rahul Menon", email="rahul.menon@rentmail.in")
        session.add_all([landlord, other])
        await session.flush()

        prop = Property(
            landlord_id=landlord.id,
            title="Sea View 2BHK",
            city="Mumbai",
            status=PropertyStatus.DRAFT,
        )
        other_prop = Property(
            landlord_id=other.id, title="Garden Villa", city="Pune"
        )
        session.add_all([prop, other_prop])
        await session.commit()

        return Seed(
            landlord_id=landlord.id,
            landlord_email=landlord.email,
            property_id=prop.id,
            property_title=prop.title,
            other_landlord_id=other.id,
            other_property_id=other_prop.id,
        )


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def document_store() -> FakeDocumentStore:
    return FakeDocumentStore()


@pytest.fixture
def failing_document_store() -> FakeDocumentStore:
    return FakeDocumentStore(fail=True)


@pytest.fixture
def policy() -> HouseholdPolicy:
    return HouseholdPolicy()


@pytest.fixture
def make_member():
    """Build one valid household member; override any field by keyword."""

    def factory(name: str, email: str, phone: str, is_primary: bool = False, **overrides):
        member = {
            "name": name,
            "email": email,
            "phone_number": phone,
            "dob": date(1990, 5, 17),
            "gender": "female",
            "occupation": "Software Engineer",
            "aadhaar_number": "1234 5678 9012",
            "pan_number": "abcde1234f",
            "is_primary": is_primary,
        }
        member.update(overrides)
        return member

    return factory


@pytest.fixture
def make_request(seed, make_member):
    """Build a household request for the seeded property."""

    def factory(tenants=None, **terms) -> TenantCreateRequest:
        if tenants is None:
            tenants = [
                make_member("Asha Rao", "asha.rao@rentmail.in", "9812345670", True),
                make_member("Vikram Rao", "vikram.rao@rentmail.in", "9812345671"),
            ]
        data = {
            "landlord_id": seed.landlord_id,
            "property_id": seed.property_id,
            "rent_amount": Decimal("25000"),
            "security_deposit": Decimal("50000"),
            "tenancy_start_date": date(2025, 11, 1),
            "rent_due_date": date(2025, 11, 5),
            "tenants": tenants,
        }
        data.update(terms)
        return TenantCreateRequest.model_validate(data)

    return factory


@pytest.fixture
def count_rows(session_factory):
    """Count rows of a model in a separate session."""

    async def counter(model) -> int:
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(model))
            return result.scalar_one()

    return counter
