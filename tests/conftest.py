import os

# Settings are read once at import time; point them at the test environment first.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_EMAILS"] = "admin@dentalportal.in"
os.environ["JWT_SECRET"] = "test-secret"

from collections.abc import AsyncGenerator
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from dentalportal.auth.service import create_access_token
from dentalportal.auth.utils import hash_password
from dentalportal.config import get_settings
from dentalportal.database import close_db, init_db
from dentalportal.dependencies import get_geocoder, get_mailer, get_uploader
from dentalportal.email.templates import EmailKind
from dentalportal.exceptions import UploadFailedError
from dentalportal.integrations.geocoding import Coordinates
from dentalportal.integrations.storage import UploadedFile, build_object_key
from dentalportal.main import create_app
from dentalportal.models.enums import ProfessionalType, UserRole
from dentalportal.models.user import User
from shared.database.postgres import Base

TEST_DATABASE_URL = "sqlite+aiosqlite://"
PASSWORD = "password123"


# ── Fakes for external services ──────────────────────────────────────────────

@dataclass
class FakeUploader:
    uploads: list[UploadedFile] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    fail: bool = False

    async def upload(self, data, name, folder, tags=None, content_type=None) -> UploadedFile:
        if self.fail:
            raise UploadFailedError(f"Failed to upload file: {name}")
        key = build_object_key(folder, name)
        uploaded = UploadedFile(
            file_id=key,
            url=f"https://cdn.test/{key}",
            name=name,
            size=len(data),
            content_type=content_type or "application/octet-stream",
        )
        self.uploads.append(uploaded)
        return uploaded

    async def delete(self, file_id: str) -> None:
        self.deleted.append(file_id)


@dataclass
class FakeGeocoder:
    known: dict[str, Coordinates] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def geocode(self, address: str) -> Coordinates | None:
        self.calls.append(address)
        return self.known.get(address)


@dataclass
class FakeMailer:
    sent: list[tuple[EmailKind, str, dict]] = field(default_factory=list)

    async def send_template(self, kind, recipient, variables) -> bool:
        self.sent.append((kind, recipient, variables))
        return True


# ── Database ──────────────────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    factory = init_db(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with factory.kw["bind"].begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield factory
    await close_db()


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


# ── App ───────────────────────────────────────────────────────────────────────

@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder(
        known={
            "Bandra West, Mumbai": Coordinates(latitude=19.0596, longitude=72.8295),
            "Koramangala, Bengaluru": Coordinates(latitude=12.9352, longitude=77.6245),
        }
    )


@pytest.fixture
def mailer() -> FakeMailer:
    return FakeMailer()


@pytest_asyncio.fixture
async def client(session_factory, uploader, geocoder, mailer) -> AsyncGenerator[AsyncClient, None]:
    app = create_app()
    app.dependency_overrides[get_uploader] = lambda: uploader
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[get_mailer] = lambda: mailer
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ── Users ─────────────────────────────────────────────────────────────────────

async def create_user(
    factory: async_sessionmaker[AsyncSession],
    email: str,
    *,
    role: UserRole = UserRole.USER,
    first_name: str = "Asha",
    last_name: str = "Rao",
    verified: bool = True,
    **fields,
) -> User:
    async with factory() as session:
        user = User(
            email=email,
            password_hash=hash_password(PASSWORD),
            first_name=first_name,
            last_name=last_name,
            role=role,
            is_email_verified=verified,
            **fields,
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user, get_settings())}"}


@pytest_asyncio.fixture
async def admin(session_factory) -> User:
    return await create_user(
        session_factory, "admin@dentalportal.in", role=UserRole.ADMIN, first_name="Admin",
    )


@pytest_asyncio.fixture
async def dentist(session_factory) -> User:
    return await create_user(
        session_factory,
        "asha@clinic.in",
        clinic_name="Smile Care",
        location="Bandra West, Mumbai",
        dci_registration_number="DCI-1001",
        professional_type=ProfessionalType.DENTIST,
    )


@pytest_asyncio.fixture
async def other_dentist(session_factory) -> User:
    return await create_user(
        session_factory,
        "vikram@clinic.in",
        first_name="Vikram",
        last_name="Shah",
        clinic_name="Bright Teeth",
        location="Koramangala, Bengaluru",
        dci_registration_number="DCI-2002",
        professional_type=ProfessionalType.ORTHODONTIST,
    )


@pytest.fixture
def admin_headers(admin) -> dict[str, str]:
    return auth_headers(admin)


@pytest.fixture
def dentist_headers(dentist) -> dict[str, str]:
    return auth_headers(dentist)


@pytest.fixture
def other_headers(other_dentist) -> dict[str, str]:
    return auth_headers(other_dentist)
