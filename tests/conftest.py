import os

# antes de importar la aplicación: la configuración se resuelve al importar
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["SECRET_KEY"] = "clave-de-pruebas"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["STORAGE_BACKEND"] = "s3"
os.environ["USE_AWS_SECRETS"] = "false"
os.environ["BASE_URL"] = "http://testserver"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import alcance.app.admin.model  # noqa: F401
from alcance.app.admin.crud import user_crud
from alcance.app.common.auth.crypto import hash_password
from alcance.app.common.auth.jwt import create_user_token
from alcance.app.common.storage import BlobStore, get_blob_store
from alcance.app.core.config import settings
from alcance.app.database import Base, get_db
from alcance.main import app


class MemoryBlobStore(BlobStore):
    """Almacenamiento en memoria para las pruebas"""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str]] = {}

    def public_url(self, key: str) -> str:
        return f"https://{settings.s3_bucket_name}.s3.{settings.aws_region}.amazonaws.com/{key}"

    async def put(self, key: str, data: bytes, content_type: str) -> str:
        self.objects[key] = (data, content_type)
        return self.public_url(key)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def blob_store():
    return MemoryBlobStore()


@pytest.fixture
async def client(session_factory, blob_store):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client

    app.dependency_overrides.clear()


async def _make_user(session_factory, email, role, distributor_id=None):
    async with session_factory() as session:
        user = await user_crud.create(session, {
            "name": email.split("@")[0],
            "email": email,
            "password_hash": hash_password("secreto123"),
            "role": role,
            "distributor_id": distributor_id,
        })
        await session.commit()
        return user


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_user_token(user.id)}"}


@pytest.fixture
async def admin(session_factory):
    return await _make_user(session_factory, "admin@example.com", "admin")


@pytest.fixture
def admin_headers(admin):
    return auth_headers(admin)


@pytest.fixture
def make_user(session_factory):
    async def factory(email, role="user", distributor_id=None):
        return await _make_user(session_factory, email, role, distributor_id)
    return factory


@pytest.fixture
def create_brand(client, admin_headers):
    async def factory(name="Acme", manufacturer="Acme Corp"):
        response = await client.post(
            "/api/marcas",
            json={"manufacturer": manufacturer, "name": name},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["brand"]
    return factory


@pytest.fixture
def create_distributor(client, admin_headers):
    async def factory(name="Distribuidora Norte", **extra):
        response = await client.post(
            "/api/distribuidores",
            json={"representativeName": name, **extra},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["distributor"]
    return factory


@pytest.fixture
def create_device(client, admin_headers):
    async def factory(model, brand_id, distributors, **extra):
        response = await client.post(
            "/api/dispositivos",
            json={"model": model, "brand": brand_id, "distributors": distributors, **extra},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["device"]
    return factory


@pytest.fixture
def single_generation(monkeypatch):
    monkeypatch.setattr(settings, "distributor_relationship", "single")
