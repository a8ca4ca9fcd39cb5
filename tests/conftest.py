"""
Pytest configuration and fixtures for artforms tests.

API tests run the ASGI app in-process against an in-memory SQLite database
that replaces the request session dependency.
"""

import itertools
import os
import time

# Set test environment variables before importing config
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only"

import httpx  # noqa: E402
import pytest_asyncio  # noqa: E402
from authlib.jose import JsonWebToken  # noqa: E402
from sqlalchemy import func, select  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from artforms.core.database import Base, get_db  # noqa: E402
from artforms.main import app  # noqa: E402
from artforms.models import Artist, Artwork, User, UserFavorite, UserFollow  # noqa: E402

JWT_SECRET = os.environ["JWT_SECRET"]


def make_token(user_id: int, expires_in: int = 3600, secret: str = JWT_SECRET) -> str:
    """Mint an HS256 access token the way the auth service does."""
    now = int(time.time())
    token = JsonWebToken(["HS256"]).encode(
        {"alg": "HS256"},
        {"sub": str(user_id), "iat": now, "exp": now + expires_in},
        secret,
    )
    return token.decode()


def auth_headers(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class Factory:
    """Creates committed rows for a test, each in its own short session."""

    def __init__(self, session_maker: async_sessionmaker):
        self.session_maker = session_maker
        self._seq = itertools.count(1)

    async def _save(self, obj):
        async with self.session_maker() as session:
            session.add(obj)
            await session.commit()
            await session.refresh(obj)
        return obj

    async def user(
        self,
        name: str = "Test User",
        user_type: str = "customer",
        city: str = None,
        state: str = None,
        **kwargs,
    ) -> User:
        n = next(self._seq)
        return await self._save(
            User(
                name=name,
                email=f"user{n}@example.com",
                user_type=user_type,
                location_city=city,
                location_state=state,
                **kwargs,
            )
        )

    async def artist(
        self,
        user: User = None,
        artist_name: str = "Test Artist",
        specializations: tuple = ("Warli",),
        **kwargs,
    ) -> Artist:
        if user is None:
            user = await self.user(name=f"{artist_name} User", user_type="artist")
        return await self._save(
            Artist(
                user_id=user.id,
                artist_name=artist_name,
                specializations=list(specializations),
                **kwargs,
            )
        )

    async def artwork(
        self,
        artist: Artist,
        title: str = "Village Harvest",
        artform: str = "Warli",
        price: float = 1000,
        status: str = "approved",
        **kwargs,
    ) -> Artwork:
        kwargs.setdefault("description", "A traditional painting of village life.")
        kwargs.setdefault("medium", "Natural pigments on handmade paper")
        return await self._save(
            Artwork(
                artist_id=artist.id,
                title=title,
                artform=artform,
                price=price,
                status=status,
                **kwargs,
            )
        )

    async def favorite(self, user: User, artwork: Artwork) -> UserFavorite:
        return await self._save(UserFavorite(user_id=user.id, artwork_id=artwork.id))

    async def get(self, model, pk):
        async with self.session_maker() as session:
            return await session.get(model, pk)

    async def count_favorites(self, **filters) -> int:
        async with self.session_maker() as session:
            return await session.scalar(select(func.count(UserFavorite.id)).filter_by(**filters))

    async def count_follows(self, **filters) -> int:
        async with self.session_maker() as session:
            return await session.scalar(select(func.count(UserFollow.id)).filter_by(**filters))


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def factory(session_maker):
    return Factory(session_maker)


@pytest_asyncio.fixture
async def async_client(session_maker):
    """Async HTTP client against the ASGI app."""

    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def customer(factory):
    return await factory.user(name="Asha Customer", city="Pune", state="Maharashtra")


@pytest_asyncio.fixture
async def artist(factory):
    user = await factory.user(
        name="Jivya Soma", user_type="artist", city="Dahanu", state="Maharashtra"
    )
    return await factory.artist(
        user=user,
        artist_name="Jivya Warli Studio",
        specializations=("Warli",),
        is_verified=True,
        rating=4.5,
    )
