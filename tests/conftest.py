import os
import sys

import pytest
from httpx import ASGITransport, AsyncClient
from asgi_lifespan import LifespanManager

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
TESTS_DIR = os.path.dirname(__file__)
if TESTS_DIR not in sys.path:
    sys.path.insert(0, TESTS_DIR)

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("MONGO_CREATE_INDEXES", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("CLOUDINARY_CLOUD_NAME", "demo")
os.environ.setdefault("CLOUDINARY_API_KEY", "123456")
os.environ.setdefault("CLOUDINARY_API_SECRET", "shhh")

from app.main import app  # noqa: E402
from app.api.deps.auth_guard import (  # noqa: E402
    AuthenticatedUser,
    get_admin_user,
    get_current_user,
)
from app.api.services.preferences_service import (  # noqa: E402
    PreferencesService,
    preferences_service,
)
from app.api.services.users_service import UsersService, users_service  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.domain.models.user import Role, UserModel  # noqa: E402
from fakes import (  # noqa: E402
    FakeImageStore,
    FakePreferencesRepository,
    FakeUserRepository,
)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def user_repo() -> FakeUserRepository:
    return FakeUserRepository()


@pytest.fixture
def preferences_repo() -> FakePreferencesRepository:
    return FakePreferencesRepository()


@pytest.fixture
def image_store() -> FakeImageStore:
    return FakeImageStore()


@pytest.fixture
def service(user_repo, preferences_repo, image_store) -> UsersService:
    """Users service wired to in-memory collaborators."""
    return UsersService(
        repository=user_repo,
        preferences=PreferencesService(preferences_repo),
        image_store=image_store,
    )


@pytest.fixture
def wired_services(monkeypatch, user_repo, preferences_repo, image_store):
    """
    Point the global services used by the routers at the in-memory
    collaborators so endpoints can run without MongoDB or Cloudinary.
    """
    monkeypatch.setattr(users_service, "repository", user_repo)
    monkeypatch.setattr(users_service, "image_store", image_store)
    monkeypatch.setattr(preferences_service, "repository", preferences_repo)
    monkeypatch.setattr(users_service, "preferences", preferences_service)


@pytest.fixture
def stored_user(user_repo) -> UserModel:
    return user_repo.add(
        UserModel(email="qa@example.com", first_name="Ada", last_name="Lovelace")
    )


@pytest.fixture
def stored_admin(user_repo) -> UserModel:
    return user_repo.add(UserModel(email="admin@example.com", role=Role.ADMIN))


@pytest.fixture
def auth_headers():
    """Build a bearer header carrying a real access token for a user."""

    def _headers(user: UserModel) -> dict:
        token = create_access_token(user.id, {"email": user.email, "role": user.role.value})
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def override_auth_dependency(stored_user: UserModel):
    """
    Override the auth dependencies so protected routes
    can be exercised without issuing tokens.
    """
    test_user = AuthenticatedUser(
        user_id=stored_user.id, email=stored_user.email, role=stored_user.role.value
    )

    async def _override_current_user() -> AuthenticatedUser:
        return test_user

    app.dependency_overrides[get_current_user] = _override_current_user
    app.dependency_overrides[get_admin_user] = _override_current_user
    yield test_user
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    """Shared HTTPX async client with FastAPI lifespan handling."""
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
