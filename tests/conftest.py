import asyncio
import inspect
import os
import sys
import tempfile
from pathlib import Path

# Configure the environment before anything imports backend.app.core.config
_test_tmp_dir = tempfile.mkdtemp(prefix="bankr_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_test_tmp_dir}/test.db")
os.environ.setdefault("JWT_ACCESS_SECRET", "test-access-secret-for-testing-only")
os.environ.setdefault("JWT_REFRESH_SECRET", "test-refresh-secret-for-testing-only")
os.environ.setdefault("ENCRYPTION_KEY", "test-encryption-master-secret")
# Minimum bcrypt cost keeps the suite fast
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("CORS_ORIGINS", "")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.app.core.config import settings  # noqa: E402
from backend.app.db.init_db import init_models  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.repositories.memory import (  # noqa: E402
    MemoryActivityLogRepository,
    MemoryUserRepository,
)
from backend.app.services.auth import AuthService  # noqa: E402

API = settings.API_V1_STR
PASSWORD = "Abcd1234"


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**call_kwargs))
        return True
    return None


def pytest_configure(config):
    config.addinivalue_line("markers", "asyncio: mark test as async")


@pytest.fixture
def user_repo():
    return MemoryUserRepository()


@pytest.fixture
def activity_repo():
    return MemoryActivityLogRepository()


@pytest.fixture
def auth_service(user_repo, activity_repo):
    return AuthService(user_repo, activity_repo, settings)


@pytest.fixture
def client():
    asyncio.run(init_models(drop=True))
    with TestClient(app) as test_client:
        yield test_client


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def register(client, email="a@b.com", password=PASSWORD, **extra):
    return client.post(f"{API}/auth/register", json={"email": email, "password": password, **extra})


def login(client, email="a@b.com", password=PASSWORD):
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})
