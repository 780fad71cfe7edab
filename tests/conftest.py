"""
Task Report API - Test Configuration and Fixtures
"""
import os
from datetime import date
from typing import AsyncGenerator
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession
from faker import Faker

# Set testing environment
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''
os.environ['DEBUG'] = 'false'

from taskreport.main import app
from taskreport.core.database import Base, Database, get_db
from taskreport.core.security import get_password_hash, create_access_token
from taskreport.models import Admin, Developer, Task, TaskStatus
from taskreport.schemas.task import TaskCreate
from taskreport.services import task_service

fake = Faker()

DEVELOPER_PASSWORD = 'devpassword123'
ADMIN_PASSWORD = 'adminpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_database = Database(TEST_DATABASE_URL)


def make_token(account, **overrides) -> str:
    """Access token for a stored Admin or Developer"""
    token_data = {
        'sub': str(account.id),
        'id': account.id,
        'email': account.email,
        'role': account.role.value,
        'isAdmin': account.is_admin,
    }
    token_data.update(overrides)
    return create_access_token(token_data)


def bearer(token: str) -> dict:
    return {'Authorization': f'Bearer {token}'}


async def create_developer(db: AsyncSession, email: str = None, **fields) -> Developer:
    developer = Developer(
        name=fields.pop('name', fake.name()),
        email=email or fake.unique.email(),
        hashed_password=get_password_hash(fields.pop('password', DEVELOPER_PASSWORD)),
        team=fields.pop('team', 'web'),
        projects=fields.pop('projects', ['Project A']),
        **fields
    )
    db.add(developer)
    await db.commit()
    await db.refresh(developer)
    return developer


async def create_admin(db: AsyncSession, email: str = None) -> Admin:
    admin = Admin(
        name=fake.name(),
        email=email or fake.unique.email(),
        hashed_password=get_password_hash(ADMIN_PASSWORD),
    )
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    return admin


async def create_task(db: AsyncSession, developer: Developer, **fields) -> Task:
    data = TaskCreate(
        date=fields.pop('date', date.today()),
        project=fields.pop('project', 'Project A'),
        targets_given=fields.pop('targets_given', fake.sentence()),
        targets_achieved=fields.pop('targets_achieved', fake.sentence()),
        status=fields.pop('status', TaskStatus.PENDING),
    )
    return await task_service.create_task(db, developer.id, data)


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with test_database.session() as session:
        yield session
        await session.rollback()

    async with test_database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.state.db = test_database
    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def developer(db_session: AsyncSession) -> Developer:
    """Create a test developer"""
    return await create_developer(db_session)


@pytest.fixture
async def other_developer(db_session: AsyncSession) -> Developer:
    """A second developer who owns nothing of the first"""
    return await create_developer(db_session)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> Admin:
    """Create an admin test user"""
    return await create_admin(db_session)


@pytest.fixture
def auth_headers(developer: Developer) -> dict:
    """Generate authentication headers for the test developer"""
    return bearer(make_token(developer))


@pytest.fixture
def other_auth_headers(other_developer: Developer) -> dict:
    return bearer(make_token(other_developer))


@pytest.fixture
def admin_auth_headers(admin_user: Admin) -> dict:
    """Generate authentication headers for admin user"""
    return bearer(make_token(admin_user))


@pytest.fixture
async def task(db_session: AsyncSession, developer: Developer) -> Task:
    """A task owned by the test developer"""
    return await create_task(db_session, developer)


@pytest.fixture
def developer_factory(db_session: AsyncSession):
    """Create developers on demand: await developer_factory(email=..., working_days=[...])"""
    async def _create(email: str = None, **fields) -> Developer:
        return await create_developer(db_session, email=email, **fields)
    return _create


@pytest.fixture
def admin_factory(db_session: AsyncSession):
    async def _create(email: str = None) -> Admin:
        return await create_admin(db_session, email=email)
    return _create


@pytest.fixture
def task_factory(db_session: AsyncSession):
    """Create tasks on demand: await task_factory(developer, date=..., project=...)"""
    async def _create(owner: Developer, **fields) -> Task:
        return await create_task(db_session, owner, **fields)
    return _create


@pytest.fixture
def headers_for():
    """Authorization headers for any account, with optional claim overrides"""
    def _headers(account, **overrides) -> dict:
        return bearer(make_token(account, **overrides))
    return _headers
