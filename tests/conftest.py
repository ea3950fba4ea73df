"""
Cấu hình và fixture dùng chung cho test.
"""
import os

# Thiết lập môi trường test trước khi import app
os.environ['ENVIRONMENT'] = 'test'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['MONGO_URI'] = 'mongodb://localhost:27017'
os.environ['BCRYPT_ROUNDS'] = '4'

from typing import AsyncGenerator
import pytest
from beanie import init_beanie
from faker import Faker
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from src.main import app
from src.models import DOCUMENT_MODELS

fake = Faker()

DEFAULT_PASSWORD = 'pw12345678'


@pytest.fixture
async def db():
    """Mỗi test dùng một database giả lập mới trong bộ nhớ"""
    client = AsyncMongoMockClient()
    database = client['halal-biye-test']
    await init_beanie(database=database, document_models=DOCUMENT_MODELS)
    yield database


@pytest.fixture
async def client(db) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac


def profile_data(**overrides) -> dict:
    data = {
        'name': fake.first_name(),
        'age': fake.random_int(min=20, max=40),
        'gender': fake.random_element(['Male', 'Female']),
        'religion': 'Islam',
        'location': fake.city(),
        'height': 170,
        'education': 'Bachelor',
        'occupation': 'Engineer',
    }
    data.update(overrides)
    return data


@pytest.fixture
def register(client: AsyncClient):
    """Đăng ký người dùng qua API, trả về data của phản hồi"""
    async def _register(email: str, password: str = DEFAULT_PASSWORD, **profile) -> dict:
        payload = {'email': email, 'password': password, **profile_data(**profile)}
        response = await client.post('/api/v1/users/register', json=payload)
        assert response.status_code == 200, response.text
        return response.json()['data']
    return _register


@pytest.fixture
def login(client: AsyncClient):
    """Đăng nhập qua API, trả về header Authorization"""
    async def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = await client.post('/api/v1/users/login', json={'email': email, 'password': password})
        assert response.status_code == 200, response.text
        # Test xác thực bằng header, không để cookie phiên còn lại trong client
        client.cookies.clear()
        return {'Authorization': f"Bearer {response.json()['data']['token']}"}
    return _login
