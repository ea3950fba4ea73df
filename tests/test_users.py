import pytest
from httpx import AsyncClient

from src.models import ConnectionRequest
from src.services import UserService


@pytest.mark.asyncio
async def test_get_me_never_returns_password(client: AsyncClient, register, login):
    await register('alice@example.com', name='Alice')
    headers = await login('alice@example.com')

    response = await client.get('/api/v1/users/me', headers=headers)

    assert response.status_code == 200
    data = response.json()['data']
    assert data['email'] == 'alice@example.com'
    assert data['name'] == 'Alice'
    assert 'password' not in data
    assert 'hashedPassword' not in data


@pytest.mark.asyncio
async def test_me_for_unknown_subject_is_not_found(client: AsyncClient):
    from src.services.jwt_service import create_access_token
    token = create_access_token({'sub': 'nobody@example.com'})

    response = await client.get('/api/v1/users/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_profile_partial(client: AsyncClient, register, login):
    await register('alice@example.com', name='Alice', location='Dhaka')
    headers = await login('alice@example.com')

    response = await client.put('/api/v1/users/me', headers=headers, json={
        'location': 'Chittagong',
        'occupation': 'Doctor',
    })

    assert response.status_code == 200
    data = response.json()['data']
    assert data['location'] == 'Chittagong'
    assert data['occupation'] == 'Doctor'
    # Các trường không gửi lên giữ nguyên
    assert data['name'] == 'Alice'


@pytest.mark.asyncio
async def test_update_profile_cannot_change_email_or_password(client: AsyncClient, register, login):
    await register('alice@example.com')
    headers = await login('alice@example.com')

    response = await client.put('/api/v1/users/me', headers=headers, json={
        'email': 'mallory@example.com',
        'password': 'newpassword1',
        'name': 'Alice B',
    })

    assert response.status_code == 200
    data = response.json()['data']
    assert data['email'] == 'alice@example.com'
    assert data['name'] == 'Alice B'

    # Mật khẩu cũ vẫn dùng được
    login_response = await client.post('/api/v1/users/login', json={
        'email': 'alice@example.com',
        'password': 'pw12345678',
    })
    assert login_response.status_code == 200


@pytest.mark.asyncio
async def test_update_profile_validation(client: AsyncClient, register, login):
    await register('alice@example.com')
    headers = await login('alice@example.com')

    response = await client.put('/api/v1/users/me', headers=headers, json={'age': -3, 'height': 0})

    assert response.status_code == 400
    paths = {source['path'] for source in response.json()['errorSources']}
    assert paths == {'age', 'height'}


@pytest.mark.asyncio
async def test_list_users_excludes_caller(client: AsyncClient, register, login):
    await register('alice@example.com')
    await register('bob@example.com')
    await register('carol@example.com')
    headers = await login('alice@example.com')

    response = await client.get('/api/v1/users', headers=headers)

    assert response.status_code == 200
    body = response.json()
    emails = [user['email'] for user in body['data']]
    assert sorted(emails) == ['bob@example.com', 'carol@example.com']
    assert all(user['connectionStatus'] == 'none' for user in body['data'])
    assert all('hashedPassword' not in user for user in body['data'])
    assert body['meta']['total'] == 2


@pytest.mark.asyncio
async def test_list_users_equality_filters(client: AsyncClient, register, login):
    await register('alice@example.com', gender='Female')
    await register('bob@example.com', gender='Male', religion='Islam')
    await register('dan@example.com', gender='Male', religion='Hinduism')
    await register('eve@example.com', gender='Female', religion='Islam')
    headers = await login('alice@example.com')

    response = await client.get('/api/v1/users', headers=headers, params={'gender': 'Male', 'religion': 'Islam'})

    assert response.status_code == 200
    emails = [user['email'] for user in response.json()['data']]
    assert emails == ['bob@example.com']


@pytest.mark.asyncio
async def test_list_users_invalid_filter(client: AsyncClient, register, login):
    await register('alice@example.com')
    headers = await login('alice@example.com')

    response = await client.get('/api/v1/users', headers=headers, params={'gender': 'Robot'})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_list_users_pagination(client: AsyncClient, register, login):
    await register('alice@example.com')
    for i in range(5):
        await register(f'user{i}@example.com')
    headers = await login('alice@example.com')

    response = await client.get('/api/v1/users', headers=headers, params={'page': 2, 'limit': 2})

    body = response.json()
    assert [user['email'] for user in body['data']] == ['user2@example.com', 'user3@example.com']
    assert body['meta'] == {'page': 2, 'limit': 2, 'total': 5, 'totalPage': 3}


@pytest.mark.asyncio
async def test_list_users_connection_status(client: AsyncClient, register, login):
    alice = await register('alice@example.com')
    bob = await register('bob@example.com')
    await register('carol@example.com')
    await register('dave@example.com')
    alice_headers = await login('alice@example.com')
    dave_headers = await login('dave@example.com')

    # alice -> bob: pending
    await client.post('/api/v1/requests', headers=alice_headers, json={'toUser': bob['id']})

    # dave -> alice và alice chấp nhận: accepted theo chiều ngược lại
    sent = await client.post('/api/v1/requests', headers=dave_headers, json={'toUser': alice['id']})
    await client.post('/api/v1/requests/accept', headers=alice_headers, json={'id': sent.json()['data']['id']})

    response = await client.get('/api/v1/users', headers=alice_headers)

    statuses = {user['email']: user['connectionStatus'] for user in response.json()['data']}
    assert statuses == {
        'bob@example.com': 'pending',
        'carol@example.com': 'none',
        'dave@example.com': 'accepted',
    }


@pytest.mark.asyncio
async def test_incoming_pending_request_is_not_shown_to_recipient(client: AsyncClient, register, login):
    """Yêu cầu pending chỉ hiển thị cho người gửi, người nhận vẫn thấy 'none'"""
    alice = await register('alice@example.com')
    await register('bob@example.com')
    bob_headers = await login('bob@example.com')
    alice_headers = await login('alice@example.com')

    await client.post('/api/v1/requests', headers=bob_headers, json={'toUser': alice['id']})

    response = await client.get('/api/v1/users', headers=alice_headers)
    assert response.json()['data'][0]['connectionStatus'] == 'none'


@pytest.mark.asyncio
async def test_compute_connection_status_accepted_wins(db):
    me = 'me'
    requests = [
        ConnectionRequest(fromUser=me, toUser='u1', status='accepted'),
        ConnectionRequest(fromUser='u1', toUser=me, status='pending'),
        ConnectionRequest(fromUser='u2', toUser=me, status='accepted'),
        ConnectionRequest(fromUser=me, toUser='u2', status='rejected'),
        ConnectionRequest(fromUser=me, toUser='u3', status='rejected'),
        ConnectionRequest(fromUser='u4', toUser=me, status='rejected'),
    ]

    status_map = UserService.compute_connection_status(requests, me)

    assert status_map == {'u1': 'accepted', 'u2': 'accepted', 'u3': 'rejected'}
