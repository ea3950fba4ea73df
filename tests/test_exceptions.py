import json
import pytest
from pymongo.errors import DuplicateKeyError

from src.exceptions import duplicate_key_handler


def read_body(response) -> dict:
    return json.loads(response.body)


@pytest.mark.asyncio
async def test_duplicate_key_uses_key_value():
    exc = DuplicateKeyError(
        'E11000 duplicate key error collection: halal-biye.users index: email_1',
        code=11000,
        details={'keyValue': {'email': 'alice@example.com'}},
    )

    response = await duplicate_key_handler(None, exc)

    assert response.status_code == 409
    body = read_body(response)
    assert body['success'] is False
    assert body['message'] == 'alice@example.com đã tồn tại'
    assert 'E11000' not in body['message']


@pytest.mark.asyncio
async def test_duplicate_key_falls_back_to_error_text():
    exc = DuplicateKeyError(
        'E11000 duplicate key error collection: halal-biye.users index: email_1 dup key: { email: "bob@example.com" }',
        code=11000,
    )

    response = await duplicate_key_handler(None, exc)

    assert response.status_code == 409
    assert read_body(response)['message'] == 'bob@example.com đã tồn tại'


@pytest.mark.asyncio
async def test_duplicate_key_without_value_uses_generic_message():
    response = await duplicate_key_handler(None, DuplicateKeyError('E11000 duplicate key error', code=11000))

    body = read_body(response)
    assert response.status_code == 409
    assert body['message'] == 'Dữ liệu đã tồn tại'
    assert body['errorSources'] == [{'path': '', 'message': 'Dữ liệu đã tồn tại'}]
