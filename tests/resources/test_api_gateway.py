import base64
import json

import pytest

from todo_api.core.api_gateway import (
    handle_create,
    handle_delete,
    handle_get,
    handle_list,
    handle_update,
    route,
)
from tests.resources.env_helper import body, make_store


def event(method: str = None, query: dict = None, path: dict = None, payload: str = None, **extra) -> dict:
    """Minimales API Gateway Proxy Event (null statt leerer Dicts, wie von API Gateway geliefert)"""
    return {
        'httpMethod': method,
        'resource': '/todo',
        'queryStringParameters': query,
        'pathParameters': path,
        'body': payload,
        **extra,
    }


def response_body(response: dict):
    return json.loads(response['body'])


def test_create_returns_201():
    store, _ = make_store()

    response = handle_create(event('POST', payload=body(item="buy milk", createdBy="alice", state=0)), store)

    assert response['statusCode'] == 201
    assert response['headers']['Content-Type'] == 'application/json'
    created = response_body(response)
    assert created['id']
    assert created == {'id': created['id'], 'item': 'buy milk', 'createdBy': 'alice', 'state': 0}


def test_create_base64_body():
    store, _ = make_store()
    raw = base64.b64encode(body(item="x", createdBy="alice", state=1).encode()).decode()

    response = handle_create(event('POST', payload=raw, isBase64Encoded=True), store)

    assert response['statusCode'] == 201
    assert response_body(response)['state'] == 1


def test_create_invalid_body_is_400():
    store, _ = make_store()

    response = handle_create(event('POST', payload="{"), store)

    assert response['statusCode'] == 400
    assert response_body(response) == {'error': 'invalid data'}


def test_create_without_body_is_400():
    store, _ = make_store()

    response = handle_create(event('POST'), store)

    assert response_body(response) == {'error': 'invalid data'}


def test_full_lifecycle_through_router():
    store, _ = make_store()

    created = response_body(route(event('POST', payload=body(item="buy milk", createdBy="alice", state=0)), store))
    todo_id = created['id']

    updated = route(event('PUT', payload=body(id=todo_id, item="", createdBy="bob", state=1)), store)
    assert response_body(updated) == {'id': todo_id, 'item': 'buy milk', 'createdBy': 'alice', 'state': 1}

    listed = route(event('GET', query={'createdBy': 'alice', 'state': '1'}), store)
    assert listed['statusCode'] == 200
    assert response_body(listed) == [response_body(updated)]

    fetched = route(event('GET', path={'id': todo_id}), store)
    assert response_body(fetched)['item'] == 'buy milk'

    deleted = route(event('DELETE', query={'id': todo_id}), store)
    assert deleted['statusCode'] == 200
    assert response_body(deleted) is None

    gone = route(event('GET', query={'id': todo_id}), store)
    assert gone['statusCode'] == 200
    assert response_body(gone) == {'id': '', 'item': '', 'createdBy': '', 'state': 0}


def test_list_invalid_params_skip_store():
    store, table = make_store()

    response = handle_list(event('GET', query={'createdBy': 'alice', 'state': 'open'}), store)

    assert response['statusCode'] == 400
    assert response_body(response) == {'error': 'invalid data'}
    assert table.calls == []


def test_list_without_query_is_400():
    store, _ = make_store()

    response = handle_list(event('GET'), store)

    assert response_body(response) == {'error': 'invalid data'}


def test_get_fetch_failure():
    store, table = make_store()
    table.fail("get_item")

    response = handle_get(event('GET', path={'id': 'x'}), store)

    assert response['statusCode'] == 400
    assert response_body(response) == {'error': 'failed to fetch record'}


def test_update_unknown_id():
    store, _ = make_store()

    response = handle_update(event('PUT', payload=body(id="nope", state=1)), store)

    assert response_body(response) == {'error': 'does not exist'}


def test_delete_failure_hides_store_error():
    store, table = make_store()
    table.fail("delete_item")

    response = handle_delete(event('DELETE', query={'id': 'x'}), store)

    assert response_body(response) == {'error': 'could not delete item'}


@pytest.mark.parametrize("method", ['PATCH', 'HEAD', None])
def test_unhandled_method(method):
    store, table = make_store()

    response = route(event(method), store)

    assert response['statusCode'] == 405
    assert response_body(response) == {'error': 'method not allowed'}
    assert table.calls == []


@pytest.mark.parametrize("raw", ['a', '!!!!', base64.b64encode(b'\xff\xfe').decode()])
def test_create_bad_base64_body_is_400(raw):
    store, table = make_store()

    response = handle_create(event('POST', payload=raw, isBase64Encoded=True), store)

    assert response['statusCode'] == 400
    assert response_body(response) == {'error': 'invalid data'}
    assert table.calls == []


def test_update_bad_base64_body_is_400():
    store, _ = make_store()

    response = handle_update(event('PUT', payload='a', isBase64Encoded=True), store)

    assert response_body(response) == {'error': 'invalid data'}
