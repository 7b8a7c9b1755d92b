"""API Gateway proxy events -> TodoStore calls -> proxy responses."""
import base64
import binascii
import json
import logging

from todo_api.core.todo_store import TodoStore
from todo_api.errors import InvalidData, TodoError

logger = logging.getLogger(__name__)

ERROR_METHOD_NOT_ALLOWED = "method not allowed"


def api_response(status: int, payload=None) -> dict:
    return {
        'statusCode': status,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(payload)
    }


def error_response(status: int, message: str) -> dict:
    return api_response(status, {'error': message})


def query_params(event: dict) -> dict:
    return event.get('queryStringParameters') or {}


def path_params(event: dict) -> dict:
    return event.get('pathParameters') or {}


def request_body(event: dict) -> str:
    body = event.get('body') or ""
    if event.get('isBase64Encoded') and body:
        try:
            body = base64.b64decode(body, validate=True).decode('utf-8')
        except (binascii.Error, UnicodeDecodeError) as e:
            logger.info("Invalid base64 body: %s", e)
            raise InvalidData() from e
    return body


def request_id(event: dict) -> str:
    """id aus dem Pfad, sonst aus dem Query String"""
    return path_params(event).get('id') or query_params(event).get('id') or ""


def handle_list(event: dict, store: TodoStore) -> dict:
    params = query_params(event)
    try:
        todos = store.list_todos(params.get('createdBy', ""), params.get('state'))
    except TodoError as e:
        return error_response(400, str(e))
    return api_response(200, [todo.to_item() for todo in todos])


def handle_get(event: dict, store: TodoStore) -> dict:
    try:
        todo = store.get_todo(request_id(event))
    except TodoError as e:
        return error_response(400, str(e))
    return api_response(200, todo.to_item())


def handle_create(event: dict, store: TodoStore) -> dict:
    try:
        todo = store.create_todo(request_body(event))
    except TodoError as e:
        return error_response(400, str(e))
    return api_response(201, todo.to_item())


def handle_update(event: dict, store: TodoStore) -> dict:
    try:
        todo = store.update_todo(request_body(event))
    except TodoError as e:
        return error_response(400, str(e))
    return api_response(200, todo.to_item())


def handle_delete(event: dict, store: TodoStore) -> dict:
    todo_id = query_params(event).get('id') or path_params(event).get('id') or ""
    try:
        store.delete_todo(todo_id)
    except TodoError as e:
        return error_response(400, str(e))
    return api_response(200, None)


def route(event: dict, store: TodoStore) -> dict:
    """Dispatch on the HTTP method of a single /todo resource."""
    method = event.get('httpMethod')
    logger.debug("method=%s path=%s query=%s", method, path_params(event), query_params(event))

    if method == 'GET':
        if request_id(event):
            return handle_get(event, store)
        return handle_list(event, store)
    if method == 'POST':
        return handle_create(event, store)
    if method == 'PUT':
        return handle_update(event, store)
    if method == 'DELETE':
        return handle_delete(event, store)
    return error_response(405, ERROR_METHOD_NOT_ALLOWED)
