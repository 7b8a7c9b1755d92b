from todo_api.config import load_config
from todo_api.core import build_store
from todo_api.core.api_gateway import route

store = build_store(load_config())


def lambda_handler(event, context):
    """
    Einzelne Lambda Funktion für alle Methoden auf /todo.

    GET mit id -> get, GET ohne id -> list, POST -> create,
    PUT -> update, DELETE -> delete.
    """
    return route(event, store)
