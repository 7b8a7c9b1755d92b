from todo_api.config import load_config
from todo_api.core import build_store
from todo_api.core.api_gateway import handle_create

store = build_store(load_config())


def lambda_handler(event, context):
    return handle_create(event, store)
