import logging
import re
import uuid
from typing import Optional, Union

import boto3
from boto3.dynamodb.conditions import Attr
from boto3.dynamodb.types import TypeSerializer
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import ValidationError

from todo_api.errors import (
    CouldNotDeleteItem,
    CouldNotDynamoPutItem,
    CouldNotMarshalItem,
    DoesNotExist,
    FailedToFetchRecord,
    FailedToUnmarshalRecord,
    InvalidData,
)
from todo_api.model import Todo, TodoConfig

logger = logging.getLogger(__name__)

STORE_ERRORS = (ClientError, BotoCoreError)

# nur ASCII Ziffern mit optionalem Vorzeichen, kein Whitespace oder "_"
STATE_PATTERN = re.compile(r"[+-]?[0-9]+")

# "state" ist ein reserviertes Wort in DynamoDB
PROJECTION_NAMES = {
    "#id": "id",
    "#item": "item",
    "#createdBy": "createdBy",
    "#state": "state",
}


class TodoStore:
    """
    CRUD facade over the todo table.

    The table is any object with the boto3 Table interface
    (scan, get_item, put_item, delete_item).
    """

    def __init__(self, table):
        self.table = table
        self._serializer = TypeSerializer()

    @classmethod
    def from_config(cls, config: TodoConfig) -> "TodoStore":
        """Baut den Store mit einer boto3 Session aus der Konfiguration"""
        env = config.env
        session = boto3.session.Session(
            profile_name=env.profile,
            region_name=env.region
        )
        dynamodb = session.resource('dynamodb')
        return cls(dynamodb.Table(config.table_name))

    @property
    def table_name(self) -> str:
        return getattr(self.table, "name", "")

    def list_todos(self, created_by: str, state: Union[str, int, None]) -> list[Todo]:
        """
        Scan for all todos of one owner in one state.

        Follows LastEvaluatedKey until the whole table has been scanned.
        """
        if isinstance(state, str) and not STATE_PATTERN.fullmatch(state):
            raise InvalidData()
        try:
            state = int(state)
        except (TypeError, ValueError):
            raise InvalidData()
        if not created_by:
            raise InvalidData()

        scan_args = {
            'FilterExpression': Attr('createdBy').eq(created_by) & Attr('state').eq(state),
            'ProjectionExpression': ", ".join(PROJECTION_NAMES),
            'ExpressionAttributeNames': dict(PROJECTION_NAMES),
        }

        items = []
        while True:
            try:
                response = self.table.scan(**scan_args)
            except STORE_ERRORS as e:
                logger.error("Scan err: %s", e)
                raise FailedToFetchRecord() from e

            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                break
            scan_args['ExclusiveStartKey'] = last_key

        return [self._unmarshal(item) for item in items]

    def find_todo(self, todo_id: str) -> Optional[Todo]:
        """Point lookup by id, None if the table has no such item."""
        try:
            response = self.table.get_item(Key={'id': todo_id})
        except STORE_ERRORS as e:
            logger.error("GetItem err: %s", e)
            raise FailedToFetchRecord() from e

        item = response.get('Item')
        if item is None:
            return None
        return self._unmarshal(item)

    def get_todo(self, todo_id: str) -> Todo:
        """Point lookup by id. A missing item yields an empty Todo."""
        todo = self.find_todo(todo_id)
        return todo if todo is not None else Todo()

    def create_todo(self, body: Union[str, bytes, None]) -> Todo:
        todo = self._decode(body)
        todo.id = str(uuid.uuid4())

        self._put(todo)
        return todo

    def update_todo(self, body: Union[str, bytes, None]) -> Todo:
        """
        Overwrite an existing todo.

        createdBy always comes from the stored record and a blank item keeps
        the stored one. state is taken from the body as is.
        """
        todo = self._decode(body)
        if not todo.id:
            raise InvalidData()

        current = self.find_todo(todo.id)
        if current is None or not current.created_by:
            raise DoesNotExist()

        todo.created_by = current.created_by
        if not todo.item:
            todo.item = current.item

        self._put(todo)
        return todo

    def delete_todo(self, todo_id: str) -> None:
        try:
            self.table.delete_item(Key={'id': todo_id})
        except STORE_ERRORS as e:
            logger.error("DeleteItem err: %s", e)
            raise CouldNotDeleteItem() from e

    def _put(self, todo: Todo) -> None:
        item = self._marshal(todo)
        try:
            self.table.put_item(Item=item)
        except STORE_ERRORS as e:
            logger.error("PutItem err: %s", e)
            raise CouldNotDynamoPutItem() from e

    def _marshal(self, todo: Todo) -> dict:
        item = todo.to_item()
        # a validated Todo only holds str and int, kept for parity with the other write errors
        try:
            for value in item.values():
                self._serializer.serialize(value)
        except TypeError as e:
            logger.error("Marshal err: %s", e)
            raise CouldNotMarshalItem() from e
        return item

    @staticmethod
    def _decode(body: Union[str, bytes, None]) -> Todo:
        if body is None:
            raise InvalidData()
        try:
            # strict: "1", true or 1.0 are not an int state
            return Todo.model_validate_json(body, strict=True)
        except ValidationError as e:
            logger.info("Invalid body: %s", e)
            raise InvalidData() from e

    @staticmethod
    def _unmarshal(item: dict) -> Todo:
        try:
            return Todo.model_validate(item)
        except ValidationError as e:
            logger.error("Unmarshal err: %s", e)
            raise FailedToUnmarshalRecord() from e

    def __repr__(self) -> str:
        return f"TodoStore(table='{self.table_name}')"
