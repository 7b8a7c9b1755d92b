"""Fehlertypen der Todo API.

Jeder Fehler trägt genau eine feste Meldung, die unverändert an den Aufrufer
geht. Details aus DynamoDB werden nur geloggt.
"""
from typing import Optional


class TodoError(Exception):
    message = "todo error"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)


class FailedToUnmarshalRecord(TodoError):
    message = "failed to unmarshal record"


class FailedToFetchRecord(TodoError):
    message = "failed to fetch record"


class InvalidData(TodoError):
    message = "invalid data"


class CouldNotMarshalItem(TodoError):
    message = "could not marshal item"


class CouldNotDeleteItem(TodoError):
    message = "could not delete item"


class CouldNotDynamoPutItem(TodoError):
    message = "could not dynamo put item"


class DoesNotExist(TodoError):
    message = "does not exist"
