import enum
from dataclasses import dataclass
from typing import List, Optional


class Outcome(str, enum.Enum):
    OK = "ok"
    CREATED = "created"
    NO_CONTENT = "no_content"
    NOT_FOUND = "not_found"
    INVALID = "invalid"
    CONFLICT = "conflict"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


class ParkingError(Exception):
    outcome = Outcome.INVALID

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ParkingError):
    outcome = Outcome.INVALID

    def __init__(self, errors: List[FieldError], index: Optional[int] = None):
        self.errors = list(errors)
        self.index = index
        fields = ", ".join(e.field for e in self.errors)
        if index is None:
            message = f"Invalid fields: {fields}"
        else:
            message = f"Item {index} has invalid fields: {fields}"
        super().__init__(message)


class IdMismatch(ParkingError):
    outcome = Outcome.INVALID

    def __init__(self, path_id: int, body_id: Optional[int]):
        self.path_id = path_id
        self.body_id = body_id
        super().__init__(f"Record id {body_id} does not match addressed id {path_id}")


class NotFound(ParkingError):
    outcome = Outcome.NOT_FOUND

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")


class ConcurrencyConflict(ParkingError):
    outcome = Outcome.CONFLICT

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} was modified by another request; re-fetch and retry")


class ForeignKeyViolation(ParkingError):
    outcome = Outcome.INVALID

    def __init__(self, errors: List[FieldError], index: Optional[int] = None):
        self.errors = list(errors)
        self.index = index
        detail = "; ".join(e.message for e in self.errors)
        if index is not None:
            detail = f"Item {index}: {detail}"
        super().__init__(detail)


class EmptyBatch(ParkingError):
    outcome = Outcome.INVALID

    def __init__(self):
        super().__init__("No records were submitted")


class RecordInUse(ParkingError):
    outcome = Outcome.CONFLICT

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} is referenced by parking sessions")


class StoreUnavailable(ParkingError):
    outcome = Outcome.UNAVAILABLE
