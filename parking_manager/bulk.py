from typing import Callable, List, Optional, Sequence

from parking_manager.errors import EmptyBatch, FieldError, ForeignKeyViolation, ValidationError
from parking_manager.integrity import ReferenceChecker
from parking_manager.schemas import record_values
from parking_manager.store import RecordStore


async def validate_batch(
    payloads: Sequence,
    validate: Callable[[object], List[FieldError]],
    checker: Optional[ReferenceChecker] = None,
):
    if not payloads:
        raise EmptyBatch()

    references = await checker.missing_references(payloads) if checker else [[] for _ in payloads]
    for index, payload in enumerate(payloads):
        errors = validate(payload)
        if errors:
            raise ValidationError(errors, index=index)
        if references[index]:
            raise ForeignKeyViolation(references[index], index=index)


async def ingest(
    store: RecordStore,
    payloads: Sequence,
    validate: Callable[[object], List[FieldError]],
    checker: Optional[ReferenceChecker] = None,
) -> list:
    await validate_batch(payloads, validate, checker)
    return await store.add_all(record_values(p) for p in payloads)
