import uvicorn
import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from parking_manager import routes
from parking_manager.config import HOST, LOG_LEVEL, PORT, ROOT_PATH
from parking_manager.database import init_db
from parking_manager.errors import Outcome, ParkingError
from parking_manager.schemas import ErrorResponse, FieldErrorResponse

logging.basicConfig(level=LOG_LEVEL)

app = FastAPI(
    title="Parking Manager API",
    version="1.0.0",
    description="Parking lots, vehicles and the parking sessions linking them.",
    root_path=ROOT_PATH,
)

app.include_router(routes.parking_lots, prefix="/api/ParkingLots", tags=["ParkingLots"])
app.include_router(routes.vehicles, prefix="/api/Vehicles", tags=["Vehicles"])
app.include_router(routes.parking_sessions, prefix="/api/ParkingSessions", tags=["ParkingSessions"])

STATUS_BY_OUTCOME = {
    Outcome.INVALID: HTTP_400_BAD_REQUEST,
    Outcome.NOT_FOUND: HTTP_404_NOT_FOUND,
    Outcome.CONFLICT: HTTP_409_CONFLICT,
    Outcome.UNAVAILABLE: HTTP_503_SERVICE_UNAVAILABLE,
}


@app.on_event("startup")
async def on_startup():
    await init_db()


@app.exception_handler(ParkingError)
async def parking_error_handler(request: Request, exc: ParkingError):
    body = ErrorResponse(
        error=type(exc).__name__,
        detail=exc.message,
        index=getattr(exc, "index", None),
        errors=[
            FieldErrorResponse(field=to_camel(e.field), message=e.message)
            for e in getattr(exc, "errors", [])
        ],
    )
    return JSONResponse(
        status_code=STATUS_BY_OUTCOME[exc.outcome],
        content=body.model_dump(by_alias=True),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    index = None
    errors = []
    for error in exc.errors():
        source, *path = error["loc"]
        if source == "body" and error["type"] != "json_invalid" and path and isinstance(path[0], int):
            if index is None:
                index = path[0]
            path = path[1:]
        # body and query locations already carry the camelCase aliases
        names = [to_camel(str(p)) if source == "path" else str(p) for p in path]
        errors.append(FieldErrorResponse(field=".".join(names) or source, message=error["msg"]))

    body = ErrorResponse(
        error="ValidationError",
        detail="The request could not be parsed",
        index=index,
        errors=errors,
    )
    return JSONResponse(status_code=HTTP_400_BAD_REQUEST, content=body.model_dump(by_alias=True))


def run():
    uvicorn.run("parking_manager.main:app", host=HOST, port=PORT)


if __name__ == "__main__":
    uvicorn.run("parking_manager.main:app", host=HOST, port=PORT, reload=True)
