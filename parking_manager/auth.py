import secrets

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.status import HTTP_401_UNAUTHORIZED

from parking_manager import config

security = HTTPBasic()


def require_operator(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    username_ok = secrets.compare_digest(credentials.username.encode("utf8"), config.API_USERNAME.encode("utf8"))
    password_ok = secrets.compare_digest(credentials.password.encode("utf8"), config.API_PASSWORD.encode("utf8"))
    if not (username_ok and password_ok):
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username
