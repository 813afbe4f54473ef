from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ...domain.entities import Principal, TEACHER
from ...domain.errors import MissingToken
from ...infrastructure.security import decode_token

# auto_error=False: отсутствие токена — это 401, а не 403 от HTTPBearer
bearer = HTTPBearer(auto_error=False)

def get_principal(creds: HTTPAuthorizationCredentials | None = Depends(bearer)) -> Principal:
    if creds is None or not creds.credentials:
        raise MissingToken()
    return decode_token(creds.credentials)

def require_teacher(principal: Principal = Depends(get_principal)) -> Principal:
    return principal.require_role(TEACHER)
