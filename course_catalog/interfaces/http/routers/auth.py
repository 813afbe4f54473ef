from fastapi import APIRouter, Depends, Request

from ....config import settings
from ....domain.entities import Principal
from ....domain.errors import InvalidCredentials
from ....application.use_cases.login_user import LoginUser
from ....infrastructure.metrics import login_attempts_total
from ....infrastructure.rate_limit import limiter
from ....infrastructure.repositories import UserRepository
from ....infrastructure.security import PasswordHasher, TokenIssuer
from ....infrastructure.store import JsonStore, get_store
from ..authz import get_principal
from ..schemas import LoginReq, LoginResp, UserResp

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=LoginResp)
@limiter.limit(settings.LOGIN_RATE_LIMIT)  # защита от перебора паролей
def login(
    request: Request,
    payload: LoginReq,
    store: JsonStore = Depends(get_store),
):
    uc = LoginUser(repo=UserRepository(store), hasher=PasswordHasher(), tokens=TokenIssuer())
    try:
        token, user = uc.execute(payload.username, payload.password)
    except InvalidCredentials:
        login_attempts_total.labels(outcome="failure").inc()
        raise
    login_attempts_total.labels(outcome="success").inc()
    return LoginResp(token=token, user=UserResp(id=user.id, username=user.username, role=user.role))


@router.get("/me", response_model=UserResp)
def me(principal: Principal = Depends(get_principal)):
    return UserResp(id=principal.id, username=principal.username, role=principal.role)
