"""Auth Controller — sign in, sign out, current user.

Invariants:
    - sign-in is the only public auth endpoint
    - sign-out revokes exactly the token used for the call
"""

from fastapi import APIRouter, Depends, Response, status

from cleancrud.api.dependencies import (
    get_bearer_token, get_current_user, get_mediator, unwrap,
)
from cleancrud.schemas.auth import (
    CurrentUser, SignInRequest, SignOutRequest, TokenResponse,
)
from cleancrud.services.mediator import Mediator

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.post("/sign-in", response_model=TokenResponse)
async def sign_in(
    body: SignInRequest, mediator: Mediator = Depends(get_mediator),
):
    """Exchange e-mail and password for a bearer token."""
    return unwrap(await mediator.send(body))


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    current: CurrentUser = Depends(get_current_user),
    token: str = Depends(get_bearer_token),
    mediator: Mediator = Depends(get_mediator),
):
    """Revoke the calling token."""
    unwrap(await mediator.send(SignOutRequest(token=token)))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me", response_model=CurrentUser)
async def me(current: CurrentUser = Depends(get_current_user)):
    return current
