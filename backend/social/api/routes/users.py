"""Users Route — account creation.

Invariants:
    - Body validated by UserCreate before the handler runs (400 on failure)
    - Password hashed before the record reaches the store
    - 201 response is UserResponse: the password never appears in any response
    - Store errors arrive already classified; the global handler maps them to 409/503/500
"""

from fastapi import Depends, status
from starlette.concurrency import run_in_threadpool

from social.api.dependencies import get_storage
from social.api.route_table import Route
from social.core.passwords import hash_password
from social.models.user import User
from social.schemas.user import UserCreate, UserResponse
from social.store.storage import Storage


async def create_user(
    body: UserCreate, storage: Storage = Depends(get_storage),
) -> UserResponse:
    """Create a user account."""
    user = User(
        username=body.username,
        email=body.email,
        password=await run_in_threadpool(hash_password, body.password),
    )
    await storage.users.create(user)
    return UserResponse.model_validate(user)


def route() -> Route:
    return Route(
        "POST", "/v1/users", create_user,
        status_code=status.HTTP_201_CREATED,
        response_model=UserResponse,
        name="create_user",
        tags=("users",),
    )
