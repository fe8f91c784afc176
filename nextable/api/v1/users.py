import logging

from fastapi import APIRouter, Depends, status

from nextable.core.security import CurrentUser, get_current_user
from nextable.schemas.response import MessageResponse, SuccessResponse
from nextable.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
    UserUpdateRequest,
)
from nextable.services.user_service import (
    authenticate,
    delete_user,
    get_user,
    register_user,
    update_user,
)

router = APIRouter()
log = logging.getLogger("uvicorn")


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def register_endpoint(payload: RegisterRequest):
    """Creates an account and returns an access token for it."""
    user, token = await register_user(
        email=payload.email,
        password=payload.password,
        first_name=payload.first_name,
        last_name=payload.last_name,
        role=payload.role,
    )
    data = AuthResponse(token=token, user=UserResponse.model_validate(user))
    return SuccessResponse(data=data.model_dump(mode="json"))


@router.post("/login", response_model=SuccessResponse)
async def login_endpoint(payload: LoginRequest):
    user, token = await authenticate(payload.email, payload.password)
    data = AuthResponse(token=token, user=UserResponse.model_validate(user))
    return SuccessResponse(data=data.model_dump(mode="json"))


@router.get("/profile", response_model=SuccessResponse)
async def profile_endpoint(current_user: CurrentUser = Depends(get_current_user)):
    user = await get_user(current_user.user_id)
    return SuccessResponse(data=UserResponse.model_validate(user).model_dump(mode="json"))


@router.put("/{user_id}", response_model=SuccessResponse)
async def update_user_endpoint(
    user_id: int,
    payload: UserUpdateRequest,
    current_user: CurrentUser = Depends(get_current_user),
):
    """Updates name fields. Users may only edit themselves unless they are admins."""
    user = await update_user(current_user, user_id, payload.model_dump(exclude_unset=True))
    return SuccessResponse(data=UserResponse.model_validate(user).model_dump(mode="json"))


@router.delete("/{user_id}", response_model=SuccessResponse)
async def delete_user_endpoint(user_id: int, current_user: CurrentUser = Depends(get_current_user)):
    await delete_user(current_user, user_id)
    return SuccessResponse(data=MessageResponse(message="User deleted successfully").model_dump())
