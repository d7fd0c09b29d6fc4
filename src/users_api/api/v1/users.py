from fastapi import APIRouter, Depends, status

from users_api.core.dependencies import get_user_service
from users_api.schemas.user import DeleteResponse, UserCreate, UserRead, UserUpdate
from users_api.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])

_NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"description": "User not found"}}
_CONFLICT = {status.HTTP_409_CONFLICT: {"description": "User with this email already exists"}}
_BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"description": "Invalid input"}}


@router.get("", response_model=list[UserRead])
async def list_users(service: UserService = Depends(get_user_service)):
    return await service.list_users()


@router.get("/{user_id}", response_model=UserRead, responses=_NOT_FOUND)
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return await service.get_user(user_id)


@router.post(
    "",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
    responses={**_CONFLICT, **_BAD_REQUEST},
)
async def create_user(body: UserCreate, service: UserService = Depends(get_user_service)):
    return await service.create_user(body.name, body.email)


@router.put("/{user_id}", response_model=UserRead, responses={**_NOT_FOUND, **_CONFLICT, **_BAD_REQUEST})
async def update_user(user_id: int, body: UserUpdate, service: UserService = Depends(get_user_service)):
    return await service.update_user(user_id, body.to_changes())


@router.delete("/{user_id}", response_model=DeleteResponse, responses=_NOT_FOUND)
async def delete_user(user_id: int, service: UserService = Depends(get_user_service)):
    await service.delete_user(user_id)
    return DeleteResponse(deleted=True)
