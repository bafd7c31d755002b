"""
User API routes
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Path
from fastapi.responses import JSONResponse

from models.user import User, UserCreateRequest, UserUpdateRequest, MessageResponse
from services.users_service import UsersService, get_users_service

router = APIRouter()
logger = logging.getLogger(__name__)

USER_NOT_FOUND = {"message": "User not found"}


def user_not_found() -> JSONResponse:
    return JSONResponse(status_code=404, content=USER_NOT_FOUND)


@router.get("", response_model=List[User], summary="Get all users")
async def list_users(
    users_service: UsersService = Depends(get_users_service)
):
    """List of users"""
    return await users_service.list_users()

@router.post("", response_model=User, status_code=201, summary="Create a new user")
async def create_user(
    request: UserCreateRequest,
    users_service: UsersService = Depends(get_users_service)
):
    """User created"""
    return await users_service.create_user(
        first_name=request.firstName,
        last_name=request.lastName,
        birthday=request.birthday
    )

@router.put(
    "/{user_id}",
    response_model=User,
    summary="Update a user",
    responses={404: {"model": MessageResponse, "description": "User not found"}}
)
async def update_user(
    request: UserUpdateRequest,
    user_id: int = Path(..., description="User ID"),
    users_service: UsersService = Depends(get_users_service)
):
    """User updated"""
    user = await users_service.update_user_by_id(
        user_id,
        first_name=request.firstName,
        last_name=request.lastName,
        birthday=request.birthday
    )
    if user is None:
        return user_not_found()
    return user

@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    summary="Delete a user",
    responses={404: {"model": MessageResponse, "description": "User not found"}}
)
async def delete_user(
    user_id: int = Path(..., description="User ID"),
    users_service: UsersService = Depends(get_users_service)
):
    """User deleted"""
    deleted = await users_service.delete_user_by_id(user_id)
    if not deleted:
        return user_not_found()
    return MessageResponse(message="User deleted")
