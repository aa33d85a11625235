"""Wallet user routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.errors import map_error
from app.schemas.common import ListResponse, MessageResponse
from app.schemas.users import (
	BalanceUpdate,
	UserAuthRead,
	UserAuthRequest,
	UserAuthResponse,
	UserMessageResponse,
	UserRead,
	UserResponse,
	UserUpdate,
)
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _to_user_read(user: object) -> UserRead:
	return UserRead.model_validate(user)


@router.get("", response_model=ListResponse[UserRead])
async def list_users(db: AsyncSession = Depends(get_db)) -> ListResponse[UserRead]:
	try:
		users = await UserService(db).list_users()
	except Exception as exc:
		raise map_error(exc, "Error fetching users") from exc
	return ListResponse[UserRead](count=len(users), data=[_to_user_read(user) for user in users])


@router.post(
	"/auth",
	response_model=UserAuthResponse,
	responses={status.HTTP_201_CREATED: {"model": UserAuthResponse}},
)
async def authenticate_user(
	payload: UserAuthRequest,
	response: Response,
	db: AsyncSession = Depends(get_db),
) -> UserAuthResponse:
	try:
		result = await UserService(db).authenticate(payload)
	except Exception as exc:
		raise map_error(exc, "Error authenticating user") from exc

	user = UserAuthRead.model_validate(
		{**_to_user_read(result.user).model_dump(), "is_new_user": result.is_new_user}
	)
	response.status_code = status.HTTP_201_CREATED if result.is_new_user else status.HTTP_200_OK
	return UserAuthResponse(
		message="User created successfully" if result.is_new_user else "User authenticated successfully",
		user=user,
	)


@router.get("/{wallet_address}", response_model=UserResponse)
async def get_user(wallet_address: str, db: AsyncSession = Depends(get_db)) -> UserResponse:
	try:
		user = await UserService(db).get_user(wallet_address)
	except Exception as exc:
		raise map_error(exc, "Error fetching user") from exc
	return UserResponse(user=_to_user_read(user))


@router.put("/{wallet_address}", response_model=UserMessageResponse)
async def update_user(
	wallet_address: str,
	payload: UserUpdate,
	db: AsyncSession = Depends(get_db),
) -> UserMessageResponse:
	try:
		user = await UserService(db).update_user(wallet_address, payload)
	except Exception as exc:
		raise map_error(exc, "Error updating user") from exc
	return UserMessageResponse(message="User updated successfully", user=_to_user_read(user))


@router.put("/{wallet_address}/balance", response_model=UserMessageResponse)
async def update_user_balance(
	wallet_address: str,
	payload: BalanceUpdate,
	db: AsyncSession = Depends(get_db),
) -> UserMessageResponse:
	try:
		user = await UserService(db).update_balance(wallet_address, payload.balance)
	except Exception as exc:
		raise map_error(exc, "Error updating balance") from exc
	return UserMessageResponse(message="Balance updated successfully", user=_to_user_read(user))


@router.delete("/{wallet_address}", response_model=MessageResponse)
async def delete_user(wallet_address: str, db: AsyncSession = Depends(get_db)) -> MessageResponse:
	try:
		await UserService(db).delete_user(wallet_address)
	except Exception as exc:
		raise map_error(exc, "Error deleting user") from exc
	return MessageResponse(message="User deleted successfully")
