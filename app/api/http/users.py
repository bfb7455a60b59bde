from fastapi import APIRouter, Depends, HTTPException, status, Path, Query, Response
import logging

from app.api.dependencies import get_user_service
from app.domains.users.exceptions import NotFoundError, StoreError, ValidationError
from app.domains.users.schemas import UserCreate, UserUpdate, UserResponse, UserListResponse
from app.domains.users.services import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])

# users.id хранится в int4
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


def _query_int(value: str) -> int:
    # Нечисловое или выходящее за int32 значение трактуется как 0,
    # сервис подставит значение по умолчанию
    try:
        number = int(value)
    except (TypeError, ValueError):
        return 0
    if number < INT32_MIN or number > INT32_MAX:
        return 0
    return number


@router.post(
    "",
    response_model=UserResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def create_user(
    user_data: UserCreate,
    service: UserService = Depends(get_user_service)
):
    """Создание пользователя (без возраста в ответе)"""
    try:
        user = await service.create_user(user_data.name, user_data.dob)
    except ValidationError as e:
        logger.error(f"Failed to create user: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    logger.info(f"User created successfully: user_id={user.id}")
    return service.to_response(user)


@router.get("", response_model=UserListResponse)
async def list_users(
    page: str = Query("1"),
    limit: str = Query("10"),
    service: UserService = Depends(get_user_service)
):
    """Постраничный список пользователей с возрастом"""
    try:
        response = await service.list_users(_query_int(page), _query_int(limit))
    except StoreError as e:
        logger.error(f"Failed to list users: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve users"
        )

    logger.info(
        f"Users listed successfully: page={response.page} "
        f"limit={response.limit} total={response.total}"
    )
    return response


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service)
):
    """Получение пользователя с вычисленным возрастом"""
    try:
        user = await service.get_user_by_id(user_id)
    except NotFoundError:
        logger.error(f"User not found: id={user_id}")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    logger.info(f"User retrieved successfully: user_id={user.id}")
    return service.to_response(user, with_age=True)


@router.put("/{user_id}", response_model=UserResponse, response_model_exclude_none=True)
async def update_user(
    user_data: UserUpdate,
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service)
):
    """Полное обновление пользователя (без возраста в ответе)"""
    try:
        user = await service.update_user(user_id, user_data.name, user_data.dob)
    except NotFoundError:
        logger.error(f"Failed to update user: id={user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    except ValidationError as e:
        logger.error(f"Failed to update user: id={user_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    logger.info(f"User updated successfully: user_id={user.id}")
    return service.to_response(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: int = Path(..., ge=INT32_MIN, le=INT32_MAX),
    service: UserService = Depends(get_user_service)
):
    """Удаление пользователя"""
    try:
        await service.delete_user(user_id)
    except NotFoundError:
        logger.error(f"Failed to delete user: id={user_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    logger.info(f"User deleted successfully: id={user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
