"""User API routes.

Endpoints for:
- POST /users - Login upsert
- GET /users - Admin listing with name search
- GET /users/{email} - Single user
- PUT /users/{email} - Update own profile (or any, as admin)
- PATCH /admin/users/{user_id}/toggle-role - Admin role toggle
"""

from uuid import UUID

from fastapi import APIRouter, Query, Response, status

from forumx.auth.dependencies import AdminUser, CallerAccount, CurrentUser, ensure_self_or_admin
from forumx.core.schemas import MessageResponse

from .dependencies import UserServiceDep
from .schemas import (
    LoginRequest,
    LoginResponse,
    RoleToggleResponse,
    UpdateUserRequest,
    UserResponse,
)


router = APIRouter(prefix="/users", tags=["users"])
admin_router = APIRouter(prefix="/admin/users", tags=["admin"])


@router.post(
    "",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    summary="Create or refresh a user on login",
)
async def login(
    body: LoginRequest,
    response: Response,
    service: UserServiceDep,
) -> LoginResponse:
    """Insert the user on first login, otherwise refresh ``lastLogin``."""
    user, created = await service.login(
        email=body.email,
        uid=body.uid,
        name=body.name,
        photo_url=body.photo_url,
    )
    if created:
        response.status_code = status.HTTP_201_CREATED
        return LoginResponse(message="User created", user_id=user.user_id)
    return LoginResponse(message="User exists, last_login updated", updated=True)


@router.get("", response_model=list[UserResponse], summary="List users (admin)")
async def list_users(
    _admin: AdminUser,
    service: UserServiceDep,
    search: str | None = Query(default=None, description="Name substring"),
) -> list[UserResponse]:
    users = await service.search(search)
    return [UserResponse.from_user(user) for user in users]


@router.get("/{email}", response_model=UserResponse, summary="Get a user by email")
async def get_user(email: str, service: UserServiceDep) -> UserResponse:
    return UserResponse.from_user(await service.get_by_email(email))


@router.put("/{email}", response_model=MessageResponse, summary="Update a user profile")
async def update_user(
    email: str,
    body: UpdateUserRequest,
    identity: CurrentUser,
    account: CallerAccount,
    service: UserServiceDep,
) -> MessageResponse:
    ensure_self_or_admin(identity, account, email)
    await service.update_profile(email, name=body.name, photo_url=body.photo_url)
    return MessageResponse(message="User updated successfully")


@admin_router.patch(
    "/{user_id}/toggle-role",
    response_model=RoleToggleResponse,
    summary="Toggle a user between user and admin",
)
async def toggle_role(
    user_id: UUID,
    _admin: AdminUser,
    service: UserServiceDep,
) -> RoleToggleResponse:
    user = await service.toggle_role(user_id)
    return RoleToggleResponse(
        message=f"User role updated to {user.role.value}", role=user.role
    )
