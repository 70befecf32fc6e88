from fastapi import APIRouter
from fastapi.responses import JSONResponse

from mangle_identity.presentation.api.dependencies import (
    Controller,
    CurrentAuthContext,
    PublicController,
    ResetCompletedCaller,
)
from mangle_identity.presentation.api.schemas import UserRequest, UserResponse

router = APIRouter(prefix="/user-management")


@router.get(
    "/users",
    summary="List all users",
    response_model=list[UserResponse],
    responses={
        200: {"description": "List of all users"},
        401: {"description": "Authentication required"},
        403: {"description": "Admin password reset pending"},
        503: {"description": "User store unavailable"},
    },
)
async def get_all_users(
    controller: Controller,
    _caller: ResetCompletedCaller,
) -> JSONResponse:
    """List all users."""
    return await controller.get_all_users()


@router.post(
    "/users",
    summary="Create a new user",
    status_code=201,
    response_model=UserResponse,
    responses={
        201: {"description": "User created successfully"},
        400: {"description": "Invalid user name, domain or password"},
        409: {"description": "User already exists"},
    },
)
async def create_user(
    request: UserRequest,
    controller: Controller,
    _caller: ResetCompletedCaller,
) -> JSONResponse:
    """Create a new user. An empty domain means the default domain."""
    return await controller.create_user(request.to_user_data())


@router.put(
    "/users",
    summary="Update an existing user",
    response_model=UserResponse,
    responses={
        200: {"description": "User updated successfully"},
        404: {"description": "User not found"},
    },
)
async def update_user(
    request: UserRequest,
    controller: Controller,
    _caller: ResetCompletedCaller,
) -> JSONResponse:
    """Update password, roles or lock state of an existing user."""
    return await controller.update_user(request.to_user_data())


@router.get(
    "/user",
    summary="Get the authenticated user",
    response_model=UserResponse,
    responses={
        200: {"description": "The caller's user record"},
        401: {"description": "Authentication required"},
        404: {"description": "No record for the authenticated identity"},
    },
)
async def get_current_user(
    controller: Controller,
    _caller: CurrentAuthContext,
) -> JSONResponse:
    """Return the caller's own user record."""
    return await controller.get_current_user()


@router.put(
    "/users/admin",
    summary="Reset the admin credentials on first login",
    response_model=bool,
    responses={
        200: {"description": "Credentials updated and reset gate cleared"},
        404: {"description": "User not found"},
        503: {"description": "Reset status could not be persisted"},
    },
)
async def reset_admin_creds_for_first_login(
    request: UserRequest,
    controller: Controller,
    _caller: CurrentAuthContext,
) -> JSONResponse:
    """Apply new admin credentials, then mark the first-login reset as done."""
    return await controller.reset_admin_creds_for_first_login(request.to_user_data())


@router.get(
    "/password/reset",
    summary="Whether the admin still has to reset the password",
    response_model=bool,
    responses={
        200: {"description": "Current reset status"},
        503: {"description": "Reset status could not be read"},
    },
)
async def get_admin_password_reset_status(
    controller: PublicController,
) -> JSONResponse:
    """Return true while the built-in admin must reset the initial password."""
    return await controller.get_admin_password_reset_status()
