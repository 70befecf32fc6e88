from mangle_identity.presentation.api.schemas.user import UserRequest, UserResponse

__all__ = ["UserRequest", "UserResponse"]
