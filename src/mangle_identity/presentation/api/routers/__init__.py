from mangle_identity.presentation.api.routers.user_management import (
    router as user_management_router,
)

__all__ = [
    "user_management_router",
]
