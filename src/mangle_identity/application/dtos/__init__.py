from mangle_identity.application.dtos.user_data import UserData

__all__ = ["UserData"]
