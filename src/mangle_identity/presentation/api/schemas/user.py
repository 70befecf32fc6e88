from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mangle_identity.application.dtos import UserData
from mangle_identity.domain.user import User


class UserRequest(BaseModel):
    """Request schema for creating or updating a user.

    An empty ``domain`` means the configured default domain. Omitted
    ``roles``/``account_locked`` keep the stored values on update.
    """

    name: str = Field(..., min_length=1, max_length=255)
    domain: str = Field("", max_length=255)
    password: str | None = Field(None, min_length=8, max_length=72)
    roles: list[str] | None = None
    account_locked: bool | None = Field(None, alias="accountLocked")

    model_config = ConfigDict(populate_by_name=True)

    def to_user_data(self) -> UserData:
        return UserData(
            name=self.name,
            domain=self.domain,
            password=self.password,
            roles=tuple(self.roles) if self.roles is not None else None,
            account_locked=self.account_locked,
        )


class UserResponse(BaseModel):
    """Response schema for a user. Never carries credential material."""

    name: str
    domain: str
    fully_qualified_name: str = Field(..., serialization_alias="fullyQualifiedName")
    roles: list[str]
    account_locked: bool = Field(..., serialization_alias="accountLocked")
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: datetime = Field(..., serialization_alias="updatedAt")

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            name=user.name,
            domain=user.domain,
            fully_qualified_name=user.fully_qualified_name,
            roles=list(user.roles),
            account_locked=user.account_locked,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
