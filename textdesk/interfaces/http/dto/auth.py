from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from textdesk.domain.users.entities import PublicUser


class CredentialsRequestDTO(BaseModel):
    # Emptiness and strength are checked by the auth service, not here
    username: str | None = None
    password: str | None = None

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=False)


class RegisterRequestDTO(CredentialsRequestDTO):
    pass


class LoginRequestDTO(CredentialsRequestDTO):
    pass


class PublicUserDTO(BaseModel):
    id: int
    username: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_domain(cls, user: PublicUser) -> "PublicUserDTO":
        return cls(id=user.id, username=user.username, created_at=user.created_at)


class AuthSuccessDTO(BaseModel):
    user: PublicUserDTO
    success: bool = True


class CurrentUserDTO(BaseModel):
    user: PublicUserDTO | None = None
    authenticated: bool = False


class LogoutDTO(BaseModel):
    success: bool = True


class SessionInfoDTO(BaseModel):
    user: PublicUserDTO
    expires_at: datetime = Field(serialization_alias="expiresAt")


def dump(model: BaseModel) -> dict:
    return model.model_dump(mode="json", by_alias=True)
