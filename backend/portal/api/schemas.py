from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from portal.models.user import Role


def _require_utf8(value: str) -> str:
    try:
        value.encode()
    except UnicodeEncodeError:
        raise ValueError("must be valid UTF-8 text") from None
    return value


# Lone surrogates survive JSON decoding but cannot be stored or hashed.
Text = Annotated[str, AfterValidator(_require_utf8)]


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class UserResponse(CamelModel):
    id: int
    username: str
    full_name: str
    role: Role
    badge_number: str
    profile_image: str | None = None
    designation: str | None = None
    department: str | None = None
    join_date: str | None = None
    contact_info: str | None = None


class LoginRequest(BaseModel):
    username: Text
    password: str


class AdminRegisterRequest(CamelModel):
    username: Text
    password: Text
    full_name: Text


class ModeratorCreateRequest(CamelModel):
    username: Text
    password: Text
    full_name: Text
    badge_number: Text
    profile_image: Text | None = None
    designation: Text | None = None
    department: Text | None = None
    join_date: Text | None = None
    contact_info: Text | None = None


class ModeratorUpdateRequest(CamelModel):
    """Partial update: fields sent overwrite, fields left out keep their value."""

    username: Text | None = None
    password: Text | None = None
    full_name: Text | None = None
    badge_number: Text | None = None
    profile_image: Text | None = None
    designation: Text | None = None
    department: Text | None = None
    join_date: Text | None = None
    contact_info: Text | None = None

    @model_validator(mode="after")
    def required_fields_not_null(self):
        for name in ("username", "password", "full_name", "badge_number"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self


class CredentialsRequest(BaseModel):
    username: Text
    password: Text


class MessageResponse(BaseModel):
    message: str
