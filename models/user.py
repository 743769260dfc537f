# models/user.py

from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
from pydantic.alias_generators import to_camel

from .enums import UserRole


# ===============================================================
# PROFILE MODELS (public.profiles)
# ===============================================================

class CamelModel(BaseModel):
    """
    snake_case in Python and in the profiles/events tables,
    camelCase on the wire to the front-end (isApproved, startTime, ...).
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class User(CamelModel):
    """
    One row of public.profiles.
    is_approved gates the whole app: unapproved users only ever see
    the pending-approval screen.
    """
    id: str
    name: str
    email: str
    role: UserRole = UserRole.MEMBER
    position: Optional[str] = None
    avatar: Optional[str] = None
    is_approved: bool = False

    @field_validator("id", mode="before")
    def id_to_str(cls, v):
        return str(v)

    @field_validator("is_approved", mode="before")
    def null_is_unapproved(cls, v):
        return bool(v) if v is not None else False

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls.model_validate(
            {k: v for k, v in row.items() if k in cls.model_fields}
        )


class UserUpdate(CamelModel):
    """
    Partial update to a profile (admin edit modal).
    Only fields the caller actually sent are written.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    position: Optional[str] = None
    avatar: Optional[str] = None
    is_approved: Optional[bool] = None

    @field_validator("name", "email", "role", "is_approved")
    def not_null(cls, v, info):
        # Omit a field to leave it alone; these columns are NOT NULL
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("name")
    def name_not_blank(cls, v):
        if not v.strip():
            raise ValueError("Name must not be empty")
        return v.strip()

    def to_row(self) -> dict:
        """profiles columns for the fields that were set."""
        return self.model_dump(exclude_unset=True, by_alias=False, mode="json")


class ProfileUpdate(BaseModel):
    """Self-service settings form: name and email only."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None

    @field_validator("name")
    def name_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Name must not be empty")
        return v.strip() if v else v

    def to_user_update(self) -> UserUpdate:
        return UserUpdate(**self.model_dump(exclude_none=True))
