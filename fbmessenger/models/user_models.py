"""Pydantic models for user profiles (no consent required)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Public profile fields returned by the User Profile API.

    Read-only projection: the library fetches it and hands it back.
    """

    model_config = ConfigDict(populate_by_name=True)

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_photo_url: Optional[str] = Field(default=None, alias="profile_pic")
    locale: Optional[str] = None
    timezone: Optional[int] = None
    gender: Optional[str] = None
