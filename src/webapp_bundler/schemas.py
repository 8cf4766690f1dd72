"""Pydantic schemas for runtime validation of bundle inputs and documents."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

URL_SCHEMES = ("http://", "https://")


def normalize_url(url: str) -> str:
    """Return ``url`` with an ``https`` scheme.

    Addresses with an ``http://`` or ``https://`` scheme are kept, ``www.``
    hosts get ``https://`` and bare hosts get ``https://www.``.
    """
    value = url.strip()
    lowered = value.lower()
    if lowered.startswith(URL_SCHEMES):
        return value
    if lowered.startswith("www."):
        return f"https://{value}"
    return f"https://www.{value}"


class BundleRequest(BaseModel):
    """Validated input for one bundle operation."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: Path
    title: str
    url: str
    infer_icon: bool = True
    debug: bool = False

    @field_validator("title")
    @classmethod
    def _validate_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title cannot be empty.")
        if "/" in value or "\0" in value:
            raise ValueError("title cannot contain '/' or NUL characters.")
        return value

    @field_validator("url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("url cannot be empty.")
        return normalize_url(value)

    @property
    def executable_name(self) -> str:
        """Base name of the bundled executable."""
        return self.target.name

    @property
    def bundle_name(self) -> str:
        """Directory name of the bundle, e.g. ``Title.app``."""
        return f"{self.title}.app"


class BundleConfig(BaseModel):
    """Runtime configuration written next to the bundled executable."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    title: str = Field(alias="Title")
    url: str = Field(alias="URL")
    debug: bool = Field(default=False, alias="Debug")

    def to_json(self) -> bytes:
        """Serialize with the ``Title``/``URL``/``Debug`` document keys."""
        return self.model_dump_json(by_alias=True).encode("utf-8")


class HttpIconSourceOptions(BaseModel):
    """Validated options for the HTTP icon source."""

    model_config = ConfigDict(extra="forbid")

    timeout: float = Field(default=10.0, gt=0.0)
    max_candidates: int = Field(default=8, ge=1)
    max_icon_bytes: int = Field(default=5 * 1024 * 1024, gt=0)
    user_agent: str = "webapp-bundler"

    @field_validator("user_agent")
    @classmethod
    def _validate_user_agent(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("user_agent cannot be empty.")
        return value
