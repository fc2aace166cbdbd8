"""Upload request validation and request-body assembly.

This module turns a raw `/upload` request into:
- a validated, immutable `UploadRequest`
- an `UploadPlan`: the enabled API parts and the matching resource body

Assembly is a pure function of the request. A part name is listed if and
only if its section is in the body, in the fixed order `snippet, status,
recordingDetails, contentDetails, localizations`.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from app.core.exceptions import AuthError, ValidationError

BEARER_PREFIX = "Bearer "

# Optional sections appended after snippet/status, in this order
OPTIONAL_SECTIONS = ("recordingDetails", "contentDetails", "localizations")

SNIPPET_OPTIONAL_FIELDS = ("categoryId", "defaultLanguage", "defaultAudioLanguage")
STATUS_OPTIONAL_FIELDS = ("publishAt", "license")
STATUS_BOOLEAN_FIELDS = (
    "embeddable",
    "publicStatsViewable",
    "madeForKids",
    "selfDeclaredMadeForKids",
    "containsSyntheticMedia",
)


class UploadRequest(BaseModel):
    """Validated upload metadata.

    Field names follow Python conventions; aliases match the JSON keys
    accepted on `/upload`. Boolean status fields are kept as received
    (`Any`) so that assembly can tell an explicit `false` from a string or
    a missing value.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    file_path: str = Field(alias="filePath", min_length=1)
    title: str = Field(min_length=1)

    # Snippet
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    category_id: str | None = Field(default=None, alias="categoryId")
    default_language: str | None = Field(default=None, alias="defaultLanguage")
    default_audio_language: str | None = Field(default=None, alias="defaultAudioLanguage")

    # Status
    privacy_status: str = Field(default="private", alias="privacyStatus")
    publish_at: str | None = Field(default=None, alias="publishAt")
    license: str | None = None
    embeddable: Any = None
    public_stats_viewable: Any = Field(default=None, alias="publicStatsViewable")
    made_for_kids: Any = Field(default=None, alias="madeForKids")
    self_declared_made_for_kids: Any = Field(default=None, alias="selfDeclaredMadeForKids")
    contains_synthetic_media: Any = Field(default=None, alias="containsSyntheticMedia")

    # Optional sections
    recording_details: dict[str, Any] | None = Field(default=None, alias="recordingDetails")
    content_details: dict[str, Any] | None = Field(default=None, alias="contentDetails")
    localizations: dict[str, dict[str, Any]] | None = None

    @field_validator("description", "tags", "privacy_status", mode="before")
    @classmethod
    def null_uses_default(cls, v: Any, info: Any) -> Any:
        """Treat an explicit null like an omitted field."""
        if v is None:
            return {"description": "", "tags": [], "privacy_status": "private"}[info.field_name]
        return v

    def raw(self, name: str) -> Any:
        """Look up a field by its JSON key."""
        return getattr(self, _ATTRIBUTE_BY_ALIAS.get(name, name))


_ATTRIBUTE_BY_ALIAS = {
    (info.alias or name): name for name, info in UploadRequest.model_fields.items()
}


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


@dataclass(frozen=True)
class UploadPlan:
    """Enabled API parts and the resource body that matches them.

    The body is deeply read-only: mappings become `MappingProxyType` and
    lists become tuples. `to_body()` returns a fresh JSON-ready copy.

    Attributes:
        parts: Part names, snippet and status first
        body: Section name to section object
    """

    parts: tuple[str, ...]
    body: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "parts", tuple(self.parts))
        object.__setattr__(self, "body", _freeze(self.body))

    @property
    def part(self) -> str:
        """Comma-separated part list as sent to the API."""
        return ",".join(self.parts)

    def to_body(self) -> dict[str, Any]:
        """Plain, mutable copy of the body for the API client."""
        return _thaw(self.body)


def extract_bearer_token(authorization: str | None) -> str:
    """Extract the access token from an Authorization header.

    Args:
        authorization: Raw header value

    Returns:
        The bearer token

    Raises:
        AuthError: If the header is missing or not `Bearer <token>`
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError()

    parts = authorization.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise AuthError()
    return token


def parse_upload_request(payload: Any) -> UploadRequest:
    """Validate a decoded JSON body into an UploadRequest.

    Args:
        payload: Decoded JSON body

    Returns:
        Validated UploadRequest

    Raises:
        ValidationError: If the body is not an object, filePath or title is
            absent/empty, or a field has the wrong type
    """
    if not isinstance(payload, dict):
        raise ValidationError("request body must be a JSON object")

    if not payload.get("filePath") or not payload.get("title"):
        raise ValidationError("filePath and title are required")

    try:
        return UploadRequest.model_validate(payload)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise ValidationError(
            "invalid upload metadata",
            field=location,
            detail=f"{location}: {first['msg']}",
        ) from e


def build_snippet(request: UploadRequest) -> dict[str, Any]:
    """Build the snippet section.

    title, description and tags are always present; categoryId,
    defaultLanguage and defaultAudioLanguage only when non-empty.
    """
    snippet: dict[str, Any] = {
        "title": request.title,
        "description": request.description,
        "tags": list(request.tags),
    }
    snippet.update(
        {name: request.raw(name) for name in SNIPPET_OPTIONAL_FIELDS if request.raw(name)}
    )
    return snippet


def build_status(request: UploadRequest) -> dict[str, Any]:
    """Build the status section.

    privacyStatus is always present; publishAt and license only when
    non-empty; boolean flags only when the received value is a real
    boolean, so an explicit false is forwarded and null/"false" are not.
    """
    status: dict[str, Any] = {"privacyStatus": request.privacy_status}
    status.update(
        {name: request.raw(name) for name in STATUS_OPTIONAL_FIELDS if request.raw(name)}
    )
    status.update(
        {
            name: request.raw(name)
            for name in STATUS_BOOLEAN_FIELDS
            if isinstance(request.raw(name), bool)
        }
    )
    return status


def build_optional_sections(request: UploadRequest) -> dict[str, dict[str, Any]]:
    """Collect the optional sections that have at least one key, in order."""
    sections: dict[str, dict[str, Any]] = {}
    for name in OPTIONAL_SECTIONS:
        value = request.raw(name)
        if value:
            sections[name] = dict(value)
    return sections


def build_plan(request: UploadRequest) -> UploadPlan:
    """Assemble the part list and resource body for an upload.

    Args:
        request: Validated upload request

    Returns:
        UploadPlan whose parts match the body's sections one to one
    """
    body = {
        "snippet": build_snippet(request),
        "status": build_status(request),
        **build_optional_sections(request),
    }
    return UploadPlan(parts=tuple(body), body=body)


__all__ = [
    "OPTIONAL_SECTIONS",
    "UploadPlan",
    "UploadRequest",
    "build_optional_sections",
    "build_plan",
    "build_snippet",
    "build_status",
    "extract_bearer_token",
    "parse_upload_request",
]
