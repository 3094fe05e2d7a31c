"""Pydantic models for trace.moe request and response bodies.

Field names follow the wire format; the few that are not valid or idiomatic
Python names (``RawDocsCount``, ``from`` ...) are mapped through aliases.

Limit and quota figures are sent as flat top-level fields, e.g.
``{"limit": 9, "limit_ttl": 60, ...}``. They are folded into the
``Limit``/``Quota``/``UserLimit``/``UserQuota`` sub-models while decoding.

Scalar fields are validated strictly: numbers sent as strings, booleans sent
as numbers and negative counts are rejected instead of coerced.
"""

import base64
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    model_validator,
)


def reject_non_number(value: Any) -> Any:
    """Only let JSON numbers through to a float field (ints are fine)."""
    if isinstance(value, (str, bool)):
        raise ValueError("Input should be a number")
    return value


Count = Annotated[StrictInt, Field(ge=0)]
Number = Annotated[float, BeforeValidator(reject_non_number)]

AnilistID = Count
MalID = Count


def fold_flattened(data: Any, parts: dict[str, type[BaseModel]]) -> Any:
    """Move sibling wire fields into the sub-model they belong to.

    Args:
        data: Raw input passed to the model validator.
        parts: Mapping of field name to sub-model type. The sub-model's own
            field names are looked up at the top level of ``data``.

    Returns:
        A copy of ``data`` with each part folded into a nested dict. Values that
        are already nested (dicts or model instances) are left alone so models
        can also be constructed directly.
    """
    if not isinstance(data, dict):
        return data

    folded = dict(data)
    for name, model in parts.items():
        if isinstance(folded.get(name), (dict, BaseModel)):
            continue
        part: dict[str, Any] = {}
        for key in model.model_fields:
            if key in folded:
                part[key] = folded.pop(key)
        folded[name] = part
    return folded


class Limit(BaseModel):
    """A rate limit. Usually resets every minute."""

    model_config = ConfigDict(frozen=True)

    limit: Count = Field(description="Number of requests remaining in limit period")
    limit_ttl: Count = Field(description="Time until limit resets (in seconds)")


class Quota(BaseModel):
    """Quota on requests. Usually resets every day."""

    model_config = ConfigDict(frozen=True)

    quota: Count = Field(description="Number of requests remaining in quota")
    quota_ttl: Count = Field(description="Time until quota resets (in seconds)")


class UserLimit(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_limit: Count = Field(description="Maximum number of requests per limit period")
    user_limit_ttl: Count = Field(description="Time between limit resets (in seconds)")


class UserQuota(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_quota: Count = Field(description="Maximum number of requests per quota")
    user_quota_ttl: Count = Field(description="Time between quota resets (in seconds)")


class SearchRequest(BaseModel):
    """The body of a search request."""

    image: str = Field(description="The Base64-encoded image")
    filter: AnilistID | None = Field(
        default=None, description="An optional AniList ID to filter on"
    )

    @classmethod
    def from_image(cls, image: bytes, filter: AnilistID | None = None) -> "SearchRequest":
        """Create a SearchRequest from raw image bytes."""
        return cls(image=base64.b64encode(image).decode("ascii"), filter=filter)

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the request; ``filter`` is omitted when unset."""
        return self.model_dump(exclude_none=True)


class Doc(BaseModel):
    """One matched scene returned by a search."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    # SCALARS
    from_: Number = Field(alias="from", description="Start of the matching scene (seconds)")
    to: Number = Field(description="End of the matching scene (seconds)")
    at: Number = Field(description="Timestamp of the matching frame (seconds)")
    similarity: Number
    anilist_id: AnilistID
    mal_id: MalID | None = None
    is_adult: StrictBool
    title_native: StrictStr | None = None
    title_chinese: StrictStr | None = None
    title_english: StrictStr | None = None
    title_romaji: StrictStr
    filename: StrictStr
    tokenthumb: StrictStr
    # ARRAYS
    synonyms: list[StrictStr]
    synonyms_chinese: list[StrictStr]


class SearchResponse(BaseModel):
    """A response from `Client.search`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    raw_docs_count: Count = Field(
        alias="RawDocsCount", description="Total number of frames searched"
    )
    raw_docs_search_time: Count = Field(
        alias="RawDocsSearchTime",
        description="Time taken to retrieve the frames from database (sum of all cores)",
    )
    re_rank_search_time: Count = Field(
        alias="ReRankSearchTime",
        description="Time taken to compare the frames (sum of all cores)",
    )
    cache_hit: StrictBool = Field(
        alias="CacheHit",
        description="Whether the search result is cached (by extracted image feature)",
    )
    trial: Count = Field(description="Number of times searched")
    limit: Limit
    quota: Quota
    docs: list[Doc]

    @model_validator(mode="before")
    @classmethod
    def fold_limits(cls, data: Any) -> Any:
        return fold_flattened(data, {"limit": Limit, "quota": Quota})


class Me(BaseModel):
    """Search quota and limit of an account (or IP address)."""

    model_config = ConfigDict(frozen=True)

    user_id: Count | None = None
    email: StrictStr = Field(description="Account e-mail, or the caller's IP address when anonymous")
    limit: Limit
    quota: Quota
    user_limit: UserLimit
    user_quota: UserQuota

    @model_validator(mode="before")
    @classmethod
    def fold_limits(cls, data: Any) -> Any:
        return fold_flattened(
            data,
            {
                "limit": Limit,
                "quota": Quota,
                "user_limit": UserLimit,
                "user_quota": UserQuota,
            },
        )
