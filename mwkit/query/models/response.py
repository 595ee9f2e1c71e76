"""API response envelope models.

These models describe the parts of a query response that the aggregation
engine navigates: title normalizations, redirects, continuation and batch
completion markers, and warnings. Entity collections (``pages`` and
``badrevids``) are kept as the raw objects from the response, since the
engine returns those very objects to callers.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TitleMapping(BaseModel):
    """One ``{from, to}`` entry of ``query.normalized`` or ``query.redirects``."""

    from_: str = Field(..., alias="from")
    to: str
    tofragment: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)


class ApiWarning(BaseModel):
    """A single warning attached to a response.

    Warnings in the legacy ``bc`` error format carry no code, only the
    module that raised them.
    """

    code: str | None = None
    module: str | None = None
    text: str | None = None

    model_config = ConfigDict(frozen=True, extra="allow")


class QueryBlock(BaseModel):
    """The ``query`` member of a response."""

    pages: Any = None
    badrevids: Any = None
    normalized: list[TitleMapping] = Field(default_factory=list)
    redirects: list[TitleMapping] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")


class ResponseEnvelope(BaseModel):
    """Navigation view over one response document."""

    query: QueryBlock | None = None
    continue_: dict[str, Any] | None = Field(default=None, alias="continue")
    batchcomplete: Any = None
    warnings: list[ApiWarning] | dict[str, Any] | None = None

    model_config = ConfigDict(frozen=True, extra="allow", populate_by_name=True)

    @classmethod
    def parse(cls, response: Mapping[str, Any]) -> ResponseEnvelope:
        """Build the envelope view of a raw response."""
        return cls.model_validate(response)

    @property
    def batch_complete(self) -> bool:
        """Whether this response completes the current batch."""
        return self.batchcomplete is not None and self.batchcomplete is not False

    @property
    def legacy_format(self) -> bool:
        """Whether the response uses formatversion=1 conventions."""
        if self.batchcomplete == "":
            return True
        return self.query is not None and isinstance(self.query.pages, dict)

    @property
    def api_warnings(self) -> list[ApiWarning]:
        """Warnings of this response, whatever the error format.

        With ``errorformat=bc`` (the API default) warnings are a map from
        module to ``{"warnings": text}`` (``{"*": text}`` in formatversion=1);
        every other error format returns a list of warnings with codes.
        """
        if isinstance(self.warnings, list):
            return list(self.warnings)
        if not isinstance(self.warnings, dict):
            return []
        result = []
        for module, body in self.warnings.items():
            text = body.get("warnings", body.get("*")) if isinstance(body, dict) else body
            result.append(ApiWarning(module=module, text=None if text is None else str(text)))
        return result
