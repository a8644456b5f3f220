"""
Typed views over the CloudFront event and the values the pipeline derives from it.

The response is deliberately NOT modelled: it stays the raw dict handed to us
by the runtime so that a passthrough returns the very same object.
"""
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from settings import DEFAULT_QUALITY


class HeaderEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    key:   str = ""
    value: str = ""


class S3Origin(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    domain_name: str | None = Field(default=None, alias="domainName")
    region:      str | None = None


class EdgeOrigin(BaseModel):
    model_config = ConfigDict(frozen=True)

    s3: S3Origin | None = None


class EdgeRequest(BaseModel):
    """Read-only view of the viewer request carried by an origin-response event."""
    model_config = ConfigDict(frozen=True)

    uri:         str = "/"
    querystring: str = ""
    headers:     dict[str, list[HeaderEntry]] = Field(default_factory=dict)
    origin:      EdgeOrigin | None = None

    @property
    def storage_host(self) -> str:
        if self.origin is None or self.origin.s3 is None:
            return ""
        return self.origin.s3.domain_name or ""


class StorageLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: str
    region: str | None = None


class StoredObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_type: str | None = None
    body:         bytes = b""


class TransformDirectives(BaseModel):
    model_config = ConfigDict(frozen=True)

    format:           str | None = None   # lower-cased, as given
    width:            int | None = None
    height:           int | None = None
    quality:          int | None = None   # raw parsed value, unclamped
    cropped:          bool = False
    resize_requested: bool = False        # width or height key present at all


class ResizeSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    width:               int | None = None
    height:              int | None = None
    fit:                 Literal["inside", "cover"] = "inside"
    without_enlargement: bool = True


class TransformPlan(BaseModel):
    """Everything the codec needs, decided before any pixel is touched."""
    model_config = ConfigDict(frozen=True)

    encoding:     str | None = None   # key into formats.FORMATS; None keeps the source format
    quality:      int = DEFAULT_QUALITY
    content_type: str | None = None   # None leaves the response header untouched
    resize:       ResizeSpec | None = None

    @property
    def is_noop(self) -> bool:
        return self.encoding is None and self.resize is None


def unpack_event(event: dict) -> tuple[EdgeRequest, dict]:
    """Split a CloudFront event into the parsed request view and the raw response dict."""
    cf = event["Records"][0]["cf"]
    return EdgeRequest.model_validate(cf["request"]), cf["response"]
