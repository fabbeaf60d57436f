"""
Pydantic models for email templates.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docx2email.config import DEFAULT_FONT_FAMILY, DEFAULT_MAX_WIDTH, clamp_width


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class EmailTemplateConfig(BaseModel):
    """
    Inputs of one transpile call.

    The transpiler trusts these values: width bounds are enforced by the
    caller (see EmailExportRequest) and the font family is an opaque CSS value.
    """
    model_config = ConfigDict(frozen=True)

    max_width: int = DEFAULT_MAX_WIDTH  # pixels, >= 100 by contract, not checked
    font_family: str = DEFAULT_FONT_FAMILY
    legacy_mode: bool = False
    header_image: Optional[str] = None  # data URI or remote URL
    footer_image: Optional[str] = None


class ImageReference(BaseModel):
    """An image placed in the content by the editor or by a document import."""
    src: str
    alt: str = "Image"
    alignment: Alignment = Alignment.CENTER
    width: int = Field(default=0, ge=0)  # 0 = scale to container


class ConversionResult(BaseModel):
    """Output of the .docx import: HTML plus the converter's diagnostics."""
    html: str
    messages: List[str] = []


class ImagePayloadResponse(BaseModel):
    data_uri: str


class PdfRenderRequest(BaseModel):
    html: Optional[str] = None


class EmailExportRequest(BaseModel):
    """
    Export request from the editor.

    max_width is clamped into the supported range here so the transpiler
    never sees an out-of-range width.
    """
    body_html: str = ""
    header_image: Optional[str] = None
    footer_image: Optional[str] = None
    legacy_mode: bool = False
    max_width: int = DEFAULT_MAX_WIDTH
    font_family: str = DEFAULT_FONT_FAMILY
    file_name: Optional[str] = None  # name of the imported .docx, if any

    @field_validator("max_width")
    @classmethod
    def clamp_max_width(cls, v: int) -> int:
        return clamp_width(v)

    @field_validator("font_family")
    @classmethod
    def default_blank_font(cls, v: str) -> str:
        return v.strip() or DEFAULT_FONT_FAMILY

    def to_config(self) -> EmailTemplateConfig:
        return EmailTemplateConfig(
            max_width=self.max_width,
            font_family=self.font_family,
            legacy_mode=self.legacy_mode,
            header_image=self.header_image or None,
            footer_image=self.footer_image or None,
        )
