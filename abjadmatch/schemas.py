from datetime import datetime

from pydantic import BaseModel, Field, field_validator


class CompatibilityRequest(BaseModel):
    partner1_name: str = Field(max_length=200)
    partner1_date_of_birth: str | None = Field(default=None, max_length=64)
    partner1_birth_time: str | None = Field(default=None, max_length=64)
    partner2_name: str = Field(max_length=200)
    partner2_date_of_birth: str | None = Field(default=None, max_length=64)
    partner2_birth_time: str | None = Field(default=None, max_length=64)

    @field_validator("partner1_name", "partner2_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be empty")
        return v

    @field_validator(
        "partner1_date_of_birth",
        "partner1_birth_time",
        "partner2_date_of_birth",
        "partner2_birth_time",
    )
    @classmethod
    def strip_optional_strings(cls, v: str | None) -> str | None:
        if v is None:
            return None
        v = v.strip()
        return v or None


class CompatibilityComputationResponse(BaseModel):
    partner1_name: str
    partner2_name: str
    partner1_date_of_birth: str | None
    partner1_birth_time: str | None
    partner2_date_of_birth: str | None
    partner2_birth_time: str | None
    partner1_abjad_value: int
    partner2_abjad_value: int
    partner1_digital_root: int
    partner2_digital_root: int
    partner1_element: str
    partner2_element: str
    name_compatibility_score: int
    life_path_compatibility_score: int | None
    overall_compatibility_score: int
    compatibility_level: str
    insights: str
    marriage_advice: str


class CompatibilityResultResponse(CompatibilityComputationResponse):
    id: int
    created_at: datetime


class ClearResultsResponse(BaseModel):
    message: str = "All compatibility results cleared"
    removed: int


class ShareLinks(BaseModel):
    whatsapp: str
    twitter: str
    facebook: str
    email: str


class ShareResponse(BaseModel):
    text: str
    links: ShareLinks


class ElementResponse(BaseModel):
    digit: int
    name: str
    icon: str
    css_class: str
    arabic: str
