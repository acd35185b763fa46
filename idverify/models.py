from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class FieldName(str, Enum):
    NAME = "name"
    DATE_OF_BIRTH = "date_of_birth"
    ID_NUMBER = "id_number"
    PHONE_NUMBER = "phone_number"


class NormalizedText(BaseModel):
    """One normalization pass exposed as a line view and a flattened view."""

    model_config = ConfigDict(frozen=True)

    lines: Tuple[str, ...] = ()
    flat: str = ""


class FieldRecord(BaseModel):
    """Common base for the four-field records; camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def get(self, field) -> Optional[str]:
        return getattr(self, FieldName(field).value)


class ExtractedFields(FieldRecord):
    """
    Candidate values read from one document.
    Absent means no plausible candidate was found; never an empty string.
    """

    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    id_number: Optional[str] = None
    phone_number: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def is_empty(self) -> bool:
        return all(self.get(field) is None for field in FieldName)


class EnteredFields(FieldRecord):
    """Values typed by the user."""

    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    date_of_birth: str = ""
    id_number: str = ""
    phone_number: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def none_to_blank(cls, value):
        return "" if value is None else value


class FieldVerdicts(FieldRecord):
    model_config = ConfigDict(frozen=True)

    name: bool = False
    date_of_birth: bool = False
    id_number: bool = False
    phone_number: bool = False

    @property
    def match_count(self) -> int:
        return sum(1 for field in FieldName if self.get(field))


class Verdict(FieldVerdicts):
    overall: bool = False


class FieldReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: FieldName
    label: str
    extracted: str
    entered: str
    match: bool
    mismatch: bool


class VerificationReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    overall: bool
    match_count: int
    title: str
    description: str
    verdict: Verdict
    fields: List[FieldReport]


class ProcessingOutcome(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    status: str
    title: str
    message: str
    extracted: ExtractedFields = ExtractedFields()

    @property
    def ok(self) -> bool:
        return self.status == "ok"
