from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # OCR Configuration
    OCR_ENGINE: str = "tesseract"
    OCR_LANGUAGE: str = "eng"
    # Optional explicit path to the tesseract binary
    TESSERACT_CMD: Optional[str] = None

    # OpenAI Configuration (only needed for the "openai" OCR engine)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4.1-mini"

    # Upload Limits
    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    # Extraction Rules
    MIN_BIRTH_YEAR: int = 1900
    MAX_BIRTH_YEAR: int = 2010
    NAME_MIN_LENGTH: int = 4
    NAME_MAX_LINE_LENGTH: int = 40
    NAME_MAX_LENGTH: int = 35

    # Decision Rules
    MATCH_THRESHOLD: int = 3
    REVIEW_THRESHOLD: int = 2
    MASK_SENSITIVE: bool = False

    # Logging
    DEBUG: bool = False

    class Config:
        env_file = ".env"

settings = Settings()

# Boilerplate printed on ID documents that must never be taken for a name
NAME_DENYLIST = (
    "government of india",
    "unique identification authority",
    "aadhaar",
    "aadhar",
    "identity card",
    "permanent account number",
    "pan card",
    "driving license",
    "voter id",
)

# OCR character confusions, applied in order
OCR_CONFUSIONS = (
    ("|", "I"),
    ("O", "0"),
)

FIELD_LABELS = {
    "name": "Full Name",
    "date_of_birth": "Date of Birth",
    "id_number": "ID Number",
    "phone_number": "Phone Number",
}

# Strict proper-case full name (2-4 words)
PROPER_NAME_REGEX = r"^[A-Z][a-z]+(?:\s[A-Z][a-z]+){1,3}$"

# Aadhaar number, optionally spaced in groups of 4
AADHAAR_REGEX = r"\b(\d{4}\s?\d{4}\s?\d{4})\b"

# Indian mobile number
MOBILE_REGEX = r"^[6-9]\d{9}$"
