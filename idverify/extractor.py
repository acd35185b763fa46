import re
from typing import Callable, Iterable, List, Optional, Pattern, Tuple

from config import (
    settings, NAME_DENYLIST, PROPER_NAME_REGEX,
    AADHAAR_REGEX, MOBILE_REGEX
)
from .logger import get_logger
from .models import ExtractedFields, NormalizedText
from .normalizer import normalize_text

logger = get_logger(__name__)

# (pattern, validator) - the validator returns the cleaned value or None
Rule = Tuple[Pattern, Callable[[str], Optional[str]]]

NAME_WORDS = r"[A-Z][a-z]+(?:\s[A-Z][a-z]+){1,3}"


class FieldExtractor:
    """
    Extracts candidate field values from normalized OCR text.

    Every field has its own ordered rule list. Rules are tried strictly in
    order and matches within a rule left to right; the first candidate that
    passes validation is kept, even if a better one appears later.
    """

    def __init__(self, denylist: Iterable[str] = NAME_DENYLIST):
        self.denylist = tuple(phrase.lower() for phrase in denylist)
        self.min_birth_year = settings.MIN_BIRTH_YEAR
        self.max_birth_year = settings.MAX_BIRTH_YEAR
        self.name_min_length = settings.NAME_MIN_LENGTH
        self.name_max_line_length = settings.NAME_MAX_LINE_LENGTH
        self.name_max_length = settings.NAME_MAX_LENGTH

        self.proper_name_regex = re.compile(PROPER_NAME_REGEX)
        self.mobile_regex = re.compile(MOBILE_REGEX)
        self.digit_regex = re.compile(r"[0-9]")

        self.name_patterns: List[Pattern] = [
            # Whole line is a proper-case name (not an all-caps header)
            re.compile(rf"^({NAME_WORDS})$"),
            # Name after a label
            re.compile(rf"(?i:name|naam)[\s:]+({NAME_WORDS})"),
            # Name somewhere inside the line
            re.compile(r"\b([A-Z][a-z]+\s[A-Z][a-z]+(?:\s[A-Z][a-z]+)?)\b"),
        ]
        self.name_fallback = re.compile(
            r"\b([A-Z][a-z]{2,}\s[A-Z][a-z]{2,}(?:\s[A-Z][a-z]{2,})?)\b"
        )

        self.date_rules: List[Rule] = [
            (re.compile(r"\b(\d{1,2}/\d{1,2}/\d{4})\b"), self.validate_date),
            (re.compile(r"\b(\d{1,2}-\d{1,2}-\d{4})\b"), self.validate_date),
            (re.compile(r"(?i:dob|date of birth|born)[\s:]*(\d{1,2}[/-]\d{1,2}[/-]\d{4})"),
             self.validate_date),
            # Year only, as a last resort
            (re.compile(r"\b(19\d{2}|20\d{2})\b"), self.validate_date),
        ]

        self.id_rules: List[Rule] = [
            (re.compile(AADHAAR_REGEX), self.validate_id_number),
            (re.compile(r"\b(\d{12})\b"), self.validate_id_number),
        ]

        self.phone_rules: List[Rule] = [
            (re.compile(r"\b([6-9]\d{9})\b"), self.validate_phone),
            (re.compile(r"\+91[\s-]?([6-9]\d{9})"), self.validate_phone),
            (re.compile(r"\b([6-9]\d{4}[\s-]?\d{5})\b"), self.validate_phone),
            (re.compile(r"\b(\d{10})\b"), self.validate_phone),
        ]

    def is_denylisted(self, text: str) -> bool:
        lowered = text.lower()
        return any(phrase in lowered for phrase in self.denylist)

    def validate_name(self, candidate: str) -> Optional[str]:
        candidate = candidate.strip()
        if not self.name_min_length <= len(candidate) <= self.name_max_length:
            return None
        if not self.proper_name_regex.fullmatch(candidate):
            return None
        if self.is_denylisted(candidate):
            return None
        return candidate

    def validate_date(self, candidate: str) -> Optional[str]:
        """Accept D/M/YYYY-style dates or a bare year inside the birth-year window"""
        if "/" in candidate or "-" in candidate:
            parts = re.split(r"[/-]", candidate)
            if len(parts) != 3:
                return None
            year = int(parts[2])
        elif len(candidate) == 4:
            year = int(candidate)
        else:
            return None

        if self.min_birth_year <= year <= self.max_birth_year:
            return candidate
        return None

    def validate_id_number(self, candidate: str) -> Optional[str]:
        number = re.sub(r"\s", "", candidate)
        if len(number) == 12 and number.isdigit():
            return number
        return None

    def validate_phone(self, candidate: str) -> Optional[str]:
        phone = re.sub(r"[\s-]", "", candidate)
        if self.mobile_regex.fullmatch(phone):
            return phone
        return None

    def first_match(self, text: str, rules: List[Rule]) -> Optional[str]:
        for pattern, validate in rules:
            for match in pattern.finditer(text):
                value = validate(match.group(1))
                if value:
                    return value
        return None

    def extract_name(self, normalized: NormalizedText) -> Optional[str]:
        for line in normalized.lines:
            if len(line) <= 2:
                continue
            # Skip headers and official text
            if self.is_denylisted(line):
                continue
            if self.digit_regex.search(line):
                continue
            if not self.name_min_length <= len(line) <= self.name_max_line_length:
                continue

            for pattern in self.name_patterns:
                match = pattern.search(line)
                if not match:
                    continue
                name = self.validate_name(match.group(1))
                if name:
                    return name

        # Nothing line by line, look for a 2-3 word name in the full text
        for match in self.name_fallback.finditer(normalized.flat):
            candidate = match.group(1)
            if not self.name_min_length <= len(candidate) <= self.name_max_length:
                continue
            if not self.is_denylisted(candidate):
                return candidate

        return None

    def extract(self, normalized: NormalizedText) -> ExtractedFields:
        """Extract all four fields; missing ones are left as None"""
        logger.debug(f"Cleaned OCR text: {normalized.flat!r}")
        logger.debug(f"Lines: {list(normalized.lines)}")

        extracted = ExtractedFields(
            name=self.extract_name(normalized),
            date_of_birth=self.first_match(normalized.flat, self.date_rules),
            id_number=self.first_match(normalized.flat, self.id_rules),
            phone_number=self.first_match(normalized.flat, self.phone_rules),
        )

        logger.debug(f"Extracted fields: {extracted.model_dump(exclude_none=True)}")
        return extracted


_extractor: Optional[FieldExtractor] = None


def get_extractor() -> FieldExtractor:
    global _extractor
    if _extractor is None:
        _extractor = FieldExtractor()
    return _extractor


def extract(normalized: NormalizedText) -> ExtractedFields:
    return get_extractor().extract(normalized)


def extract_fields(raw_text: Optional[str]) -> ExtractedFields:
    """Normalize raw OCR text and extract fields from it"""
    return extract(normalize_text(raw_text))
