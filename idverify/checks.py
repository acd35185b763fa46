import re
from typing import Optional, Union

from .models import EnteredFields, ExtractedFields, FieldName, FieldVerdicts


class FieldComparator:
    """
    Fuzzy equality between an extracted value and a user-entered value.

    Missing data never matches. A value that normalizes to nothing
    (e.g. "--") is treated as missing.
    """

    def __init__(self):
        self.non_alnum = re.compile(r"[^a-z0-9]")
        self.non_digit = re.compile(r"[^0-9]")

    def normalize_text(self, text: str) -> str:
        """Lower-case and drop everything but letters and digits"""
        return self.non_alnum.sub("", text.lower())

    def normalize_digits(self, text: str) -> str:
        return self.non_digit.sub("", text)

    @staticmethod
    def contains_either_way(a: str, b: str) -> bool:
        return a == b or a in b or b in a

    def compare_text(self, extracted: str, entered: str) -> bool:
        """Equal or contained in either direction, e.g. a missing middle name"""
        a = self.normalize_text(extracted)
        b = self.normalize_text(entered)
        if not a or not b:
            return False
        return self.contains_either_way(a, b)

    def compare_dates(self, extracted: str, entered: str) -> bool:
        # Day/month order is not canonicalized; digit strings must be identical
        a = self.normalize_digits(extracted)
        b = self.normalize_digits(entered)
        if not a or not b:
            return False
        return a == b

    def compare_phones(self, extracted: str, entered: str) -> bool:
        """Containment tolerates a leading country code on either side"""
        a = self.normalize_digits(extracted)
        b = self.normalize_digits(entered)
        if not a or not b:
            return False
        return self.contains_either_way(a, b)

    def compare(self,
                field: Union[FieldName, str],
                extracted: Optional[str],
                entered: Optional[str]) -> bool:
        if not extracted or not entered:
            return False

        field = FieldName(field)
        if field is FieldName.DATE_OF_BIRTH:
            return self.compare_dates(extracted, entered)
        if field is FieldName.PHONE_NUMBER:
            return self.compare_phones(extracted, entered)
        return self.compare_text(extracted, entered)

    def compare_all(self, extracted: ExtractedFields, entered: EnteredFields) -> FieldVerdicts:
        return FieldVerdicts(**{
            field.value: self.compare(field, extracted.get(field), entered.get(field))
            for field in FieldName
        })


_comparator = FieldComparator()


def compare(field: Union[FieldName, str],
            extracted: Optional[str],
            entered: Optional[str]) -> bool:
    return _comparator.compare(field, extracted, entered)


def compare_all(extracted: ExtractedFields, entered: EnteredFields) -> FieldVerdicts:
    return _comparator.compare_all(extracted, entered)
