from typing import Optional

from config import settings, FIELD_LABELS
from .models import (
    EnteredFields, ExtractedFields, FieldName, FieldReport,
    FieldVerdicts, Verdict, VerificationReport
)

VERIFIED = "VERIFIED"
NEEDS_REVIEW = "NEEDS_REVIEW"
FAILED = "FAILED"


def aggregate(flags: FieldVerdicts, threshold: Optional[int] = None) -> Verdict:
    """Overall verdict: at least `threshold` (default 3) of the 4 fields match"""
    if threshold is None:
        threshold = settings.MATCH_THRESHOLD
    values = {field.value: bool(flags.get(field)) for field in FieldName}
    matched = sum(values.values())
    return Verdict(**values, overall=matched >= threshold)


class DecisionEngine:
    """
    Turns per-field match flags into the final verification result
    shown to the user.

    Tiers:
    - overall verdict passes → VERIFIED
    - at least REVIEW_THRESHOLD fields match → NEEDS_REVIEW
    - otherwise → FAILED
    """

    def __init__(self, mask_sensitive: Optional[bool] = None):
        self.match_threshold = settings.MATCH_THRESHOLD
        self.review_threshold = settings.REVIEW_THRESHOLD
        if mask_sensitive is None:
            mask_sensitive = settings.MASK_SENSITIVE
        self.mask_sensitive = mask_sensitive

    def mask_id_number(self, id_number: str) -> str:
        """Mask ID number showing only last 4 digits"""
        if not id_number:
            return id_number
        clean = id_number.replace(" ", "")
        if len(clean) != 12:
            return "XXXX"
        return f"XXXX XXXX {clean[-4:]}"

    def decide(self, flags: FieldVerdicts) -> Verdict:
        return aggregate(flags, self.match_threshold)

    def status_for(self, verdict: Verdict) -> str:
        if verdict.overall:
            return VERIFIED
        if verdict.match_count >= self.review_threshold:
            return NEEDS_REVIEW
        return FAILED

    def message_for(self, status: str, matched: int):
        total = len(FieldName)
        if status == VERIFIED:
            return (
                "Identity Verified Successfully",
                f"{matched} out of {total} fields matched. "
                "Your identity has been successfully verified.",
            )
        if status == NEEDS_REVIEW:
            return (
                "Partial Verification",
                f"{matched} out of {total} fields matched. "
                "Please review the mismatched information.",
            )
        return (
            "Verification Failed",
            f"Only {matched} out of {total} fields matched. "
            "Please check your document and information.",
        )

    def build_report(self,
                     flags: FieldVerdicts,
                     extracted: ExtractedFields,
                     entered: EnteredFields) -> VerificationReport:
        """Build the standardized result with one row per field"""
        verdict = self.decide(flags)
        status = self.status_for(verdict)
        title, description = self.message_for(status, verdict.match_count)

        rows = []
        for field in FieldName:
            extracted_value = extracted.get(field)
            entered_value = entered.get(field)
            match = bool(verdict.get(field))

            shown = extracted_value
            if shown and field is FieldName.ID_NUMBER and self.mask_sensitive:
                shown = self.mask_id_number(shown)

            rows.append(FieldReport(
                key=field,
                label=FIELD_LABELS[field.value],
                extracted=shown or "Not detected",
                entered=entered_value or "Not provided",
                match=match,
                mismatch=not match and bool(extracted_value) and bool(entered_value),
            ))

        return VerificationReport(
            status=status,
            overall=verdict.overall,
            match_count=verdict.match_count,
            title=title,
            description=description,
            verdict=verdict,
            fields=rows,
        )
