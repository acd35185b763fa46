from typing import Optional, Union

from .decision import DecisionEngine
from .exceptions import WorkflowStateError
from .logger import get_logger
from .models import (
    EnteredFields, ExtractedFields, FieldName,
    ProcessingOutcome, VerificationReport
)
from .ocr import OcrEngine, ProgressCallback
from .run_pipeline import process_document, verify as run_verification

logger = get_logger(__name__)

STEP_UPLOAD = "upload"
STEP_FORM = "form"
STEP_RESULTS = "results"

# Fields that must be typed in before verification is allowed
REQUIRED_FOR_VERIFY = (FieldName.NAME, FieldName.DATE_OF_BIRTH, FieldName.ID_NUMBER)


class VerificationWorkflow:
    """
    Holds one user's verification session: upload → form → results.

    Extracted fields are replaced wholesale on every processed upload and the
    report on every verify. Entered fields are only ever set by the user.
    """

    def __init__(self,
                 engine: Optional[OcrEngine] = None,
                 decision_engine: Optional[DecisionEngine] = None):
        self.engine = engine
        self.decision_engine = decision_engine or DecisionEngine()
        self.reset()

    def reset(self) -> None:
        """Start over"""
        self.step = STEP_UPLOAD
        self.extracted = ExtractedFields()
        self.entered = EnteredFields()
        self.report: Optional[VerificationReport] = None
        self.last_outcome: Optional[ProcessingOutcome] = None

    def submit_document(self,
                        payload: bytes,
                        content_type: Optional[str],
                        progress: Optional[ProgressCallback] = None) -> ProcessingOutcome:
        if self.step == STEP_RESULTS:
            raise WorkflowStateError("upload a document", self.step)

        outcome = process_document(payload, content_type, self.engine, progress)
        self.last_outcome = outcome

        # Any processed upload discards the previous document's data
        self.extracted = outcome.extracted
        self.report = None
        self.step = STEP_FORM if outcome.ok else STEP_UPLOAD
        logger.debug(f"Upload finished with status {outcome.status}, now at {self.step}")
        return outcome

    def update_field(self, field: Union[FieldName, str], value: Optional[str]) -> None:
        if self.step != STEP_FORM:
            raise WorkflowStateError("edit the form", self.step)
        setattr(self.entered, FieldName(field).value, value)

    @property
    def can_verify(self) -> bool:
        return self.step == STEP_FORM and all(
            self.entered.get(field) for field in REQUIRED_FOR_VERIFY
        )

    def verify(self) -> VerificationReport:
        if self.step != STEP_FORM:
            raise WorkflowStateError("verify", self.step)
        if not self.can_verify:
            missing = [f.value for f in REQUIRED_FOR_VERIFY if not self.entered.get(f)]
            raise WorkflowStateError(f"verify without {', '.join(missing)}", self.step)

        self.report = run_verification(self.extracted, self.entered, self.decision_engine)
        self.step = STEP_RESULTS
        return self.report

    def edit(self) -> None:
        """Go back from the results to the form"""
        if self.step != STEP_RESULTS:
            raise WorkflowStateError("return to the form", self.step)
        self.step = STEP_FORM
