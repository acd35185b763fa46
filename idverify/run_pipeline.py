import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional, Sequence, Tuple

from .checks import compare_all
from .decision import DecisionEngine
from .exceptions import RecognitionError, UploadRejectedError
from .extractor import extract_fields
from .file_converter import load_image, validate_upload
from .logger import get_logger
from .models import EnteredFields, ExtractedFields, ProcessingOutcome, VerificationReport
from .ocr import OcrEngine, ProgressCallback, get_engine

logger = get_logger(__name__)

STATUS_OK = "ok"
STATUS_NO_DATA = "no_data"
STATUS_ERROR = "error"
STATUS_REJECTED = "rejected"


def process_document(payload: bytes,
                     content_type: Optional[str],
                     engine: Optional[OcrEngine] = None,
                     progress: Optional[ProgressCallback] = None,
                     language: Optional[str] = None) -> ProcessingOutcome:
    """
    Run one uploaded document through OCR and field extraction.

    Upload rejections (wrong media type, too large) are raised before OCR.
    A recognition failure is reported as an "error" outcome with no partial
    extraction; a run that finds nothing is a "no_data" outcome.
    Every call returns a fresh ExtractedFields.
    """
    # Step 1: Reject unusable uploads
    validate_upload(payload, content_type)
    image = load_image(payload)

    # Step 2: OCR
    engine = engine or get_engine()
    try:
        text = engine.recognize(image, language, progress)
    except RecognitionError as e:
        logger.error(f"Error processing document: {e}")
        return ProcessingOutcome(
            status=STATUS_ERROR,
            title="Processing Error",
            message="Failed to process the document. "
                    "Please try again with a clearer image.",
        )

    logger.debug(f"Extracted text: {text!r}")

    # Step 3: Extract fields
    extracted = extract_fields(text)

    if extracted.is_empty():
        logger.info("No fields could be extracted from the document")
        return ProcessingOutcome(
            status=STATUS_NO_DATA,
            title="No Data Found",
            message="Could not extract information from the document. "
                    "Please ensure the image is clear and contains readable text.",
            extracted=extracted,
        )

    found = [field for field, value in extracted.model_dump().items() if value]
    logger.info(f"Document processed, fields found: {', '.join(found)}")
    return ProcessingOutcome(
        status=STATUS_OK,
        title="Document Processed",
        message="Information extracted successfully. "
                "Please verify the details below.",
        extracted=extracted,
    )


def process_documents(documents: Sequence[Tuple[bytes, str]],
                      engine: Optional[OcrEngine] = None,
                      max_workers: Optional[int] = None) -> List[ProcessingOutcome]:
    """
    Process several (payload, content_type) documents in parallel.
    Results keep the input order; a rejected upload becomes a "rejected"
    outcome instead of aborting the batch.
    """
    if not documents:
        return []

    engine = engine or get_engine()
    max_workers = max_workers or min(os.cpu_count() or 4, 8)
    results: List[Optional[ProcessingOutcome]] = [None] * len(documents)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_index = {
            executor.submit(process_document, payload, content_type, engine): index
            for index, (payload, content_type) in enumerate(documents)
        }

        for future in as_completed(future_to_index):
            index = future_to_index[future]
            try:
                results[index] = future.result()
            except UploadRejectedError as e:
                logger.warning(f"Document {index} rejected: {e.message}")
                results[index] = ProcessingOutcome(
                    status=STATUS_REJECTED,
                    title="Invalid File",
                    message=e.message,
                )

    return results


def verify(extracted: ExtractedFields,
           entered: EnteredFields,
           decision_engine: Optional[DecisionEngine] = None) -> VerificationReport:
    """Compare entered values against extracted ones and build the result"""
    decision_engine = decision_engine or DecisionEngine()

    flags = compare_all(extracted, entered)
    report = decision_engine.build_report(flags, extracted, entered)

    logger.info(
        f"Verification {report.status}: {report.match_count}/{len(report.fields)} fields matched"
    )
    return report
