from fastapi import FastAPI, File, UploadFile, HTTPException, Depends
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from idverify.exceptions import (
    ConfigurationError, IdVerifyError, ImageTooLargeError,
    InvalidMediaTypeError, PayloadTooLargeError
)
from idverify.logger import get_logger
from idverify.models import (
    EnteredFields, ExtractedFields, ProcessingOutcome, VerificationReport
)
from idverify.ocr import OcrEngine, get_engine
from idverify.run_pipeline import (
    STATUS_ERROR, STATUS_NO_DATA, process_document, verify
)

logger = get_logger(__name__)

app = FastAPI(
    title="ID Verification Service",
    description="Compare user-entered identity details against an uploaded ID document",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class VerifyRequest(BaseModel):
    extracted: ExtractedFields
    entered: EnteredFields


def get_ocr_engine() -> OcrEngine:
    try:
        return get_engine()
    except ConfigurationError as e:
        logger.error(f"OCR engine unavailable: {e}")
        raise HTTPException(status_code=500, detail=e.message)


# ------------------------
# Document extraction
# ------------------------
@app.post("/documents/extract", response_model=ProcessingOutcome)
async def extract_document(
    document: UploadFile = File(...),
    engine: OcrEngine = Depends(get_ocr_engine),
):
    """
    Read an uploaded ID photo and return the fields found on it.
    Nothing is stored.
    """
    payload = await document.read()

    try:
        outcome = await run_in_threadpool(
            process_document, payload, document.content_type, engine
        )
    except InvalidMediaTypeError as e:
        raise HTTPException(status_code=415, detail=e.message)
    except (PayloadTooLargeError, ImageTooLargeError) as e:
        raise HTTPException(status_code=413, detail=e.message)
    except IdVerifyError as e:
        logger.error(f"Document extraction failed: {e}")
        raise HTTPException(status_code=500, detail=e.message)

    if outcome.status == STATUS_ERROR:
        raise HTTPException(status_code=502, detail=outcome.message)
    if outcome.status == STATUS_NO_DATA:
        raise HTTPException(status_code=422, detail=outcome.message)

    return outcome


# ------------------------
# Verification
# ------------------------
@app.post("/verify", response_model=VerificationReport)
async def verify_identity(request: VerifyRequest):
    """Compare entered details with previously extracted ones"""
    return verify(request.extracted, request.entered)


# ------------------------
# Health Check
# ------------------------
@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "service": "id-verification"
    }


# ------------------------
# Local Dev Entry
# ------------------------
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
