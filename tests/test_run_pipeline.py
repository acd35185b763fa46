import pytest
from PIL import Image

from idverify.exceptions import ImageTooLargeError, InvalidMediaTypeError
from idverify.models import EnteredFields
from idverify.run_pipeline import (
    STATUS_ERROR, STATUS_NO_DATA, STATUS_OK, STATUS_REJECTED,
    process_document, process_documents, verify
)

from conftest import BOILERPLATE_ONLY_TEXT, FakeEngine, image_bytes


def test_process_document(png_bytes, sample_engine):
    seen = []
    outcome = process_document(png_bytes, "image/png", sample_engine, seen.append)

    assert outcome.status == STATUS_OK
    assert outcome.ok
    assert outcome.extracted.name == "Ravi Kumar"
    assert outcome.extracted.id_number == "123456789012"
    assert seen[-1] == 1.0


def test_no_data_is_a_normal_outcome(png_bytes):
    outcome = process_document(png_bytes, "image/png", FakeEngine(BOILERPLATE_ONLY_TEXT))

    assert outcome.status == STATUS_NO_DATA
    assert outcome.title == "No Data Found"
    assert outcome.extracted.is_empty()


def test_recognition_failure_skips_extraction(png_bytes):
    engine = FakeEngine("Ravi Kumar", error=RuntimeError("boom"))
    outcome = process_document(png_bytes, "image/png", engine)

    assert outcome.status == STATUS_ERROR
    assert outcome.title == "Processing Error"
    assert outcome.extracted.is_empty()


def test_rejected_upload_never_reaches_ocr(png_bytes, sample_engine):
    with pytest.raises(InvalidMediaTypeError):
        process_document(png_bytes, "application/pdf", sample_engine)

    assert sample_engine.calls == []


def test_each_run_returns_a_fresh_record(png_bytes, sample_engine):
    first = process_document(png_bytes, "image/png", sample_engine)
    second = process_document(png_bytes, "image/png", sample_engine)

    assert first.extracted == second.extracted
    assert first.extracted is not second.extracted


def test_process_documents_keeps_order(png_bytes, sample_engine):
    outcomes = process_documents(
        [
            (png_bytes, "image/png"),
            (b"hello", "text/plain"),
            (png_bytes, "image/png"),
        ],
        engine=sample_engine,
        max_workers=2,
    )

    assert [o.status for o in outcomes] == [STATUS_OK, STATUS_REJECTED, STATUS_OK]
    assert outcomes[1].title == "Invalid File"


def test_process_documents_empty():
    assert process_documents([]) == []


def test_verify(png_bytes, sample_engine):
    extracted = process_document(png_bytes, "image/png", sample_engine).extracted
    entered = EnteredFields(
        name="ravi kumar sharma",
        date_of_birth="15-08-1985",
        id_number="1234 5678 9012",
        phone_number="+91 98765 43210",
    )

    report = verify(extracted, entered)

    assert report.overall is True
    assert report.status == "VERIFIED"
    assert report.match_count == 4


def test_oversized_image_is_rejected_before_ocr(monkeypatch, png_bytes, sample_engine):
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 500)

    with pytest.raises(ImageTooLargeError):
        process_document(png_bytes, "image/png", sample_engine)

    assert sample_engine.calls == []


def test_oversized_image_does_not_abort_batch(monkeypatch, sample_engine):
    # 4x4 stays under the lowered limit, 64x32 is far over it
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)

    outcomes = process_documents(
        [
            (image_bytes((4, 4)), "image/png"),
            (image_bytes((64, 32)), "image/png"),
        ],
        engine=sample_engine,
    )

    assert [o.status for o in outcomes] == [STATUS_OK, STATUS_REJECTED]
    assert "too large" in outcomes[1].message
