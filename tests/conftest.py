import io

import pytest
from PIL import Image

from idverify.ocr import OcrEngine

SAMPLE_ID_TEXT = """
Government of India
Ravi Kumar
DOB: 15/08/1985
Male
1234 5678 9012
Mobile: 9876543210
"""

BOILERPLATE_ONLY_TEXT = """
Unique Identification Authority of India
AADHAAR
"""


class FakeEngine(OcrEngine):
    """OCR stand-in returning canned text or failing"""

    name = "fake"

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def _recognize(self, image, language):
        self.calls.append(language)
        if self.error:
            raise self.error
        return self.text


def image_bytes(size=(64, 32), mode="RGB"):
    buffer = io.BytesIO()
    Image.new(mode, size, "white").save(buffer, "PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return image_bytes()


@pytest.fixture
def sample_engine():
    return FakeEngine(SAMPLE_ID_TEXT)
