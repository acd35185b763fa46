import base64
import io
from typing import Callable, Optional, Union

import cv2
import numpy as np
import pytesseract
from openai import OpenAI
from PIL import Image

from config import settings
from .exceptions import ConfigurationError, RecognitionError
from .logger import get_logger

logger = get_logger(__name__)

ProgressCallback = Callable[[float], None]


class ProgressTracker:
    """
    Forwards OCR progress to a callback.
    Reported fractions are clamped to [0, 1] and never go backwards.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None):
        self.callback = callback
        self.value = 0.0

    @classmethod
    def wrap(cls, progress: Union["ProgressTracker", ProgressCallback, None]) -> "ProgressTracker":
        if isinstance(progress, ProgressTracker):
            return progress
        return cls(progress)

    def update(self, fraction: float) -> None:
        fraction = min(max(float(fraction), 0.0), 1.0)
        if fraction < self.value:
            return
        self.value = fraction
        if self.callback:
            self.callback(fraction)


class OcrEngine:
    """Turns an image into text. Any engine failure surfaces as RecognitionError."""

    name = "base"

    def recognize(self,
                  image: Image.Image,
                  language: Optional[str] = None,
                  progress: Union[ProgressTracker, ProgressCallback, None] = None) -> str:
        tracker = ProgressTracker.wrap(progress)
        language = language or settings.OCR_LANGUAGE
        tracker.update(0.0)
        try:
            text = self._recognize(image, language)
        except RecognitionError:
            raise
        except Exception as e:
            logger.error(f"{self.name} recognition failed: {e}")
            raise RecognitionError(f"Text recognition failed: {e}", engine=self.name) from e
        tracker.update(1.0)
        return text or ""

    def _recognize(self, image: Image.Image, language: str) -> str:
        raise NotImplementedError


class TesseractEngine(OcrEngine):
    """Local Tesseract OCR with a binarization pass first"""

    name = "tesseract"

    def __init__(self, tesseract_cmd: Optional[str] = None):
        tesseract_cmd = tesseract_cmd or settings.TESSERACT_CMD
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd

    def preprocess(self, image: Image.Image) -> Image.Image:
        """Grayscale + Otsu threshold"""
        img = np.array(image.convert("RGB"))
        gray = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
        _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return Image.fromarray(binary)

    def _recognize(self, image: Image.Image, language: str) -> str:
        return pytesseract.image_to_string(self.preprocess(image), lang=language)


class OpenAIVisionEngine(OcrEngine):
    """
    Transcribes document text with an OpenAI vision model.
    Only transcription is asked for; field extraction stays local.
    """

    name = "openai"

    def __init__(self, client: Optional[OpenAI] = None, model: Optional[str] = None):
        if client is None:
            if not settings.OPENAI_API_KEY:
                raise ConfigurationError(
                    "OPENAI_API_KEY is required for the openai OCR engine",
                    config_key="OPENAI_API_KEY",
                )
            client = OpenAI(api_key=settings.OPENAI_API_KEY)
        self.client = client
        self.model = model or settings.OPENAI_MODEL

    def encode_image(self, image: Image.Image) -> str:
        """Encode image as base64 data URL"""
        buffer = io.BytesIO()
        image.convert("RGB").save(buffer, "JPEG", quality=95)
        b64 = base64.b64encode(buffer.getvalue()).decode("utf-8")
        return f"data:image/jpeg;base64,{b64}"

    def get_prompt(self, language: str) -> str:
        return f"""
You are an OCR system.

Transcribe ALL text visible in this identity document exactly as printed.
Language hint (Tesseract code): {language}

Rules:
- Keep the original line breaks, one printed line per output line
- Do not translate, correct, reformat or summarize
- Do not add commentary
- If no text is visible, return an empty response
"""

    def _recognize(self, image: Image.Image, language: str) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self.get_prompt(language)},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": self.encode_image(image)
                            }
                        }
                    ]
                }
            ],
            max_tokens=800,
            temperature=0
        )
        return response.choices[0].message.content or ""


ENGINES = {
    TesseractEngine.name: TesseractEngine,
    OpenAIVisionEngine.name: OpenAIVisionEngine,
}


def get_engine(name: Optional[str] = None) -> OcrEngine:
    name = (name or settings.OCR_ENGINE).lower()
    if name not in ENGINES:
        raise ConfigurationError(f"Unknown OCR engine: {name}", config_key="OCR_ENGINE")
    return ENGINES[name]()
