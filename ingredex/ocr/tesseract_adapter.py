import os

import pytesseract
from PIL import Image

from ingredex.ocr.base import BaseOcrEngine
from ingredex.ocr.exceptions import OcrError, OcrTimeoutError
from ingredex.ocr.models import OcrResult


class TesseractAdapter(BaseOcrEngine):
    """Multilingual OCR through the tesseract binary (LSTM engine)."""

    def __init__(
        self,
        *,
        languages: str,
        psm_mode: int = 6,
        timeout_seconds: int = 30,
        tesseract_cmd: str | None = None,
        tessdata_prefix: str | None = None,
    ) -> None:
        self._languages = languages
        self._config = f"--oem 1 --psm {psm_mode}"
        self._timeout_seconds = timeout_seconds
        if tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = tesseract_cmd
        if tessdata_prefix:
            os.environ["TESSDATA_PREFIX"] = tessdata_prefix

    def recognize(self, image: Image.Image) -> OcrResult:
        try:
            data = pytesseract.image_to_data(
                image,
                lang=self._languages,
                config=self._config,
                timeout=self._timeout_seconds,
                output_type=pytesseract.Output.DICT,
            )
        except RuntimeError as exc:
            # pytesseract signals its own timeout as a bare RuntimeError
            if "timeout" in str(exc).lower():
                raise OcrTimeoutError(
                    f"tesseract exceeded {self._timeout_seconds}s"
                ) from exc
            raise OcrError(f"tesseract failed: {exc}") from exc
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as exc:
            raise OcrError(f"tesseract failed: {exc}") from exc
        return self._build_result(data)

    @staticmethod
    def _build_result(data: dict[str, list[object]]) -> OcrResult:
        lines: dict[tuple[int, int, int, int], list[str]] = {}
        confidences: list[float] = []
        for index, word in enumerate(data.get("text", [])):
            token = str(word).strip()
            confidence = float(data["conf"][index])  # type: ignore[arg-type]
            if not token or confidence < 0:
                continue
            key = (
                int(data["page_num"][index]),  # type: ignore[call-overload]
                int(data["block_num"][index]),  # type: ignore[call-overload]
                int(data["par_num"][index]),  # type: ignore[call-overload]
                int(data["line_num"][index]),  # type: ignore[call-overload]
            )
            lines.setdefault(key, []).append(token)
            confidences.append(confidence)

        text = "\n".join(" ".join(words) for words in lines.values())
        mean = sum(confidences) / len(confidences) if confidences else 0.0
        return OcrResult(text=text, mean_confidence=mean, word_count=len(confidences))
