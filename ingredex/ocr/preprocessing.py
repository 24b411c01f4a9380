"""Image preparation ahead of OCR.

Flow: EXIF orientation fix -> grayscale -> resize into the configured edge
range -> autocontrast -> optional global (Otsu) threshold.
"""

from dataclasses import dataclass

from PIL import Image, ImageOps


@dataclass(frozen=True)
class PreprocessingConfig:
    min_edge_px: int = 1000
    max_edge_px: int = 3000
    contrast_cutoff: int = 2
    binarize: bool = True


class ImagePreprocessor:
    """Normalizes packaging photos into a recognition-friendly pixel buffer."""

    def __init__(self, config: PreprocessingConfig | None = None) -> None:
        self._config = config or PreprocessingConfig()

    def prepare(self, image: Image.Image, binarize: bool | None = None) -> Image.Image:
        prepared = ImageOps.exif_transpose(image) or image
        prepared = prepared.convert("L")
        prepared = self._resize(prepared)
        prepared = ImageOps.autocontrast(prepared, cutoff=self._config.contrast_cutoff)
        if self._config.binarize if binarize is None else binarize:
            threshold = otsu_threshold(prepared.histogram())
            prepared = prepared.point(lambda value: 255 if value > threshold else 0)
        return prepared

    def _resize(self, image: Image.Image) -> Image.Image:
        width, height = image.size
        longer = max(width, height)
        if longer == 0:
            return image
        if longer < self._config.min_edge_px:
            scale = self._config.min_edge_px / longer
        elif longer > self._config.max_edge_px:
            scale = self._config.max_edge_px / longer
        else:
            return image
        new_size = (max(1, round(width * scale)), max(1, round(height * scale)))
        return image.resize(new_size, Image.Resampling.LANCZOS)


def otsu_threshold(histogram: list[int]) -> int:
    """Return the gray level that maximizes between-class variance."""
    levels = histogram[:256]
    total = sum(levels)
    if total == 0:
        return 127
    weighted_sum = sum(level * count for level, count in enumerate(levels))

    background_weight = 0
    background_sum = 0.0
    best_threshold = 127
    best_variance = -1.0
    for level, count in enumerate(levels):
        background_weight += count
        if background_weight == 0:
            continue
        foreground_weight = total - background_weight
        if foreground_weight == 0:
            break
        background_sum += level * count
        background_mean = background_sum / background_weight
        foreground_mean = (weighted_sum - background_sum) / foreground_weight
        variance = (
            background_weight * foreground_weight * (background_mean - foreground_mean) ** 2
        )
        if variance > best_variance:
            best_variance = variance
            best_threshold = level
    return best_threshold
