from PIL import Image

from ingredex.ocr.preprocessing import ImagePreprocessor, PreprocessingConfig, otsu_threshold


def _make_image(size: tuple[int, int]) -> Image.Image:
    image = Image.new("RGB", size, (200, 200, 200))
    for x in range(size[0] // 4, size[0] // 2):
        image.putpixel((x, size[1] // 2), (30, 30, 30))
    return image


class TestImagePreprocessor:
    def test_upscales_small_images_to_min_edge(self) -> None:
        prepared = ImagePreprocessor(PreprocessingConfig(min_edge_px=1000)).prepare(
            _make_image((400, 200))
        )
        assert prepared.size == (1000, 500)
        assert prepared.mode == "L"

    def test_downscales_large_images_to_max_edge(self) -> None:
        prepared = ImagePreprocessor(PreprocessingConfig(max_edge_px=3000)).prepare(
            _make_image((200, 6000)), binarize=False
        )
        assert prepared.size == (100, 3000)

    def test_keeps_images_inside_the_range(self) -> None:
        prepared = ImagePreprocessor().prepare(_make_image((1500, 900)))
        assert prepared.size == (1500, 900)

    def test_binarize_leaves_only_black_and_white(self) -> None:
        prepared = ImagePreprocessor().prepare(_make_image((1200, 400)), binarize=True)
        assert set(prepared.getdata()) <= {0, 255}

    def test_binarize_can_be_disabled_by_config(self) -> None:
        image = Image.linear_gradient("L").resize((1200, 1200))
        prepared = ImagePreprocessor(PreprocessingConfig(binarize=False)).prepare(image)
        assert len(set(prepared.getdata())) > 2


class TestOtsuThreshold:
    def test_splits_bimodal_histogram(self) -> None:
        histogram = [0] * 256
        histogram[40] = 500
        histogram[210] = 500
        threshold = otsu_threshold(histogram)
        assert 40 <= threshold < 210

    def test_empty_histogram_uses_midpoint(self) -> None:
        assert otsu_threshold([0] * 256) == 127
