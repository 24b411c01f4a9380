from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_upload_size_bytes: int = 10 * 1024 * 1024
    temp_dir: str | None = None

    pdf_engine: str = "pdfplumber"
    pdf_min_text_chars: int = 50
    pdf_ocr_dpi: int = 200
    pdf_ocr_max_pages: int = 10

    ocr_tesseract_cmd: str = "tesseract"
    ocr_languages: str = "eng+fra+deu+spa+ita+nld+por+tur+ara+urd+hin+tha+msa+ind"
    ocr_psm_mode: int = 6
    ocr_min_edge_px: int = 1000
    ocr_max_edge_px: int = 3000
    ocr_contrast_cutoff: int = 2
    ocr_binarize: bool = True
    ocr_timeout_seconds: int = 30
    ocr_min_confidence: float = 40.0

    tier_timeout_seconds: int = 60
    worker_max_concurrency: int = 4

    llm_provider: str = "openai"
    llm_api_key: str = ""
    llm_base_url: str | None = None
    llm_timeout_seconds: int = 30
    llm_temperature: float = 0.1
    classification_model_name: str = "gpt-4o"
    structuring_model_name: str = "gpt-4o-mini"
    structuring_enabled: bool = False
