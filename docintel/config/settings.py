from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docintel"
    db_username: str = "docintel"
    db_password: str = "secret"

    job_poll_interval_seconds: int = 5
    claim_batch_size: int = 10
    stale_upload_seconds: int = 60
    stale_processing_seconds: int = 900
    worker_pool_size: int = 4

    pdf_engine: str = "pdfplumber"
    ocr_languages: str = "eng+pol"
    tesseract_cmd: str = ""

    storage_backend: str = "local"
    upload_dir: str = "./uploads"
    aws_region: str = "us-east-1"
    aws_s3_bucket: str = ""

    max_upload_bytes: int = 10 * 1024 * 1024

    annotation_provider: str = "ollama"
    annotation_model_name: str = "llama3.1:8b"
    annotation_api_key: str = ""
    annotation_base_url: str = ""
    annotation_timeout_seconds: int = 120
    annotation_temperature: float = 0.1
