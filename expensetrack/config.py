from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    APP_NAME: str = "ExpenseTrack"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # OCR
    TESSERACT_CMD: str = "tesseract"
    TESSERACT_CONFIG: str = "--oem 3 --psm 6"

    # Uploads
    MAX_FILE_SIZE_MB: int = 10

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
