from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    PORT: int = 8080
    DATABASE_URL: str = "sqlite:///./student_admissions.db"

    # Mail
    MAIL_USERNAME: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = ""
    MAIL_SERVER: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_SUPPRESS_SEND: bool = False
    ADMIN_EMAIL: str = "admin@example.com"

    UPLOAD_DIR: str = "uploads"
    STATIC_DIR: str = "public"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    @property
    def mail_sender(self) -> str:
        # Gönderen adresi verilmemişse SMTP kullanıcısı kullanılır
        return self.MAIL_FROM or self.MAIL_USERNAME


settings = Settings()
