from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    app_name: str = "Accessibility Compliance Dashboard"
    debug: bool = False
    version: str = "1.0.0"

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Remote scan / search / PDF API
    api_base_url: str = "http://localhost:5000"
    request_timeout: float = 30.0
    pdf_timeout: float = 60.0

    # Search
    search_history_size: int = 5

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
