from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "development"
    DATABASE_URL: str = "sqlite:///./tempora.db"
    API_BASE_URL: str = "http://localhost:8080/api"
    API_TOKEN: str | None = None
    HTTP_TIMEOUT_S: float = 10.0
    CALENDAR_ROUTE: str = "/calendar"
    DEFAULT_EVENT_COLOR: str = "#D50000"
    DEFAULT_EVENT_CATEGORY: str = "work"
    DEFAULT_EVENT_TYPE: str = "meeting"


settings = Settings()
