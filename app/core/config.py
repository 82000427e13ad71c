from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./splitledger.db"
    APP_NAME: str = "Split Ledger Backend"
    CURRENCY_SYMBOL: str = "₹"
    LOG_LEVEL: str = "INFO"
    DB_CONNECT_RETRIES: int = 5

    class Config:
        env_file = ".env"

settings = Settings()
