from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str
    JWT_SECRET: str
    JWT_ALGO: str = "HS256"
    SQL_ECHO: bool = False
    LOG_LEVEL: str = "INFO"
    CREATE_SCHEMA: bool = True

    class Config:
        env_file = ".env"

settings = Settings()
