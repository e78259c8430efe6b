from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./scsd.db"
    COMPANY_NAME: str = "SCSD Sealing & Asphalt"
    COMPANY_EMAIL: str = ""
    COMPANY_PHONE: str = ""

    # Pricing
    GST_RATE: float = 0.10
    MARKUP_DEFAULT: float = 0.0

    # Quote numbering: QU-0399, QU-0400, ...
    QUOTE_NUMBER_PREFIX: str = "QU-"
    QUOTE_NUMBER_START: int = 399
    QUOTE_VALID_DAYS: int = 30

    class Config:
        env_file = ".env"


settings = Settings()
