from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./invoices.db"
    LOG_LEVEL: str = "INFO"

    # Company identity printed on every invoice
    COMPANY_NAME: str = "Meduza Studio Works"
    COMPANY_ADDRESS: str = "Tolon, El Sayeda Zeinab, Cairo, Egypt"
    COMPANY_PHONE: str = "+20 1146700228 / +20 1018705558"
    COMPANY_EMAIL: str = "info@meduzafurniture.com"
    COMPANY_LOGO_URL: str = ""

    CURRENCY: str = "EGP"
    VAT_RATE_DEFAULT: float = 14.0

    class Config:
        env_file = ".env"


settings = Settings()
