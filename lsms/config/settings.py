import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load the appropriate environment file
env_file = '.env.local'
load_dotenv(env_file)

class Settings(BaseSettings):
    """Application settings."""
    # App settings
    APP_ENV: str = os.getenv('APP_ENV', 'production')
    PORT: int = int(os.getenv('PORT', 5500))

    # Storage settings
    DATA_DIR: str = os.getenv('DATA_DIR', 'data')

    # Mail settings
    SMTP_HOST: str = os.getenv('SMTP_HOST', 'smtp.gmail.com')
    SMTP_PORT: int = int(os.getenv('SMTP_PORT', 587))
    SMTP_USER: str = os.getenv('SMTP_USER', '')
    SMTP_PASSWORD: str = os.getenv('SMTP_PASSWORD', '')
    SMTP_USE_TLS: bool = os.getenv('SMTP_USE_TLS', 'true').lower() == 'true'
    SMTP_TIMEOUT: int = int(os.getenv('SMTP_TIMEOUT', 30))
    EMAIL_FROM: str = os.getenv('EMAIL_FROM', '')
    EMAIL_FROM_NAME: str = os.getenv('EMAIL_FROM_NAME', 'Landmark Student Record')

    # Content of the welcome / credentials emails
    LANDING_PAGE_URL: str = os.getenv('LANDING_PAGE_URL', 'http://localhost:5500/LSMS_Landing.html')
    LOGO_PATH: str = os.getenv('LOGO_PATH', 'landmarklogo2.png')
    PORTAL_EMAIL: str = os.getenv('PORTAL_EMAIL', '')
    PORTAL_PASSWORD: str = os.getenv('PORTAL_PASSWORD', '')

    # OTP
    OTP_TTL_SECONDS: int = int(os.getenv('OTP_TTL_SECONDS', 60))

    # API settings
    API_TITLE: str = "Landmark Student Management API"
    API_DESCRIPTION: str = "Backend API for the Landmark Student Management System"
    API_VERSION: str = "1.0.0"
    API_DOCS_URL: str = "/api/docs"
    API_REDOC_URL: str = "/api/redoc"
    API_OPENAPI_URL: str = "/api/openapi.json"

    class Config:
        env_file = env_file

settings = Settings()
