# school_admin/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    database_url: str
    redis_url: str
    jwt_secret_key: str

    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    allowed_origins: List[str] = ['*']

    # Auth
    jwt_algorithm: str = 'HS256'
    jwt_expire_days: int = 7
    bcrypt_rounds: int = 12
    auth_cookie_name: str = 'token'

    # Object storage (Cloudinary)
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None

    # Payment gateway (Razorpay)
    razorpay_key_id: Optional[str] = None
    razorpay_key_secret: Optional[str] = None
    razorpay_currency: str = 'INR'

    gateway_timeout_seconds: float = 30.0

    # Outbound mail
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_password: Optional[str] = None
    mail_from_name: str = 'D.M. Public School'

    school_name: str = 'D.M. Public School'
    school_contact: str = '7352737650'
    school_address: str = ''
    admin_inbox: Optional[str] = None

    upload_max_bytes: int = 5 * 1024 * 1024

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

    @property
    def is_production(self) -> bool:
        return self.environment == 'production'

settings = Settings()
