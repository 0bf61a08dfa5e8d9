from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 5001

    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for admin auth operations (profile metadata)

    # AWS S3 (optional; local disk is used when not configured)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Uploads
    upload_dir: str = "uploads"
    public_base_url: str = ""  # e.g. "https://api.hoteltrek.example"; empty gives relative URLs

    # Profile pictures
    profile_image_folder: str = "hotel-trek-profiles"
    profile_image_max_bytes: int = 2_000_000
    profile_image_min_size: int = 200
    profile_image_max_size: int = 800
    profile_image_formats: str = "png,jpg,jpeg,gif"

    # Hotel images
    hotel_image_folder: str = "hotel-images"
    hotel_image_max_bytes: int = 5_000_000
    hotel_image_max_size: int = 1600
    hotel_image_formats: str = "png,jpg,jpeg,gif,webp"

    # Booking rules
    max_stay_nights: int = 30
    max_guests_per_room: int = 4

    # App
    app_name: str = "hoteltrek-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_rate_limit: str = "20/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def get_profile_image_formats(self) -> List[str]:
        return [f.strip().lower() for f in self.profile_image_formats.split(",") if f.strip()]

    def get_hotel_image_formats(self) -> List[str]:
        return [f.strip().lower() for f in self.hotel_image_formats.split(",") if f.strip()]

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
