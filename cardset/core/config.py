from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

IMAGE_SIZES = {"small", "normal", "large", "png", "art_crop", "border_crop"}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="CARDSET_",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO")
    api_base_url: str = Field(default="https://api.scryfall.com")
    images_dir: str = Field(default="images")
    output_dir: str = Field(default=".")
    # Scryfall asks for 50-100ms between requests
    rate_limit_delay: float = Field(default=0.1, ge=0)
    image_size: str = Field(default="normal")
    max_concurrent_downloads: int = Field(default=2, ge=1)
    http_timeout: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="cardset/0.1.0")

    @field_validator("api_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, v):
        if v is None:
            return "https://api.scryfall.com"
        return str(v).strip().rstrip("/")

    @field_validator("image_size", mode="before")
    @classmethod
    def _validate_image_size(cls, v: str) -> str:
        if v is None:
            return "normal"
        val = str(v).strip().lower()
        if val not in IMAGE_SIZES:
            raise ValueError(f"image_size must be one of {sorted(IMAGE_SIZES)}")
        return val

    @property
    def http_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}


settings = Settings()
