from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./pdv.db"

    # JWT
    secret_key: str = "pdv_secret_key_change_me_in_prod"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 12  # 12 horas

    # Forma de pagamento selecionada depois de cada venda
    default_payment_method: str = "pix"

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    model_config = SettingsConfigDict(env_prefix="PDV_", env_file=".env", env_file_encoding="utf-8")


settings = Settings()
