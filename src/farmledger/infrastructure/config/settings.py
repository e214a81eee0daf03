from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from farmledger.domain.enums import AuthorityAdmission


class Settings(BaseSettings):
    # App
    app_name: str = "FarmLedger"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./farmledger.db"
    database_echo: bool = False

    # Access control
    # "authorities": owner or any authority may add authorities
    # "owner": only the AuthorityCenter owner may add authorities
    authority_admission: str = AuthorityAdmission.AUTHORITIES.value

    # ChickenEggTracker: refuse eggs whose parent chicken has been removed
    tracker_require_active_parent: bool = False

    # Event log hash chain
    hash_algorithm: str = "sha256"  # Options: "sha256", "sha512"

    @model_validator(mode="after")
    def validate_ledger_config(self) -> "Settings":
        """Validate access-control policy and hash configuration"""
        if not self.database_url:
            raise ValueError("DATABASE_URL is required. Set in environment or .env file.")

        if self.authority_admission not in AuthorityAdmission.values():
            raise ValueError(
                f"Invalid authority_admission '{self.authority_admission}'. "
                f"Must be one of: {', '.join(AuthorityAdmission.values())}"
            )

        if self.hash_algorithm not in ("sha256", "sha512"):
            raise ValueError(
                f"Invalid hash_algorithm '{self.hash_algorithm}'. "
                f"Must be one of: 'sha256', 'sha512'"
            )
        return self

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="allow", case_sensitive=False
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
