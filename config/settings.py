from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_CONFIG = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


class AppSettings(BaseSettings):
    """General application settings."""

    name: str = Field("Vault Deposit Planner", validation_alias="APP_NAME")
    debug: bool = Field(False, validation_alias="DEBUG")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = ENV_CONFIG


class EthereumSettings(BaseSettings):
    """Settings related to the Ethereum node connection."""

    provider_uri: str = Field(
        default="http://127.0.0.1:8545",
        validation_alias="PROVIDER_URI",
        description="Ethereum Node JSON-RPC URL",
    )
    # Transport timeout for a single HTTP round-trip (seconds)
    rpc_timeout: int = Field(default=60, gt=0, validation_alias="RPC_TIMEOUT")

    model_config = ENV_CONFIG


class DepositSettings(BaseSettings):
    """Settings for deposit planning and submission."""

    # Upper bound for each ledger read, gas simulation and send; unset disables it
    remote_call_timeout: Optional[float] = Field(default=None, gt=0, validation_alias="REMOTE_CALL_TIMEOUT")
    confirmation_timeout: float = Field(default=120, gt=0, validation_alias="CONFIRMATION_TIMEOUT")
    confirmation_poll_latency: float = Field(default=0.1, gt=0, validation_alias="CONFIRMATION_POLL_LATENCY")
    private_key: Optional[str] = Field(
        default=None,
        validation_alias="DEPOSITOR_PRIVATE_KEY",
        description="Hex private key used to sign deposits. Unset means the node signs (eth_sendTransaction).",
        repr=False,
    )

    model_config = ENV_CONFIG


class Settings(BaseSettings):
    """
    Main Settings class that composes all sub-settings.
    Each sub-settings class reads its own flat env vars through validation_alias.
    """

    app: AppSettings = Field(default_factory=AppSettings)
    ethereum: EthereumSettings = Field(default_factory=EthereumSettings)
    deposit: DepositSettings = Field(default_factory=DepositSettings)

    model_config = ENV_CONFIG


# Singleton instance
settings = Settings()
