from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Soroban RPC (defaults target the public testnet)
    SOROBAN_RPC_URL: str = "https://soroban-testnet.stellar.org"
    NETWORK_PASSPHRASE: str = "Test SDF Network ; September 2015"
    FRIENDBOT_URL: str = "https://friendbot.stellar.org"

    # Deployed prediction-market contract, set in .env after deployment
    CONTRACT_ID: str = ""

    # Envelope parameters
    BASE_FEE: int = 100  # stroops
    READ_TIMEOUT_SECONDS: int = 30
    WRITE_TIMEOUT_SECONDS: int = 180  # covers human-speed wallet confirmation

    # Read-only simulations run from an unfunded placeholder source
    READ_SOURCE_ACCOUNT: str = "GAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAWHF"

    # Confirmation polling; POLL_TIMEOUT_SECONDS=None polls forever
    POLL_INTERVAL_SECONDS: float = 1.5
    POLL_TIMEOUT_SECONDS: float | None = 120.0

    # None = wait for the wallet as long as the user takes
    SIGN_TIMEOUT_SECONDS: float | None = None

    HTTP_TIMEOUT_SECONDS: float = 30.0

    MAX_QUESTION_LENGTH: int = 256

    # App
    APP_NAME: str = "Stellar Prediction Market"
    DEBUG: bool = False


settings = Settings()
