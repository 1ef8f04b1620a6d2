from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Central configuration for the qjwt sign & verify service.
    Values can be overridden via environment variables or a .env file.
    """

    app_name: str = "qjwt – JWT Sign & Verify"
    environment: str = "dev"

    default_alg: str = "HS256"

    # HS256/HS384/HS512 shared secret
    hmac_secret: str | None = None

    # PEM files for RS256 / ES256
    private_key_path: str | None = None
    public_key_path: str | None = None

    # JSON file: {"<iss>": {"secret": "..."} | {"pem_path": "..."}}
    issuer_keys_path: str | None = None

    # 0 = tokens without exp unless the request asks for one
    default_expires_in: int = 0

    log_level: str = "INFO"

    host: str = "127.0.0.1"
    port: int = 8000

    class Config:
        env_file = ".env"  # if a .env file exists, it will be read automatically


# create a single settings instance we can import everywhere
settings = Settings()
