"""PhotoShare Server Configuration."""

import secrets
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    app_name: str = "PhotoShare"
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]

    # Paths
    data_dir: Path = Path.home() / "photoshare" / "data"
    upload_dir: Path = Path.home() / "photoshare" / "uploads"

    # Database
    db_path: Path = Path.home() / "photoshare" / "data" / "photoshare.db"
    database_url: str = ""  # overrides db_path when set

    # Session (signed JWT in an HttpOnly cookie)
    session_secret: str = ""
    session_algorithm: str = "HS256"
    session_cookie_name: str = "photoshare_session"
    session_expire_minutes: int = 60 * 24 * 7  # 7 days
    session_cookie_secure: bool = False

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024  # 10 MiB

    model_config = {"env_prefix": "PHOTOSHARE_"}

    @property
    def sqlalchemy_url(self) -> str:
        return self.database_url or f"sqlite:///{self.db_path}"

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        for d in [self.data_dir, self.upload_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)

    def ensure_secrets(self) -> None:
        """Generate the session secret if not set, persist it so sessions survive restarts."""
        secrets_file = self.data_dir / ".secrets"
        saved = {}
        if secrets_file.exists():
            for line in secrets_file.read_text().strip().splitlines():
                if "=" in line:
                    k, v = line.split("=", 1)
                    saved[k.strip()] = v.strip()

        if not self.session_secret:
            self.session_secret = saved.get("session_secret", "") or secrets.token_urlsafe(32)

        secrets_file.write_text(f"session_secret={self.session_secret}\n")


settings = Settings()
settings.ensure_dirs()
settings.ensure_secrets()
