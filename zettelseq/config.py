from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from zettelseq.domain.sequence import Scheme


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="ZETTELSEQ_", env_file=".env", extra="ignore")

    # Sequence settings
    scheme: Scheme = Scheme.NUMERIC

    # Notes directory settings
    notes_dir: Path = Path("data/notes")
    note_extensions: list[str] = [".md", ".org", ".txt"]
    note_extension: str = ".md"  # Extension used for newly created notes
    allocation_attempts: int = 5
    claim_timeout: float = 300.0  # Seconds before an unreleased address claim is stale

    # Basic auth settings, auth is disabled when no username is set
    auth_username: str | None = None
    auth_password: str | None = None

    log_level: str = "INFO"  # Can be DEBUG, INFO, WARNING, ERROR, CRITICAL


settings = Settings()
