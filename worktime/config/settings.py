from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # GitHub - token is read from github_token, or from github_token_file when empty
    github_token: str = ""
    github_token_file: str = "./token.txt"
    github_organisation: str = "p2panda"
    github_author: str = "adzialocha"

    # Folder holding one JSON file of activity records per repository
    data_dir: str = "data"

    # Analysis range, ISO 8601 strings (UTC when no offset is given)
    fetch_from: str = "2021-09-01T00:00:00"
    analysis_from: str = "2021-09-01T00:00:00"
    analysis_to: str = "2022-09-30T23:59:59"

    # Work phase inference
    # Gap between two events after which a work phase is considered finished
    threshold_minutes: int = 240
    # Work assumed to happen after the last event of a phase
    padding_minutes: int = 5
    # Calendar cell size, must divide a day evenly
    cell_minutes: int = 30

    # Logging
    debug: bool = False

    @property
    def github_enabled(self) -> bool:
        """Check if a GitHub token is configured directly."""
        return bool(self.github_token)


settings = Settings()
