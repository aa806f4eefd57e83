from pathlib import Path

from pydantic_settings import BaseSettings

DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class Settings(BaseSettings):
    PROJECT_NAME: str = "Vulnerability Report"
    API_V1_STR: str = "/api/v1"

    # GitLab connection
    GITLAB_URL: str = "https://gitlab.com"
    GITLAB_ACCESS_TOKEN: str = ""
    GITLAB_GROUP_ID: int = 1120
    GITLAB_PIPELINES_PER_PAGE: int = 20
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Static lookup tables
    ARTIFACT_PATHS_FILE: Path = DATA_DIR / "artifact_paths.json"
    CWE_LIST_FILE: Path = DATA_DIR / "cwe_list.json"

    LOG_LEVEL: str = "INFO"

    class Config:
        case_sensitive = True
        env_file = ".env"


settings = Settings()
