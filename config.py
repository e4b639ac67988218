import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Application
    app_name: str = os.getenv("APP_NAME", "Library Management System")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")

    # Logging; WARNING keeps INFO records out of the interactive menu
    log_level: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Catalog
    seed_sample_data: bool = _env_flag("SEED_SAMPLE_DATA", "True")

    # CLI
    cli_config_dir: str = os.getenv("LIBRARY_CLI_CONFIG_DIR", str(Path.home() / ".library-cli"))


settings = Settings()
