"""Configuration settings for the spelling app."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Define base directory
BASE_DIR = Path(__file__).parent.parent.parent

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


# Define data directories from environment variables
DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
LOGS_DIR = DATA_DIR / "logs"

# Learning settings
REVIEW_INTERVALS_DAYS = [1, 3, 7, 14, 30]  # days until next review after a correct answer
RETRY_DELAY_HOURS = 2  # review again soon after a wrong answer
QUEST_WORD_COUNTS = [10, 10, 20]  # words per quest chapter, chapter 1 first


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    directories = [
        DATA_DIR,
    ]

    for directory in directories:
        directory.mkdir(parents=True, exist_ok=True)


@dataclass
class PathSettings:
    """Path configuration settings."""
    base_dir: Path = BASE_DIR
    data_dir: Path = DATA_DIR
    logs_dir: Path = LOGS_DIR


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", "sqlite:///spellcat.db")
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class ServerSettings:
    """HTTP server settings."""
    host: str = os.getenv("HOST", "127.0.0.1")
    port: int = int(os.getenv("PORT", "5000"))
    secret_key: str = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    debug: bool = os.getenv("DEBUG", "0") == "1"


@dataclass
class LearningSettings:
    """Spelling practice and review settings."""
    year_group: int = int(os.getenv("YEAR_GROUP", "3"))
    mastered_threshold: int = int(os.getenv("MASTERED_THRESHOLD", "80"))
    practicing_threshold: int = int(os.getenv("PRACTICING_THRESHOLD", "60"))
    min_attempts_for_mastery: int = int(os.getenv("MIN_ATTEMPTS_FOR_MASTERY", "3"))
    unmastered_correct_limit: int = 3
    review_list_limit: int = int(os.getenv("REVIEW_LIST_LIMIT", "20"))
    recent_sessions_limit: int = int(os.getenv("RECENT_SESSIONS_LIMIT", "10"))
    review_intervals: list[int] = field(default_factory=lambda: list(REVIEW_INTERVALS_DAYS))
    retry_delay_hours: int = RETRY_DELAY_HOURS
    struggling_threshold: int = 50
    struggling_min_attempts: int = 2
    quest_word_counts: list[int] = field(default_factory=lambda: list(QUEST_WORD_COUNTS))
    min_difficulty: int = 1
    max_difficulty: int = 5
    max_mastery_level: int = 5


@dataclass
class MonitoringSettings:
    """Prometheus metrics settings."""
    enabled: bool = os.getenv("METRICS_ENABLED", "true").lower() == "true"


def get_path_settings() -> PathSettings:
    """Get path settings."""
    return PathSettings()


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_server_settings() -> ServerSettings:
    """Get server settings."""
    return ServerSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    paths: PathSettings = field(default_factory=get_path_settings)
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    server: ServerSettings = field(default_factory=get_server_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.database.url:
            raise ValueError("DATABASE_URL is required")

        if self.learning.year_group not in (1, 2, 3):
            raise ValueError("YEAR_GROUP must be 1, 2 or 3")

        if not 0 <= self.learning.practicing_threshold <= 100 or \
           not 0 <= self.learning.mastered_threshold <= 100:
            raise ValueError("Mastery thresholds must be between 0 and 100")

        if self.learning.practicing_threshold > self.learning.mastered_threshold:
            raise ValueError("PRACTICING_THRESHOLD cannot be greater than MASTERED_THRESHOLD")

        if self.learning.min_attempts_for_mastery < 1:
            raise ValueError("MIN_ATTEMPTS_FOR_MASTERY must be positive")

        if not self.learning.review_intervals:
            raise ValueError("Review intervals must not be empty")

        if not self.learning.quest_word_counts or min(self.learning.quest_word_counts) < 1:
            raise ValueError("Every quest chapter needs at least one word")


# Create global settings instance
settings = Settings()
settings.validate()
