"""
Configuration loader utility for environment-specific settings.
"""

import logging
import os
from pathlib import Path
from typing import Optional
from .settings import DEFAULT_JWT_SECRET, Settings, Environment

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Utility class for loading environment-specific configurations"""

    @staticmethod
    def load_environment_config(environment: Optional[str] = None) -> Settings:
        """
        Load configuration for the specified environment.

        Args:
            environment: Target environment (development, staging, production, testing)
                        If None, uses ENVIRONMENT env var or defaults to development

        Returns:
            Settings instance with environment-specific configuration
        """
        if environment is None:
            environment = os.getenv("ENVIRONMENT", "development")

        env = Environment(environment.lower())
        env_file_path = Path(f".env.{env.value}")

        if env_file_path.exists():
            return Settings(_env_file=(".env", str(env_file_path)), environment=env)

        logger.warning(
            f"Environment file {env_file_path} not found, using default settings"
        )
        return Settings(_env_file=".env", environment=env)

    @staticmethod
    def get_available_environments() -> list[str]:
        """Get list of available environment configurations"""
        env_files = []
        for env_file in Path(".").glob(".env.*"):
            if env_file.name.endswith(".sample"):
                continue
            env_files.append(env_file.name.replace(".env.", ""))
        return sorted(env_files)

    @staticmethod
    def validate_environment_config(environment: str) -> bool:
        """
        Validate that an environment configuration exists and is valid.

        Args:
            environment: Environment name to validate

        Returns:
            True if configuration is valid, False otherwise
        """
        try:
            env = Environment(environment.lower())
            if not Path(f".env.{env.value}").exists():
                return False

            settings = ConfigLoader.load_environment_config(environment)
        except ValueError:
            return False

        problems = ConfigLoader.find_config_problems(settings)
        for problem in problems:
            logger.error(f"Invalid {env.value} configuration: {problem}")
        return not problems

    @staticmethod
    def find_config_problems(settings: Settings) -> list[str]:
        """
        Check loaded settings for values that must not reach a deployment.

        Returns:
            Human-readable problems, empty when the settings are usable
        """
        problems = []
        deployed = settings.environment in (Environment.STAGING, Environment.PRODUCTION)
        if deployed and settings.security.jwt_secret == DEFAULT_JWT_SECRET:
            problems.append("SECURITY_JWT_SECRET is still the default secret")
        if settings.favorites.default_page_size > settings.favorites.max_page_size:
            problems.append("FAVORITES_DEFAULT_PAGE_SIZE exceeds FAVORITES_MAX_PAGE_SIZE")
        if settings.is_production() and settings.database.url.startswith("sqlite"):
            problems.append("DATABASE_URL points at SQLite in production")
        return problems

    @staticmethod
    def create_sample_env_file(environment: str, output_path: Optional[str] = None) -> str:
        """
        Create a sample .env file for the specified environment.

        Args:
            environment: Target environment
            output_path: Optional custom output path

        Returns:
            Path to the created sample file
        """
        env = Environment(environment.lower())

        if output_path is None:
            output_path = f".env.{env.value}.sample"

        default_settings = Settings()

        sample_content = f"""# Sample configuration for {env.value} environment
# Copy this file to .env.{env.value} and modify as needed

# Application Configuration
APP_NAME={default_settings.app_name}
APP_VERSION={default_settings.app_version}
ENVIRONMENT={env.value}
DEBUG={'true' if env == Environment.DEVELOPMENT else 'false'}

# Server Configuration
HOST={default_settings.host}
PORT={default_settings.port}
RELOAD={'true' if env == Environment.DEVELOPMENT else 'false'}
WORKERS={1 if env == Environment.DEVELOPMENT else 4}

# Logging Configuration
LOG_LEVEL={default_settings.log_level.value}
LOG_FORMAT={default_settings.log_format}

# Database Configuration
DATABASE_URL={default_settings.database.url}
DATABASE_CREATE_TABLES_ON_STARTUP={'true' if env == Environment.DEVELOPMENT else 'false'}

# Security Configuration
SECURITY_JWT_SECRET=change-me
SECURITY_ACCESS_TOKEN_EXPIRE_MINUTES={default_settings.security.access_token_expire_minutes}
SECURITY_CORS_ORIGINS=*

# Favorites Configuration
FAVORITES_DEFAULT_PAGE_SIZE={default_settings.favorites.default_page_size}
FAVORITES_MAX_PAGE_SIZE={default_settings.favorites.max_page_size}

# Client Configuration
CLIENT_API_URL={default_settings.client.api_url}
CLIENT_TIMEOUT_SECONDS={default_settings.client.timeout_seconds}
"""

        with open(output_path, "w") as f:
            f.write(sample_content)

        return output_path
