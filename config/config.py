import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv()


class ConfigError(Exception):
    """Отсутствует обязательный параметр конфигурации"""


def _parse_ids(raw: str) -> List[int]:
    return [int(item.strip()) for item in raw.split(',') if item.strip()]


def _is_enabled(raw: str) -> bool:
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class BotConfig:
    bot_key: str = os.getenv('BOT_TOKEN')
    gpt_key: str = os.getenv('GPT_KEY')
    database_url: str = os.getenv('DATABASE_URL')
    openai_base_url: str = os.getenv('OPENAI_BASE_URL', 'https://api.openai.com/v1')

    # Выбор качества изображения перед генерацией
    image_quality_change_available: bool = _is_enabled(os.getenv('IMAGE_QUALITY_CHANGE_AVAILABLE', ''))
    admin_ids: List[int] = field(default_factory=lambda: _parse_ids(os.getenv('ADMIN_IDS', '')))

    max_history_length: int = 10
    default_model: str = "gpt-4o-mini"
    temperature: float = 0.5
    image_model: str = "dall-e-3"
    image_size: str = "1024x1024"
    request_timeout: int = 60  # в секундах
    role_file: str = 'role.txt'

    log_directory: str = "logs"
    log_level: str = os.getenv('LOG_LEVEL', 'INFO')
    max_log_size: int = 5 * 1024 * 1024  # 5MB
    backup_count: int = 5

    def validate(self) -> None:
        """Проверка обязательных параметров, без которых бот не запускается"""
        if not self.bot_key:
            raise ConfigError('BOT_TOKEN is not defined')
        if not self.database_url:
            raise ConfigError('DATABASE_URL is not defined')
