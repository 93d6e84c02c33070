import logging
import logging.handlers
import os
from typing import Optional

SECRET_MARKERS = ('key', 'token', 'database_url')


class BotLogger:
    def __init__(self, log_directory: str = "logs", level: str = "INFO",
                 max_bytes: int = 5 * 1024 * 1024, backup_count: int = 5):
        self.log_directory = log_directory
        self.level = level
        self.max_bytes = max_bytes
        self.backup_count = backup_count
        self._setup_directory()
        self.logger = self._configure_logger()

    @classmethod
    def from_config(cls, config) -> 'BotLogger':
        return cls(
            log_directory=config.log_directory,
            level=config.log_level,
            max_bytes=config.max_log_size,
            backup_count=config.backup_count,
        )

    def _setup_directory(self) -> None:
        """Создание директории для логов если она не существует"""
        if not os.path.exists(self.log_directory):
            os.makedirs(self.log_directory)

    def _configure_logger(self) -> logging.Logger:
        """Настройка логгера с разделением по уровням логирования"""
        logger = logging.getLogger('GptChatBot')
        logger.setLevel(logging.DEBUG)

        # Повторная инициализация не должна дублировать обработчики
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

        # Обработчик для всех логов
        all_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(self.log_directory, 'all.log'),
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        all_handler.setLevel(logging.DEBUG)
        all_handler.setFormatter(formatter)

        # Обработчик для ошибок
        error_handler = logging.handlers.RotatingFileHandler(
            filename=os.path.join(self.log_directory, 'error.log'),
            maxBytes=self.max_bytes,
            backupCount=self.backup_count,
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(formatter)

        # Консольный обработчик
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, str(self.level).upper(), logging.INFO))
        console_handler.setFormatter(formatter)

        logger.addHandler(all_handler)
        logger.addHandler(error_handler)
        logger.addHandler(console_handler)

        return logger

    def log_bot_startup(self, config: dict) -> None:
        """Логирование запуска бота"""
        self.logger.info("Bot starting up with configuration:")
        for key, value in config.items():
            if any(marker in key.lower() for marker in SECRET_MARKERS):
                self.logger.info(f"{key}: ***hidden***")
            else:
                self.logger.info(f"{key}: {value}")

    def log_api_request(self, endpoint: str, status_code: Optional[int] = None, error: Optional[str] = None) -> None:
        """Логирование API запросов"""
        if status_code == 200:
            self.logger.info(f"API request successful - Endpoint: {endpoint}")
        else:
            self.logger.error(f"API request failed - Endpoint: {endpoint}, Status: {status_code}, Error: {error}")

    def log_gpt_interaction(self, telegram_id: int, model: str, success: bool, error: Optional[str] = None) -> None:
        """Логирование взаимодействий с GPT"""
        if success:
            self.logger.info(f"GPT interaction successful - Telegram ID: {telegram_id}, Model: {model}")
        else:
            self.logger.error(f"GPT interaction failed - Telegram ID: {telegram_id}, Model: {model}, Error: {error}")

    def log_image_generation(self, telegram_id: int, quality: str, success: bool, error: Optional[str] = None) -> None:
        if success:
            self.logger.info(f"Image generated - Telegram ID: {telegram_id}, Quality: {quality}")
        else:
            self.logger.error(f"Image generation failed - Telegram ID: {telegram_id}, Quality: {quality}, Error: {error}")

    def log_handler_error(self, handler: str, error: BaseException) -> None:
        """Логирование ошибки на границе обработчика"""
        self.logger.error(f"Error in {handler}: {error}", exc_info=error)
