"""
Общие фикстуры для тестов бота
"""

import pytest
from unittest.mock import AsyncMock, Mock

from config.config import BotConfig
from models.database import create_session_factory, init_db
from modules.gpt_service import GPTService
from modules.logger import BotLogger
from services.database_service import DatabaseService


@pytest.fixture
def config(tmp_path):
    return BotConfig(
        bot_key='123456:TEST-TOKEN',
        gpt_key='test-key',
        database_url=f"sqlite:///{tmp_path / 'bot.db'}",
        openai_base_url='https://api.example.com/v1/',
        image_quality_change_available=False,
        admin_ids=[1000],
        max_history_length=4,
        role_file=str(tmp_path / 'role.txt'),
        log_directory=str(tmp_path / 'logs'),
    )


@pytest.fixture
def logger(config):
    return BotLogger.from_config(config)


@pytest.fixture
def db_service(config):
    session_factory = create_session_factory(config.database_url)
    init_db(session_factory)
    return DatabaseService(session_factory, config.default_model)


@pytest.fixture
def gpt_service():
    service = Mock(spec=GPTService)
    service.get_gpt_response.return_value = 'Hi there!'
    service.generate_image.return_value = None
    return service


def make_update(text: str = '', telegram_id: int = 42, first_name: str = 'Ivan', username: str = 'ivan'):
    """Фейковый апдейт с текстовым сообщением"""
    placeholder = Mock()
    placeholder.edit_text = AsyncMock()

    update = Mock()
    update.effective_user.id = telegram_id
    update.effective_user.first_name = first_name
    update.effective_user.username = username
    update.message.text = text
    update.message.reply_text = AsyncMock(return_value=placeholder)
    update.message.reply_photo = AsyncMock()
    return update, placeholder


def make_callback(data: str, telegram_id: int = 42):
    """Фейковый апдейт с нажатием inline-кнопки"""
    update = Mock()
    update.effective_user.id = telegram_id
    query = update.callback_query
    query.data = data
    query.answer = AsyncMock()
    query.edit_message_text = AsyncMock()
    query.message.reply_text = AsyncMock()
    return update


def make_context():
    context = Mock()
    context.chat_data = {}
    return context
