"""
Tests for bot configuration
"""

import pytest

from config.config import BotConfig, ConfigError, _is_enabled, _parse_ids


class TestBotConfig:

    def test_validate_passes_with_credentials(self, config):
        config.validate()

    def test_missing_bot_token_is_fatal(self, config):
        config.bot_key = None
        with pytest.raises(ConfigError, match='BOT_TOKEN'):
            config.validate()

    def test_missing_database_url_is_fatal(self, config):
        config.database_url = ''
        with pytest.raises(ConfigError, match='DATABASE_URL'):
            config.validate()

    def test_admin_ids_parsing(self):
        assert _parse_ids('1, 2,,3 ') == [1, 2, 3]
        assert _parse_ids('') == []

    @pytest.mark.parametrize('raw,expected', [
        ('1', True), ('true', True), ('Yes', True), ('', False), ('0', False), ('off', False),
    ])
    def test_feature_flag_parsing(self, raw, expected):
        assert _is_enabled(raw) is expected

    def test_history_window_default(self):
        assert BotConfig(bot_key='x', database_url='sqlite://').max_history_length == 10
