"""
Tests for the image generation dialog
"""

import pytest
from unittest.mock import AsyncMock

from telegram.error import NetworkError

from modules import texts
from modules.ai_models import ModelRegistry
from modules.gpt_service import GeneratedImage
from modules.image_dialog import ImageDialog
from modules.session import SessionState, DialogState, get_session
from tests.conftest import make_update, make_callback, make_context


@pytest.fixture
def dialog(gpt_service, logger):
    return ImageDialog(gpt_service, ModelRegistry(), logger, quality_selection=True)


@pytest.mark.asyncio
class TestImageDialog:

    async def test_start_offers_quality_choice(self, dialog):
        session = SessionState()
        update, _ = make_update('/image')

        await dialog.start(update, session)

        assert session.dialog_state == DialogState.AWAITING_QUALITY_CHOICE
        assert session.dialog_user_id == 42
        markup = update.message.reply_text.call_args.kwargs['reply_markup']
        callbacks = [button.callback_data for row in markup.inline_keyboard for button in row]
        assert callbacks == ['standard', 'hd', 'cancelImageGeneration']

    async def test_start_without_quality_selection_asks_prompt(self, gpt_service, logger):
        dialog = ImageDialog(gpt_service, ModelRegistry(), logger, quality_selection=False)
        session = SessionState()
        update, _ = make_update('/image')

        await dialog.start(update, session)

        assert session.dialog_state == DialogState.AWAITING_PROMPT
        update.message.reply_text.assert_awaited_once_with(texts.ASK_IMAGE_PROMPT)

    async def test_cancel_never_calls_image_api(self, dialog, gpt_service):
        session = SessionState()
        await dialog.start(make_update('/image')[0], session)

        callback = make_callback('cancelImageGeneration')
        await dialog.cancel(callback, session)

        assert session.dialog_state == DialogState.CANCELLED
        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.IMAGE_CANCELLED)

        # Следующее сообщение уже не считается описанием
        update, _ = make_update('a cat')
        assert await dialog.handle_prompt(update, session) is False
        gpt_service.generate_image.assert_not_called()

    async def test_quality_then_prompt_generates_once(self, dialog, gpt_service):
        gpt_service.generate_image.return_value = GeneratedImage(url='https://img.example.com/cat.png')
        session = SessionState()
        await dialog.start(make_update('/image')[0], session)

        await dialog.choose_quality(make_callback('hd'), session)
        assert session.image_quality == 'hd'
        assert session.dialog_state == DialogState.AWAITING_PROMPT

        update, placeholder = make_update(' a cat in space ')
        assert await dialog.handle_prompt(update, session) is True

        gpt_service.generate_image.assert_called_once_with('a cat in space', 'hd', 42)
        update.message.reply_photo.assert_awaited_once_with(photo='https://img.example.com/cat.png')
        placeholder.edit_text.assert_awaited_once_with(texts.IMAGE_READY)
        assert session.dialog_state == DialogState.DELIVERED
        assert not session.dialog_active

    async def test_invalid_quality_is_rejected(self, dialog):
        session = SessionState()
        callback = make_callback('ultra')

        await dialog.choose_quality(callback, session)

        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.ERROR_GENERIC)
        assert session.image_quality == 'standard'
        assert session.dialog_state == DialogState.IDLE

    async def test_failed_generation(self, dialog, gpt_service):
        gpt_service.generate_image.return_value = None
        session = SessionState()
        session.begin_dialog(42, DialogState.AWAITING_PROMPT)

        update, placeholder = make_update('a dog')
        assert await dialog.handle_prompt(update, session) is True

        gpt_service.generate_image.assert_called_once_with('a dog', 'standard', 42)
        placeholder.edit_text.assert_awaited_once_with(texts.ERROR_IMAGE)
        update.message.reply_photo.assert_not_awaited()
        assert session.dialog_state == DialogState.FAILED

    async def test_prompt_from_other_user_falls_through(self, dialog, gpt_service):
        session = SessionState()
        session.begin_dialog(42, DialogState.AWAITING_PROMPT)

        update, _ = make_update('not mine', telegram_id=7)

        assert await dialog.handle_prompt(update, session) is False
        assert session.dialog_state == DialogState.AWAITING_PROMPT
        gpt_service.generate_image.assert_not_called()

    async def test_photo_delivery_error_reported_once(self, dialog, gpt_service):
        gpt_service.generate_image.return_value = GeneratedImage(data=b'png')
        session = SessionState()
        session.begin_dialog(42, DialogState.AWAITING_PROMPT)
        update, placeholder = make_update('a dog')
        update.message.reply_photo = AsyncMock(side_effect=NetworkError('telegram down'))

        assert await dialog.handle_prompt(update, session) is True

        assert session.dialog_state == DialogState.FAILED
        placeholder.edit_text.assert_awaited_once_with(texts.ERROR_IMAGE)
        update.message.reply_text.assert_awaited_once_with(texts.GENERATING_IMAGE)

    async def test_stale_cancel_while_awaiting_prompt(self, dialog, gpt_service):
        gpt_service.generate_image.return_value = GeneratedImage(url='https://img.example.com/1.png')
        session = SessionState()
        await dialog.start(make_update('/image')[0], session)
        await dialog.start(make_update('/image')[0], session)
        await dialog.choose_quality(make_callback('hd'), session)

        # Кнопка отмены со старой клавиатуры
        callback = make_callback('cancelImageGeneration')
        await dialog.cancel(callback, session)

        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.IMAGE_CANCEL_UNAVAILABLE)
        assert session.dialog_state == DialogState.AWAITING_PROMPT

        update, _ = make_update('a lighthouse')
        assert await dialog.handle_prompt(update, session) is True
        gpt_service.generate_image.assert_called_once_with('a lighthouse', 'hd', 42)

    async def test_cancel_without_dialog(self, dialog):
        session = SessionState()
        callback = make_callback('cancelImageGeneration')

        await dialog.cancel(callback, session)

        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.NO_ACTIVE_IMAGE_DIALOG)
        assert session.dialog_state == DialogState.IDLE

    async def test_cancel_by_other_user_is_ignored(self, dialog):
        session = SessionState()
        await dialog.start(make_update('/image')[0], session)

        callback = make_callback('cancelImageGeneration', telegram_id=7)
        await dialog.cancel(callback, session)

        callback.callback_query.answer.assert_awaited_once_with(texts.NOT_YOUR_DIALOG)
        callback.callback_query.edit_message_text.assert_not_awaited()
        assert session.dialog_state == DialogState.AWAITING_QUALITY_CHOICE
        assert session.dialog_user_id == 42

    async def test_quality_by_other_user_is_ignored(self, dialog):
        session = SessionState()
        await dialog.start(make_update('/image')[0], session)

        callback = make_callback('hd', telegram_id=7)
        await dialog.choose_quality(callback, session)

        callback.callback_query.answer.assert_awaited_once_with(texts.NOT_YOUR_DIALOG)
        callback.callback_query.edit_message_text.assert_not_awaited()
        assert session.image_quality == 'standard'
        assert session.dialog_state == DialogState.AWAITING_QUALITY_CHOICE

    async def test_stale_quality_button_is_ignored(self, dialog, gpt_service):
        session = SessionState()
        callback = make_callback('hd')

        await dialog.choose_quality(callback, session)

        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.QUALITY_CHOICE_EXPIRED)
        callback.callback_query.message.reply_text.assert_not_awaited()
        assert session.image_quality == 'standard'
        assert session.dialog_state == DialogState.IDLE

    async def test_quality_button_ignored_when_selection_disabled(self, gpt_service, logger):
        dialog = ImageDialog(gpt_service, ModelRegistry(), logger, quality_selection=False)
        session = SessionState()
        session.begin_dialog(42, DialogState.AWAITING_QUALITY_CHOICE)
        callback = make_callback('hd')

        await dialog.choose_quality(callback, session)

        callback.callback_query.edit_message_text.assert_awaited_once_with(texts.QUALITY_CHOICE_EXPIRED)
        assert session.image_quality == 'standard'

class TestSession:

    def test_session_created_with_defaults(self):
        context = make_context()

        session = get_session(context)

        assert session == SessionState()
        assert get_session(context) is session

    def test_foreign_value_is_replaced(self):
        context = make_context()
        context.chat_data['session'] = {'chat_id': 1}
        assert get_session(context) == SessionState()
