from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update

from . import texts
from .ai_models import ModelRegistry, CANCEL_IMAGE_GENERATION
from .gpt_service import GPTService
from .logger import BotLogger
from .session import SessionState, DialogState


class ImageDialog:
    """
    Диалог генерации изображения.

    Состояние хранится в SessionState, поэтому диалог продолжается
    с любого следующего апдейта того же чата:
    AWAITING_QUALITY_CHOICE -> AWAITING_PROMPT -> GENERATING -> DELIVERED / FAILED,
    отмена (CANCELLED) возможна только из AWAITING_QUALITY_CHOICE.
    """

    def __init__(self, gpt_service: GPTService, registry: ModelRegistry,
                 logger: BotLogger, quality_selection: bool):
        self.gpt_service = gpt_service
        self.registry = registry
        self.logger = logger
        self.quality_selection = quality_selection

    def quality_keyboard(self) -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([
            [
                InlineKeyboardButton(label, callback_data=quality)
                for quality, label in self.registry.quality_labels.items()
            ],
            [InlineKeyboardButton(texts.CANCEL_BUTTON, callback_data=CANCEL_IMAGE_GENERATION)],
        ])

    async def start(self, update: Update, session: SessionState) -> None:
        """Вход в диалог по команде /image"""
        user_id = update.effective_user.id
        if self.quality_selection:
            session.begin_dialog(user_id, DialogState.AWAITING_QUALITY_CHOICE)
            await update.message.reply_text(texts.CHOOSE_QUALITY, reply_markup=self.quality_keyboard())
            return

        session.begin_dialog(user_id, DialogState.AWAITING_PROMPT)
        self.logger.logger.info(f"Image dialog started - Telegram ID: {user_id}")
        await update.message.reply_text(texts.ASK_IMAGE_PROMPT)

    async def choose_quality(self, update: Update, session: SessionState) -> None:
        query = update.callback_query
        quality = query.data

        if not self.registry.is_valid_quality(quality):
            await query.answer()
            await query.edit_message_text(texts.ERROR_GENERIC)
            return

        if session.dialog_active and session.dialog_user_id != update.effective_user.id:
            await query.answer(texts.NOT_YOUR_DIALOG)
            return

        # Кнопка со старой клавиатуры
        if not (self.quality_selection and session.dialog_state == DialogState.AWAITING_QUALITY_CHOICE):
            await query.answer()
            await query.edit_message_text(texts.QUALITY_CHOICE_EXPIRED)
            return

        await query.answer()
        session.image_quality = quality
        await query.edit_message_text(texts.QUALITY_SELECTED.format(quality=quality))

        session.begin_dialog(update.effective_user.id, DialogState.AWAITING_PROMPT)
        await query.message.reply_text(texts.ASK_IMAGE_PROMPT)

    async def cancel(self, update: Update, session: SessionState) -> None:
        query = update.callback_query
        user_id = update.effective_user.id

        if session.dialog_active and session.dialog_user_id != user_id:
            await query.answer(texts.NOT_YOUR_DIALOG)
            return

        # Отмена возможна только на шаге выбора качества
        if session.dialog_state != DialogState.AWAITING_QUALITY_CHOICE:
            await query.answer()
            if session.awaits_prompt_from(user_id):
                await query.edit_message_text(texts.IMAGE_CANCEL_UNAVAILABLE)
            else:
                await query.edit_message_text(texts.NO_ACTIVE_IMAGE_DIALOG)
            return

        await query.answer(texts.CANCELLED_ANSWER)
        session.finish_dialog(DialogState.CANCELLED)
        self.logger.logger.info(f"Image dialog cancelled - Telegram ID: {user_id}")
        await query.edit_message_text(texts.IMAGE_CANCELLED)

    async def handle_prompt(self, update: Update, session: SessionState) -> bool:
        """
        Обработка описания изображения.

        Возвращает False, если сообщение не относится к диалогу и должно
        обрабатываться как обычный запрос к GPT.
        """
        telegram_id = update.effective_user.id
        if not session.awaits_prompt_from(telegram_id):
            return False

        prompt = update.message.text.strip()
        quality = session.image_quality if self.registry.is_valid_quality(session.image_quality) \
            else self.registry.default_quality
        session.dialog_state = DialogState.GENERATING

        placeholder = await update.message.reply_text(texts.GENERATING_IMAGE)
        image = self.gpt_service.generate_image(prompt, quality, telegram_id)

        if image is None:
            session.finish_dialog(DialogState.FAILED)
            await placeholder.edit_text(texts.ERROR_IMAGE)
            return True

        try:
            await update.message.reply_photo(photo=image.photo)
        except Exception as e:
            session.finish_dialog(DialogState.FAILED)
            self.logger.log_handler_error("image delivery", e)
            await placeholder.edit_text(texts.ERROR_IMAGE)
            return True

        session.finish_dialog(DialogState.DELIVERED)
        await placeholder.edit_text(texts.IMAGE_READY)
        return True
