import re
from typing import Optional

from telegram import BotCommand, InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.constants import ParseMode
from telegram.error import NetworkError, TelegramError
from telegram.ext import Application, CallbackQueryHandler, CommandHandler, ContextTypes, MessageHandler, filters

from config.config import BotConfig
from models.database import create_session_factory, init_db
from models.models import Chat, User
from modules import texts
from modules.ai_models import ModelRegistry, CANCEL_IMAGE_GENERATION
from modules.gpt_service import GPTService
from modules.history import HistoryAssembler
from modules.image_dialog import ImageDialog
from modules.logger import BotLogger
from modules.session import get_session
from services.database_service import DatabaseService


def _exact_pattern(values) -> str:
    return '^(' + '|'.join(re.escape(value) for value in values) + ')$'


class TelegramBot:
    def __init__(self, config: BotConfig, db_service: DatabaseService = None,
                 gpt_service: GPTService = None, logger: BotLogger = None,
                 registry: ModelRegistry = None):
        # Без токена и базы данных бот не запускается
        config.validate()
        self.config = config

        self.logger = logger or BotLogger.from_config(config)
        self.logger.log_bot_startup(config.__dict__)

        self.registry = registry or ModelRegistry(default_model=config.default_model)

        if db_service is None:
            session_factory = create_session_factory(config.database_url)
            init_db(session_factory)
            db_service = DatabaseService(session_factory, config.default_model)
        self.db_service = db_service

        self.gpt_service = gpt_service or GPTService(config, self.logger)
        self.history = HistoryAssembler(self.db_service, config.max_history_length)
        self.image_dialog = ImageDialog(
            self.gpt_service,
            self.registry,
            self.logger,
            quality_selection=config.image_quality_change_available
        )

        self.application = Application.builder()\
            .token(config.bot_key)\
            .post_init(self._post_init)\
            .build()
        self._setup_handlers()

        self.logger.logger.info('Bot initialization completed successfully')

    def run(self) -> None:
        self.logger.logger.info('Starting polling')
        self.application.run_polling(1.0)

    def _setup_handlers(self):
        app = self.application

        # Команды
        app.add_handler(CommandHandler('start', self.start))
        app.add_handler(CommandHandler('help', self.help))
        app.add_handler(CommandHandler('newchat', self.new_chat))
        app.add_handler(CommandHandler('image', self.image))
        app.add_handler(CommandHandler('models', self.models))
        app.add_handler(CommandHandler('stats', self.stats))

        # Нажатия на inline-кнопки
        app.add_handler(CallbackQueryHandler(self.select_model, pattern=_exact_pattern(self.registry.models)))
        app.add_handler(CallbackQueryHandler(self.cancel_image, pattern=_exact_pattern([CANCEL_IMAGE_GENERATION])))
        app.add_handler(CallbackQueryHandler(self.select_quality, pattern=_exact_pattern(self.registry.qualities)))

        # Обычные сообщения
        app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_message))

        app.add_error_handler(self.error_handler)

    async def _post_init(self, application: Application) -> None:
        """Регистрация меню команд"""
        await application.bot.set_my_commands(
            [BotCommand(command, description) for command, description in texts.BOT_COMMANDS]
        )

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Обработчик команды /start"""
        tg_user = update.effective_user
        session = get_session(context)

        await update.message.reply_text(texts.START_MESSAGE, parse_mode=ParseMode.HTML)

        try:
            user = self.db_service.find_user_by_telegram_id(tg_user.id)
            if not user:
                response_message = await update.message.reply_text(texts.CREATING_BOT)
                user = self.db_service.create_user(
                    telegram_id=tg_user.id,
                    first_name=tg_user.first_name,
                    username=tg_user.username
                )
                self.logger.logger.info(f"User created - Telegram ID: {tg_user.id}")
                await response_message.edit_text(texts.BOT_CREATED)
            else:
                await update.message.reply_text(texts.ENTER_REQUEST)

            chat = self.db_service.create_chat(user.id)
            session.chat_id = chat.id
        except Exception as e:
            self.logger.log_handler_error('/start command', e)
            await update.message.reply_text(texts.ERROR_START)

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await update.message.reply_text(texts.HELP_MESSAGE, parse_mode=ParseMode.HTML)

    async def new_chat(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Обработчик команды /newchat"""
        session = get_session(context)

        try:
            user = self.db_service.find_user_by_telegram_id(update.effective_user.id)
            if not user:
                await update.message.reply_text(texts.PLEASE_START)
                return

            chat = self.db_service.create_chat(user.id)
            session.chat_id = chat.id

            await update.message.reply_text(texts.NEW_CHAT_CREATED)
        except Exception as e:
            self.logger.log_handler_error('/newchat command', e)
            await update.message.reply_text(texts.ERROR_NEW_CHAT)

    async def image(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.image_dialog.start(update, get_session(context))

    async def models(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Клавиатура выбора AI-модели"""
        user = self.db_service.find_user_by_telegram_id(update.effective_user.id)
        current = user.selected_model if user else None

        keyboard = InlineKeyboardMarkup([
            [InlineKeyboardButton(
                f"{'✅ ' if model == current else ''}{self.registry.label(model)}",
                callback_data=model
            )]
            for model in self.registry.models
        ])
        text = texts.CURRENT_MODEL.format(label=self.registry.label(current)) if current else texts.CHOOSE_MODEL
        await update.message.reply_text(text, reply_markup=keyboard)

    async def stats(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Статистика, только для администраторов"""
        telegram_id = update.effective_user.id
        if telegram_id not in self.config.admin_ids:
            self.logger.logger.warning(f"Stats requested by non-admin - Telegram ID: {telegram_id}")
            await update.message.reply_text(texts.NOT_ADMIN)
            return

        await update.message.reply_text(texts.STATS.format(**self.db_service.get_stats()))

    async def select_model(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        query = update.callback_query
        await query.answer()
        selected_model = query.data

        if not self.registry.is_valid_model(selected_model):
            await query.edit_message_text(texts.INVALID_MODEL)
            return

        try:
            user = self.db_service.find_user_by_telegram_id(update.effective_user.id)
            if not user:
                await query.message.reply_text(texts.PLEASE_START)
                return

            self.db_service.update_user_model(user.id, selected_model)
            await query.edit_message_text(
                texts.MODEL_SELECTED.format(label=self.registry.label(selected_model))
            )
        except Exception as e:
            self.logger.log_handler_error('model callback', e)
            await query.message.reply_text(texts.ERROR_SAVE_MODEL)

    async def select_quality(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.image_dialog.choose_quality(update, get_session(context))

    async def cancel_image(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        await self.image_dialog.cancel(update, get_session(context))

    def _resolve_chat(self, user: User, session) -> Optional[Chat]:
        """Активный чат: из сессии, иначе последний созданный"""
        if session.chat_id is not None:
            chat = self.db_service.find_chat_by_id(session.chat_id)
            # В группе сессия общая, чужой чат не используется
            if chat is None or chat.user_id == user.id:
                return chat

        latest_chat = self.db_service.find_latest_chat(user.id)
        if latest_chat:
            session.chat_id = latest_chat.id
        return latest_chat

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Обработка обычных сообщений"""
        session = get_session(context)
        telegram_id = update.effective_user.id

        # Описание изображения для активного диалога
        if await self.image_dialog.handle_prompt(update, session):
            return

        response_message = await update.message.reply_text(texts.LOADING)

        try:
            user = self.db_service.find_user_by_telegram_id(telegram_id)
            if not user:
                await response_message.edit_text(texts.USER_NOT_FOUND)
                return

            had_session_chat = session.chat_id is not None
            chat = self._resolve_chat(user, session)
            if not chat:
                await response_message.edit_text(texts.CHAT_NOT_FOUND if had_session_chat else texts.START_NEW_CHAT)
                return

            self.db_service.create_message(chat.id, user.id, 'user', update.message.text)

            history = self.history.assemble(chat.id)
            answer = self.gpt_service.get_gpt_response(history, telegram_id, user.selected_model)

            if not answer:
                await response_message.edit_text(texts.ERROR_GENERATION)
                return

            self.db_service.create_message(chat.id, user.id, 'assistant', answer)
            self.db_service.update_chat_timestamp(chat.id)

            await response_message.edit_text(answer)

        except Exception as e:
            self.logger.log_handler_error('message handler', e)
            await response_message.edit_text(texts.ERROR_MESSAGE)

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Ошибки, не перехваченные обработчиками"""
        update_id = update.update_id if isinstance(update, Update) else None
        self.logger.logger.error(f"Error while handling update {update_id}:")

        error = context.error
        if isinstance(error, NetworkError):
            self.logger.logger.error(f"Could not contact Telegram: {error}", exc_info=error)
        elif isinstance(error, TelegramError):
            self.logger.logger.error(f"Error in request: {error}", exc_info=error)
        else:
            self.logger.logger.error(f"Unknown error: {error}", exc_info=error)

        if not isinstance(update, Update) or update.effective_message is None:
            return
        try:
            await update.effective_message.reply_text(texts.ERROR_UNKNOWN)
        except Exception as reply_error:
            self.logger.logger.error(f"Failed to send error message to user: {reply_error}")


if __name__ == '__main__':
    config = BotConfig()
    bot = TelegramBot(config)
    bot.run()
