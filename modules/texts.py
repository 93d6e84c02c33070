START_MESSAGE = (
    "<b>Привет!</b> 👋\n\n"
    "Я чат-бот на основе GPT. Просто напишите вопрос, и я отвечу.\n"
    "Команда /help расскажет, что ещё я умею."
)

HELP_MESSAGE = (
    "<b>Что умеет бот</b>\n\n"
    "/start — начать диалог\n"
    "/newchat — начать новый чат, история предыдущего не учитывается\n"
    "/image — сгенерировать изображение по описанию\n"
    "/models — выбрать AI-модель\n"
    "/help — общая информация\n\n"
    "В рамках одного чата бот помнит последние сообщения переписки."
)

BOT_COMMANDS = [
    ('start', 'Начать диалог'),
    ('help', 'Общая информация'),
    ('newchat', 'Начать новый чат'),
    ('image', 'Сгенерировать изображение'),
    ('models', 'Выбрать AI-модель'),
]

LOADING = 'Загрузка...'
CREATING_BOT = 'Создаю Ваш персональный чат-бот, одну секунду...'
BOT_CREATED = 'Ваш персональный чат-бот создан. Пожалуйста, введите запрос'
ENTER_REQUEST = 'Пожалуйста, введите запрос'
NEW_CHAT_CREATED = 'Новый чат создан. Пожалуйста, введите запрос.'

PLEASE_START = 'Пожалуйста, начните с команды /start.'
USER_NOT_FOUND = 'Пользователь не найден. Пожалуйста, начните новый чат с помощью команды /start.'
START_NEW_CHAT = 'Пожалуйста, начните новый чат с помощью команды /start.'
CHAT_NOT_FOUND = 'Чат не найден. Пожалуйста, начните новый чат с помощью команды /start.'

CHOOSE_MODEL = 'Выберите AI-модель:'
CURRENT_MODEL = 'Текущая модель: {label}\n\nВыберите AI-модель:'
MODEL_SELECTED = 'Вы переключились на модель {label} ✅'
INVALID_MODEL = 'Неверная модель. Пожалуйста, выберите правильную модель.'

CHOOSE_QUALITY = (
    'Выберите качество изображения:\n'
    'standard — стандартное\n'
    'hd — повышенная детализация'
)
QUALITY_SELECTED = 'Выбрано качество: {quality}'
CANCEL_BUTTON = 'Отменить ❌'
CANCELLED_ANSWER = 'Отменено ✅'
IMAGE_CANCELLED = 'Генерация изображения отменена'
IMAGE_CANCEL_UNAVAILABLE = 'Отменить уже нельзя: бот ждёт описание изображения.'
NO_ACTIVE_IMAGE_DIALOG = 'Нет активной генерации изображения.'
QUALITY_CHOICE_EXPIRED = 'Выбор качества больше не актуален. Чтобы сгенерировать изображение, отправьте /image.'
NOT_YOUR_DIALOG = 'Эта кнопка относится к диалогу другого пользователя.'
ASK_IMAGE_PROMPT = 'Опишите изображение, которое нужно сгенерировать'
GENERATING_IMAGE = 'Генерирую изображение, это может занять до минуты...'
IMAGE_READY = 'Готово ✅'

NOT_ADMIN = 'Команда доступна только администраторам.'
STATS = (
    'Статистика бота\n\n'
    'Пользователей: {users}\n'
    'Новых за сутки: {new_users_24h}\n'
    'Чатов: {chats}\n'
    'Сообщений: {messages}'
)

# Сообщения об ошибках
ERROR_START = 'Произошла ошибка при создании персонального чат-бота. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_NEW_CHAT = 'Произошла ошибка при создании нового чата. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_SAVE_MODEL = 'Произошла ошибка при сохранении модели. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_GENERATION = 'Произошла ошибка при генерации ответа. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_IMAGE = 'Не удалось сгенерировать изображение. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_MESSAGE = 'Произошла ошибка при обработке запроса. Пожалуйста, обратитесь к администратору.'
ERROR_GENERIC = 'Что-то пошло не так. Пожалуйста, попробуйте позже или обратитесь в поддержку.'
ERROR_UNKNOWN = 'Произошла ошибка. Пожалуйста, попробуйте позже.'
