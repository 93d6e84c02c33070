from datetime import timedelta
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.orm import sessionmaker
from models.models import User, Chat, Message, utcnow


class DatabaseService:
    """Хранилище пользователей, чатов и сообщений"""

    def __init__(self, session_factory: sessionmaker, default_model: str):
        self.session_factory = session_factory
        self.default_model = default_model

    def find_user_by_telegram_id(self, telegram_id: int) -> Optional[User]:
        """Получение пользователя по telegram_id"""
        with self.session_factory() as db:
            return db.query(User).filter(User.telegram_id == telegram_id).first()

    def create_user(self, telegram_id: int, first_name: Optional[str] = None,
                    username: Optional[str] = None) -> User:
        with self.session_factory() as db:
            user = User(
                telegram_id=telegram_id,
                first_name=first_name,
                username=username,
                selected_model=self.default_model
            )
            db.add(user)
            db.commit()
            return user

    def update_user_model(self, user_id: int, model: str) -> Optional[User]:
        """Сохранение выбранной пользователем модели"""
        with self.session_factory() as db:
            user = db.get(User, user_id)
            if not user:
                return None
            user.selected_model = model
            db.commit()
            return user

    def create_chat(self, user_id: int) -> Chat:
        with self.session_factory() as db:
            chat = Chat(user_id=user_id)
            db.add(chat)
            db.commit()
            return chat

    def find_latest_chat(self, user_id: int) -> Optional[Chat]:
        """Последний созданный чат пользователя"""
        with self.session_factory() as db:
            return db.query(Chat)\
                .filter(Chat.user_id == user_id)\
                .order_by(Chat.created_at.desc(), Chat.id.desc())\
                .first()

    def find_chat_by_id(self, chat_id: int) -> Optional[Chat]:
        with self.session_factory() as db:
            return db.get(Chat, chat_id)

    def update_chat_timestamp(self, chat_id: int) -> None:
        with self.session_factory() as db:
            chat = db.get(Chat, chat_id)
            if chat:
                chat.updated_at = utcnow()
                db.commit()

    def create_message(self, chat_id: int, user_id: int, role: str, content: str) -> Message:
        """Сохранение сообщения"""
        with self.session_factory() as db:
            message = Message(
                chat_id=chat_id,
                user_id=user_id,
                role=role,
                content=content
            )
            db.add(message)
            db.commit()
            return message

    def list_messages(self, chat_id: int) -> List[Message]:
        """Сообщения чата в хронологическом порядке"""
        with self.session_factory() as db:
            return db.query(Message)\
                .filter(Message.chat_id == chat_id)\
                .order_by(Message.created_at.asc(), Message.id.asc())\
                .all()

    def get_stats(self) -> dict:
        """Сводка по пользователям, чатам и сообщениям для /stats"""
        with self.session_factory() as db:
            since = utcnow() - timedelta(days=1)
            return {
                'users': db.query(func.count(User.id)).scalar(),
                'chats': db.query(func.count(Chat.id)).scalar(),
                'messages': db.query(func.count(Message.id)).scalar(),
                'new_users_24h': db.query(func.count(User.id)).filter(User.created_at >= since).scalar(),
            }
