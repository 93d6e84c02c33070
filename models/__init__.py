from .models import User, Chat, Message
from .database import init_db, create_session_factory, Base

__all__ = ['User', 'Chat', 'Message', 'init_db', 'create_session_factory', 'Base']
