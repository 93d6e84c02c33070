from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

# Создаем базовый класс для моделей
Base = declarative_base()


def create_session_factory(database_url: str, **engine_kwargs) -> sessionmaker:
    """Создание движка и фабрики сессий для указанной базы данных"""
    engine = create_engine(database_url, **engine_kwargs)
    # Объекты остаются доступными после закрытия сессии
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


# Функция инициализации базы данных
def init_db(session_factory: sessionmaker) -> None:
    Base.metadata.create_all(bind=session_factory.kw['bind'])
