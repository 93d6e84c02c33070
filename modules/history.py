from typing import Dict, List
from services.database_service import DatabaseService


class HistoryAssembler:
    def __init__(self, db_service: DatabaseService, max_length: int):
        if max_length < 1:
            raise ValueError("max_length must be positive")
        self.db_service = db_service
        self.max_length = max_length

    def assemble(self, chat_id: int) -> List[Dict[str, str]]:
        """Последние max_length сообщений чата в хронологическом порядке"""
        messages = self.db_service.list_messages(chat_id)
        return [
            {'role': message.role, 'content': message.content}
            for message in messages[-self.max_length:]
        ]
