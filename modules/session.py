from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .ai_models import STANDARD_QUALITY

SESSION_KEY = 'session'


class DialogState(str, Enum):
    """Состояния диалога генерации изображения"""
    IDLE = 'idle'
    AWAITING_QUALITY_CHOICE = 'awaiting_quality_choice'
    AWAITING_PROMPT = 'awaiting_prompt'
    GENERATING = 'generating'
    DELIVERED = 'delivered'
    CANCELLED = 'cancelled'
    FAILED = 'failed'


ACTIVE_DIALOG_STATES = (
    DialogState.AWAITING_QUALITY_CHOICE,
    DialogState.AWAITING_PROMPT,
    DialogState.GENERATING,
)


@dataclass
class SessionState:
    """Эфемерное состояние переписки, хранится в chat_data, а не в базе"""
    chat_id: Optional[int] = None
    image_quality: str = STANDARD_QUALITY
    dialog_state: DialogState = DialogState.IDLE
    dialog_user_id: Optional[int] = None

    @property
    def dialog_active(self) -> bool:
        return self.dialog_state in ACTIVE_DIALOG_STATES

    def begin_dialog(self, user_id: int, state: DialogState) -> None:
        self.dialog_user_id = user_id
        self.dialog_state = state

    def finish_dialog(self, state: DialogState) -> None:
        self.dialog_state = state
        self.dialog_user_id = None

    def awaits_prompt_from(self, user_id: int) -> bool:
        return self.dialog_state == DialogState.AWAITING_PROMPT and self.dialog_user_id == user_id


def get_session(context) -> SessionState:
    """Сессия текущего чата, создается с настройками по умолчанию при отсутствии"""
    session = context.chat_data.get(SESSION_KEY)
    if not isinstance(session, SessionState):
        session = SessionState()
        context.chat_data[SESSION_KEY] = session
    return session
