from .gpt_service import GPTService
from .logger import BotLogger
from .ai_models import ModelRegistry
from .history import HistoryAssembler
from .image_dialog import ImageDialog
from .session import SessionState, DialogState, get_session

__all__ = ['GPTService', 'BotLogger', 'ModelRegistry', 'HistoryAssembler',
           'ImageDialog', 'SessionState', 'DialogState', 'get_session']
