import base64
import codecs
import os
from dataclasses import dataclass
from typing import List, Dict, Optional, Union

import requests
from config.config import BotConfig
from .logger import BotLogger

DEFAULT_ROLE = "You are a helpful assistant. Answer in the language of the user."


@dataclass
class GeneratedImage:
    url: Optional[str] = None
    data: Optional[bytes] = None

    @property
    def photo(self) -> Union[str, bytes]:
        """Значение, которое принимает send_photo"""
        return self.url if self.url else self.data


class GPTService:
    def __init__(self, config: BotConfig, logger: BotLogger):
        self.config = config
        self.headers = {'Authorization': f"Bearer {config.gpt_key}"}
        self.base_url = config.openai_base_url.rstrip('/')
        self.logger = logger
        self.role = self._load_role()

    def _load_role(self) -> str:
        """Загрузка системной роли бота"""
        role_path = os.path.join(os.getcwd(), self.config.role_file)
        try:
            with codecs.open(role_path, 'r', encoding='utf-8') as file:
                return file.read().strip() or DEFAULT_ROLE
        except OSError as e:
            self.logger.logger.warning(f"Role file not loaded, using default role: {e}")
            return DEFAULT_ROLE

    def _post(self, endpoint: str, data: dict) -> Optional[dict]:
        url = f'{self.base_url}/{endpoint}'
        response = requests.post(
            url=url,
            json=data,
            headers=self.headers,
            timeout=self.config.request_timeout
        )
        if response.status_code != 200:
            self.logger.log_api_request(endpoint, response.status_code, response.text)
            return None
        self.logger.log_api_request(endpoint, response.status_code)
        return response.json()

    def get_gpt_response(self, history: List[Dict[str, str]], telegram_id: int,
                         model: str, temperature: float = None) -> Optional[str]:
        """Ответ модели на историю диалога или None, если получить его не удалось"""
        try:
            temp = temperature if temperature is not None else self.config.temperature
            data = {
                'model': model,
                'messages': [{'role': 'system', 'content': self.role}] + list(history),
                'temperature': temp,
                'user': str(telegram_id),
            }

            self.logger.logger.debug(f"Sending chat completion request, model {model}, {len(history)} messages")
            payload = self._post('chat/completions', data)
            if payload is None:
                self.logger.log_gpt_interaction(telegram_id, model, False, "bad response status")
                return None

            choices = payload.get('choices') or []
            content = choices[0].get('message', {}).get('content') if choices else None
            if not content or not content.strip():
                self.logger.log_gpt_interaction(telegram_id, model, False, "empty completion")
                return None

            self.logger.log_gpt_interaction(telegram_id, model, True)
            return content.strip()

        except (requests.RequestException, ValueError, TypeError, AttributeError, IndexError) as e:
            self.logger.log_gpt_interaction(telegram_id, model, False, str(e))
            self.logger.logger.error(f"GPT Error: {str(e)}", exc_info=True)
            return None

    def generate_image(self, prompt: str, quality: str, telegram_id: int) -> Optional[GeneratedImage]:
        """Генерация изображения по описанию, None при ошибке"""
        try:
            data = {
                'model': self.config.image_model,
                'prompt': prompt,
                'quality': quality,
                'size': self.config.image_size,
                'n': 1,
                'user': str(telegram_id),
            }
            payload = self._post('images/generations', data)
            items = (payload or {}).get('data') or []
            if not items:
                self.logger.log_image_generation(telegram_id, quality, False, "no image in response")
                return None

            item = items[0]
            if item.get('url'):
                image = GeneratedImage(url=item['url'])
            elif item.get('b64_json'):
                image = GeneratedImage(data=base64.b64decode(item['b64_json']))
            else:
                self.logger.log_image_generation(telegram_id, quality, False, "unknown image format")
                return None

            self.logger.log_image_generation(telegram_id, quality, True)
            return image

        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            self.logger.log_image_generation(telegram_id, quality, False, str(e))
            self.logger.logger.error(f"Image generation error: {str(e)}", exc_info=True)
            return None
