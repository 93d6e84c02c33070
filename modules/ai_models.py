from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Tuple

AI_MODEL_LABELS = {
    'gpt-4o-mini': 'GPT-4o mini',
    'gpt-4o': 'GPT-4o',
    'gpt-4.1-mini': 'GPT-4.1 mini',
    'gpt-4.1': 'GPT-4.1',
}

STANDARD_QUALITY = 'standard'
HD_QUALITY = 'hd'
IMAGE_QUALITY_LABELS = {
    STANDARD_QUALITY: 'Standard',
    HD_QUALITY: 'HD',
}

CANCEL_IMAGE_GENERATION = 'cancelImageGeneration'


@dataclass(frozen=True)
class ModelRegistry:
    """Неизменяемый справочник AI-моделей и уровней качества изображений"""
    model_labels: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(AI_MODEL_LABELS)))
    quality_labels: Mapping[str, str] = field(default_factory=lambda: MappingProxyType(dict(IMAGE_QUALITY_LABELS)))
    default_model: str = 'gpt-4o-mini'
    default_quality: str = STANDARD_QUALITY

    def __post_init__(self):
        if self.default_model not in self.model_labels:
            raise ValueError(f"Unknown default model: {self.default_model}")
        if self.default_quality not in self.quality_labels:
            raise ValueError(f"Unknown default quality: {self.default_quality}")

    @property
    def models(self) -> Tuple[str, ...]:
        return tuple(self.model_labels)

    @property
    def qualities(self) -> Tuple[str, ...]:
        return tuple(self.quality_labels)

    def is_valid_model(self, candidate: str) -> bool:
        return candidate in self.model_labels

    def is_valid_quality(self, candidate: str) -> bool:
        return candidate in self.quality_labels

    def label(self, model: str) -> str:
        return self.model_labels.get(model, model)
