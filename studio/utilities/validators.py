"""
Input validation schemas using Pydantic for the coach and ad forms.
"""
from pydantic import BaseModel, Field, ValidationError, field_validator
from typing import Any, Mapping, Type, TypeVar

from studio.domain.errors import InvalidInput
from studio.utilities.constants import AD_STYLES, DEFAULT_AD_STYLE, EXPERIENCE_LEVELS

ModelT = TypeVar("ModelT", bound=BaseModel)


class ProfileInput(BaseModel):
    """Schema for the training profile submitted on the coach page."""
    age: int = Field(..., ge=14, le=100)
    sex: str = Field(..., min_length=1, max_length=30)
    weight_kg: float = Field(..., gt=20, le=400)
    height_cm: float = Field(..., gt=100, le=250)
    level: str = Field(default='principiante')
    goal: str = Field(..., min_length=1, max_length=300)
    days_per_week: int = Field(..., ge=1, le=7)
    weeks: int = Field(default=4, ge=1, le=12)
    equipment: str = Field(default='', max_length=300)
    limitations: str = Field(default='', max_length=500)

    @field_validator('sex', 'goal', 'equipment', 'limitations')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('goal')
    @classmethod
    def validate_goal(cls, v):
        if not v:
            raise ValueError('Indica un objetivo de entrenamiento')
        return v

    @field_validator('level')
    @classmethod
    def validate_level(cls, v):
        level = (v or '').strip().lower()
        if level not in EXPERIENCE_LEVELS:
            raise ValueError(f"Nivel no válido: {v}")
        return level


class AdRequestInput(BaseModel):
    """Schema for the ad studio form."""
    title: str = Field(default='', max_length=120)
    style: str = Field(default=DEFAULT_AD_STYLE)
    add_text: bool = False

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v or not v.strip():
            raise ValueError('Por favor, introduce un título para el anuncio.')
        return v.strip()

    @field_validator('style')
    @classmethod
    def validate_style(cls, v):
        if v not in AD_STYLES:
            raise ValueError(f"Estilo no válido: {v}")
        return v


def validate_input(model: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate raw form data, turning the first pydantic error into InvalidInput."""
    try:
        return model.model_validate(dict(data or {}))
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first.get('loc', ()))
        message = first.get('msg', 'Entrada no válida')
        # pydantic prefixes messages raised from validators
        message = message.removeprefix('Value error, ')
        if first.get('type') == 'missing':
            message = f"Falta el campo obligatorio: {field}"
        raise InvalidInput(message, field=field or None) from e
