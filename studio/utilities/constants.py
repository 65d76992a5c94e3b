from typing import Final

from studio.domain.BatchImage import AdFormat

AD_STYLES: Final[tuple[str, ...]] = (
    'Realista', 'Cinematográfico', 'Minimalista', 'Tipográfico',
    'Ilustrativo', 'Abstracto', 'Vintage', 'Futurista',
)
DEFAULT_AD_STYLE: Final[str] = 'Realista'

AD_FORMATS: Final[tuple[AdFormat, ...]] = (
    AdFormat('Reel/Historia', '9:16'),
    AdFormat('Post Cuadrado', '1:1'),
    AdFormat('Anuncio Horizontal', '16:9'),
)

EXPERIENCE_LEVELS: Final[tuple[str, ...]] = ('principiante', 'intermedio', 'avanzado')

PLAN_PROMPT_TEMPLATE: Final[str] = (
    """
Eres un entrenador personal certificado. Crea un plan de entrenamiento de {weeks} semanas
para la siguiente persona:

- Edad: {age} años
- Sexo: {sex}
- Peso: {weight_kg} kg
- Altura: {height_cm} cm
- Nivel de experiencia: {level}
- Objetivo: {goal}
- Días de entrenamiento por semana: {days_per_week}
- Material disponible: {equipment}
- Lesiones o limitaciones: {limitations}

Cada semana debe tener exactamente {days_per_week} días de entrenamiento. Para cada ejercicio
incluye series, repeticiones, RPE, descanso, una descripción breve de la técnica y un campo
"imageQuery" con una descripción corta en inglés para generar una ilustración del ejercicio.

Responde ÚNICAMENTE con un documento JSON válido, sin texto adicional, con este formato:
"""
)

PLAN_JSON_FORMAT: Final[str] = (
    """
{
  "title": str,
  "introduction": str,
  "weeklyPlan": [
    {
      "week": int,
      "plan": [
        {
          "day": str,
          "exercises": [
            {
              "name": str,
              "sets": str,
              "reps": str,
              "rpe": str,
              "rest": str,
              "description": str,
              "imageQuery": str
            }
          ]
        }
      ]
    }
  ],
  "nutritionAdvice": {
    "protein": str,
    "hydration": str,
    "sleep": str
  },
  "finalMessage": str
}
    """
)

EXERCISE_IMAGE_TEMPLATE: Final[str] = (
    "Clean, well-lit fitness illustration of a person performing: {query}. "
    "Neutral gym background, correct form, no text."
)
