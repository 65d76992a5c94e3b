"""Prompt templating for the coach plan, exercise illustrations and ad batches."""
from studio.domain.BatchImage import AdFormat
from studio.utilities.constants import EXERCISE_IMAGE_TEMPLATE, PLAN_JSON_FORMAT, PLAN_PROMPT_TEMPLATE
from studio.utilities.validators import AdRequestInput, ProfileInput


def _fmt_number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def build_plan_prompt(profile: ProfileInput) -> str:
    prompt = PLAN_PROMPT_TEMPLATE.format(
        weeks=profile.weeks,
        age=profile.age,
        sex=profile.sex,
        weight_kg=_fmt_number(profile.weight_kg),
        height_cm=_fmt_number(profile.height_cm),
        level=profile.level,
        goal=profile.goal,
        days_per_week=profile.days_per_week,
        equipment=profile.equipment or "ninguno (peso corporal)",
        limitations=profile.limitations or "ninguna",
    )
    return prompt + PLAN_JSON_FORMAT


def build_exercise_image_prompt(query: str) -> str:
    return EXERCISE_IMAGE_TEMPLATE.format(query=query.strip())


def build_ad_prompt(request: AdRequestInput) -> str:
    """Base prompt shared by every format of an ad batch."""
    prompt = (
        f'Crea una imagen de alta calidad para un anuncio de Meta (Facebook/Instagram). '
        f'El anuncio es para un producto o servicio llamado "{request.title}". '
        f'El estilo visual debe ser {request.style}.'
    )
    if request.add_text:
        prompt += (
            f' La imagen debe incluir el texto "{request.title}" de forma grande, clara y legible, '
            f'perfectamente integrado en el diseño.'
        )
    else:
        prompt += ' La imagen no debe contener texto.'
    return prompt


def build_format_prompt(base_prompt: str, ad_format: AdFormat) -> str:
    return f"{base_prompt} El formato de la imagen debe ser para {ad_format.name}."
