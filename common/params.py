from django.conf import settings
from rest_framework.exceptions import ValidationError


def _max_limit() -> int:
    return int(getattr(settings, "FEED_LIMITS", {}).get("MAX_LIMIT", 100))


def query_limit(request, default: int, name: str = "limit") -> int:
    """?limit= 파싱. 없거나 0 이면 기본값, 음수/숫자 아님은 400, 상한은 MAX_LIMIT."""
    raw = request.query_params.get(name)
    if raw in (None, ""):
        return default
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ValidationError({name: "Must be an integer"})
    if value < 0:
        raise ValidationError({name: "Must not be negative"})
    if value == 0:
        return default
    return min(value, _max_limit())


UUID_LOOKUP_REGEX = r"[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}"
