from datetime import datetime, timezone as dt_timezone

from rest_framework import serializers


def to_epoch_ms(value: datetime | None) -> int | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt_timezone.utc)
    return int(value.timestamp() * 1000)


def from_epoch_ms(value: int) -> datetime:
    return datetime.fromtimestamp(int(value) / 1000, tz=dt_timezone.utc)


class EpochMillisecondsField(serializers.Field):
    """datetime <-> epoch milliseconds(int). API 의 모든 타임스탬프 표현."""

    default_error_messages = {"invalid": "Expected an integer timestamp in milliseconds."}

    def to_representation(self, value):
        return to_epoch_ms(value)

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail("invalid")
        try:
            return from_epoch_ms(int(data))
        except (TypeError, ValueError, OverflowError, OSError):
            self.fail("invalid")
