"""
Shared behavior for records that travel as JSON: key matching on decode,
omit-empty on encode and RFC 3339 timestamps.
"""
import json
import re
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator

# Timestamp used when a descriptor leaves ``created`` unset.
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?"
    r"([Zz]|[+-]\d{2}:\d{2})\Z",
    re.ASCII,
)

_SURROGATE_ESCAPE = re.compile(r"\\u[dD][89a-fA-F]")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON token: {name}")


def _replace_surrogates(value: Any) -> Any:
    if isinstance(value, str):
        return _LONE_SURROGATE.sub("\ufffd", value)
    if isinstance(value, list):
        return [_replace_surrogates(item) for item in value]
    if isinstance(value, dict):
        return {
            _replace_surrogates(key): _replace_surrogates(item)
            for key, item in value.items()
        }
    return value


def load_json(data: bytes) -> Any:
    """
    Decodes strict JSON from UTF-8 bytes.

    A byte order mark, other text encodings and the NaN/Infinity tokens are
    rejected with ValueError. Escaped surrogates that do not form a pair become
    U+FFFD.
    """
    text = bytes(data).decode("utf-8")
    if text.startswith("\ufeff"):
        raise ValueError("invalid character \\ufeff looking for beginning of value")

    payload = json.loads(text, parse_constant=_reject_constant)
    if _SURROGATE_ESCAPE.search(text):
        payload = _replace_surrogates(payload)
    return payload


def parse_timestamp(value: Any) -> datetime:
    """
    Parses an RFC 3339 timestamp. Fractions finer than a microsecond are
    truncated; ``None`` yields the zero timestamp.
    """
    if value is None:
        return ZERO_TIME
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise ValueError("timestamp must be an RFC 3339 string")

    match = _RFC3339.match(value)
    if not match:
        raise ValueError(f"invalid RFC 3339 timestamp: {value!r}")

    year, month, day, hour, minute, second, fraction, offset = match.groups()
    microsecond = int((fraction or "").ljust(6, "0")[:6])

    if offset in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if offset[0] == "-" else 1
        hours, minutes = offset[1:].split(":")
        tz = timezone(sign * timedelta(hours=int(hours), minutes=int(minutes)))

    return datetime(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second),
        microsecond, tzinfo=tz,
    )


def format_timestamp(value: datetime) -> str:
    """Formats a timestamp as RFC 3339 with trailing fraction zeros removed."""
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += f".{value.microsecond:06d}".rstrip("0")

    offset = value.utcoffset()
    if not offset:
        return text + "Z"

    total = int(offset.total_seconds()) // 60
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total), 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, int):
        return value == 0
    return False


class WireModel(BaseModel):
    """
    Base for descriptor records.

    Decoding follows the conventions image tooling expects: an exact key wins,
    otherwise keys match case-insensitively; ``null`` leaves a field at its
    default; unknown keys are ignored. Encoding drops every empty field except
    those named in ``always_emit``.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    always_emit: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data

        exact = set()
        folded: Dict[str, str] = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            exact.update((name, key))
            folded[key.lower()] = key

        matched = {}
        for key, value in data.items():
            if value is None:
                continue
            target = key if key in exact else folded.get(key.lower(), key)
            matched[target] = value
        return matched

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        for name, field in type(self).model_fields.items():
            if name in self.always_emit or not _is_empty(getattr(self, name)):
                continue
            data.pop(field.alias or name, None)
            data.pop(name, None)
        return data

    def to_json(self) -> bytes:
        """
        Encodes the record in compact form, fields in declaration order.
        """
        payload = self.model_dump(mode="json", by_alias=True)
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
