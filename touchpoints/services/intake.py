"""
Typed intake boundary

parse_record turns an untyped payload into Valid(record) or Invalid(errors).
Handlers branch on the result; nothing downstream ever sees a raw dict.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from touchpoints.core.errors import ValidationError
from touchpoints.models.events import INTAKE_MODELS


@dataclass(frozen=True)
class Valid:
    record: BaseModel


@dataclass(frozen=True)
class Invalid:
    errors: List[str] = field(default_factory=list)


ParseResult = Union[Valid, Invalid]


def _message(err: Dict[str, Any]) -> str:
    loc = ".".join(str(part) for part in err.get("loc", ()))
    msg = str(err.get("msg", "invalid value"))
    # pydantic prefixes custom validator messages
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f"{loc}: {msg}" if loc else msg


def parse_record(kind: str, payload: Any) -> ParseResult:
    """Validate payload against the intake model for kind"""
    model = INTAKE_MODELS.get(kind)
    if model is None:
        return Invalid([f"Unknown record kind: {kind}"])
    if not isinstance(payload, dict):
        return Invalid(["Request body must be a JSON object"])
    try:
        return Valid(model.model_validate(payload))
    except PydanticValidationError as e:
        return Invalid([_message(err) for err in e.errors()])


def require_valid(kind: str, payload: Any) -> BaseModel:
    """parse_record, raising ValidationError on Invalid"""
    result = parse_record(kind, payload)
    if isinstance(result, Invalid):
        raise ValidationError(result.errors)
    return result.record
