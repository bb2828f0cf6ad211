# assignmentpro/utils/forms.py
from typing import Type, TypeVar
from pydantic import BaseModel, ValidationError

from assignmentpro.utils.exceptions import ValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)

def _describe(error: dict) -> str:
    message = error.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {message}" if location else message

def parse_form(model_cls: Type[ModelT], **fields) -> ModelT:
    """Validate multipart form fields against a request schema.

    Form parameters cannot be bound to a pydantic model directly the way JSON
    bodies are, so multipart endpoints collect their fields and run them
    through the same schema here. Fields left as None are dropped so that
    schema defaults apply.
    """
    data = {key: value for key, value in fields.items() if value is not None}
    try:
        return model_cls(**data)
    except ValidationError as e:
        raise ValidationFailed("; ".join(_describe(err) for err in e.errors()))
