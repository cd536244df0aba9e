from typing import Annotated, Any

from pydantic import BeforeValidator, StringConstraints


def _external_id_to_str(value: Any) -> Any:
    # Pexels ids arrive as JSON numbers from some screens and as strings from others
    if isinstance(value, bool):
        raise ValueError("content id must be a string or a number")
    if isinstance(value, int):
        return str(value)
    return value


ExternalContentId = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100),
    BeforeValidator(_external_id_to_str),
]
