"""Input validation helpers."""

from __future__ import annotations

from pydantic import ValidationError


def jsonable_errors(exc: ValidationError) -> list[dict]:
    """pydantic error list with ctx values stringified for JSON output."""
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        if "input" in err:
            err["input"] = str(err["input"])
    return errors
