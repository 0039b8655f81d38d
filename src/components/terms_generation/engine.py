"""
Terms template engine.

Templates carry ``{{variable}}`` placeholders and an optional JSON schema
describing their variables::

    {"clientName": {"type": "string", "required": true},
     "monthlyFee": {"type": "number"}}

Everything here is pure: no I/O, no clock. Callers pass `now` in.
"""

from __future__ import annotations

import calendar
import json
import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, TypeVar

from src.components.crud import EntityValidationError
from src.domain.entities import Distributor
from src.rules.models import TermsRules

VARIABLE_PATTERN = re.compile(r"\{\{([^}]+)\}\}")

D = TypeVar("D", date, datetime)


class VariableSchemaError(ValueError):
    """The template's variable schema is not a JSON object of objects."""


@dataclass(frozen=True)
class VariableSpec:
    name: str
    type: str = "string"
    required: bool = False


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True


def parse_variable_schema(raw: str | dict[str, Any] | None) -> dict[str, VariableSpec]:
    """
    Parse a template's `variables` column.

    Raises VariableSchemaError if it is not a JSON object whose values are objects.
    """
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return {}

    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise VariableSchemaError(f"Variables are not valid JSON: {e.msg}") from e
    else:
        data = raw

    if not isinstance(data, dict):
        raise VariableSchemaError("Variables must be a JSON object")

    specs: dict[str, VariableSpec] = {}
    for name, definition in data.items():
        if not isinstance(definition, dict):
            raise VariableSchemaError(f"Definition of variable '{name}' must be an object")
        specs[name] = VariableSpec(
            name=name,
            type=str(definition.get("type") or "string").lower(),
            required=_as_bool(definition.get("required", False)),
        )
    return specs


def _is_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
        return True
    except ValueError:
        pass
    try:
        datetime.fromisoformat(value)
        return True
    except ValueError:
        return False


def is_valid_type(value: Any, expected_type: str) -> bool:
    """Whether a supplied value fits a declared variable type. Unknown types accept anything."""
    if value is None:
        return True

    kind = expected_type.lower()
    if kind == "string":
        return isinstance(value, str)
    if kind == "number":
        return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)
    if kind == "boolean":
        return isinstance(value, bool)
    if kind == "date":
        if isinstance(value, (date, datetime)):
            return True
        return isinstance(value, str) and _is_iso_date(value)
    return True


def validate_variables(
    schema: dict[str, VariableSpec], values: dict[str, Any]
) -> list[EntityValidationError]:
    """Check required presence and declared types. All failures are reported."""
    errors: list[EntityValidationError] = []

    for name, spec in schema.items():
        value = values.get(name)
        if spec.required and value is None:
            errors.append(
                EntityValidationError(
                    code="variable_required",
                    message=f"Required variable '{name}' is missing",
                    field=name,
                )
            )
            continue
        if name in values and not is_valid_type(value, spec.type):
            errors.append(
                EntityValidationError(
                    code="variable_type_invalid",
                    message=f"Variable '{name}' has invalid type. Expected: {spec.type}",
                    field=name,
                )
            )

    return errors


def format_value(value: Any, rules: TermsRules | None = None) -> str:
    rules = rules or TermsRules()
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.strftime(rules.datetime_format)
    if isinstance(value, date):
        return value.strftime(rules.date_format)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def process_template(
    content: str | None,
    variables: dict[str, Any] | None,
    rules: TermsRules | None = None,
) -> str | None:
    """
    Replace every ``{{name}}`` whose variable has a value.

    Unknown or null variables leave their placeholder untouched. Substituted
    text is not scanned again.
    """
    if content is None or variables is None:
        return content

    def replace(match: re.Match[str]) -> str:
        value = variables.get(match.group(1).strip())
        if value is None:
            return match.group(0)
        return format_value(value, rules)

    return VARIABLE_PATTERN.sub(replace, content)


def extract_placeholders(content: str | None) -> list[str]:
    """Placeholder names in order of first appearance."""
    if not content:
        return []
    seen: dict[str, None] = {}
    for match in VARIABLE_PATTERN.finditer(content):
        seen.setdefault(match.group(1).strip(), None)
    return list(seen)


def default_variables(
    distributor: Distributor | None,
    now: datetime,
    rules: TermsRules | None = None,
) -> dict[str, Any]:
    """Variables every template may use without the caller supplying them."""
    rules = rules or TermsRules()
    variables: dict[str, Any] = {
        "currentDate": now.strftime(rules.date_format),
        "currentDateTime": now.strftime(rules.datetime_format),
    }
    if distributor is None:
        return variables

    variables.update(
        {
            "distributorName": distributor.name,
            "distributorDisplayName": distributor.display_name,
            "distributorTaxId": distributor.tax_id,
            "distributorEmail": distributor.support_email,
            "distributorAddress": distributor.address_line,
            "distributorCity": distributor.city,
            "distributorState": distributor.state,
            "distributorCountry": distributor.country_code,
            "distributorPostalCode": distributor.postal_code,
            "distributorWebsite": distributor.website_url,
        }
    )
    return variables


def add_months(moment: D, months: int) -> D:
    """Calendar month arithmetic; the day is clamped to the target month's length."""
    index = moment.month - 1 + months
    year = moment.year + index // 12
    month = index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def needs_renewal(expiration: datetime | None, now: datetime, window_days: int) -> bool:
    """True once `now` is inside the renewal window before expiration."""
    if expiration is None:
        return False
    return now > expiration - timedelta(days=window_days)
