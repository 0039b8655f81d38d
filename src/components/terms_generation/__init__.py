"""
Terms generation component - Renders templates into distributor documents.
"""

from ._impl import TermsGenerationService
from .component import (
    run_generate,
    run_needs_renewal,
    run_preview,
    run_renew,
    run_renew_due,
)
from .engine import (
    VariableSchemaError,
    VariableSpec,
    add_months,
    default_variables,
    extract_placeholders,
    format_value,
    is_valid_type,
    needs_renewal,
    parse_variable_schema,
    process_template,
    validate_variables,
)
from .models import (
    GenerateInput,
    GenerationOutput,
    PreviewInput,
    PreviewOutput,
    RenewalCheckOutput,
    RenewalReport,
    RenewInput,
)

__all__ = [
    # Entry points
    "run_generate",
    "run_preview",
    "run_needs_renewal",
    "run_renew",
    "run_renew_due",
    # Input models
    "GenerateInput",
    "PreviewInput",
    "RenewInput",
    # Output models
    "GenerationOutput",
    "PreviewOutput",
    "RenewalCheckOutput",
    "RenewalReport",
    # Engine
    "VariableSpec",
    "VariableSchemaError",
    "parse_variable_schema",
    "validate_variables",
    "is_valid_type",
    "format_value",
    "process_template",
    "extract_placeholders",
    "default_variables",
    "add_months",
    "needs_renewal",
    # Service
    "TermsGenerationService",
]
