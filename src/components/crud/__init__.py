"""
CRUD component - Life cycle shared by every managed resource.
"""

from ._impl import EntityService, ExclusiveFlag, errors_from_validation
from .component import (
    run_create,
    run_delete,
    run_filter,
    run_get,
    run_list,
    run_set_flag,
    run_update,
)
from .models import (
    CreateInput,
    DeleteInput,
    EntityValidationError,
    FilterInput,
    FilterOutput,
    GetInput,
    ListOutput,
    OperationOutput,
    PageOutput,
    SetFlagInput,
    UpdateInput,
)
from .ports import ClockPort, EntityRepoPort

__all__ = [
    # Entry points
    "run_create",
    "run_update",
    "run_delete",
    "run_get",
    "run_list",
    "run_filter",
    "run_set_flag",
    # Input models
    "CreateInput",
    "UpdateInput",
    "DeleteInput",
    "GetInput",
    "FilterInput",
    "SetFlagInput",
    # Output models
    "OperationOutput",
    "ListOutput",
    "PageOutput",
    "FilterOutput",
    "EntityValidationError",
    # Ports
    "EntityRepoPort",
    "ClockPort",
    # Service
    "EntityService",
    "ExclusiveFlag",
    "errors_from_validation",
]
