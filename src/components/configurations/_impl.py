"""
Configuration services.

Distributor configuration values are checked against the validation
pattern of their data type.
"""

from __future__ import annotations

import re
from typing import Any

from src.components.crud import EntityRepoPort, EntityService, EntityValidationError
from src.domain.entities import (
    ConfigurationDataType,
    ConfigurationScope,
    DistributorConfiguration,
)


class ConfigurationScopeService(EntityService[ConfigurationScope]):
    model = ConfigurationScope
    label = "configuration_scope"
    unique_together = (("code",),)


class ConfigurationDataTypeService(EntityService[ConfigurationDataType]):
    model = ConfigurationDataType
    label = "configuration_data_type"
    unique_together = (("code",),)

    def validate(
        self, entity: ConfigurationDataType, existing: ConfigurationDataType | None
    ) -> list[EntityValidationError]:
        if entity.validation_regex is None:
            return []
        try:
            re.compile(entity.validation_regex)
        except re.error as e:
            return [
                EntityValidationError(
                    code="validation_regex_invalid",
                    message=f"Invalid regular expression: {e}",
                    field="validation_regex",
                )
            ]
        return []


class DistributorConfigurationService(EntityService[DistributorConfiguration]):
    model = DistributorConfiguration
    label = "configuration"
    scope_fields = ("distributor_id",)

    def __init__(
        self,
        repo: EntityRepoPort[DistributorConfiguration],
        data_type_repo: EntityRepoPort[ConfigurationDataType],
        **kwargs: Any,
    ) -> None:
        super().__init__(repo, **kwargs)
        self._data_type_repo = data_type_repo

    def validate(
        self, entity: DistributorConfiguration, existing: DistributorConfiguration | None
    ) -> list[EntityValidationError]:
        errors: list[EntityValidationError] = []

        if (
            entity.effective_from
            and entity.effective_until
            and entity.effective_until < entity.effective_from
        ):
            errors.append(
                EntityValidationError(
                    code="effective_period_invalid",
                    message="effective_until cannot precede effective_from",
                    field="effective_until",
                )
            )

        if entity.data_type_id is None:
            return errors

        data_type = self._data_type_repo.get_by_id(entity.data_type_id)
        if data_type is None:
            errors.append(
                EntityValidationError(
                    code="data_type_unknown",
                    message=f"Configuration data type {entity.data_type_id} does not exist",
                    field="data_type_id",
                )
            )
        elif (
            data_type.validation_regex
            and entity.config_value is not None
            and re.fullmatch(data_type.validation_regex, entity.config_value) is None
        ):
            errors.append(
                EntityValidationError(
                    code="config_value_invalid",
                    message=f"Value does not match the {data_type.code} format",
                    field="config_value",
                )
            )
        return errors
