"""
Base application service providing common functionality.

This module provides a base class for all application services, with the
validation helpers and error factories they share.
"""

from abc import ABC

from jobcost.core.exceptions import (
    EntityNotFoundError,
    ValidationError,
)
from jobcost.infrastructure.database.repositories.base import BaseRepository


class ApplicationServiceBase(ABC):
    """
    Base class for application services.

    Services receive their repositories from the dependency layer; they
    never open sessions themselves.
    """

    def validate_non_empty_string(self, value: str | None, field_name: str) -> str:
        """
        Validate that a string field is not empty.

        Args:
            value: String value to validate
            field_name: Name of the field for error messages

        Returns:
            The stripped string

        Raises:
            ValidationError: If string is None or empty
        """
        if not value or not value.strip():
            raise ValidationError(field_name, value, f"{field_name} cannot be empty")
        return value.strip()

    def validate_reference(
        self, repository: BaseRepository, entity_id: int | None, field_name: str
    ) -> None:
        """
        Check that a foreign key in a request points at an existing row.

        Raises:
            ValidationError: If the referenced entity does not exist
        """
        if entity_id is None:
            return
        if not repository.exists(entity_id):
            raise ValidationError(
                field_name,
                entity_id,
                f"{repository.entity_name} {entity_id} does not exist",
            )

    def entity_not_found_error(
        self, entity_type: str, entity_id: int | str
    ) -> EntityNotFoundError:
        return EntityNotFoundError(entity_type, entity_id)
