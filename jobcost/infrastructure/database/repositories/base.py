"""
Base repository implementation providing generic CRUD operations.

Concrete repositories extend BaseRepository with their entity_class and the
joined or filtered queries their handlers need. Every SQLAlchemy failure is
rolled back and re-raised as a repository exception.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, SQLModel, select

from jobcost.core.exceptions import DomainError, EntityNotFoundError, ErrorType

EntityType = TypeVar("EntityType", bound=SQLModel)
CreateType = TypeVar("CreateType", bound=SQLModel)
UpdateType = TypeVar("UpdateType", bound=SQLModel)


class RepositoryException(DomainError):
    """Base exception for repository layer errors."""

    def __init__(
        self, message: str, details: dict[str, str | int | bool | None] | None = None
    ) -> None:
        super().__init__(message, ErrorType.REPOSITORY, details)


class EntityAlreadyExistsError(RepositoryException):
    """Raised when an insert or update hits a unique constraint."""

    pass


class EntityInUseError(RepositoryException):
    """Raised when a delete is refused because other rows still reference the entity."""

    pass


class DatabaseError(RepositoryException):
    """Raised when a database operation fails."""

    pass


class BaseRepository(Generic[EntityType, CreateType, UpdateType], ABC):
    """
    Base repository class providing generic CRUD operations.

    Each write commits its own transaction. Repositories that must write
    several rows atomically do so in a single commit of their own.
    """

    def __init__(self, session: Session):
        """
        Initialize repository with database session.

        Args:
            session: SQLModel database session
        """
        self.session = session

    @property
    @abstractmethod
    def entity_class(self) -> type[EntityType]:
        """Return the SQLModel entity class managed by this repository."""
        pass

    @property
    def entity_name(self) -> str:
        return self.entity_class.__name__

    def _to_entity(self, entity_data: CreateType | EntityType | dict[str, Any]) -> EntityType:
        if isinstance(entity_data, self.entity_class):
            return entity_data
        if isinstance(entity_data, dict):
            return self.entity_class.model_validate(entity_data)
        return self.entity_class.model_validate(entity_data.model_dump())

    def create(self, entity_data: CreateType | EntityType | dict[str, Any]) -> EntityType:
        """
        Create a new entity.

        Args:
            entity_data: Create model, dict, or ready-made entity

        Returns:
            Created entity

        Raises:
            EntityAlreadyExistsError: If a unique or foreign key constraint fails
            DatabaseError: If database operation fails
        """
        entity = self._to_entity(entity_data)
        return self.save(entity)

    def get_by_id(self, entity_id: int) -> EntityType | None:
        """
        Get entity by ID.

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            return self.session.get(self.entity_class, entity_id)
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during get_by_id: {str(e)}") from e

    def get_by_id_required(self, entity_id: int) -> EntityType:
        """
        Get entity by ID, raising exception if not found.

        Raises:
            EntityNotFoundError: If entity not found
            DatabaseError: If database operation fails
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return entity

    def get_all(self, order_by: Sequence[Any] = ()) -> list[EntityType]:
        """
        Get all entities, ordered by the given columns (id when none given).

        Raises:
            DatabaseError: If database operation fails
        """
        try:
            statement = select(self.entity_class).order_by(
                *(order_by or (self.entity_class.id,))
            )
            return list(self.session.exec(statement).all())
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during get_all: {str(e)}") from e

    def count(self) -> int:
        try:
            statement = select(func.count()).select_from(self.entity_class)
            return self.session.exec(statement).one()
        except SQLAlchemyError as e:
            raise DatabaseError(f"Database error during count: {str(e)}") from e

    def update(self, entity_id: int, update_data: UpdateType | dict[str, Any]) -> EntityType:
        """
        Apply the fields explicitly set on update_data to an existing entity.

        Returns:
            Updated entity

        Raises:
            EntityNotFoundError: If entity not found
            EntityAlreadyExistsError: If a constraint fails
            DatabaseError: If database operation fails
        """
        entity = self.get_by_id_required(entity_id)
        update_dict = (
            update_data
            if isinstance(update_data, dict)
            else update_data.model_dump(exclude_unset=True)
        )
        entity.sqlmodel_update(update_dict)
        return self.save(entity)

    def delete(self, entity_id: int) -> bool:
        """
        Delete an entity by ID.

        Returns:
            True if entity was deleted, False if not found

        Raises:
            EntityInUseError: If other rows still reference the entity
            DatabaseError: If database operation fails
        """
        try:
            entity = self.get_by_id(entity_id)
            if entity is None:
                return False

            self.session.delete(entity)
            self.session.commit()
            return True

        except IntegrityError as e:
            self.session.rollback()
            raise EntityInUseError(
                f"{self.entity_name} {entity_id} is still referenced and cannot be deleted",
                {"entity_type": self.entity_name, "entity_id": entity_id},
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(f"Database error during delete: {str(e)}") from e

    def exists(self, entity_id: int) -> bool:
        return self.get_by_id(entity_id) is not None

    def save(self, entity: EntityType) -> EntityType:
        """
        Save or update an entity.

        Raises:
            EntityAlreadyExistsError: If a constraint fails
            DatabaseError: If database operation fails
        """
        try:
            self.session.add(entity)
            self.session.commit()
            self.session.refresh(entity)
            return entity
        except IntegrityError as e:
            self.session.rollback()
            raise EntityAlreadyExistsError(
                f"{self.entity_name} violates a constraint: {str(e.orig)}"
            ) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            raise DatabaseError(f"Database error during save: {str(e)}") from e
