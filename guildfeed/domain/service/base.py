"""Base service class for domain services."""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from guildfeed.domain.error import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    @staticmethod
    def build(model_cls: type[ModelT], **fields: Any) -> ModelT:
        """Construct a domain model, reporting field violations as ValidationError.

        Args:
            model_cls: Domain model class
            **fields: Field values

        Returns:
            The validated model

        Raises:
            ValidationError: If any field violates its constraints
        """
        try:
            return model_cls(**fields)
        except PydanticValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise ValidationError(f"Invalid {model_cls.__name__.lower()}: {details}")
