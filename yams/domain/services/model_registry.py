"""Static registry of the models executed on every tick."""

from __future__ import annotations

from typing import Iterable, Set, Tuple

from yams.domain.entities.errors import ModelValidationError
from yams.domain.entities.model import ModelIdentity
from yams.domain.ports.model import IModel
from yams.domain.services.local_model import LocalModel


class StaticModelRegistry:
    """Holds the models registered at process start.

    Only fully built models can be registered, so every entry is concrete.
    Identities of local models must be unique; remote identities are only
    known after their metadata call and are checked by the store's unique key.
    """

    def __init__(self, models: Iterable[IModel]) -> None:
        registered = tuple(models)
        seen: Set[ModelIdentity] = set()
        for model in registered:
            if isinstance(model, LocalModel):
                identity = model.static_identity
                if identity in seen:
                    raise ModelValidationError(
                        f"Model {identity} is registered more than once",
                        details={"model": str(identity)},
                    )
                seen.add(identity)
        self._models = registered

    def list_models(self) -> Tuple[IModel, ...]:
        """Return every registered model."""
        return self._models

    def __len__(self) -> int:
        return len(self._models)
