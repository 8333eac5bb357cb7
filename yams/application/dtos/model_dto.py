"""
Model DTOs - Application Layer

Model definitions as they appear in configuration, and the summaries
returned by the models endpoint. Definitions form a union tagged by ``kind``
and convert to the frozen domain configuration structs.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from yams.domain.entities.errors import ModelValidationError
from yams.domain.entities.model import (
    ARIMAConfig,
    ETSConfig,
    ModelIdentity,
    ModelKind,
    MovingAverageConfig,
    RemoteHTTPConfig,
)


class _LocalDefinitionDTO(BaseModel):
    name: str = Field(min_length=1, description="Model name")
    version: str = Field(min_length=1, description="Model version")

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def identity(self) -> ModelIdentity:
        return ModelIdentity(name=self.name, version=self.version)


class MovingAverageDefinitionDTO(_LocalDefinitionDTO):
    kind: Literal["moving_average"] = "moving_average"
    lookback_seconds: int = Field(default=3600, gt=0)
    min_observations: int = Field(default=1, ge=1)

    def to_config(self) -> MovingAverageConfig:
        return MovingAverageConfig(
            lookback_seconds=self.lookback_seconds,
            min_observations=self.min_observations,
        )


class ETSDefinitionDTO(_LocalDefinitionDTO):
    kind: Literal["ets"] = "ets"
    alpha: float = Field(default=0.5, gt=0, le=1)
    beta: Optional[float] = Field(default=None, gt=0, le=1)

    def to_config(self) -> ETSConfig:
        return ETSConfig(alpha=self.alpha, beta=self.beta)


class ARIMADefinitionDTO(_LocalDefinitionDTO):
    kind: Literal["arima"] = "arima"
    p: int = Field(default=1, ge=1)
    d: int = Field(default=0, ge=0, le=2)

    def to_config(self) -> ARIMAConfig:
        return ARIMAConfig(p=self.p, d=self.d)


class RemoteHTTPDefinitionDTO(BaseModel):
    """Remote models report their own name and version via /metadata."""

    kind: Literal["remote_http"] = "remote_http"
    api_root: str = Field(min_length=1, description="Base URL of the model API")
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    identity_ttl_seconds: Optional[float] = Field(
        default=None,
        ge=0,
        description="Omit to inherit the global TTL; null caches forever",
    )

    model_config = {"extra": "forbid", "frozen": True}

    def to_config(
        self,
        default_timeout_seconds: float,
        default_identity_ttl_seconds: Optional[float],
    ) -> RemoteHTTPConfig:
        if "identity_ttl_seconds" in self.model_fields_set:
            ttl = self.identity_ttl_seconds
        else:
            ttl = default_identity_ttl_seconds
        return RemoteHTTPConfig(
            api_root=self.api_root.rstrip("/"),
            timeout_seconds=self.timeout_seconds or default_timeout_seconds,
            identity_ttl_seconds=ttl,
        )


LocalDefinitionDTO = Union[
    MovingAverageDefinitionDTO, ETSDefinitionDTO, ARIMADefinitionDTO
]

ModelDefinitionDTO = Annotated[
    Union[
        MovingAverageDefinitionDTO,
        ETSDefinitionDTO,
        ARIMADefinitionDTO,
        RemoteHTTPDefinitionDTO,
    ],
    Field(discriminator="kind"),
]

_definitions_adapter = TypeAdapter(List[ModelDefinitionDTO])


def parse_model_definitions(
    raw: Sequence[Dict[str, Any]],
) -> List[ModelDefinitionDTO]:
    """Validate raw model definitions from configuration.

    Raises:
        ModelValidationError: If any definition is malformed.
    """
    try:
        return _definitions_adapter.validate_python(list(raw))
    except ValidationError as exc:
        raise ModelValidationError(
            f"Invalid model definitions: {exc.error_count()} error(s)",
            details={"errors": exc.errors(include_url=False)},
        ) from exc


class ModelInfoDTO(BaseModel):
    """A registered model as listed by the models endpoint."""

    name: Optional[str] = Field(default=None, description="Model name")
    version: Optional[str] = Field(default=None, description="Model version")
    kind: ModelKind
    available: bool = Field(
        default=True, description="False when the identity could not be resolved"
    )
    error: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "name": "moving-average-1h",
                "version": "v1",
                "kind": "moving_average",
                "available": True,
                "error": None,
            }
        }
    }
