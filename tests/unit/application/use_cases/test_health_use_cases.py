from __future__ import annotations

from dataclasses import dataclass

import pytest

from yams.application.use_cases.health_use_cases import GetHealthStatusUseCase
from yams.domain.entities.health import DependencyStatus, ServiceStatus, SystemHealth


@dataclass
class _StubHealthService:
    health: SystemHealth

    async def evaluate(self) -> SystemHealth:
        return self.health


@pytest.mark.asyncio
async def test_get_health_status_use_case_returns_dto() -> None:
    dependencies = [
        DependencyStatus(name="mongo", status=ServiceStatus.UP),
        DependencyStatus(name="datastore", status=ServiceStatus.DOWN),
    ]
    health = SystemHealth(status=ServiceStatus.DOWN, dependencies=dependencies)

    use_case = GetHealthStatusUseCase(health_check_service=_StubHealthService(health))

    dto = await use_case.execute()

    assert dto.status is ServiceStatus.DOWN
    assert len(dto.dependencies) == 2
    assert dto.dependencies[1].status is ServiceStatus.DOWN
