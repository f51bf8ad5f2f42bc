from dishka import AsyncContainer, make_async_container

from sla.config import Config
from sla.domain.record.model.value import ResearcherId
from sla.domain.record.util.di import RecordProvider
from sla.infrastructure.analysis.di import AnalysisProvider
from sla.infrastructure.store.di import StoreProvider
from sla.util.di.scope import Scope


def create_container(config: Config | None = None, researcher: str | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]
    identity = researcher if researcher is not None else config.identity.researcher

    return make_async_container(
        StoreProvider(),
        AnalysisProvider(),
        RecordProvider(),
        context={Config: config, ResearcherId: ResearcherId(identity)},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
