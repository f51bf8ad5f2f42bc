"""Query and QueryHandler base classes."""

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, dataclass_transform

from pydantic import BaseModel


class Query(BaseModel): ...


class Result(BaseModel): ...


Q = TypeVar("Q", bound=Query)
R = TypeVar("R", bound=Result)


@dataclass_transform()
class _QueryHandlerMeta(ABCMeta):
    """Metaclass that combines ABC with auto-dataclass for subclasses."""

    def __new__(mcs, name: str, bases: tuple[type, ...], namespace: dict[str, Any]):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            cls = dataclass(cls)
        return cls


class QueryHandler(Generic[Q, R], metaclass=_QueryHandlerMeta):
    """Base class for query handlers. Subclasses are automatically dataclasses.

    Queries never write to the store.
    """

    @abstractmethod
    async def run(self, cmd: Q) -> R: ...
