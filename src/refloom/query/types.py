"""Query support for the ``/types`` route."""

from typing import ClassVar, Literal

from ..constants import WorkType
from ..exceptions import ConfigurationError
from .base import Component
from .works import WorksCombiner


class Types(WorksCombiner):
    """All work types, a single type, or the works of one type."""

    component: ClassVar[Component] = Component.TYPES

    kind: Literal["all", "identifier", "works"]

    @classmethod
    def all(cls) -> "Types":
        return cls(kind="all")

    @classmethod
    def identifier(cls, identifier: WorkType | str) -> "Types":
        try:
            work_type = WorkType(identifier)
        except ValueError as e:
            raise ConfigurationError(f"Unknown work type: {identifier!r}") from e
        return cls(kind="identifier", id=work_type.value)

    def query_route(self) -> str:
        if self.kind == "all":
            return self.component.route()
        return super().query_route()
