"""Query support for the ``/prefixes`` route."""

from typing import ClassVar, Literal

from .base import Component
from .works import WorksCombiner


class Prefixes(WorksCombiner):
    """A DOI prefix (e.g. ``10.1016``) or the works registered under it."""

    component: ClassVar[Component] = Component.PREFIXES

    kind: Literal["identifier", "works"]
