"""Request Data — capability-tagged payloads that feed the request builder.

Invariants:
    - Capabilities are declared by class, never probed per instance
    - A class's capability set is the union of the capabilities of every base it inherits
    - Absence of a capability is a no-op for the builder, never an error

Design Decisions:
    - Flag set computed in __init_subclass__: the builder tests membership in
      `capabilities` instead of isinstance checks against marker types
    - Mixins supply empty defaults for headers and query items; body has no default
"""

from enum import Flag, auto
from typing import Any, ClassVar, Mapping, Sequence

from apitime.core.domain_types import QueryItem


class Capability(Flag):
    """Optional request-construction behaviors a payload may declare."""
    NONE = 0
    HEADERS = auto()
    QUERY = auto()
    BODY = auto()


class RequestData:
    """Base for every request payload."""

    provides: ClassVar[Capability] = Capability.NONE
    capabilities: ClassVar[Capability] = Capability.NONE

    def __init_subclass__(cls, **kwargs: Any):
        super().__init_subclass__(**kwargs)
        declared = Capability.NONE
        for base in cls.__mro__:
            declared |= base.__dict__.get("provides", Capability.NONE)
        cls.capabilities = declared


class NoRequestData(RequestData):
    """Payload for operations that send nothing beyond method and URL."""

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NoRequestData)

    def __hash__(self) -> int:
        return hash(NoRequestData)

    def __repr__(self) -> str:
        return "NoRequestData()"


class WithHeaders(RequestData):
    provides = Capability.HEADERS

    def headers(self) -> Mapping[str, str]:
        return {}


class WithQueryItems(RequestData):
    provides = Capability.QUERY

    def query_items(self) -> Sequence[QueryItem]:
        return []


class WithBody(RequestData):
    provides = Capability.BODY

    def body(self) -> Any:
        """Value to serialize as the JSON request body."""
        raise NotImplementedError(f"{type(self).__name__} must implement body()")
