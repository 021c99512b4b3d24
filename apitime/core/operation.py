"""Operation — typed, single-shot description of one HTTP call.

Invariants:
    - Immutable once constructed; one instance per call
    - response_type is carried explicitly (generic parameters are erased at runtime)
    - Defaults: no request data, plain coder for both directions
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from apitime.core.domain_types import HTTPMethod
from apitime.core.json_coders import PLAIN_CODER, JSONCoder
from apitime.core.request_data import NoRequestData, RequestData

RequestT = TypeVar("RequestT", bound=RequestData)
ResponseT = TypeVar("ResponseT")


@dataclass(frozen=True)
class Operation(Generic[RequestT, ResponseT]):
    configuration_key: str
    method: HTTPMethod
    path: str
    response_type: type[ResponseT] | Any
    request_data: RequestT = field(default_factory=NoRequestData)
    encoder: JSONCoder = PLAIN_CODER
    decoder: JSONCoder = PLAIN_CODER

    @property
    def name(self) -> str:
        """Label used in logs: METHOD path -> ResponseType."""
        response_name = getattr(self.response_type, "__name__", repr(self.response_type))
        return f"{self.method.value} {self.path} -> {response_name}"
