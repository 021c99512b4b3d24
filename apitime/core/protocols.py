"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell: dependency arrows point inward only
    - The network is reached only through Transport
    - A transport raises TransportError for network failures; any other return
      shape is rejected by the runner as an invalid response

Design Decisions:
    - Protocol over ABC: structural subtyping, test stubs need no base class
    - Async in Protocol: the transport call is one of the two suspension points
"""

from dataclasses import dataclass, field
from typing import Protocol

from apitime.core.request_builder import DraftRequest


@dataclass(frozen=True)
class TransportResponse:
    """Raw outcome of one HTTP exchange."""
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""


class Transport(Protocol):
    """Contract for sending one fully built request, implemented by the shell."""
    async def send(self, request: DraftRequest) -> TransportResponse: ...
