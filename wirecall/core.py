"""Procedure descriptors and routers.

Procedures are declared with a small builder::

    app_router = router(
        getUser=endpoint.action(lambda ctx: {"id": "1"}),
        greeting=endpoint.input(Greeting).action(lambda data, ctx: f"Hi {data.name}"),
    )

A router is a read-only mapping from identifier-form names to :class:`Endpoint`.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Generic, Mapping, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, TypeAdapter

Ctx = TypeVar("Ctx")
Router = Mapping[str, "Endpoint"]


@runtime_checkable
class Contract(Protocol):
    """Anything that can parse a raw value into a validated one, raising on failure."""

    def parse(self, value: Any) -> Any:
        ...


def parse_with_contract(contract: Any, value: Any) -> Any:
    """Validate ``value`` with a pydantic model, a TypeAdapter or a ``parse``-capable object."""
    if isinstance(contract, type) and issubclass(contract, BaseModel):
        return contract.model_validate(value)
    if isinstance(contract, TypeAdapter):
        return contract.validate_python(value)
    if isinstance(contract, Contract):
        return contract.parse(value)
    raise TypeError(f"unsupported input contract: {contract!r}")


@dataclass(frozen=True, slots=True)
class Endpoint:
    """A procedure: optional input contract plus the action to run."""

    action: Callable[..., Any]
    input: Any | None = None

    @property
    def has_input(self) -> bool:
        return self.input is not None


class _InputBuilder:
    def __init__(self, contract: Any) -> None:
        self._contract = contract

    def action(self, fn: Callable[..., Any]) -> Endpoint:
        """Attach ``fn(validated_input, context)``."""
        return Endpoint(action=fn, input=self._contract)


class EndpointBuilder:
    """Entry point of the ``endpoint.input(...).action(...)`` chain."""

    def input(self, contract: Any) -> _InputBuilder:
        if contract is None:
            raise TypeError("input contract must not be None; use endpoint.action() instead")
        return _InputBuilder(contract)

    def action(self, fn: Callable[..., Any]) -> Endpoint:
        """Attach ``fn(context)`` for a procedure without input."""
        return Endpoint(action=fn)


endpoint = EndpointBuilder()


def router(procedures: Mapping[str, Endpoint] | None = None, /, **named: Endpoint) -> Router:
    """Freeze procedures into a read-only router."""
    merged: dict[str, Endpoint] = dict(procedures or {})
    merged.update(named)
    for name, item in merged.items():
        if not isinstance(name, str) or not name:
            raise TypeError(f"procedure names must be non-empty strings, got {name!r}")
        if not isinstance(item, Endpoint):
            raise TypeError(f"procedure {name!r} is not an Endpoint: {item!r}")
    return MappingProxyType(merged)


class CtxRouter(Generic[Ctx]):
    """Router factory bound to a context type, for annotation purposes only.

    ``ctx = CtxRouter[AppContext]()`` then ``ctx.router(getUser=ctx.endpoint.action(...))``.
    """

    endpoint = endpoint

    def router(self, procedures: Mapping[str, Endpoint] | None = None, /, **named: Endpoint) -> Router:
        return router(procedures, **named)
