from types import MappingProxyType

import pytest
from pydantic import BaseModel, TypeAdapter, ValidationError

from wirecall.core import CtxRouter, Endpoint, endpoint, parse_with_contract, router


class _User(BaseModel):
    name: str


class _ParseContract:
    def parse(self, value):
        return {"parsed": value}


def test_endpoint_with_input_keeps_contract_and_action():
    def action(data, ctx):
        return {"success": True}

    result = endpoint.input(_User).action(action)
    assert isinstance(result, Endpoint)
    assert result.input is _User
    assert result.action is action
    assert result.has_input is True


def test_endpoint_without_input():
    def action(ctx):
        return {"message": "hello"}

    result = endpoint.action(action)
    assert result.input is None
    assert result.action is action
    assert result.has_input is False


def test_endpoint_is_immutable():
    result = endpoint.action(lambda ctx: None)
    with pytest.raises(AttributeError):
        result.input = _User  # type: ignore[misc]


def test_endpoint_input_rejects_none():
    with pytest.raises(TypeError):
        endpoint.input(None)


def test_router_is_read_only_mapping():
    get_user = endpoint.input(_User).action(lambda data, ctx: {"name": data.name})
    app_router = router(getUser=get_user)
    assert isinstance(app_router, MappingProxyType)
    assert app_router["getUser"] is get_user
    with pytest.raises(TypeError):
        app_router["other"] = get_user  # type: ignore[index]


def test_router_accepts_mapping_and_keywords():
    a = endpoint.action(lambda ctx: 1)
    b = endpoint.action(lambda ctx: 2)
    app_router = router({"first": a}, second=b)
    assert dict(app_router) == {"first": a, "second": b}


def test_empty_router():
    assert dict(router()) == {}


def test_router_rejects_non_endpoint_values():
    with pytest.raises(TypeError):
        router(getUser=lambda ctx: None)


def test_ctx_router_shares_builder():
    ctx = CtxRouter[dict]()
    greeting = ctx.endpoint.input(_User).action(lambda data, context: f"Hi {data.name}")
    app_router = ctx.router(greeting=greeting)
    assert app_router["greeting"] is greeting


def test_parse_with_pydantic_model():
    parsed = parse_with_contract(_User, {"name": "Ada"})
    assert parsed == _User(name="Ada")
    with pytest.raises(ValidationError):
        parse_with_contract(_User, {"name": 1})


def test_parse_with_type_adapter():
    assert parse_with_contract(TypeAdapter(list[int]), [1, 2]) == [1, 2]


def test_parse_with_parse_capable_object():
    assert parse_with_contract(_ParseContract(), 5) == {"parsed": 5}


def test_parse_with_unsupported_contract():
    with pytest.raises(TypeError):
        parse_with_contract(object(), 1)
