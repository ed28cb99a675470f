from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum

import pytest
from pydantic import BaseModel, Field, SecretStr

from sweetkicks_core.forms import BindingTargetNotFound, format_value, resolve_field


class Address(BaseModel):
    city: str | None = Field(default=None, alias="City")


class Customer(BaseModel):
    name: str = Field(alias="Name", min_length=1, max_length=40)
    nickname: str | None = None
    age: int | None = Field(default=None, ge=0, le=150)
    born: dt.date | None = None
    last_seen: dt.datetime | None = None
    balance: Decimal | None = None
    password: SecretStr | None = None
    address: Address | None = Field(default=None, alias="Address")


class Color(Enum):
    RED = "red"


def test_resolves_by_alias_and_by_python_name() -> None:
    model = Customer(Name="Alex Murphy")

    by_alias = resolve_field(model, "Name")
    by_attr = resolve_field(model, "name")

    assert by_alias == by_attr
    assert by_alias.name == "Name"
    assert by_alias.value == "Alex Murphy"


def test_binding_name_without_alias_is_field_name() -> None:
    field = resolve_field(Customer(Name="a", nickname="Murph"), "nickname")
    assert field.name == "nickname"
    assert field.value == "Murph"
    assert field.required is False


def test_required_from_missing_default_or_min_length() -> None:
    class Signup(BaseModel):
        email: str
        handle: str | None = Field(default=None, min_length=1)
        bio: str | None = Field(default=None, max_length=200)

    model = Signup.model_construct()
    assert resolve_field(model, "email").required is True
    assert resolve_field(model, "handle").required is True
    assert resolve_field(model, "bio").required is False


def test_constraints_are_collected() -> None:
    model = Customer(Name="a")

    name = resolve_field(model, "Name")
    assert (name.min_length, name.max_length) == (1, 40)

    age = resolve_field(model, "age")
    assert (age.minimum, age.maximum) == (0, 150)
    assert age.input_type == "number"


@pytest.mark.parametrize(
    ("expression", "input_type"),
    [
        ("Name", "text"),
        ("age", "number"),
        ("balance", "number"),
        ("born", "date"),
        ("last_seen", "datetime-local"),
        ("password", "password"),
    ],
)
def test_input_type_follows_annotation(expression: str, input_type: str) -> None:
    assert resolve_field(Customer(Name="a"), expression).input_type == input_type


def test_nested_expression() -> None:
    model = Customer(Name="a", Address=Address(City="Detroit"))
    field = resolve_field(model, "Address.City")

    assert field.name == "Address.City"
    assert field.value == "Detroit"
    assert field.html_id == "Address_City"
    assert resolve_field(model, "address.city") == field


def test_nested_expression_with_missing_parent_resolves_to_none() -> None:
    field = resolve_field(Customer(Name="a"), "Address.City")
    assert field.name == "Address.City"
    assert field.value is None


@pytest.mark.parametrize("expression", ["Nmae", "", "Address.Zip", "Name.first", "Address..City"])
def test_unknown_expression_raises(expression: str) -> None:
    with pytest.raises(BindingTargetNotFound):
        resolve_field(Customer(Name="a"), expression)


def test_format_value() -> None:
    assert format_value(None) is None
    assert format_value("") == ""
    assert format_value(42) == "42"
    assert format_value(True) == "true"
    assert format_value(False) == "false"
    assert format_value(Color.RED) == "red"
    assert format_value(Decimal("1.50")) == "1.50"
    assert format_value(dt.date(1987, 7, 17)) == "1987-07-17"
    assert format_value(dt.datetime(1987, 7, 17, 9, 30, 15)) == "1987-07-17T09:30"
    assert format_value(SecretStr("hunter2")) is None


def test_secret_value_is_not_echoed() -> None:
    field = resolve_field(Customer(Name="a", password="hunter2"), "password")
    assert field.formatted_value is None
