"""Unit tests for the dataclass / named tuple reflection front end."""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

import pytest

from mp_redact.config.settings import EnvSettingsLoader
from mp_redact.formatting import (
    RedactedFormatter,
    field,
    policies_of,
    pretty_repr,
    redactable,
    redactable_union,
    schema_for,
)
from mp_redact.kernel.errors import PolicyError
from mp_redact.kernel.types import Nothing, Option, Some
from mp_redact.policy import RedactionPolicy, ShapeKind, redact
from mp_redact.toggle import RedactionToggle


@redactable()
@dataclass
class Customer:
    id: int
    email: str | None = field(redact=redact(), default=None)
    name: str = field(redact=redact(partial=True), default="")


@redactable(redact(all=True, partial=True))
@dataclass
class CreditCard:
    number: str
    brand: str = field(redact=redact(skip=True), default="visa")


@redactable()
@dataclass
class Address:
    city: str = field(redact=redact(partial=True))


@redactable()
@dataclass
class Person:
    address: Address
    name: str = field(redact=redact(partial=True))


@redactable()
@dataclass
class Order:
    address: Address = field(redact=redact())


@redactable()
class Token(NamedTuple):
    value: str
    scope: str

    __redact_fields__ = {"value": redact(fixed=4)}


@redactable()
@dataclass
class Contact:
    phone: Option[str] = field(redact=redact(partial=True))
    fax: Optional[str] = field(redact=redact(), default=None)


# ---------------------------------------------------------------------------
# Schema extraction
# ---------------------------------------------------------------------------


class TestSchemaFor:
    def test_dataclass_fields(self) -> None:
        schema = schema_for(Customer)
        assert schema.name == "Customer"
        assert schema.kind is ShapeKind.RECORD
        assert [f.name for f in schema.fields] == ["id", "email", "name"]
        assert [f.nullable for f in schema.fields] == [False, True, False]
        assert schema.fields[1].annotations == (redact(),)

    def test_type_level_annotations(self) -> None:
        assert schema_for(CreditCard, redact(all=True)).annotations == (redact(all=True),)

    def test_named_tuple(self) -> None:
        schema = schema_for(Token)
        assert schema.kind is ShapeKind.TUPLE
        assert [f.name for f in schema.fields] == [0, 1]
        assert schema.fields[0].annotations == (redact(fixed=4),)

    def test_option_and_optional_are_nullable(self) -> None:
        assert all(f.nullable for f in schema_for(Contact).fields)

    def test_unresolvable_hints_rejected(self) -> None:
        @dataclass
        class Local:
            ref: Missing | None = None  # type: ignore[name-defined]  # noqa: F821
            other: Missing = None  # type: ignore[name-defined]  # noqa: F821

        with pytest.raises(TypeError, match="cannot resolve the type hints of Local"):
            schema_for(Local)

    def test_explicit_nullable_overrides_hint(self) -> None:
        @dataclass
        class Local:
            ref: Any = field(nullable=True, default=None)
            note: str | None = field(nullable=False, default=None)

        assert [f.nullable for f in schema_for(Local).fields] == [True, False]

    def test_fields_hidden_from_repr_are_dropped(self) -> None:
        @dataclass
        class Local:
            user: str
            password: str = dataclasses.field(repr=False, default="")

        assert [f.name for f in schema_for(Local).fields] == ["user"]

    def test_plain_class_rejected(self) -> None:
        class NotADataclass:
            value: int

        with pytest.raises(TypeError):
            schema_for(NotADataclass)

    def test_policies_of(self) -> None:
        assert policies_of(Customer).fields[1].policy == RedactionPolicy.default()

    def test_policies_of_plain_class(self) -> None:
        with pytest.raises(TypeError):
            policies_of(int)


# ---------------------------------------------------------------------------
# @redactable
# ---------------------------------------------------------------------------


class TestRedactable:
    def test_field_annotations(self) -> None:
        assert repr(Customer(1, "jane@prima.it", "Jane Doe")) == (
            "Customer { id: 1, email: Some('****@*****.**'), name: 'Ja** *oe' }"
        )

    def test_absent_optional(self) -> None:
        assert repr(Customer(2)) == "Customer { id: 2, email: None, name: '' }"

    def test_type_level_default_and_skip(self) -> None:
        assert repr(CreditCard("4111111111111111")) == (
            "CreditCard { number: '411**********111', brand: 'visa' }"
        )

    def test_str_falls_back_to_redacted_repr(self) -> None:
        assert str(CreditCard("4111111111111111")).startswith("CreditCard { number: '411*")
        assert f"{Customer(3, None, 'Al')}" == "Customer { id: 3, email: None, name: '**' }"

    def test_nested_value_renders_redacted(self) -> None:
        person = Person(Address("New York"), "Johnathan")
        assert repr(person) == "Person { address: Address { city: 'Ne* **rk' }, name: 'Joh***han' }"

    def test_nested_value_pretty(self) -> None:
        person = Person(Address("New York"), "Johnathan")
        assert RedactedFormatter(policies_of(Person)).render(person, pretty=True) == (
            "Person {\n"
            "    address: Address {\n"
            "        city: 'Ne* **rk',\n"
            "    },\n"
            "    name: 'Joh***han',\n"
            "}"
        )

    def test_pretty_repr(self) -> None:
        person = Person(Address("New York"), "Johnathan")
        assert pretty_repr(person) == RedactedFormatter(policies_of(Person)).render(person, pretty=True)
        assert pretty_repr(Token("abcdef", "read")) == "Token(\n    ****,\n    'read',\n)"

    def test_pretty_repr_of_plain_value(self) -> None:
        with pytest.raises(TypeError, match="not redactable"):
            pretty_repr({"password": "hunter2"})

    def test_redacted_nested_value_is_redacted_again(self) -> None:
        assert repr(Order(Address("New York"))) == "Order { address: ******* { ****: '*** ****' } }"

    def test_named_tuple(self) -> None:
        assert repr(Token("abcdef", "read")) == "Token(****, 'read')"

    def test_option_wrappers(self) -> None:
        assert repr(Contact(Some("Doe"))) == "Contact { phone: Some('***'), fax: None }"
        assert repr(Contact(Nothing(), "0123456789")) == (
            "Contact { phone: None, fax: Some('**********') }"
        )

    def test_explicit_toggle(self) -> None:
        toggle = RedactionToggle(settings_loader=EnvSettingsLoader(environ={}))
        toggle.disable().unwrap()

        @redactable(toggle=toggle)
        @dataclass
        class Login:
            password: str = field(redact=redact())

        assert repr(Login("hunter2")) == "Login { password: 'hunter2' }"

    def test_hidden_field_never_rendered(self) -> None:
        @redactable()
        @dataclass
        class Login:
            user: str = field(redact=redact())
            password: str = field(repr=False, default="")

        rendered = repr(Login("jane", "hunter2"))
        assert rendered == "Login { user: '****' }"
        assert "hunter2" not in rendered

    def test_explicit_nullable_renders_option(self) -> None:
        @redactable()
        @dataclass
        class Profile:
            nickname: Any = field(redact=redact(), nullable=True, default=None)

        assert repr(Profile()) == "Profile { nickname: None }"
        assert repr(Profile("bob")) == "Profile { nickname: Some('***') }"

    def test_misuse_fails_at_decoration(self) -> None:
        with pytest.raises(PolicyError, match="does nothing"):

            @redactable()
            @dataclass
            class Plain:
                value: int

    def test_conflicting_field_fails_at_decoration(self) -> None:
        with pytest.raises(PolicyError) as exc_info:

            @redactable()
            @dataclass
            class Broken:
                value: str = field(redact=redact(partial=True, fixed=2))

        assert exc_info.value.location == "Broken.value"

    def test_empty_dataclass_is_unit(self) -> None:
        with pytest.raises(PolicyError, match="unit"):

            @redactable(redact(all=True))
            @dataclass
            class Marker:
                pass

    def test_field_keeps_user_metadata(self) -> None:
        from dataclasses import fields

        @dataclass
        class Tagged:
            value: str = field(redact=redact(), metadata={"doc": "secret"})

        metadata = fields(Tagged)[0].metadata
        assert metadata["doc"] == "secret"
        assert metadata["mp_redact"] == (redact(),)


# ---------------------------------------------------------------------------
# redactable_union
# ---------------------------------------------------------------------------


class Issuer(enum.Enum):
    VISA = "visa"
    MASTERCARD = "mastercard"


redactable_union("Issuer", Issuer, redact(all=True, variant=True))


@dataclass
class Card:
    number: str


@dataclass
class Cash:
    pass


@dataclass
class Voucher:
    code: str


PAYMENT = redactable_union(
    "Payment",
    [Card, Cash, Voucher],
    member_annotations={
        "Card": redact(all=True, partial=True),
        "Voucher": (redact(variant=True), redact(all=True)),
    },
)


class TestRedactableUnion:
    def test_enum_member_names_redacted(self) -> None:
        assert repr(Issuer.VISA) == "****"
        assert repr(Issuer.MASTERCARD) == "**********"

    def test_enum_str_untouched(self) -> None:
        assert str(Issuer.VISA) == "Issuer.VISA"

    def test_record_variant(self) -> None:
        assert repr(Card("4111111111111111")) == "Card { number: '411**********111' }"

    def test_unit_variant(self) -> None:
        assert repr(Cash()) == "Cash"

    def test_variant_name_and_fields(self) -> None:
        assert repr(Voucher("XMAS2024")) == "******* { code: '********' }"

    def test_formatter_returned(self) -> None:
        assert PAYMENT.resolved.kind is ShapeKind.ENUM
        assert PAYMENT.render(Cash()) == "Cash"

    def test_unknown_member_annotation(self) -> None:
        with pytest.raises(TypeError, match="Amex"):
            redactable_union("Payment", [Card], member_annotations={"Amex": redact(variant=True)})

    def test_union_without_redaction(self) -> None:
        with pytest.raises(PolicyError, match="does nothing"):
            redactable_union("Plain", [Cash])

    def test_union_level_requires_variant(self) -> None:
        with pytest.raises(PolicyError) as exc_info:
            redactable_union("Payment", [Card], redact(all=True))
        assert exc_info.value.location == "Payment"
