from __future__ import annotations

import unittest
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Optional

from statement_dao import (
    UNBOUND,
    BeanBinding,
    Binding,
    InvalidParameterError,
    NamedBinding,
    PositionalBinding,
    Unbound,
    bean_params,
    bind,
    model_fields,
    row_to_model,
)
from statement_dao.core.params import accepted_shapes


class Color(Enum):
    RED = 1
    BLUE = 2


@dataclass
class ItemRow:
    id: Optional[int] = None
    color: Optional[Color] = None
    attrs: dict[str, Any] = field(default_factory=dict)
    raw: str = field(default="", metadata={"codec": "json"})
    version: int = field(default=0, init=False)


@dataclass
class RequiredRow:
    id: int
    name: str


@dataclass
class BadCodecRow:
    value: str = field(default="", metadata={"codec": "yaml"})


class BeanUser:
    kind: ClassVar[str] = "user"
    id: Optional[int] = None
    first_name: str = ""

    def __init__(self) -> None:
        self.nickname = ""
        self._secret = "hidden"


class NeedsArgs:
    def __init__(self, value: int) -> None:
        self.value = value


class ClassVarNote:
    pass


class NotedBean:
    kind: ClassVar[str] = "noted"
    note: Optional[ClassVarNote] = None
    label: str = ""


class BrokenInit:
    def __init__(self) -> None:
        self.value = len(None)  # type: ignore[arg-type]


class CustomSource:
    def to_params(self) -> dict[str, Any]:
        return {"token": "abc"}


class BindTests(unittest.TestCase):
    def test_none_is_unbound(self) -> None:
        binding = bind(None, ItemRow)

        self.assertIs(binding, UNBOUND)
        self.assertIsInstance(binding, Unbound)
        self.assertIsNone(binding.params())
        self.assertEqual(binding.kind, "none")

    def test_model_instance_becomes_bean_binding(self) -> None:
        item = ItemRow(id=1)

        binding = bind(item, ItemRow)

        self.assertEqual(binding, BeanBinding(item))
        self.assertEqual(binding.kind, "bean")

    def test_mapping_and_sequences(self) -> None:
        named = bind({"id": 1}, ItemRow)
        from_list = bind([1, 2], None)
        from_tuple = bind((1, 2), None)

        self.assertIsInstance(named, NamedBinding)
        self.assertEqual(named.params(), {"id": 1})
        self.assertIsInstance(from_list, PositionalBinding)
        self.assertEqual(from_list.params(), [1, 2])
        self.assertEqual(from_tuple.params(), [1, 2])

    def test_model_instance_wins_over_mapping_shape(self) -> None:
        class RowDict(dict):
            pass

        row = RowDict(id=3)

        self.assertIsInstance(bind(row, RowDict), BeanBinding)
        self.assertIsInstance(bind(row, None), NamedBinding)

    def test_explicit_bindings_pass_through(self) -> None:
        named = NamedBinding({"a": 1})
        positional = PositionalBinding([1])

        self.assertIs(bind(named, None), named)
        self.assertIs(bind(positional, ItemRow), positional)
        self.assertIs(bind(UNBOUND, ItemRow), UNBOUND)

    def test_unsupported_shapes_raise(self) -> None:
        for value in ("text", b"bytes", 5, 1.5, {1}, frozenset(), object()):
            with self.subTest(value=value):
                with self.assertRaises(InvalidParameterError):
                    bind(value, ItemRow)

    def test_model_instance_without_model_is_rejected(self) -> None:
        with self.assertRaises(InvalidParameterError) as ctx:
            bind(ItemRow(), None)

        self.assertEqual(ctx.exception.accepted, ("Mapping", "list/tuple"))
        self.assertTrue(ctx.exception.actual.endswith("ItemRow"))

    def test_bean_binding_is_validated_against_model(self) -> None:
        with self.assertRaises(InvalidParameterError):
            bind(BeanBinding(BeanUser()), ItemRow)
        with self.assertRaises(InvalidParameterError):
            bind(BeanBinding(ItemRow()), None)

    def test_explicit_bindings_are_shape_checked(self) -> None:
        for binding in (PositionalBinding("ab"), PositionalBinding(b"ab"), PositionalBinding({1, 2})):
            with self.subTest(binding=binding):
                with self.assertRaises(InvalidParameterError):
                    bind(binding, None)

        with self.assertRaises(InvalidParameterError) as ctx:
            bind(NamedBinding(5), ItemRow)  # type: ignore[arg-type]
        self.assertEqual(ctx.exception.actual, "int")
        with self.assertRaises(InvalidParameterError):
            bind(NamedBinding([("id", 1)]), None)  # type: ignore[arg-type]

    def test_binding_base_class_is_abstract(self) -> None:
        with self.assertRaises(TypeError):
            Binding()  # type: ignore[abstract]

    def test_accepted_shapes_include_model_name(self) -> None:
        shapes = accepted_shapes(ItemRow)

        self.assertEqual(shapes[1:], ("Mapping", "list/tuple"))
        self.assertTrue(shapes[0].endswith(".ItemRow"))

    def test_error_message_lists_shapes(self) -> None:
        err = InvalidParameterError(("A", "B", "C"), "builtins.int")

        self.assertEqual(
            str(err), "Parameters must be of type A, B or C; type passed was builtins.int."
        )


class BeanParamsTests(unittest.TestCase):
    def test_dataclass_fields_are_encoded(self) -> None:
        item = ItemRow(id=7, color=Color.BLUE, attrs={"a": [1]}, raw='{"x": 1}')

        params = bean_params(item)

        self.assertEqual(
            params,
            {"id": 7, "color": 2, "attrs": '{"a": [1]}', "raw": '{"x": 1}', "version": 0},
        )

    def test_none_values_stay_none(self) -> None:
        self.assertEqual(bean_params(ItemRow())["color"], None)

    def test_bean_class_uses_public_attributes(self) -> None:
        user = BeanUser()
        user.id = 4
        user.first_name = "Ada"

        self.assertEqual(bean_params(user), {"id": 4, "first_name": "Ada", "nickname": ""})

    def test_parameter_source_wins(self) -> None:
        self.assertEqual(bean_params(CustomSource()), {"token": "abc"})

    def test_unknown_codec_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            bean_params(BadCodecRow(value="x"))

    def test_invalid_enum_value_is_rejected(self) -> None:
        item = ItemRow(color=99)  # type: ignore[arg-type]

        with self.assertRaises(ValueError):
            bean_params(item)


class RowToModelTests(unittest.TestCase):
    def test_dataclass_mapping_decodes_codecs(self) -> None:
        item = row_to_model(
            ItemRow,
            {"id": 1, "color": 1, "attrs": '{"k": "v"}', "raw": "[1, 2]", "version": 3},
        )

        self.assertEqual(item.id, 1)
        self.assertIs(item.color, Color.RED)
        self.assertEqual(item.attrs, {"k": "v"})
        self.assertEqual(item.raw, [1, 2])
        self.assertEqual(item.version, 3)

    def test_enum_member_names_are_accepted(self) -> None:
        self.assertIs(row_to_model(ItemRow, {"color": "BLUE"}).color, Color.BLUE)

    def test_unknown_columns_are_ignored_and_defaults_kept(self) -> None:
        item = row_to_model(ItemRow, {"ID": 5, "extra": "ignored"})

        self.assertEqual(item.id, 5)
        self.assertIsNone(item.color)
        self.assertEqual(item.attrs, {})

    def test_invalid_json_raises(self) -> None:
        with self.assertRaises(ValueError):
            row_to_model(ItemRow, {"attrs": "{not json"})

    def test_missing_required_field_raises(self) -> None:
        with self.assertRaises(TypeError):
            row_to_model(RequiredRow, {"id": 1})

        self.assertEqual(row_to_model(RequiredRow, {"ID": 1, "NAME": "x"}), RequiredRow(1, "x"))

    def test_bean_class_mapping(self) -> None:
        user = row_to_model(BeanUser, {"ID": 2, "FirstName": "Grace", "nickname": "g", "kind": "x"})

        self.assertIsInstance(user, BeanUser)
        self.assertEqual(user.id, 2)
        self.assertEqual(user.first_name, "Grace")
        self.assertEqual(user.nickname, "g")
        self.assertEqual(BeanUser.kind, "user")
        self.assertEqual(user.kind, "user")

    def test_class_without_no_arg_constructor_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            row_to_model(NeedsArgs, {"value": 1})

    def test_errors_inside_constructor_are_not_relabelled(self) -> None:
        with self.assertRaises(TypeError) as ctx:
            row_to_model(BrokenInit, {"value": 1})

        self.assertNotIn("constructible with no arguments", str(ctx.exception))
        self.assertIn("NoneType", str(ctx.exception))


class ModelFieldsTests(unittest.TestCase):
    def test_dataclass_fields_in_declaration_order(self) -> None:
        self.assertEqual(model_fields(ItemRow), ["id", "color", "attrs", "raw", "version"])

    def test_bean_fields(self) -> None:
        self.assertEqual(model_fields(BeanUser), ["id", "first_name", "nickname"])

    def test_only_real_class_vars_are_skipped(self) -> None:
        self.assertEqual(model_fields(NotedBean), ["note", "label"])

        bean = row_to_model(NotedBean, {"note": "n", "LABEL": "l", "kind": "x"})
        self.assertEqual((bean.note, bean.label, bean.kind), ("n", "l", "noted"))

    def test_non_class_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            model_fields(ItemRow())  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
