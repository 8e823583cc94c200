"""Tests for the built-in serializers and the registry."""

import pytest

from pull_api_data.serializers import (
    BoolSerializer,
    ConversionError,
    FloatSerializer,
    IntSerializer,
    SerializerRegistry,
    StrSerializer,
    default_registry,
)

from helpers import Triplet, TripletSerializer


class TestBoolSerializer:
    @pytest.mark.parametrize("text", ["false", "F", "No", "n", "0", "NONE", " false "])
    def test_false_words(self, text: str) -> None:
        assert BoolSerializer().parse(text) is False

    @pytest.mark.parametrize("text", ["true", "yes", "1", "-1", "maybe", ""])
    def test_everything_else_is_true(self, text: str) -> None:
        assert BoolSerializer().parse(text) is True

    def test_format(self) -> None:
        assert BoolSerializer().format(True) == "true"
        assert BoolSerializer().format(False) == "false"


class TestNumericSerializers:
    def test_int_reads_leading_token(self) -> None:
        assert IntSerializer().parse("  -12 apples") == -12
        assert IntSerializer().parse("1.99") == 1

    def test_int_rejects_non_numeric(self) -> None:
        with pytest.raises(ConversionError) as exc_info:
            IntSerializer().parse("seven")
        assert exc_info.value.text == "seven"
        assert exc_info.value.target == "int"

    def test_float_reads_leading_token(self) -> None:
        assert FloatSerializer().parse("2.5 kg") == 2.5
        assert FloatSerializer().parse("1e3") == 1000.0
        assert FloatSerializer().parse(".5") == 0.5

    def test_float_rejects_non_numeric(self) -> None:
        with pytest.raises(ValueError):
            FloatSerializer().parse("kg")

    def test_float_format_round_trips(self) -> None:
        s = FloatSerializer()
        assert s.parse(s.format(1.99)) == 1.99


class TestRegistry:
    def test_default_types(self) -> None:
        registry = default_registry()
        assert isinstance(registry.for_type(str), StrSerializer)
        assert isinstance(registry.for_type(int), IntSerializer)
        assert isinstance(registry.for_type(float), FloatSerializer)
        assert isinstance(registry.for_type(bool), BoolSerializer)

    def test_bool_not_shadowed_by_int(self) -> None:
        assert default_registry().format(True) == "true"

    def test_subclass_resolves_through_mro(self) -> None:
        class Port(int):
            pass

        assert isinstance(default_registry().for_type(Port), IntSerializer)

    def test_unknown_type_raises(self) -> None:
        with pytest.raises(TypeError, match="No serializer registered"):
            SerializerRegistry().for_type(str)

    def test_register_user_type(self) -> None:
        registry = default_registry()
        assert Triplet not in registry
        registry.register(Triplet, TripletSerializer())
        assert Triplet in registry
        assert registry.format(Triplet(1, 2, 3)) == "1 2 3"

    def test_resolve_accepts_serializer_instance(self) -> None:
        serializer = TripletSerializer()
        assert default_registry().resolve(serializer) is serializer

    def test_resolve_rejects_other_objects(self) -> None:
        with pytest.raises(TypeError):
            default_registry().resolve(42)  # type: ignore[arg-type]

    def test_default_registries_are_independent(self) -> None:
        first = default_registry()
        first.register(Triplet, TripletSerializer())
        assert Triplet not in default_registry()
