"""Tests de enums abiertos y cerrados."""

from __future__ import annotations

import pytest
from pydantic import TypeAdapter

from core.domain.catalog.redis import (
    DayOfWeek,
    MinimumTlsVersion,
    PublicNetworkAccess,
    RedisCommonProperties,
    ScheduleEntry,
)
from core.domain.catalog.streamanalytics import (
    AuthenticationMode,
    BlobOutputDataSourceProperties,
    BlobWriteMode,
)
from core.domain.errors import (
    DecodeError,
    KnownEnumValueError,
    MissingFieldError,
    UnknownEnumValueError,
    WireError,
)
from core.domain.wire_enum import UNKNOWN_VALUE


class TestOpenEnum:
    """Decodificación/codificación de `OpenEnum`."""

    def test_known_value_decodes_to_member(self):
        decoded = AuthenticationMode.from_wire("Msi")

        assert decoded is AuthenticationMode.MSI
        assert not decoded.is_unknown
        assert decoded.to_wire() == "Msi"

    def test_unrecognized_value_is_kept_verbatim(self):
        decoded = AuthenticationMode.from_wire("Foo")

        assert isinstance(decoded, AuthenticationMode)
        assert decoded.is_unknown
        assert decoded.name == UNKNOWN_VALUE
        assert decoded.to_wire() == "Foo"
        assert decoded == AuthenticationMode.unknown("Foo")

    def test_matching_is_case_sensitive(self):
        decoded = AuthenticationMode.from_wire("msi")

        assert decoded.is_unknown
        assert decoded.to_wire() == "msi"

    def test_empty_string_is_an_unknown_value(self):
        decoded = BlobWriteMode.from_wire("")

        assert decoded.is_unknown
        assert decoded.to_wire() == ""

    @pytest.mark.parametrize("raw", ["Msi", "UserToken", "ConnectionString", "Foo", "ünïcode", " Msi"])
    def test_wire_string_round_trips(self, raw):
        assert AuthenticationMode.from_wire(raw).to_wire() == raw

    def test_every_member_round_trips(self):
        for member in AuthenticationMode:
            assert AuthenticationMode.from_wire(member.to_wire()) is member

    def test_unknown_values_are_not_registered_or_shared(self):
        first = AuthenticationMode.from_wire("Foo")
        second = AuthenticationMode.from_wire("Foo")

        assert first == second
        assert first is not second
        assert len(list(AuthenticationMode)) == 3
        assert AuthenticationMode.known_values() == ("Msi", "UserToken", "ConnectionString")

    def test_decoded_member_passes_through(self):
        assert AuthenticationMode.from_wire(AuthenticationMode.USER_TOKEN) is AuthenticationMode.USER_TOKEN

    def test_non_string_is_a_decode_error(self):
        with pytest.raises(DecodeError):
            AuthenticationMode.from_wire(5)

    def test_explicit_unknown_rejects_known_values(self):
        with pytest.raises(KnownEnumValueError) as excinfo:
            AuthenticationMode.unknown("Msi")

        assert isinstance(excinfo.value, WireError)
        assert excinfo.value.value == "Msi"

    def test_symbolic_name_can_differ_from_wire_string(self):
        decoded = MinimumTlsVersion.from_wire("1.0")

        assert decoded is MinimumTlsVersion.N1_0
        assert decoded.name == "N1_0"
        assert str(decoded) == "1.0"


class TestDefaults:
    def test_declared_default_is_used_for_absent_value(self):
        assert AuthenticationMode.from_absent() is AuthenticationMode.CONNECTION_STRING

    def test_absent_value_without_default_is_missing_field(self):
        with pytest.raises(MissingFieldError):
            BlobWriteMode.from_absent()

    def test_absent_field_in_model_uses_default(self):
        props = BlobOutputDataSourceProperties.from_wire({"container": "logs"})

        assert props.authentication_mode is AuthenticationMode.CONNECTION_STRING
        assert props.blob_write_mode is None

    def test_absent_public_network_access_defaults_to_enabled(self):
        props = RedisCommonProperties.from_wire({"enableNonSslPort": False})

        assert props.public_network_access.to_wire() == "Enabled"

    def test_explicit_null_uses_default(self):
        blob = BlobOutputDataSourceProperties.from_wire({"container": "c", "authenticationMode": None})
        redis = RedisCommonProperties.from_wire({"publicNetworkAccess": None})

        assert blob.authentication_mode is AuthenticationMode.CONNECTION_STRING
        assert redis.public_network_access is PublicNetworkAccess.ENABLED

    def test_explicit_null_without_default_is_still_optional(self):
        props = BlobOutputDataSourceProperties.from_wire({"blobWriteMode": None})

        assert props.blob_write_mode is None


class TestClosedEnum:
    def test_known_value_decodes(self):
        assert DayOfWeek.from_wire("Weekend") is DayOfWeek.WEEKEND

    def test_unknown_value_is_rejected(self):
        with pytest.raises(UnknownEnumValueError) as excinfo:
            DayOfWeek.from_wire("Funday")

        assert excinfo.value.value == "Funday"
        assert "Monday" in excinfo.value.known
        assert isinstance(excinfo.value, DecodeError)

    def test_unknown_value_in_model_fails_whole_object(self):
        with pytest.raises(DecodeError) as excinfo:
            ScheduleEntry.from_wire({"dayOfWeek": "Funday", "startHourUtc": 3})

        assert excinfo.value.__cause__ is not None

    def test_absent_value_without_default_is_missing_field(self):
        with pytest.raises(MissingFieldError):
            DayOfWeek.from_absent()


class TestPydanticIntegration:
    def test_unknown_value_survives_model_round_trip(self):
        props = BlobOutputDataSourceProperties.from_wire(
            {"authenticationMode": "Foo", "blobWriteMode": "Append"}
        )

        assert props.authentication_mode.is_unknown
        assert props.blob_write_mode is BlobWriteMode.APPEND
        assert props.to_wire() == {"authenticationMode": "Foo", "blobWriteMode": "Append"}

    def test_type_adapter_routes_through_codec(self):
        adapter = TypeAdapter(MinimumTlsVersion)

        assert adapter.validate_python("1.2") is MinimumTlsVersion.N1_2
        assert adapter.validate_python("1.3").is_unknown
        assert adapter.dump_python(MinimumTlsVersion.unknown("1.3"), mode="json") == "1.3"

    def test_json_schema_marks_open_and_closed_enums(self):
        open_schema = TypeAdapter(AuthenticationMode).json_schema()
        closed_schema = TypeAdapter(DayOfWeek).json_schema()

        assert open_schema["x-ms-enum"] == {"name": "AuthenticationMode", "modelAsString": True}
        assert closed_schema["x-ms-enum"]["modelAsString"] is False
        assert closed_schema["enum"][0] == "Monday"
