"""Tests de uniones discriminadas."""

from __future__ import annotations

import pytest
from pydantic import Field

from core.domain.catalog.streamanalytics import (
    OUTPUT_DATA_SOURCE,
    AuthenticationMode,
    BlobOutputDataSource,
    Output,
)
from core.domain.catalog.workloads import (
    FILE_SHARE_CONFIGURATION,
    INFRASTRUCTURE_CONFIGURATION,
    LinuxConfiguration,
    MountFileShareConfiguration,
    SapDatabaseType,
    SingleServerConfiguration,
    SingleServerFullResourceNames,
    SkipFileShareConfiguration,
    ThreeTierConfiguration,
    WindowsConfiguration,
)
from core.domain.errors import (
    DecodeError,
    EncodeError,
    MissingDiscriminatorError,
    UnknownDiscriminatorError,
)
from core.domain.models import WireModel
from core.domain.tagged_union import TaggedUnion


class TestDecode:
    """Despacho por tag."""

    def test_single_server_selects_its_shape(self, single_server_payload):
        decoded = INFRASTRUCTURE_CONFIGURATION.decode(single_server_payload)

        assert isinstance(decoded, SingleServerConfiguration)
        assert decoded.app_resource_group == "rg1"
        assert decoded.database_type is SapDatabaseType.HANA
        assert INFRASTRUCTURE_CONFIGURATION.tag_of(decoded) == "SingleServer"

    def test_nested_unions_are_decoded(self, single_server_payload):
        decoded = INFRASTRUCTURE_CONFIGURATION.decode(single_server_payload)

        os_configuration = decoded.virtual_machine_configuration.os_profile.os_configuration
        assert isinstance(os_configuration, LinuxConfiguration)
        assert os_configuration.ssh.public_keys[0].key_data == "ssh-rsa AAAA"
        assert isinstance(decoded.custom_resource_names, SingleServerFullResourceNames)
        assert decoded.custom_resource_names.virtual_machine.vm_name == "sapvm01"

    def test_three_tier_with_file_share_union(self, three_tier_payload):
        decoded = INFRASTRUCTURE_CONFIGURATION.decode(three_tier_payload)

        assert isinstance(decoded, ThreeTierConfiguration)
        assert decoded.application_server.instance_count == 2
        assert decoded.database_server.database_type is SapDatabaseType.DB2
        share = decoded.storage_configuration.transport_file_share_configuration
        assert isinstance(share, MountFileShareConfiguration)
        assert share.private_endpoint_id.endswith("/pe1")

    def test_unregistered_tag_fails(self, single_server_payload):
        payload = {**single_server_payload, "deploymentType": "FourTier"}

        with pytest.raises(UnknownDiscriminatorError) as excinfo:
            INFRASTRUCTURE_CONFIGURATION.decode(payload)

        error = excinfo.value
        assert error.value == "FourTier"
        assert error.tag == "deploymentType"
        assert error.known == ("SingleServer", "ThreeTier")
        assert "FourTier" in str(error)

    @pytest.mark.parametrize("payload", [{"appResourceGroup": "rg1"}, {"deploymentType": 3}])
    def test_missing_or_non_string_tag_fails(self, payload):
        with pytest.raises(MissingDiscriminatorError):
            INFRASTRUCTURE_CONFIGURATION.decode(payload)

    def test_non_object_payload_fails(self):
        with pytest.raises(DecodeError):
            INFRASTRUCTURE_CONFIGURATION.decode(["SingleServer"])

    def test_malformed_field_fails_without_falling_back(self, single_server_payload):
        payload = {**single_server_payload, "appResourceGroup": ""}

        with pytest.raises(DecodeError):
            INFRASTRUCTURE_CONFIGURATION.decode(payload)

    def test_unknown_nested_tag_fails_whole_decode(self, single_server_payload):
        single_server_payload["virtualMachineConfiguration"]["osProfile"]["osConfiguration"]["osType"] = "Plan9"

        with pytest.raises(DecodeError) as excinfo:
            INFRASTRUCTURE_CONFIGURATION.decode(single_server_payload)

        assert "Plan9" in str(excinfo.value)

    def test_extra_fields_are_ignored(self):
        decoded = FILE_SHARE_CONFIGURATION.decode({"configurationType": "Skip", "futureField": 1})

        assert isinstance(decoded, SkipFileShareConfiguration)

    def test_open_enum_inside_union_keeps_unknown_value(self):
        decoded = OUTPUT_DATA_SOURCE.decode(
            {"type": "Microsoft.Storage/Blob", "properties": {"authenticationMode": "Foo"}}
        )

        assert isinstance(decoded, BlobOutputDataSource)
        assert decoded.properties.authentication_mode == AuthenticationMode.unknown("Foo")


class TestEncode:
    def test_tag_is_reinjected_first(self, single_server_payload):
        decoded = INFRASTRUCTURE_CONFIGURATION.decode(single_server_payload)

        encoded = INFRASTRUCTURE_CONFIGURATION.encode(decoded)

        assert next(iter(encoded)) == "deploymentType"
        assert encoded == single_server_payload

    def test_three_tier_round_trip(self, three_tier_payload):
        decoded = INFRASTRUCTURE_CONFIGURATION.decode(three_tier_payload)

        assert INFRASTRUCTURE_CONFIGURATION.encode(decoded) == three_tier_payload

    def test_required_empty_list_survives_round_trip(self):
        class Labelled(WireModel):
            tags: list[str] = Field(..., alias="tags")
            notes: list[str] = Field(default_factory=list, alias="notes")

        union = TaggedUnion("Labelled", tag="kind", shapes={"A": Labelled})
        shape = Labelled(tags=[])

        encoded = union.encode(shape)

        assert encoded == {"kind": "A", "tags": []}
        assert union.decode(encoded) == shape

    def test_shape_without_fields_encodes_to_tag_only(self):
        assert FILE_SHARE_CONFIGURATION.encode(SkipFileShareConfiguration()) == {"configurationType": "Skip"}

    def test_unregistered_shape_cannot_be_encoded(self):
        with pytest.raises(EncodeError):
            INFRASTRUCTURE_CONFIGURATION.encode(WindowsConfiguration())

    def test_union_field_in_model_serializes_with_tag(self):
        output = Output.from_wire(
            {
                "name": "out1",
                "properties": {
                    "datasource": {
                        "type": "Microsoft.Sql/Server/Database",
                        "properties": {"server": "sql1", "authenticationMode": "Msi"},
                    }
                },
            }
        )

        datasource = output.to_wire()["properties"]["datasource"]
        assert datasource == {
            "type": "Microsoft.Sql/Server/Database",
            "properties": {"server": "sql1", "authenticationMode": "Msi"},
        }


class TestRegistry:
    def test_introspection(self):
        assert FILE_SHARE_CONFIGURATION.tags == ("CreateAndMount", "Mount", "Skip")
        assert FILE_SHARE_CONFIGURATION.shape_for("Mount") is MountFileShareConfiguration
        with pytest.raises(UnknownDiscriminatorError):
            FILE_SHARE_CONFIGURATION.shape_for("Nfs")

    def test_empty_registry_is_rejected(self):
        with pytest.raises(ValueError):
            TaggedUnion("Empty", tag="kind", shapes={})

    def test_duplicate_shape_is_rejected(self):
        with pytest.raises(ValueError, match="registered twice"):
            TaggedUnion("Dup", tag="kind", shapes={"A": LinuxConfiguration, "B": LinuxConfiguration})

    def test_shape_declaring_the_tag_is_rejected(self):
        class Tagged(WireModel):
            kind: str = Field(..., alias="kind")

        with pytest.raises(ValueError, match="must not declare the tag"):
            TaggedUnion("Bad", tag="kind", shapes={"A": Tagged})

    def test_non_model_shape_is_rejected(self):
        with pytest.raises(ValueError):
            TaggedUnion("Bad", tag="kind", shapes={"A": dict})
