"""SAP Workloads: configuración de infraestructura de un Virtual Instance.

Subconjunto de `Microsoft.Workloads` (2022-11-01-preview). Aquí viven las
uniones anidadas: `deploymentType` -> shape de infraestructura, que a su vez
contiene uniones por `osType`, `namingPatternType` y `configurationType`.
"""

from __future__ import annotations

from pydantic import Field

from core.domain.models import WireList, WireModel
from core.domain.tagged_union import TaggedUnion
from core.domain.wire_enum import OpenEnum


class SapDatabaseType(OpenEnum):
    """Defines the supported SAP Database types."""

    HANA = "HANA"
    DB2 = "DB2"


class SshPublicKey(WireModel):
    key_data: str | None = Field(default=None, alias="keyData")


class SshConfiguration(WireModel):
    public_keys: WireList[SshPublicKey] = Field(default_factory=list, alias="publicKeys")


class LinuxConfiguration(WireModel):
    disable_password_authentication: bool | None = Field(
        default=None, alias="disablePasswordAuthentication"
    )
    ssh: SshConfiguration | None = None


class WindowsConfiguration(WireModel):
    pass


OS_CONFIGURATION = TaggedUnion(
    "OsConfiguration",
    tag="osType",
    shapes={"Linux": LinuxConfiguration, "Windows": WindowsConfiguration},
)
OsConfigurationUnion = OS_CONFIGURATION.annotation


class OsProfile(WireModel):
    admin_username: str | None = Field(default=None, alias="adminUsername")
    admin_password: str | None = Field(default=None, alias="adminPassword")
    os_configuration: OsConfigurationUnion | None = Field(default=None, alias="osConfiguration")


class ImageReference(WireModel):
    publisher: str | None = None
    offer: str | None = None
    sku: str | None = None
    version: str | None = None


class VirtualMachineConfiguration(WireModel):
    vm_size: str = Field(..., min_length=1, alias="vmSize")
    image_reference: ImageReference = Field(..., alias="imageReference")
    os_profile: OsProfile = Field(..., alias="osProfile")


class VirtualMachineResourceNames(WireModel):
    vm_name: str | None = Field(default=None, alias="vmName")
    host_name: str | None = Field(default=None, alias="hostName")


class SingleServerFullResourceNames(WireModel):
    virtual_machine: VirtualMachineResourceNames | None = Field(default=None, alias="virtualMachine")


SINGLE_SERVER_CUSTOM_RESOURCE_NAMES = TaggedUnion(
    "SingleServerCustomResourceNames",
    tag="namingPatternType",
    shapes={"FullResourceName": SingleServerFullResourceNames},
)
SingleServerCustomResourceNamesUnion = SINGLE_SERVER_CUSTOM_RESOURCE_NAMES.annotation


class CreateAndMountFileShareConfiguration(WireModel):
    resource_group: str | None = Field(default=None, alias="resourceGroup")
    storage_account_name: str | None = Field(default=None, alias="storageAccountName")


class MountFileShareConfiguration(WireModel):
    id: str
    private_endpoint_id: str = Field(..., alias="privateEndpointId")


class SkipFileShareConfiguration(WireModel):
    pass


FILE_SHARE_CONFIGURATION = TaggedUnion(
    "FileShareConfiguration",
    tag="configurationType",
    shapes={
        "CreateAndMount": CreateAndMountFileShareConfiguration,
        "Mount": MountFileShareConfiguration,
        "Skip": SkipFileShareConfiguration,
    },
)
FileShareConfigurationUnion = FILE_SHARE_CONFIGURATION.annotation


class StorageConfiguration(WireModel):
    transport_file_share_configuration: FileShareConfigurationUnion | None = Field(
        default=None, alias="transportFileShareConfiguration"
    )


class ServerConfiguration(WireModel):
    subnet_id: str = Field(..., alias="subnetId")
    virtual_machine_configuration: VirtualMachineConfiguration = Field(
        ..., alias="virtualMachineConfiguration"
    )
    instance_count: int = Field(..., ge=0, alias="instanceCount")


class DatabaseConfiguration(ServerConfiguration):
    database_type: SapDatabaseType | None = Field(default=None, alias="databaseType")


class InfrastructureConfiguration(WireModel):
    """Campos comunes a toda shape de infraestructura (flatten en el servicio)."""

    app_resource_group: str = Field(
        ...,
        min_length=1,
        alias="appResourceGroup",
        description="Resource group donde se despliegan los recursos SAP.",
    )


class SingleServerConfiguration(InfrastructureConfiguration):
    subnet_id: str = Field(..., alias="subnetId")
    virtual_machine_configuration: VirtualMachineConfiguration = Field(
        ..., alias="virtualMachineConfiguration"
    )
    database_type: SapDatabaseType | None = Field(default=None, alias="databaseType")
    custom_resource_names: SingleServerCustomResourceNamesUnion | None = Field(
        default=None, alias="customResourceNames"
    )


class ThreeTierConfiguration(InfrastructureConfiguration):
    central_server: ServerConfiguration = Field(..., alias="centralServer")
    application_server: ServerConfiguration = Field(..., alias="applicationServer")
    database_server: DatabaseConfiguration = Field(..., alias="databaseServer")
    storage_configuration: StorageConfiguration | None = Field(
        default=None, alias="storageConfiguration"
    )


INFRASTRUCTURE_CONFIGURATION = TaggedUnion(
    "InfrastructureConfiguration",
    tag="deploymentType",
    shapes={"SingleServer": SingleServerConfiguration, "ThreeTier": ThreeTierConfiguration},
)
InfrastructureConfigurationUnion = INFRASTRUCTURE_CONFIGURATION.annotation
