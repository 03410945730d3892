"""Stream Analytics: outputs y sus data sources.

Subconjunto mínimo de `Microsoft.StreamAnalytics` (2021-10-01-preview) para
ejercitar los codecs: enums abiertos con y sin default y una unión por `type`.
"""

from __future__ import annotations

from pydantic import Field

from core.domain.models import NextLinkPage, WireList, WireModel
from core.domain.tagged_union import TaggedUnion
from core.domain.wire_enum import OpenEnum, defaulted


class AuthenticationMode(OpenEnum):
    """Authentication Mode. Valid modes are `ConnectionString`, `Msi` and `UserToken`."""

    MSI = "Msi"
    USER_TOKEN = "UserToken"
    CONNECTION_STRING = "ConnectionString"

    @classmethod
    def default(cls) -> AuthenticationMode:
        return cls.CONNECTION_STRING


AuthenticationModeField = defaulted(AuthenticationMode)


class BlobWriteMode(OpenEnum):
    APPEND = "Append"
    ONCE = "Once"


class OutputErrorPolicy(OpenEnum):
    STOP = "Stop"
    DROP = "Drop"


class StorageAccount(WireModel):
    account_name: str | None = Field(default=None, alias="accountName")
    account_key: str | None = Field(default=None, alias="accountKey")


class BlobOutputDataSourceProperties(WireModel):
    storage_accounts: WireList[StorageAccount] = Field(
        default_factory=list,
        alias="storageAccounts",
        description="Cuentas de Storage; requerido en PUT.",
    )
    container: str | None = None
    path_pattern: str | None = Field(default=None, alias="pathPattern")
    date_format: str | None = Field(default=None, alias="dateFormat")
    time_format: str | None = Field(default=None, alias="timeFormat")
    authentication_mode: AuthenticationModeField = Field(
        default_factory=AuthenticationMode.from_absent,
        alias="authenticationMode",
    )
    blob_path_prefix: str | None = Field(default=None, alias="blobPathPrefix")
    blob_write_mode: BlobWriteMode | None = Field(default=None, alias="blobWriteMode")


class BlobOutputDataSource(WireModel):
    """Output a Azure Blob Storage (`type = Microsoft.Storage/Blob`)."""

    properties: BlobOutputDataSourceProperties | None = None


class AzureSqlDatabaseOutputDataSourceProperties(WireModel):
    server: str | None = None
    database: str | None = None
    user: str | None = None
    password: str | None = None
    table: str | None = None
    max_batch_count: float | None = Field(default=None, alias="maxBatchCount")
    max_writer_count: float | None = Field(default=None, alias="maxWriterCount")
    authentication_mode: AuthenticationModeField = Field(
        default_factory=AuthenticationMode.from_absent,
        alias="authenticationMode",
    )


class AzureSqlDatabaseOutputDataSource(WireModel):
    """Output a Azure SQL (`type = Microsoft.Sql/Server/Database`)."""

    properties: AzureSqlDatabaseOutputDataSourceProperties | None = None


OUTPUT_DATA_SOURCE = TaggedUnion(
    "OutputDataSource",
    tag="type",
    shapes={
        "Microsoft.Storage/Blob": BlobOutputDataSource,
        "Microsoft.Sql/Server/Database": AzureSqlDatabaseOutputDataSource,
    },
)
OutputDataSourceUnion = OUTPUT_DATA_SOURCE.annotation


class OutputProperties(WireModel):
    datasource: OutputDataSourceUnion | None = None
    time_window: str | None = Field(default=None, alias="timeWindow")
    size_window: int | None = Field(default=None, alias="sizeWindow")
    etag: str | None = None


class Output(WireModel):
    id: str | None = None
    name: str | None = None
    type: str | None = None
    properties: OutputProperties | None = None


class OutputListResult(NextLinkPage[Output]):
    """Página de `GET .../streamingjobs/{job}/outputs`."""
