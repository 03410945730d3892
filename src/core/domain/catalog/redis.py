"""Azure Cache for Redis (2021-06-01): enums abiertos y uno cerrado."""

from __future__ import annotations

from pydantic import Field

from core.domain.models import WireList, WireModel
from core.domain.wire_enum import OpenEnum, WireEnum, defaulted


class MinimumTlsVersion(OpenEnum):
    """El nombre simbólico difiere del string de wire."""

    N1_0 = "1.0"
    N1_1 = "1.1"
    N1_2 = "1.2"


class PublicNetworkAccess(OpenEnum):
    ENABLED = "Enabled"
    DISABLED = "Disabled"

    @classmethod
    def default(cls) -> PublicNetworkAccess:
        return cls.ENABLED


PublicNetworkAccessField = defaulted(PublicNetworkAccess)


class SkuName(OpenEnum):
    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


class SkuFamily(OpenEnum):
    C = "C"
    P = "P"


class DayOfWeek(WireEnum):
    """Enum cerrado (sin `modelAsString`): un día desconocido es error."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
    EVERYDAY = "Everyday"
    WEEKEND = "Weekend"


class Sku(WireModel):
    name: SkuName
    family: SkuFamily
    capacity: int = Field(..., ge=0)


class ScheduleEntry(WireModel):
    day_of_week: DayOfWeek = Field(..., alias="dayOfWeek")
    start_hour_utc: int = Field(..., ge=0, le=23, alias="startHourUtc")
    maintenance_window: str | None = Field(default=None, alias="maintenanceWindow")


class ScheduleEntries(WireModel):
    schedule_entries: WireList[ScheduleEntry] = Field(default_factory=list, alias="scheduleEntries")


class RedisCommonProperties(WireModel):
    sku: Sku | None = None
    minimum_tls_version: MinimumTlsVersion | None = Field(default=None, alias="minimumTlsVersion")
    public_network_access: PublicNetworkAccessField = Field(
        default_factory=PublicNetworkAccess.from_absent,
        alias="publicNetworkAccess",
    )
    enable_non_ssl_port: bool | None = Field(default=None, alias="enableNonSslPort")
