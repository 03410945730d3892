"""Catálogo de tipos Azure registrados con los codecs genéricos.

Por qué un registro por nombre:
- La CLI (y cualquier herramienta) puede resolver `"AuthenticationMode"` o
  `"InfrastructureConfiguration"` sin importar módulos concretos.
"""

from __future__ import annotations

from core.domain.catalog.redis import (
    DayOfWeek,
    MinimumTlsVersion,
    PublicNetworkAccess,
    SkuFamily,
    SkuName,
)
from core.domain.catalog.streamanalytics import (
    OUTPUT_DATA_SOURCE,
    AuthenticationMode,
    BlobWriteMode,
    OutputErrorPolicy,
)
from core.domain.catalog.workloads import (
    FILE_SHARE_CONFIGURATION,
    INFRASTRUCTURE_CONFIGURATION,
    OS_CONFIGURATION,
    SINGLE_SERVER_CUSTOM_RESOURCE_NAMES,
    SapDatabaseType,
)
from core.domain.tagged_union import TaggedUnion
from core.domain.wire_enum import WireEnum

ENUMS: dict[str, type[WireEnum]] = {
    enum.__name__: enum
    for enum in (
        AuthenticationMode,
        BlobWriteMode,
        OutputErrorPolicy,
        SapDatabaseType,
        MinimumTlsVersion,
        PublicNetworkAccess,
        SkuName,
        SkuFamily,
        DayOfWeek,
    )
}

UNIONS: dict[str, TaggedUnion] = {
    union.name: union
    for union in (
        OUTPUT_DATA_SOURCE,
        INFRASTRUCTURE_CONFIGURATION,
        OS_CONFIGURATION,
        SINGLE_SERVER_CUSTOM_RESOURCE_NAMES,
        FILE_SHARE_CONFIGURATION,
    )
}


def get_enum(name: str) -> type[WireEnum]:
    try:
        return ENUMS[name]
    except KeyError:
        raise KeyError(f"unknown enum {name!r} (available: {', '.join(sorted(ENUMS))})") from None


def get_union(name: str) -> TaggedUnion:
    try:
        return UNIONS[name]
    except KeyError:
        raise KeyError(f"unknown union {name!r} (available: {', '.join(sorted(UNIONS))})") from None


__all__ = ["ENUMS", "UNIONS", "get_enum", "get_union"]
