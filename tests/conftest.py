"""Fixtures compartidas por la suite."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from core.config import AppSettings

ENDPOINT = "https://management.azure.com"
API_VERSION = "2021-10-01-preview"

_VM_CONFIGURATION: dict[str, Any] = {
    "vmSize": "Standard_E32ds_v4",
    "imageReference": {
        "publisher": "RedHat",
        "offer": "RHEL-SAP-HA",
        "sku": "84sapha-gen2",
        "version": "latest",
    },
    "osProfile": {
        "adminUsername": "azureuser",
        "osConfiguration": {
            "osType": "Linux",
            "disablePasswordAuthentication": True,
            "ssh": {"publicKeys": [{"keyData": "ssh-rsa AAAA"}]},
        },
    },
}

_SUBNET = "/subscriptions/sub/resourceGroups/rg1/providers/Microsoft.Network/virtualNetworks/vnet/subnets/app"


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    for name in (
        "AZWIRE_ENDPOINT",
        "AZWIRE_API_VERSION",
        "AZWIRE_HTTP_TIMEOUT_SECONDS",
        "AZWIRE_USER_AGENT",
        "AZWIRE_CONTINUATION_HEADER",
        "AZWIRE_LOG_LEVEL",
        "AZWIRE_RICH_LOGGING",
        "AZWIRE_BEARER_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, endpoint=ENDPOINT, api_version=API_VERSION)


@pytest.fixture
def single_server_payload() -> dict[str, Any]:
    return {
        "deploymentType": "SingleServer",
        "appResourceGroup": "rg1",
        "subnetId": _SUBNET,
        "virtualMachineConfiguration": copy.deepcopy(_VM_CONFIGURATION),
        "databaseType": "HANA",
        "customResourceNames": {
            "namingPatternType": "FullResourceName",
            "virtualMachine": {"vmName": "sapvm01", "hostName": "sapvm01"},
        },
    }


@pytest.fixture
def three_tier_payload() -> dict[str, Any]:
    def server(count: int) -> dict[str, Any]:
        return {
            "subnetId": _SUBNET,
            "virtualMachineConfiguration": copy.deepcopy(_VM_CONFIGURATION),
            "instanceCount": count,
        }

    return {
        "deploymentType": "ThreeTier",
        "appResourceGroup": "rg-sap",
        "centralServer": server(1),
        "applicationServer": server(2),
        "databaseServer": {**server(1), "databaseType": "DB2"},
        "storageConfiguration": {
            "transportFileShareConfiguration": {
                "configurationType": "Mount",
                "id": "/subscriptions/sub/fileShares/trans",
                "privateEndpointId": "/subscriptions/sub/privateEndpoints/pe1",
            }
        },
    }
