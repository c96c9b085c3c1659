"""Tests for configuration parsing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from volumeset.config import Config
from volumeset.models.v1.extravolumes import ExtraVolType, NFSVolumeSource

from .support.data import config_path, read_config


def test_standard() -> None:
    config = read_config("standard")

    assert config.service_name == "glance"
    assert config.instance_name == "glance-default"
    assert config.enable_block_storage
    assert not config.external_data_store
    assert config.secret_names == ["glance-db-password", "glance-keystone"]
    assert config.propagation == ["glance"]
    assert config.cache_size == "10G"
    assert config.cache_claim_name is None
    assert not config.validate_volumes

    assert len(config.extra_mounts) == 1
    extra = config.extra_mounts[0]
    assert extra.region == "regionOne"
    assert [g.extra_vol_type for g in extra.ext_vol_mounts] == [
        ExtraVolType.CEPH,
        ExtraVolType.NFS,
    ]
    nfs = extra.ext_vol_mounts[1].volumes[0].source
    assert isinstance(nfs, NFSVolumeSource)
    assert nfs.server_path == "/exports/backup"


def test_minimal() -> None:
    config = read_config("minimal")

    assert config.instance_name == "glance-external"
    assert config.external_data_store
    assert config.secret_names == []
    assert config.extra_mounts == []


def test_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VOLUMESET_EXTERNAL_DATA_STORE", "true")
    monkeypatch.setenv("VOLUMESET_SERVICE_NAME", "manila")
    monkeypatch.setenv("VOLUMESET_SECRET_NAMES", '["one", "two"]')

    config = Config.from_file(config_path("standard"))

    assert config.external_data_store
    assert config.service_name == "manila"
    assert config.secret_names == ["one", "two"]
    assert config.propagation == ["manila"]


def test_invalid() -> None:
    with pytest.raises(ValidationError):
        Config(instance_name="Not_Valid")
    with pytest.raises(ValidationError):
        Config.model_validate({"instanceName": "glance", "unknown": True})
    with pytest.raises(ValidationError):
        Config.model_validate(
            {
                "instanceName": "glance",
                "extraMounts": [
                    {
                        "extraVol": [
                            {
                                "mounts": [
                                    {
                                        "volumeName": "x",
                                        "containerPath": "relative/path",
                                    }
                                ]
                            }
                        ]
                    }
                ],
            }
        )
