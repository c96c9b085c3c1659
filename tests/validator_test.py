"""Tests for the volume set consistency checks."""

from __future__ import annotations

import pytest
from kubernetes_asyncio.client import (
    V1EmptyDirVolumeSource,
    V1Volume,
    V1VolumeMount,
)

from volumeset.exceptions import (
    DanglingMountError,
    DuplicateMountPathError,
    DuplicateVolumeError,
    VolumeSetError,
)
from volumeset.services.builder.volumes import VolumeSetBuilder
from volumeset.services.validator import validate_volume_set


def _volume(name: str) -> V1Volume:
    return V1Volume(name=name, empty_dir=V1EmptyDirVolumeSource())


def test_valid(builder: VolumeSetBuilder) -> None:
    volumes = builder.build_volumes("glance", enable_block_storage=True)
    mounts = builder.build_mounts(enable_block_storage=True)
    validate_volume_set(volumes, mounts)
    validate_volume_set([], [])


def test_duplicate_volume() -> None:
    volumes = [_volume("a"), _volume("b"), _volume("a")]
    with pytest.raises(DuplicateVolumeError) as excinfo:
        validate_volume_set(volumes, [], container="api")
    assert excinfo.value.names == ["a"]
    assert excinfo.value.container == "api"
    assert str(excinfo.value) == (
        "Multiple volumes with the same name in container api"
    )


def test_dangling_mount() -> None:
    mounts = [
        V1VolumeMount(name="a", mount_path="/a"),
        V1VolumeMount(name="missing", mount_path="/b"),
    ]
    with pytest.raises(DanglingMountError) as excinfo:
        validate_volume_set([_volume("a")], mounts)
    assert excinfo.value.names == ["missing"]
    assert excinfo.value.container is None


def test_duplicate_mount_path() -> None:
    mounts = [
        V1VolumeMount(name="a", mount_path="/data"),
        V1VolumeMount(name="b", mount_path="/data"),
    ]
    with pytest.raises(DuplicateMountPathError) as excinfo:
        validate_volume_set([_volume("a"), _volume("b")], mounts)
    assert excinfo.value.names == ["/data"]
    assert isinstance(excinfo.value, VolumeSetError)


def test_shared_volume() -> None:
    # Several mounts of one volume at different paths are fine.
    mounts = [
        V1VolumeMount(name="a", mount_path="/one"),
        V1VolumeMount(name="a", mount_path="/two", sub_path="x"),
    ]
    validate_volume_set([_volume("a")], mounts)
