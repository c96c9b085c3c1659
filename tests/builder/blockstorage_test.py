"""Tests for the block-storage host path volumes."""

from __future__ import annotations

from volumeset.services.builder.blockstorage import (
    build_block_storage_mounts,
    build_block_storage_volumes,
)


def test_volumes() -> None:
    volumes = build_block_storage_volumes()

    seen = [(v.name, v.host_path.path, v.host_path.type) for v in volumes]
    assert seen == [
        ("etc-iscsi", "/etc/iscsi", None),
        ("dev", "/dev", None),
        ("lib-modules", "/lib/modules", None),
        ("run", "/run", None),
        ("sys", "/sys", None),
        (
            "var-locks-brick",
            "/var/locks/openstack/os-brick",
            "DirectoryOrCreate",
        ),
        ("etc-nvme", "/etc/nvme", "DirectoryOrCreate"),
    ]


def test_mounts() -> None:
    mounts = build_block_storage_mounts()

    assert len(mounts) == 7
    assert [(m.name, m.mount_path, m.read_only) for m in mounts] == [
        ("etc-iscsi", "/etc/iscsi", True),
        ("dev", "/dev", False),
        ("lib-modules", "/lib/modules", True),
        ("run", "/run", False),
        ("sys", "/sys", True),
        ("var-locks-brick", "/var/locks/openstack/os-brick", False),
        ("etc-nvme", "/etc/nvme", False),
    ]
    names = {v.name for v in build_block_storage_volumes()}
    assert {m.name for m in mounts} == names


def test_fresh_objects() -> None:
    first = build_block_storage_mounts()
    first[0].read_only = False
    assert build_block_storage_mounts()[0].read_only is True
