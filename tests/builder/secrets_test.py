"""Tests for secret projection."""

from __future__ import annotations

from volumeset.services.builder.secrets import build_secret_projections


def test_empty() -> None:
    result = build_secret_projections([])
    assert result.volumes == []
    assert result.mounts == []


def test_order() -> None:
    result = build_secret_projections(["s1", "s2"])

    assert [v.name for v in result.volumes] == ["s1", "s2"]
    assert [v.secret.secret_name for v in result.volumes] == ["s1", "s2"]
    assert all(v.secret.default_mode == 0o640 for v in result.volumes)
    assert [m.name for m in result.mounts] == ["s1", "s2"]
    assert [m.mount_path for m in result.mounts] == [
        "/var/lib/config-data/secret-0",
        "/var/lib/config-data/secret-1",
    ]
    assert all(m.read_only for m in result.mounts)


def test_similar_names() -> None:
    # Mount paths depend only on position, never on the secret name.
    names = ["db", "db-1", "db.1", "DB"]
    result = build_secret_projections(names)

    paths = [m.mount_path for m in result.mounts]
    assert len(set(paths)) == len(names)
    assert paths[3].endswith("/secret-3")


def test_generator_input() -> None:
    result = build_secret_projections(n for n in ("a", "b", "c"))
    assert [m.mount_path.rsplit("/", 1)[1] for m in result.mounts] == [
        "secret-0",
        "secret-1",
        "secret-2",
    ]
