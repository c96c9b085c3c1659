"""Merging of caller-supplied extra volumes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ...models.domain.volumes import ExtraVolumeProvider, VolumeSet

__all__ = ["merge_extra_volumes"]


def merge_extra_volumes(
    extra_volumes: Iterable[ExtraVolumeProvider], targets: Sequence[str]
) -> VolumeSet:
    """Collect the extra volumes that propagate to the given targets.

    The targets are passed through to each provider uninterpreted. Results
    are concatenated in input order without deduplication.

    Parameters
    ----------
    extra_volumes
        Providers of extra volumes.
    targets
        Propagation targets for the service being composed.

    Returns
    -------
    VolumeSet
        Concatenated volumes and mounts of every propagated fragment.
    """
    result = VolumeSet()
    for provider in extra_volumes:
        for fragment in provider.propagate(targets):
            result.extend(fragment)
    return result
