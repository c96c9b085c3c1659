"""Exceptions for volume set composition."""

from __future__ import annotations

from typing import override

from safir.slack.blockkit import SlackException, SlackMessage, SlackTextBlock

__all__ = [
    "DanglingMountError",
    "DuplicateMountPathError",
    "DuplicateVolumeError",
    "VolumeSetError",
]


class VolumeSetError(SlackException):
    """A composed volume set is not internally consistent.

    Composition itself never raises this. It is only raised by the optional
    validation pass run on an assembled container.

    Parameters
    ----------
    message
        Human-readable summary of the problem.
    names
        Offending volume names or mount paths.
    container
        Container whose mounts were being validated, if known.
    """

    heading = "Offending entries"
    """Heading of the Slack attachment listing the offending entries."""

    def __init__(
        self, message: str, names: list[str], container: str | None = None
    ) -> None:
        if container:
            message = f"{message} in container {container}"
        super().__init__(message)
        self.names = names
        self.container = container

    @override
    def to_slack(self) -> SlackMessage:
        """Format this exception as a Slack message."""
        message = super().to_slack()
        text = ", ".join(self.names)
        message.attachments.append(
            SlackTextBlock(heading=self.heading, text=text)
        )
        return message


class DanglingMountError(VolumeSetError):
    """A mount references a volume that does not exist."""

    heading = "Missing volumes"

    def __init__(
        self, names: list[str], container: str | None = None
    ) -> None:
        msg = "Mounts reference undefined volumes"
        super().__init__(msg, names, container)


class DuplicateMountPathError(VolumeSetError):
    """Two mounts of the same container share a mount path."""

    heading = "Duplicate mount paths"

    def __init__(
        self, names: list[str], container: str | None = None
    ) -> None:
        msg = "Multiple mounts at the same path"
        super().__init__(msg, names, container)


class DuplicateVolumeError(VolumeSetError):
    """Two volumes share a name."""

    heading = "Duplicate volumes"

    def __init__(
        self, names: list[str], container: str | None = None
    ) -> None:
        msg = "Multiple volumes with the same name"
        super().__init__(msg, names, container)
