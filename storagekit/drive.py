"""Records exchanged with the remote-mount service."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/87.0.4280.88 Safari/537.36"
)
DEFAULT_TIMEOUT = 30.0


@dataclass
class MountPoints:
    """One entry of a mount listing."""

    mount_point: str = ""
    fs: str = ""
    icon: str = ""
    name: str = ""


def _mount_points_from(data: Mapping[str, Any]) -> MountPoints:
    return MountPoints(
        mount_point=data.get("MountPoint", ""),
        fs=data.get("Fs", ""),
        icon=data.get("Icon", ""),
        name=data.get("Name", ""),
    )


def _mount_points_to(entry: MountPoints) -> dict[str, Any]:
    return {
        "MountPoint": entry.mount_point,
        "Fs": entry.fs,
        "Icon": entry.icon,
        "Name": entry.name,
    }


@dataclass
class MountList:
    mount_points: list[MountPoints] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MountList":
        return cls([_mount_points_from(item) for item in data.get("mountPoints") or []])

    def to_dict(self) -> dict[str, Any]:
        return {"mountPoints": [_mount_points_to(item) for item in self.mount_points]}


@dataclass
class MountPoint:
    mount_point: str = ""
    fs: str = ""
    icon: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MountPoint":
        return cls(
            mount_point=data.get("mount_point", ""),
            fs=data.get("fs", ""),
            icon=data.get("icon", ""),
            name=data.get("name", ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "mount_point": self.mount_point,
            "fs": self.fs,
            "icon": self.icon,
            "name": self.name,
        }


@dataclass
class MountInput:
    fs: str = ""
    mount_point: str = ""


@dataclass
class MountResult:
    error: str = ""
    input: MountInput = field(default_factory=MountInput)
    path: str = ""
    status: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MountResult":
        raw_input = data.get("input") or {}
        return cls(
            error=data.get("error", ""),
            input=MountInput(
                fs=raw_input.get("fs", ""),
                mount_point=raw_input.get("mountPoint", ""),
            ),
            path=data.get("path", ""),
            status=int(data.get("status", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.error,
            "input": {"fs": self.input.fs, "mountPoint": self.input.mount_point},
            "path": self.path,
            "status": self.status,
        }


@dataclass
class RemotesResult:
    remotes: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RemotesResult":
        return cls(list(data.get("remotes") or []))

    def to_dict(self) -> dict[str, Any]:
        return {"remotes": list(self.remotes)}