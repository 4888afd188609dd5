"""Loading and saving the service's INI configuration."""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

LOCAL_STORAGE_CONFIG_FILE_PATH = "/etc/casaos/local-storage.conf"

_TOP_SECTION = "DEFAULT"
_UNUSED_DEFAULT = "\x00unused"


def _key(name: str) -> Any:
    return field(metadata={"key": name})


@dataclass
class CommonInfo:
    runtime_path: str = field(default="/var/run/casaos", metadata={"key": "RuntimePath"})


@dataclass
class AppInfo:
    db_path: str = field(default="/var/lib/casaos/db", metadata={"key": "DBPath"})
    log_path: str = field(default="/var/log/casaos", metadata={"key": "LogPath"})
    log_save_name: str = field(default="local-storage", metadata={"key": "LogSaveName"})
    log_file_ext: str = field(default="log", metadata={"key": "LogFileExt"})
    shell_path: str = field(default="/usr/share/casaos/shell", metadata={"key": "ShellPath"})


@dataclass
class ServerInfo:
    usb_auto_mount: str = field(default="True", metadata={"key": "USBAutoMount"})
    enable_merger_fs: str = field(default="False", metadata={"key": "EnableMergerFS"})


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None, default_section=_UNUSED_DEFAULT, strict=False
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _load(path: str) -> configparser.ConfigParser:
    parser = _new_parser()
    text = Path(path).read_text(encoding="utf-8")
    parser.read_string(f"[{_TOP_SECTION}]\n" + text, source=path)
    return parser


def _dump(parser: configparser.ConfigParser) -> str:
    lines: list[str] = []
    sections = parser.sections()
    ordered = [s for s in sections if s == _TOP_SECTION] + [s for s in sections if s != _TOP_SECTION]
    for section in ordered:
        items = list(parser[section].items())
        if section == _TOP_SECTION:
            if not items:
                continue
        else:
            lines.append(f"[{section}]")
        lines.extend(f"{key} = {value}" for key, value in items)
        lines.append("")
    return "\n".join(lines)


def _map_to(parser: configparser.ConfigParser, section: str, target: Any) -> None:
    if not parser.has_section(section):
        return
    values = parser[section]
    for f in fields(target):
        key = f.metadata["key"]
        if key in values:
            setattr(target, f.name, values[key])


def _reflect_from(parser: configparser.ConfigParser, section: str, source: Any) -> None:
    if not parser.has_section(section):
        parser.add_section(section)
    for f in fields(source):
        parser.set(section, f.metadata["key"], str(getattr(source, f.name)))


@dataclass
class LocalStorageConfig:
    """The service settings together with the INI document they came from."""

    common: CommonInfo = field(default_factory=CommonInfo)
    app: AppInfo = field(default_factory=AppInfo)
    server: ServerInfo = field(default_factory=ServerInfo)
    config_file_path: str = LOCAL_STORAGE_CONFIG_FILE_PATH
    _parser: configparser.ConfigParser = field(default_factory=_new_parser, repr=False)

    def init_setup(self, config_path: str = "", sample: str = "") -> None:
        """Load settings, first writing ``sample`` if the file does not exist."""
        self.config_file_path = config_path or LOCAL_STORAGE_CONFIG_FILE_PATH
        if not os.path.exists(self.config_file_path):
            print("config file not exist, create it")
            Path(self.config_file_path).write_text(sample, encoding="utf-8")

        self._parser = _load(self.config_file_path)
        _map_to(self._parser, "common", self.common)
        _map_to(self._parser, "app", self.app)
        _map_to(self._parser, "server", self.server)

    def save_setup(self, config_path: str = "") -> None:
        """Write the current settings, keeping any other keys of the document."""
        _reflect_from(self._parser, "common", self.common)
        _reflect_from(self._parser, "app", self.app)
        _reflect_from(self._parser, "server", self.server)
        path = config_path or LOCAL_STORAGE_CONFIG_FILE_PATH
        Path(path).write_text(_dump(self._parser), encoding="utf-8")