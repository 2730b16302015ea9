from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path


DUPLICATE_LABEL_POLICIES = {"error", "last"}
UNKNOWN_DEST_POLICIES = {"error", "zero"}
KNOWN_KEYS = {"schema_version", "duplicate_labels", "unknown_dest"}


class ConfigError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class AssemblerOptions:
    """Policies for input the instruction grammar leaves open.

    ``duplicate_labels`` decides what a second ``(NAME)`` declaration does:
    ``"error"`` aborts, ``"last"`` keeps the later address. ``unknown_dest``
    decides whether an unrecognized destination field aborts (``"error"``) or
    encodes as ``000`` (``"zero"``).
    """

    duplicate_labels: str = "error"
    unknown_dest: str = "error"

    @classmethod
    def lenient(cls) -> "AssemblerOptions":
        return cls(duplicate_labels="last", unknown_dest="zero")

    @property
    def strict_labels(self) -> bool:
        return self.duplicate_labels == "error"

    @property
    def strict_dest(self) -> bool:
        return self.unknown_dest == "error"


def load_options(path: Path | str) -> AssemblerOptions:
    resolved = Path(path).expanduser().resolve()
    data = _load_json(resolved)
    return _validate_options(data)


def _load_json(path: Path) -> dict:
    if not path.exists():
        raise ConfigError(f"Options file not found: {path}")
    try:
        with path.open("r", encoding="utf-8") as handle:
            return json.load(handle)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed to read options: {exc}") from exc


def _validate_options(data: dict) -> AssemblerOptions:
    if not isinstance(data, dict):
        raise ConfigError("Options must be a JSON object.")
    schema_version = data.get("schema_version")
    if not isinstance(schema_version, int) or isinstance(schema_version, bool):
        raise ConfigError("schema_version must be an integer.")
    if schema_version != 1:
        raise ConfigError(f"Unsupported schema_version: {schema_version}")
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")
    defaults = AssemblerOptions()
    duplicate_labels = data.get("duplicate_labels", defaults.duplicate_labels)
    if duplicate_labels not in DUPLICATE_LABEL_POLICIES:
        raise ConfigError("duplicate_labels must be one of: error, last.")
    unknown_dest = data.get("unknown_dest", defaults.unknown_dest)
    if unknown_dest not in UNKNOWN_DEST_POLICIES:
        raise ConfigError("unknown_dest must be one of: error, zero.")
    return AssemblerOptions(duplicate_labels=duplicate_labels, unknown_dest=unknown_dest)
