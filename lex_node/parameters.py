"""
Parameter readers.

Every lookup returns the value when the key exists and ``None`` otherwise,
so callers can tell a missing key from an empty one.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml


logger = logging.getLogger(__name__)


ROS_PARAMETERS_KEY = "ros__parameters"


class ParameterPath:
    """A parameter key built from segments and a separator."""

    def __init__(self, *segments: str):
        self.segments = segments

    def join(self, separator: str = "/") -> str:
        return separator.join(self.segments)

    def __repr__(self) -> str:
        return f"ParameterPath({'/'.join(self.segments)!r})"


class ParameterReader(ABC):
    """Typed key-value lookups."""

    @abstractmethod
    def get(self, name: str) -> Optional[Any]:
        """Return the raw value stored under ``name`` or None."""

    def read_int(self, name: str) -> Optional[int]:
        value = self.get(name)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        return value

    def read_double(self, name: str) -> Optional[float]:
        value = self.get(name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return float(value)

    def read_bool(self, name: str) -> Optional[bool]:
        value = self.get(name)
        return value if isinstance(value, bool) else None

    def read_str(self, name: str) -> Optional[str]:
        value = self.get(name)
        return value if isinstance(value, str) else None

    def read_map(self, name: str) -> Optional[Dict[str, str]]:
        value = self.get(name)
        if not isinstance(value, Mapping):
            return None
        return {str(k): str(v) for k, v in value.items()}

    def read_list(self, name: str) -> Optional[List[str]]:
        value = self.get(name)
        if not isinstance(value, (list, tuple)):
            return None
        return [str(item) for item in value]


class DictParameterReader(ParameterReader):
    """Reader over a flat in-memory mapping of full key names."""

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values or {})

    def get(self, name: str) -> Optional[Any]:
        return self._values.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._values


class YamlParameterReader(DictParameterReader):
    """
    Reader over a YAML document.

    Nested mappings are flattened so that::

        lex_configuration:
          bot_name: RobotBot

    is readable as ``lex_configuration/bot_name`` (with the default
    separator). A mapping whose keys are all leaves is also kept whole so
    ``read_map`` works on it.

    ROS 2 parameter files wrap the parameters in ``<node>: ros__parameters:``;
    that wrapper is removed, for ``node_name`` when given or for the only
    node in the file otherwise.
    """

    def __init__(
        self,
        document: Mapping[str, Any],
        separator: str = "/",
        node_name: Optional[str] = None,
    ):
        self.separator = separator
        super().__init__(_flatten(_unwrap_ros_parameters(document, node_name), separator))

    @classmethod
    def from_file(
        cls,
        path: str,
        separator: str = "/",
        node_name: Optional[str] = None,
    ) -> "YamlParameterReader":
        with open(Path(path), "r") as f:
            document = yaml.safe_load(f) or {}
        if not isinstance(document, Mapping):
            raise ValueError(f"Parameter file {path} must contain a mapping")
        logger.debug("Loaded %d top-level parameters from %s", len(document), path)
        return cls(document, separator=separator, node_name=node_name)


def _unwrap_ros_parameters(document: Mapping[str, Any], node_name: Optional[str]) -> Mapping[str, Any]:
    nodes = {
        name: value[ROS_PARAMETERS_KEY]
        for name, value in document.items()
        if isinstance(value, Mapping) and isinstance(value.get(ROS_PARAMETERS_KEY), Mapping)
    }
    if not nodes:
        return document
    if node_name is not None:
        if node_name not in nodes:
            raise ValueError(f"No ros__parameters for node {node_name!r}")
        return nodes[node_name]
    if len(nodes) == 1:
        return next(iter(nodes.values()))
    raise ValueError(
        f"Parameter file holds several nodes ({', '.join(sorted(nodes))}); pass node_name"
    )


def _flatten(document: Mapping[str, Any], separator: str, prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in document.items():
        name = f"{prefix}{separator}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat[name] = dict(value)
            flat.update(_flatten(value, separator, name))
        else:
            flat[name] = value
    return flat
