from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

import yaml
from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")

JSON_EXTENSIONS = frozenset({"json"})
YAML_EXTENSIONS = frozenset({"yaml", "yml"})

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class ConfigFileError(OSError):
    """A supported file could not be read, parsed or written."""


class _ConfigLoader(yaml.SafeLoader):
    """SafeLoader that keeps dates as strings and mapping keys as their source text."""

    yaml_implicit_resolvers = {
        first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
        for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
    }

    def construct_mapping(self, node, deep=False):
        # resolves "<<" merge keys in place
        self.flatten_mapping(node)
        mapping: dict[str, Any] = {}
        for key_node, value_node in node.value:
            if isinstance(key_node, yaml.ScalarNode):
                key = key_node.value
            else:
                key = str(self.construct_object(key_node, deep=deep))
            mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


class _ConfigDumper(yaml.SafeDumper):
    pass


# OrderedDict, defaultdict and other dict subclasses dump as plain mappings
_ConfigDumper.add_multi_representer(dict, yaml.SafeDumper.represent_dict)


def dump_json(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"), default=str)


def resolve_extension(path: str | Path) -> str:
    """Return the lowercased extension of ``path`` if it names a supported format.

    The extension is whatever follows the last ``.`` of the file name.
    """
    name = Path(path).name
    _, dot, ext = name.rpartition(".")
    if not dot or not ext:
        raise ValueError(f"File does not have a valid extension: {path}")
    ext = ext.lower()
    if ext not in JSON_EXTENSIONS | YAML_EXTENSIONS:
        raise ValueError(f"Unsupported file format: .{ext}")
    return ext


def _read_bytes(p: Path) -> bytes:
    if not p.is_file():
        raise ValueError(f"Nonexisting file path provided: {p}")
    try:
        raw = p.read_bytes()
    except OSError as e:
        raise ConfigFileError(f"Failed to read file: {p}") from e
    if not raw.strip():
        raise ConfigFileError(f"File is empty: {p}")
    return raw


def _parse(p: Path) -> Any:
    raw = _read_bytes(p)
    ext = resolve_extension(p)
    try:
        text = raw.decode("utf-8")
        if ext in YAML_EXTENSIONS:
            return yaml.load(text, Loader=_ConfigLoader)
        return json.loads(text)
    except (UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError, RecursionError) as e:
        raise ConfigFileError(f"Failed to parse {ext.upper()} file: {p}") from e


def load_file_to_map(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML file into a dict.

    Raises ``ValueError`` for a missing file or an unsupported extension and
    ``ConfigFileError`` when the file is empty or cannot be parsed.
    """
    p = Path(path)
    data = _parse(p)
    if not isinstance(data, dict):
        raise ConfigFileError(f"Top-level document must be a mapping: {p}")
    return data


def load_file_to_object(path: str | Path, target_type: type[T]) -> T:
    """Load a JSON or YAML file and validate it into ``target_type``.

    Any type pydantic can validate from a mapping works: ``BaseModel``
    subclasses, dataclasses, ``TypedDict``. Keys without a matching field are
    ignored.
    """
    if not str(path):
        raise ValueError("File path is empty")
    p = Path(path)
    data = _parse(p)
    try:
        return TypeAdapter(target_type).validate_python(data)
    except ValidationError as e:
        type_name = getattr(target_type, "__name__", repr(target_type))
        raise ConfigFileError(f"Failed to map {p} onto {type_name}") from e


def _dump(data: dict[str, Any], ext: str) -> str:
    if ext in YAML_EXTENSIONS:
        # no leading "---" unless explicit_start is set
        return yaml.dump(
            data,
            Dumper=_ConfigDumper,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


def write_map_to_file(path: str | Path, data: dict[str, Any]) -> None:
    """Serialize ``data`` to ``path``, picking JSON or YAML from the extension.

    Parent directories are created and existing content is replaced.
    """
    p = Path(path)
    ext = resolve_extension(p)
    try:
        content = _dump(data, ext)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        raise ConfigFileError(f"Failed to serialize data for {p}") from e
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(f"Failed to write file: {p}") from e
