"""fileconf: load JSON/YAML configuration files into dicts or typed objects.

The file extension (``.json``, ``.yaml``, ``.yml``) selects the codec. Maps can
be written back in either format.
"""

__version__ = "0.1.0"

from .utils.io import (  # noqa: E402
    ConfigFileError,
    load_file_to_map,
    load_file_to_object,
    resolve_extension,
    write_map_to_file,
)

__all__ = [
    "__version__",
    "ConfigFileError",
    "load_file_to_map",
    "load_file_to_object",
    "resolve_extension",
    "write_map_to_file",
]
