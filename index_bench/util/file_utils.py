from pathlib import Path
from typing import Union

_SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]


def directory_size(path: Union[str, Path], pattern: str = "*") -> int:
    """
    Sum the size in bytes of all regular files under path matching pattern.

    Only the top level is scanned, so index files kept in a table's
    ``_index`` subdirectory are not counted as table data.

    Raises:
        FileNotFoundError: If the path does not exist
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")
    if path_obj.is_file():
        return path_obj.stat().st_size

    total = 0
    for item in path_obj.glob(pattern):
        if item.is_file() and not item.is_symlink():
            total += item.stat().st_size
    return total


def human_size(num_bytes: int) -> str:
    """Format a byte count as e.g. '12.3 KB'."""
    size = float(num_bytes)
    for unit in _SIZE_UNITS:
        if size < 1024 or unit == _SIZE_UNITS[-1]:
            return f"{size:.1f} {unit}"
        size /= 1024
    return f"{size:.1f} {_SIZE_UNITS[-1]}"


def project_root(start: Path | None = None) -> Path:
    """
    Find the nearest ancestor directory (including the start directory) that
    contains a 'pyproject.toml'.

    Args:
        start: Optional starting path to search from. If a file path is provided,
               its parent directory is used. Defaults to this file's directory.

    Returns:
        Path to the detected project root.

    Raises:
        FileNotFoundError: If no directory containing 'pyproject.toml' is found.
    """
    start_path = (start or Path(__file__)).resolve()
    start_dir = start_path if start_path.is_dir() else start_path.parent

    for candidate in [start_dir] + list(start_dir.parents):
        if (candidate / "pyproject.toml").is_file():
            return candidate

    raise FileNotFoundError(
        f"No project root found starting from '{start_dir}'. Ensure you're "
        f"running inside a checkout that contains 'pyproject.toml'."
    )
