"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_MAX_FILE_SIZE

TOOL_NAME = "readme-rustdocify"


@dataclass
class RustdocifyConfig:
    """Configuration for rustdocifying a readme.

    Attributes:
        package_name: Package whose docs.rs links are converted.
        version: Version that every converted docs.rs link must name, if any.
        crate_name: Crate name that every converted docs.rs link must name,
            if any.
        max_file_size: Maximum readme size in bytes that will be processed.

    Examples:
        RustdocifyConfig(package_name="foo", version="0.1.0", crate_name="foo")
    """

    package_name: str | None = None
    version: str | None = None
    crate_name: str | None = None

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`package_name` must not be empty")
    """


def load_config(search_path: Path) -> RustdocifyConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.readme-rustdocify]`` table from `pyproject.toml` and the
    ``[readme-rustdocify]`` or ``[tool.readme-rustdocify]`` table from
    `.readme-rustdocify.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        RustdocifyConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a table is present but not a mapping or contains unsupported keys.

    Examples:
        load_config(Path("crates/foo"))
    """
    for current in _walk_up(search_path):
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", TOOL_NAME)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / f".{TOOL_NAME}.toml",
            table_paths=[(TOOL_NAME,), ("tool", TOOL_NAME)],
        )
        if dotfile_config is not None:
            return dotfile_config

    return RustdocifyConfig()


def load_cargo_manifest(search_path: Path) -> tuple[str | None, str | None]:
    """Read package and crate names from the nearest `Cargo.toml`.

    The crate name is the ``[lib]`` name when set, otherwise the package name
    with hyphens replaced by underscores, as Cargo does.

    Args:
        search_path: Directory used as the starting point for the lookup.

    Returns:
        tuple[str | None, str | None]: Package name and crate name, both None
            when no readable manifest with a ``[package]`` name is found.

    Examples:
        package_name, crate_name = load_cargo_manifest(Path.cwd())
    """
    for current in _walk_up(search_path):
        data = _read_toml(current / "Cargo.toml")
        if data is None:
            continue

        package_name = _extract_table(data, ("package", "name"))
        if not isinstance(package_name, str):
            continue

        crate_name = _extract_table(data, ("lib", "name"))
        if not isinstance(crate_name, str):
            crate_name = package_name.replace("-", "_")
        return package_name, crate_name

    return None, None


_MISSING = object()


def _walk_up(search_path: Path):
    current = search_path.resolve()
    while True:
        yield current
        parent = current.parent
        if parent == current:
            return
        current = parent


def _read_toml(config_file: Path) -> dict | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            return tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> RustdocifyConfig | None:
    data = _read_toml(config_file)
    if data is None:
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> RustdocifyConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return RustdocifyConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: RustdocifyConfig) -> None:
    """Validate a `RustdocifyConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the package name is missing or empty, the version or
            crate name is empty or not a string, or the file size limit is not
            a positive integer.

    Examples:
        validate_config(RustdocifyConfig(package_name="foo"))
    """
    if config.package_name is None:
        raise ConfigError(
            "`package_name` is required (set it in configuration, pass "
            "--package-name, or run inside a Cargo package)"
        )

    for key in ("package_name", "version", "crate_name"):
        value = getattr(config, key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")
        if not value:
            raise ConfigError(f"`{key}` must not be empty")

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: RustdocifyConfig, **overrides: object) -> RustdocifyConfig:
    """Apply override values to a `RustdocifyConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        RustdocifyConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `RustdocifyConfig`.

    Examples:
        updated = apply_overrides(config, version="0.2.0")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> RustdocifyConfig:
    """Load, complete, override, and validate configuration.

    Names missing from the configuration files are filled in from the nearest
    `Cargo.toml` before overrides are applied.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        RustdocifyConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), package_name="foo", version="0.1.0")
    """
    config = load_config(search_path)

    if config.package_name is None and overrides.get("package_name") is None:
        package_name, crate_name = load_cargo_manifest(search_path)
        config = apply_overrides(
            config,
            package_name=package_name,
            crate_name=config.crate_name or crate_name,
        )

    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
