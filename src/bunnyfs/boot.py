import zirconium as zr
import pathlib
import os
import logging
import zrlog

__VERSION__ = "0.1.0"


def _config_paths() -> list[pathlib.Path]:
    """Directories searched for .bunnyfs*.toml files, later ones taking precedence."""
    candidates = [pathlib.Path("."), pathlib.Path("~").expanduser()]
    extra = os.environ.get("BUNNYFS_CONFIG_SEARCH_PATHS", "./config") or ""
    candidates.extend(pathlib.Path(x) for x in extra.split(";") if x)
    config_paths = []
    for candidate in candidates:
        candidate = candidate.absolute()
        if candidate.is_dir() and candidate not in config_paths:
            config_paths.append(candidate)
    return config_paths


def init_bunnyfs(app_type: str):
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.INFO)

    @zr.configure
    def set_config(app_config: zr.ApplicationConfig):
        config_paths = _config_paths()
        logging.getLogger("bunnyfs.boot").info(f"Config Search Paths: {';'.join(str(x) for x in config_paths)}")
        for path in config_paths:
            app_config.register_default_file(path / ".bunnyfs.defaults.toml")
            app_config.register_default_file(path / f".bunnyfs.{app_type}.defaults.toml")
            app_config.register_file(path / ".bunnyfs.toml")
            app_config.register_file(path / f".bunnyfs.{app_type}.toml")
    zrlog.set_default_extra("app_type", app_type)
    zrlog.set_default_extra("version", __VERSION__)
    zrlog.init_logging()
