"""

Config module. Checks the current directory and all parent directories for a
`pyzwo.ini` or `pyzwo.json` config file. If none exists, the defaults of
`Config` are used, optionally after writing them to a new INI file.
"""
from pathlib import Path
from typing import Optional, Union

from pyzwo.config.config import Config
from pyzwo.config.file import read_config_file, write_config_file
from pyzwo.config.formats import MultiLoader
from pyzwo.config.formats.ini_config import IniLoader, IniSaver
from pyzwo.config.formats.json_config import JsonLoader

DEFAULT_LOADERS = [IniLoader(), JsonLoader()]

DEFAULT_LOADER = MultiLoader(DEFAULT_LOADERS)

DEFAULT_SAVER = IniSaver()


def get_file(base_name: str, _dir: Path) -> Optional[Path]:
  for ext in (rdr.extension for rdr in DEFAULT_LOADERS):
    cfg = _dir / f"{base_name}.{ext}"
    if cfg.exists():
      return cfg
  return None


def get_config_file(
  base_name: str,
  cur_dir: Optional[Union[str, Path]] = None
) -> Optional[Path]:
  """Get the path to the config file, searching `cur_dir` and then its parents.

  Args:
    base_name: The base name of the config file.
    cur_dir: The directory to start in. Defaults to the working directory.

  Returns:
    The path to the config file, or `None` if there is none.
  """
  cdir = Path(cur_dir) if cur_dir is not None else Path.cwd()

  cfg = get_file(base_name, cdir)
  if cfg is not None:
    return cfg

  if cdir.parent == cdir:
    return None

  return get_config_file(base_name, cdir.parent)


def load_config(base_file_name: str, create_default: bool = False,
                cur_dir: Optional[Union[str, Path]] = None) -> Config:
  """Load a Config object from a file.

  Args:
    base_file_name: The base file name to load.
    create_default: Whether to write a default INI config file to `cur_dir` (or the working
      directory) if no file exists.
    cur_dir: The directory to start searching in.
  """
  config_path = get_config_file(base_file_name, cur_dir=cur_dir)
  if config_path is None:
    if not create_default:
      return Config()
    create_dir = Path(cur_dir) if cur_dir is not None else Path.cwd()
    config_path = create_dir / f"{base_file_name}.{DEFAULT_SAVER.extension}"
    write_config_file(config_path, Config(), DEFAULT_SAVER)

  return read_config_file(config_path, DEFAULT_LOADER)
