from pathlib import Path
from typing import Union

from pyzwo.config.config import Config
from pyzwo.config.formats import ConfigLoader, ConfigSaver

ENCODING = "utf-8"


def read_config_file(path: Union[str, Path], loader: ConfigLoader) -> Config:
  """ Read a Config object from a file using `loader`. """
  with open(path, "r", encoding=ENCODING) as f:
    return loader.load(f)


def write_config_file(path: Union[str, Path], cfg: Config, saver: ConfigSaver):
  """ Serialize `cfg` using `saver` and write it to a file. """
  with open(path, "w", encoding=ENCODING) as f:
    saver.save(f, cfg)
