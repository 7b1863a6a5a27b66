import json
from typing import IO

from pyzwo.config.config import Config
from pyzwo.config.formats import ConfigLoader


class JsonLoader(ConfigLoader):
  """ Loads a `pyzwo.json` file, e.g. `{"polling": {"interval": 0.25}}`.

  Config files are only ever written as INI, see `IniSaver`.
  """

  extension = "json"

  def load(self, r: IO) -> Config:
    data = json.load(r)
    if not isinstance(data, dict):
      raise ValueError(f"expected a JSON object at the top level, got {type(data).__name__}")
    return Config.from_dict(data)
