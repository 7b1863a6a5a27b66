import io
import json
import logging
from pathlib import Path
import tempfile
import unittest

from pyzwo.config import load_config
from pyzwo.config.config import Config
from pyzwo.config.file import read_config_file, write_config_file
from pyzwo.config.formats import ConfigLoader, ConfigSaver
from pyzwo.config.formats.ini_config import IniLoader, IniSaver
from pyzwo.config.formats.json_config import JsonLoader


class ConfigTests(unittest.TestCase):
  """ Tests for pyzwo.config """
  def run_file_reader_writer_test(
    self,
    format_loader: ConfigLoader,
    format_saver: ConfigSaver,
    write_to: Path,
    should_be: Config,
  ):
    write_config_file(write_to, should_be, format_saver)
    cfg = read_config_file(write_to, format_loader)
    assert cfg == should_be

  def test_file_reader_writer(self):
    tmp_path: Path = Path(tempfile.mkdtemp())
    fake_config = Config(
      logging=Config.Logging(
        level=logging.DEBUG,
        log_dir=tmp_path / "logs",
      ),
      polling=Config.Polling(interval=0.25, wheel_step_attempts=40),
    )
    self.run_file_reader_writer_test(
      IniLoader(), IniSaver(), tmp_path / "fake_config.ini", fake_config
    )

    json_path = tmp_path / "fake_config.json"
    json_path.write_text(json.dumps(fake_config.as_dict), encoding="utf-8")
    self.assertEqual(read_config_file(json_path, JsonLoader()), fake_config)

  def test_json_must_be_an_object(self):
    with self.assertRaises(ValueError):
      JsonLoader().load(io.StringIO("[1, 2]"))

  def test_ini_missing_sections_use_defaults(self):
    cfg = IniLoader().load(io.StringIO("[polling]\ninterval = 1.5\n"))
    self.assertEqual(cfg.polling.interval, 1.5)
    self.assertEqual(cfg.polling.wheel_step_attempts, 100)
    self.assertEqual(cfg.logging, Config.Logging())

  def test_load_config_without_file(self):
    tmp_path = Path(tempfile.mkdtemp())
    cfg = load_config("no_such_config", create_default=False, cur_dir=tmp_path)
    self.assertEqual(cfg, Config())

  def test_load_config_creates_default(self):
    tmp_path = Path(tempfile.mkdtemp())
    test_path = tmp_path / "test_config.ini"
    assert not test_path.exists()
    cfg = load_config("test_config", create_default=True, cur_dir=tmp_path)
    assert test_path.exists()
    assert cfg == Config()

  def test_load_config_searches_parents(self):
    tmp_path = Path(tempfile.mkdtemp())
    (tmp_path / "pyzwo_test.json").write_text('{"polling": {"interval": 2}}', encoding="utf-8")
    child = tmp_path / "a" / "b"
    child.mkdir(parents=True)
    cfg = load_config("pyzwo_test", cur_dir=child)
    self.assertEqual(cfg.polling.interval, 2.0)
