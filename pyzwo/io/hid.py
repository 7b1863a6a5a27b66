import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Optional, cast

from pyzwo.io.errors import TransportError
from pyzwo.io.io import LOG_LEVEL_IO, FeatureReportIO

_HID_IMPORT_ERROR: Optional[ImportError] = None

try:
  import hid  # type: ignore

  USE_HID = True
except ImportError as e:
  USE_HID = False
  _HID_IMPORT_ERROR = e


logger = logging.getLogger(__name__)


class HID(FeatureReportIO):
  """ Feature report transport over hidapi, through the `hid` package.

  hidapi calls block, so they are run on a single worker thread. That also guarantees that only
  one transfer is in flight at any time.
  """

  def __init__(self, vid: int, pid: int, serial_number: Optional[str] = None):
    self.vid = vid
    self.pid = pid
    self.serial_number = serial_number
    self.device: Optional[hid.Device] = None
    self._unique_id = f"{vid:04x}:{pid:04x}:{serial_number}"
    self._executor: Optional[ThreadPoolExecutor] = None

  async def setup(self):
    if not USE_HID:
      raise TransportError(
        f"Unable to open HID device {self._unique_id}: the `hid` package and the hidapi library "
        f"are required. Import error: {_HID_IMPORT_ERROR}"
      )
    try:
      self.device = hid.Device(vid=self.vid, pid=self.pid, serial=self.serial_number)
    except hid.HIDException as e:
      raise TransportError(f"Unable to open HID device {self._unique_id}: {e}") from e
    self._executor = ThreadPoolExecutor(max_workers=1)
    logger.log(LOG_LEVEL_IO, "Opened HID device %s", self._unique_id)

  async def stop(self):
    if self.device is not None:
      self.device.close()
      self.device = None
    logger.log(LOG_LEVEL_IO, "Closing HID device %s", self._unique_id)
    if self._executor is not None:
      self._executor.shutdown(wait=True)
      self._executor = None

  async def send_feature_report(self, data: bytes) -> int:
    loop = asyncio.get_running_loop()

    def _send():
      assert self.device is not None, "forgot to call setup?"
      return self.device.send_feature_report(bytes(data))

    if self._executor is None:
      raise RuntimeError("Call setup() first.")
    try:
      r = await loop.run_in_executor(self._executor, _send)
    except hid.HIDException as e:
      raise TransportError(f"[{self._unique_id}] send feature report failed: {e}") from e
    logger.log(LOG_LEVEL_IO, "[%s] send feature report %s", self._unique_id, data.hex())
    return cast(int, r)

  async def get_feature_report(self, report_id: int, size: int) -> bytes:
    loop = asyncio.get_running_loop()

    def _get():
      assert self.device is not None, "forgot to call setup?"
      return self.device.get_feature_report(report_id, size)

    if self._executor is None:
      raise RuntimeError("Call setup() first.")
    try:
      r = await loop.run_in_executor(self._executor, _get)
    except hid.HIDException as e:
      raise TransportError(f"[{self._unique_id}] get feature report failed: {e}") from e
    logger.log(LOG_LEVEL_IO, "[%s] get feature report %s", self._unique_id, r.hex())
    return cast(bytes, r)

  @property
  def manufacturer(self) -> Optional[str]:
    if self.device is None:
      return None
    return cast(Optional[str], self.device.manufacturer)

  @property
  def product(self) -> Optional[str]:
    if self.device is None:
      return None
    return cast(Optional[str], self.device.product)

  def serialize(self):
    return {
      "vid": self.vid,
      "pid": self.pid,
      "serial_number": self.serial_number,
    }
