import logging
from abc import ABC, abstractmethod
from typing import Optional

LOG_LEVEL_IO = 5
logging.addLevelName(LOG_LEVEL_IO, "IO")


class FeatureReportIO(ABC):
  """ A device that is talked to through HID feature reports on the control endpoint. """

  @abstractmethod
  async def setup(self):
    pass

  @abstractmethod
  async def stop(self):
    pass

  @abstractmethod
  async def send_feature_report(self, data: bytes) -> int:
    """ Send a feature report. The first byte of `data` is the report ID.

    Returns:
      The number of bytes the transport reports as written.
    """

  @abstractmethod
  async def get_feature_report(self, report_id: int, size: int) -> bytes:
    """ Request a feature report of at most `size` bytes, including the report ID byte.

    Returns:
      The bytes the transport reports as read. The first byte is the report ID.
    """

  @property
  def manufacturer(self) -> Optional[str]:
    return None

  @property
  def product(self) -> Optional[str]:
    return None

  def serialize(self):
    return {}
