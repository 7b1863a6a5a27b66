from collections import deque
from typing import Deque, Iterable, List, Optional, Tuple

from pyzwo.io.io import FeatureReportIO


class MockFeatureReportIO(FeatureReportIO):
  """ In-memory feature report transport for device-free testing.

  Every sent report is recorded in `sent`. Reads are answered from `responses` in order, unless a
  subclass overrides `respond` to simulate a device.
  """

  def __init__(
    self,
    responses: Optional[Iterable[bytes]] = None,
    manufacturer: Optional[str] = "ZWO",
    product: Optional[str] = None,
  ):
    self.responses: Deque[bytes] = deque(responses or [])
    self.sent: List[bytes] = []
    self.requested: List[Tuple[int, int]] = []
    self.is_open = False
    self.open_count = 0
    self.close_count = 0
    self._manufacturer = manufacturer
    self._product = product

  async def setup(self):
    self.is_open = True
    self.open_count += 1

  async def stop(self):
    self.is_open = False
    self.close_count += 1

  async def send_feature_report(self, data: bytes) -> int:
    assert self.is_open, "forgot to call setup?"
    self.sent.append(bytes(data))
    return len(data)

  async def get_feature_report(self, report_id: int, size: int) -> bytes:
    assert self.is_open, "forgot to call setup?"
    self.requested.append((report_id, size))
    return self.respond()

  def respond(self) -> bytes:
    if len(self.responses) == 0:
      raise AssertionError("No scripted feature report left to return.")
    return self.responses.popleft()

  @property
  def manufacturer(self) -> Optional[str]:
    return self._manufacturer

  @property
  def product(self) -> Optional[str]:
    return self._product
