import logging
from typing import Optional

from pyzwo.focusing.backend import FocuserBackend, StatusCallback
from pyzwo.io.hid import HID
from pyzwo.zwo.convergence import DEFAULT_POLL_INTERVAL, poll_until_settled, validate_target
from pyzwo.zwo.eaf_protocol import (
  ZWO_USB_PRODUCT_ID_EAF,
  FocuserStatus,
  decode_position_report,
  encode_query_position,
  encode_set_position,
)
from pyzwo.zwo.protocol import ZWO_USB_VENDOR_ID
from pyzwo.zwo.status import interpret_focuser_status
from pyzwo.zwo.transfer import query, send_report

logger = logging.getLogger("pyzwo")


class ZWOEAFBackend(FocuserBackend):
  """ Backend for the ZWO EAF (Electronic Automatic Focuser).

  The protocol was learned from usbmon captures. Only tested against the 5V model.

  The focuser is trusted to finish a commanded move on its own: the set command is sent once and
  the position is then only observed. Polling is unbounded, a stuck focuser shows up as a transport
  error rather than a status.
  """

  def __init__(
    self,
    vid: int = ZWO_USB_VENDOR_ID,
    pid: int = ZWO_USB_PRODUCT_ID_EAF,
    serial_number: Optional[str] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
  ):
    super().__init__()
    self.io = HID(vid=vid, pid=pid, serial_number=serial_number)
    self.poll_interval = poll_interval
    self._settled_status: Optional[FocuserStatus] = None

  async def setup(self):
    await self.io.setup()
    # loop in case it is still moving from a previous run
    status = await self.wait_until_settled()
    logger.info("current pos = %d (max %d)", status.position, status.max_position)

  async def stop(self):
    await self.io.stop()

  def serialize(self) -> dict:
    return {
      **super().serialize(),
      **self.io.serialize(),
      "poll_interval": self.poll_interval,
    }

  def _require_settled_status(self) -> FocuserStatus:
    if self._settled_status is None:
      raise RuntimeError("Focuser position unknown. Call setup() first.")
    return self._settled_status

  @property
  def position(self) -> int:
    return self._require_settled_status().position

  @property
  def max_position(self) -> int:
    return self._require_settled_status().max_position

  async def get_status(self) -> FocuserStatus:
    frame = await query(self.io, encode_query_position())
    status = decode_position_report(frame)
    logger.debug(
      "position report: moving=%d, aux1=0x%02x, aux2=0x%02x, position=%d",
      status.moving, status.aux1, status.aux2, status.position,
    )
    return status

  async def wait_until_settled(self) -> FocuserStatus:
    status = await poll_until_settled(
      self.get_status,
      interpret_focuser_status,
      interval=self.poll_interval,
    )
    assert status is not None  # unbounded polling only returns once settled
    self._settled_status = status
    return status

  async def set_position(self, position: int):
    """ Start a move to `position`. The focuser sends no response to this command. """
    await send_report(self.io, encode_set_position(position))

  async def move_to(self, position: int, on_status: Optional[StatusCallback] = None) -> int:
    """ Move to `position` and wait until the focuser has settled there.

    Args:
      position: The absolute target, between 0 and `max_position`.
      on_status: Called with every status polled while moving.

    Raises:
      InvalidTargetError: if `position` is out of range. Nothing is sent in that case.
      TransportError: if a transfer fails. The focuser needs a physical reset.
    """
    validate_target(position, 0, self.max_position)
    logger.info("requesting target %d", position)
    await self.set_position(position)

    status = await poll_until_settled(
      self.get_status,
      interpret_focuser_status,
      interval=self.poll_interval,
      accept=lambda s: s.position == position,
      on_status=on_status,
    )
    assert status is not None
    self._settled_status = status
    return status.position
