import logging
from typing import Optional

from pyzwo.filter_wheels.backend import FilterWheelBackend, RequestCallback, StepCallback
from pyzwo.io.hid import HID
from pyzwo.zwo.convergence import DEFAULT_POLL_INTERVAL, poll_until_settled, validate_target
from pyzwo.zwo.efw_protocol import (
  ZWO_USB_PRODUCT_ID_EFW,
  WheelStatus,
  decode_info_report,
  decode_slot_report,
  encode_get_info,
  encode_query_slot,
  encode_set_slot,
)
from pyzwo.zwo.protocol import ZWO_USB_VENDOR_ID
from pyzwo.zwo.status import MotionState, interpret_wheel_status
from pyzwo.zwo.transfer import query, send_report

logger = logging.getLogger("pyzwo")

DEFAULT_STEP_ATTEMPTS = 100


def next_slot(current: int, num_slots: int) -> int:
  """ The slot one step forward from `current`, wrapping from the last slot to slot 1. """
  return ((current - 1 + 1) % num_slots) + 1


class ZWOEFWBackend(FilterWheelBackend):
  """ Backend for the 7 slot ZWO EFW (Electronic Filter Wheel).

  The wheel's controller times out, and needs a hard reset, when commanded across many slots at
  once (e.g. from slot 1 directly to 7). Moves are therefore always made one slot forward at a
  time, each step waiting for the fine alignment on the intermediate slot. This is slow, about 15
  seconds per step. Reverse moves are never commanded: the wheel can do them, but they give
  results nobody has been able to explain.
  """

  def __init__(
    self,
    vid: int = ZWO_USB_VENDOR_ID,
    pid: int = ZWO_USB_PRODUCT_ID_EFW,
    serial_number: Optional[str] = None,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    step_attempts: int = DEFAULT_STEP_ATTEMPTS,
  ):
    super().__init__()
    self.io = HID(vid=vid, pid=pid, serial_number=serial_number)
    self.poll_interval = poll_interval
    self.step_attempts = step_attempts
    self.info: Optional[str] = None
    self._settled_status: Optional[WheelStatus] = None

  async def setup(self):
    await self.io.setup()
    logger.info("Manufacturer String: %s", self.io.manufacturer)
    logger.info("Product String: %s", self.io.product)
    self.info = await self.get_info()
    await self.wait_until_settled()

  async def stop(self):
    await self.io.stop()

  def serialize(self) -> dict:
    return {
      **super().serialize(),
      **self.io.serialize(),
      "poll_interval": self.poll_interval,
      "step_attempts": self.step_attempts,
    }

  def _require_settled_status(self) -> WheelStatus:
    if self._settled_status is None:
      raise RuntimeError("Filter wheel slot unknown. Call setup() first.")
    return self._settled_status

  @property
  def num_slots(self) -> int:
    return self._require_settled_status().num_slots

  @property
  def current_slot(self) -> int:
    return self._require_settled_status().current_slot

  async def get_info(self) -> str:
    """ Read the identification report, e.g. "EFW-S-0". """
    return decode_info_report(await query(self.io, encode_get_info()))

  async def get_status(self) -> WheelStatus:
    status = decode_slot_report(await query(self.io, encode_query_slot()))
    logger.debug(
      "position report: status=%d, [%d, %d, %d], max=%d",
      status.status_code, *status.slot_samples, status.num_slots,
    )
    return status

  def _remember_settled(self, status: WheelStatus):
    if interpret_wheel_status(status) is MotionState.SETTLED:
      self._settled_status = status

  async def wait_until_settled(self) -> WheelStatus:
    status = await poll_until_settled(
      self.get_status,
      interpret_wheel_status,
      interval=self.poll_interval,
    )
    assert status is not None  # unbounded polling only returns once settled
    self._settled_status = status
    return status

  async def set_slot(self, slot: int):
    """ Command the wheel to `slot`. The wheel sends no response to this command. """
    await send_report(self.io, encode_set_slot(slot))

  async def _step(self, slot: int) -> int:
    """ Command a single step to `slot` and poll for the wheel to settle there.

    The wheel takes a moment to start processing the command, so a settled report at the old slot
    does not end the polling. Running out of attempts is not an error: the caller steps again from
    wherever the wheel was last seen settled.
    """
    logger.info("request slot %d", slot)
    await self.set_slot(slot)
    status = await poll_until_settled(
      self.get_status,
      interpret_wheel_status,
      interval=self.poll_interval,
      max_attempts=self.step_attempts,
      accept=lambda s: s.current_slot == slot,
      on_status=self._remember_settled,
    )
    if status is None:
      logger.warning(
        "wheel not settled at slot %d after %d polls, still converging", slot, self.step_attempts)
    logger.info("current slot = %d", self.current_slot)
    return self.current_slot

  async def move_to_slot(
    self,
    slot: int,
    on_step: Optional[StepCallback] = None,
    on_request: Optional[RequestCallback] = None,
  ) -> int:
    """ Move to `slot`, one slot forward at a time.

    Args:
      slot: The target slot, between 1 and `num_slots`.
      on_step: Called after every step with the requested and the current slot.
      on_request: Called with the slot of every step before it is commanded.

    Raises:
      InvalidTargetError: if `slot` is out of range. Nothing is sent in that case.
      DeviceFaultError: if the wheel reports a fault. No further commands are sent.
      TransportError: if a transfer fails.
    """
    validate_target(slot, 1, self.num_slots)
    current = self.current_slot
    while current != slot:
      requested = next_slot(current, self.num_slots)
      if on_request is not None:
        on_request(requested)
      current = await self._step(requested)
      if on_step is not None:
        on_step(requested, current)
    logger.info("final slot = %d", current)
    return current
