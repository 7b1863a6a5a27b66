from typing import Optional

from pyzwo.filter_wheels.backend import FilterWheelBackend, RequestCallback, StepCallback
from pyzwo.filter_wheels.zwo_efw_backend import next_slot
from pyzwo.zwo.convergence import validate_target
from pyzwo.zwo.efw_protocol import NUM_SLOTS, WheelStatus
from pyzwo.zwo.status import WHEEL_STATUS_STABLE


class FilterWheelChatterboxBackend(FilterWheelBackend):
  """ Chatter box backend for device-free testing. Prints out all operations. """

  def __init__(self, dummy_slot: int = 1, dummy_num_slots: int = NUM_SLOTS) -> None:
    super().__init__()
    self._dummy_slot = dummy_slot
    self._dummy_num_slots = dummy_num_slots

  async def setup(self):
    print("Setting up the filter wheel.")

  async def stop(self):
    print("Stopping the filter wheel.")

  @property
  def num_slots(self) -> int:
    return self._dummy_num_slots

  @property
  def current_slot(self) -> int:
    return self._dummy_slot

  async def get_status(self) -> WheelStatus:
    print("Getting the filter wheel status.")
    slot = self._dummy_slot
    return WheelStatus(
      status_code=WHEEL_STATUS_STABLE,
      error_code=0,
      slot_samples=(slot, slot, slot),
      num_slots=self._dummy_num_slots,
    )

  async def wait_until_settled(self) -> WheelStatus:
    return await self.get_status()

  async def move_to_slot(
    self,
    slot: int,
    on_step: Optional[StepCallback] = None,
    on_request: Optional[RequestCallback] = None,
  ) -> int:
    validate_target(slot, 1, self._dummy_num_slots)
    while self._dummy_slot != slot:
      requested = next_slot(self._dummy_slot, self._dummy_num_slots)
      if on_request is not None:
        on_request(requested)
      self._dummy_slot = requested
      print(f"Moving the filter wheel to slot {self._dummy_slot}.")
      if on_step is not None:
        on_step(self._dummy_slot, self._dummy_slot)
    return slot
