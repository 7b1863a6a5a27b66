from typing import Optional

from pyzwo.filter_wheels.backend import FilterWheelBackend, RequestCallback, StepCallback
from pyzwo.machines.machine import Machine, need_setup_finished
from pyzwo.zwo.convergence import ConvergenceOutcome


class FilterWheel(Machine):
  """ A filter wheel. Slots are numbered from 1. """

  def __init__(self, backend: FilterWheelBackend):
    super().__init__(backend=backend)
    self.backend: FilterWheelBackend = backend  # fix type

  @property
  def num_slots(self) -> int:
    return self.backend.num_slots

  @need_setup_finished
  async def get_slot(self) -> int:
    """ Wait until the wheel has settled and return its slot. """
    status = await self.backend.wait_until_settled()
    return status.current_slot

  @need_setup_finished
  async def move_to_slot(
    self,
    slot: int,
    on_step: Optional[StepCallback] = None,
    on_request: Optional[RequestCallback] = None,
  ) -> ConvergenceOutcome:
    """ Move to `slot`.

    Args:
      slot: Target slot, between 1 and `num_slots`.
      on_step: Called after every intermediate step with the requested and the current slot.
      on_request: Called with the slot of every intermediate step before it is commanded.
    """
    final = await self.backend.move_to_slot(slot, on_step=on_step, on_request=on_request)
    return ConvergenceOutcome.reached(final)
