from typing import Optional

from pyzwo.focusing.backend import FocuserBackend, StatusCallback
from pyzwo.machines.machine import Machine, need_setup_finished
from pyzwo.zwo.convergence import ConvergenceOutcome, TargetRequest


class Focuser(Machine):
  """ An absolute position focuser. """

  def __init__(self, backend: FocuserBackend):
    super().__init__(backend=backend)
    self.backend: FocuserBackend = backend  # fix type

  @property
  def max_position(self) -> int:
    return self.backend.max_position

  @need_setup_finished
  async def get_position(self) -> int:
    """ Wait until the focuser is not moving and return its position. """
    status = await self.backend.wait_until_settled()
    return status.position

  @need_setup_finished
  async def move_to(
    self, position: int, on_status: Optional[StatusCallback] = None
  ) -> ConvergenceOutcome:
    """ Move to an absolute position.

    Args:
      position: Target position, between 0 and `max_position`.
      on_status: Called with every status polled while the focuser moves.
    """
    final = await self.backend.move_to(position, on_status=on_status)
    return ConvergenceOutcome.reached(final)

  async def move_by(
    self, offset: int, on_status: Optional[StatusCallback] = None
  ) -> ConvergenceOutcome:
    """ Move relative to the last settled position. """
    return await self.move(TargetRequest(value=offset, relative=True), on_status=on_status)

  async def move(
    self, request: TargetRequest, on_status: Optional[StatusCallback] = None
  ) -> ConvergenceOutcome:
    """ Move to an absolute or relative target, see `TargetRequest`. """
    target = request.resolve(self.backend.position)
    return await self.move_to(target, on_status=on_status)
