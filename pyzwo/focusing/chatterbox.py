from typing import Optional

from pyzwo.focusing.backend import FocuserBackend, StatusCallback
from pyzwo.zwo.convergence import validate_target
from pyzwo.zwo.eaf_protocol import FocuserStatus


class FocuserChatterboxBackend(FocuserBackend):
  """ Chatter box backend for device-free testing. Prints out all operations. """

  def __init__(self, dummy_position: int = 0, dummy_max_position: int = 60000) -> None:
    super().__init__()
    self._dummy_position = dummy_position
    self._dummy_max_position = dummy_max_position

  async def setup(self):
    print("Setting up the focuser.")

  async def stop(self):
    print("Stopping the focuser.")

  @property
  def position(self) -> int:
    return self._dummy_position

  @property
  def max_position(self) -> int:
    return self._dummy_max_position

  async def get_status(self) -> FocuserStatus:
    print("Getting the focuser status.")
    return FocuserStatus(
      position=self._dummy_position,
      max_position=self._dummy_max_position,
      moving=False,
      aux1=0,
      aux2=0,
    )

  async def wait_until_settled(self) -> FocuserStatus:
    return await self.get_status()

  async def move_to(self, position: int, on_status: Optional[StatusCallback] = None) -> int:
    validate_target(position, 0, self._dummy_max_position)
    print(f"Moving the focuser to {position}.")
    self._dummy_position = position
    if on_status is not None:
      on_status(await self.get_status())
    return position
