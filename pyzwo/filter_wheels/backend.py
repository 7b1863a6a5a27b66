from abc import ABCMeta, abstractmethod
from typing import Callable, Optional

from pyzwo.machines.backend import MachineBackend
from pyzwo.zwo.efw_protocol import WheelStatus

# called after every single slot step with the requested slot and the slot the wheel settled at
StepCallback = Callable[[int, int], None]
# called with the requested slot right before each single slot step is commanded
RequestCallback = Callable[[int], None]


class FilterWheelBackend(MachineBackend, metaclass=ABCMeta):
  """ Backend for a filter wheel. Slots are numbered from 1. """

  @property
  @abstractmethod
  def num_slots(self) -> int:
    """ Number of filter slots, as reported by the device. """

  @property
  @abstractmethod
  def current_slot(self) -> int:
    """ The slot from the most recent settled status. """

  @abstractmethod
  async def get_status(self) -> WheelStatus:
    """ Poll the wheel once. """

  @abstractmethod
  async def wait_until_settled(self) -> WheelStatus:
    """ Poll until the wheel has settled and return the settled status. """

  @abstractmethod
  async def move_to_slot(
    self,
    slot: int,
    on_step: Optional[StepCallback] = None,
    on_request: Optional[RequestCallback] = None,
  ) -> int:
    """ Move to `slot` and wait until the wheel has settled there.

    Returns:
      The slot the wheel settled at.
    """
