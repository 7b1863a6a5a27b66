from abc import ABCMeta, abstractmethod
from typing import Callable, Optional

from pyzwo.machines.backend import MachineBackend
from pyzwo.zwo.eaf_protocol import FocuserStatus

StatusCallback = Callable[[FocuserStatus], None]


class FocuserBackend(MachineBackend, metaclass=ABCMeta):
  """ Backend for an absolute position focuser. """

  @property
  @abstractmethod
  def position(self) -> int:
    """ The position from the most recent settled status. """

  @property
  @abstractmethod
  def max_position(self) -> int:
    """ The highest position the focuser accepts, as reported by the device. """

  @abstractmethod
  async def get_status(self) -> FocuserStatus:
    """ Poll the focuser once. """

  @abstractmethod
  async def wait_until_settled(self) -> FocuserStatus:
    """ Poll until the focuser is not moving and return the settled status. """

  @abstractmethod
  async def move_to(self, position: int, on_status: Optional[StatusCallback] = None) -> int:
    """ Move to an absolute position and wait until the focuser has settled there.

    Returns:
      The position the focuser settled at.
    """
