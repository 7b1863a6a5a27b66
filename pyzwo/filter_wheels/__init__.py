from .backend import FilterWheelBackend
from .chatterbox import FilterWheelChatterboxBackend
from .filter_wheel import FilterWheel
from .zwo_efw_backend import ZWOEFWBackend
