from .backend import FocuserBackend
from .chatterbox import FocuserChatterboxBackend
from .focuser import Focuser
from .zwo_eaf_backend import ZWOEAFBackend
