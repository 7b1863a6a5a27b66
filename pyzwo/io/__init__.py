from .errors import TransportError
from .hid import HID
from .io import LOG_LEVEL_IO, FeatureReportIO
