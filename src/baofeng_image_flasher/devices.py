"""
USB serial device discovery.

Programming cables for Baofeng handhelds enumerate as USB serial adapters
(``/dev/ttyUSB0`` and friends). Only ports whose path contains ``USB`` are
offered to the operator.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

try:
    import serial.tools.list_ports
except ImportError:
    raise ImportError("PySerial required: pip install pyserial")

from baofeng_image_flasher.errors import NoDeviceFoundError

logger = logging.getLogger(__name__)

USB_MARKER = "USB"


@dataclass(frozen=True)
class DevicePort:
    """A serial connection point. Manufacturer and product id are display only."""
    device: str
    manufacturer: Optional[str] = None
    product_id: Optional[str] = None

    @property
    def label(self) -> str:
        """Choice label, e.g. ``/dev/ttyUSB0 - Prolific - 2303``."""
        name = self.device
        if self.manufacturer:
            name += f" - {self.manufacturer}"
        if self.product_id:
            name += f" - {self.product_id}"
        return name

    @property
    def is_usb(self) -> bool:
        return USB_MARKER in self.device

    @classmethod
    def from_port_info(cls, info) -> "DevicePort":
        """Build from a pyserial ``ListPortInfo``."""
        pid = getattr(info, "pid", None)
        return cls(
            device=info.device,
            manufacturer=getattr(info, "manufacturer", None) or None,
            product_id=f"{pid:04x}" if pid is not None else None,
        )


def list_ports(comports: Optional[Callable[[], Iterable]] = None) -> List[DevicePort]:
    """Return every serial port pyserial can see."""
    comports = comports or serial.tools.list_ports.comports
    return [DevicePort.from_port_info(info) for info in comports()]


def discover_usb_ports(comports: Optional[Callable[[], Iterable]] = None) -> List[DevicePort]:
    """
    Return the USB serial ports available for programming.

    Raises:
        NoDeviceFoundError: If no port path contains ``USB``.
    """
    all_ports = list_ports(comports)
    ports = [port for port in all_ports if port.is_usb]
    logger.debug(
        "Found %d serial port(s), %d USB: %s",
        len(all_ports), len(ports), ", ".join(p.device for p in ports) or "-",
    )
    if not ports:
        raise NoDeviceFoundError()
    return ports
