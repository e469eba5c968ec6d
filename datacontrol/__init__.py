"""DataControl: tray toggles for Wi-Fi, Bluetooth, mobile data and brightness."""

__version__ = "0.4.0"
