"""miningsim: mining truck and unloading station simulation."""

__version__ = "0.1.0"
